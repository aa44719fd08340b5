"""Intent classification for correspondence and proposals.

Each intent has a set of cue patterns. A pattern counts once when it
matches anywhere in the text, however often it repeats. The intent with
the most matching cues wins; ties go to the intent listed first in
:data:`INTENT_PATTERNS`. Text with no cue at all is ``UNKNOWN``.
"""

import re
from typing import Dict, Mapping, Tuple

from ..core.models import DocumentIntent


def _compile(*patterns: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


INTENT_PATTERNS: Dict[DocumentIntent, Tuple[re.Pattern, ...]] = {
    DocumentIntent.INVESTMENT_ASK: _compile(
        r"investment\s+(?:opportunity|proposal)",
        r"funding\s+request",
        r"capital\s+(?:raise|requirement)",
        r"seeking\s+(?:investment|funding)",
        r"investment\s+(?:amount|size)",
        r"\$\d+(?:\.\d+)?\s*(?:million|billion|m|b)\b",
        r"return\s+on\s+investment",
        r"equity|stake|shares",
    ),
    DocumentIntent.RESEARCH_REQUEST: _compile(
        r"research\s+(?:request|proposal|study)",
        r"study\s+(?:proposal|protocol)",
        r"clinical\s+trial",
        r"research\s+(?:question|objective)",
        r"methodology",
        r"data\s+collection",
        r"irb\s+approval",
    ),
    DocumentIntent.MEETING_REQUEST: _compile(
        r"request\s+(?:a\s+)?meeting",
        r"schedule\s+(?:a\s+)?(?:meeting|call)",
        r"available\s+(?:for\s+)?(?:meeting|call)",
        r"would\s+(?:you\s+)?like\s+to\s+meet",
        r"let'?s\s+(?:schedule|meet|discuss)",
        r"coffee|lunch|dinner",
        r"discuss\s+(?:further|in\s+person)",
    ),
    DocumentIntent.INFO_SHARING: _compile(
        r"please\s+find\s+attached",
        r"attached\s+(?:is|please\s+find)",
        r"enclosed\s+(?:is|please\s+find)",
        r"sharing\s+(?:with\s+you|this\s+(?:document|info))",
        r"for\s+your\s+(?:information|review|records)",
        r"fyi\b",
        r"as\s+(?:promised|discussed|requested)",
    ),
    DocumentIntent.SALES_PITCH: _compile(
        r"our\s+(?:product|service|solution)",
        r"we\s+offer",
        r"pricing",
        r"demo",
        r"free\s+trial",
        r"contact\s+sales",
    ),
    DocumentIntent.COLLABORATION: _compile(
        r"collaborate",
        r"partnership",
        r"joint\s+(?:venture|project)",
        r"work\s+together",
        r"cooperate",
    ),
    DocumentIntent.FUNDING_REQUEST: _compile(
        r"funding\s+request",
        r"grant\s+application",
        r"financial\s+support",
        r"donation",
        r"sponsorship",
    ),
}


def score_intents(
    text: str,
    patterns: Mapping[DocumentIntent, Tuple[re.Pattern, ...]] = INTENT_PATTERNS,
) -> Dict[DocumentIntent, int]:
    """Number of distinct cues matched per intent."""
    if not isinstance(text, str) or not text:
        return {intent: 0 for intent in patterns}
    return {intent: sum(1 for p in cues if p.search(text)) for intent, cues in patterns.items()}


def classify_document_intent(text: str) -> DocumentIntent:
    best, best_score = DocumentIntent.UNKNOWN, 0
    for intent, score in score_intents(text).items():
        if score > best_score:
            best, best_score = intent, score
    return best
