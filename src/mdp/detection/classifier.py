"""Greedy best-of-five document-type classifier."""

from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..core.models import DocType
from ..taxonomy.doc_types import DOC_TYPE_PATTERNS, EVALUATION_ORDER, DocTypePattern


def pattern_tally(text: str, config: DocTypePattern) -> int:
    """Number of the archetype's patterns present in ``text`` (each counts once)."""
    if not text:
        return 0
    return sum(1 for pattern in config.patterns if pattern.search(text))


def score_document_types(
    text: str,
    patterns: Mapping[DocType, DocTypePattern] = DOC_TYPE_PATTERNS,
    order: Sequence[DocType] = EVALUATION_ORDER,
) -> Dict[DocType, float]:
    """Score of every archetype that reaches its minimum tally."""
    scores: Dict[DocType, float] = {}
    for doc_type in order:
        config = patterns[doc_type]
        tally = pattern_tally(text, config)
        if tally >= config.min_matches:
            scores[doc_type] = tally * config.weight
    return scores


def classify_document_with_score(
    text: str,
    patterns: Optional[Mapping[DocType, DocTypePattern]] = None,
    order: Sequence[DocType] = EVALUATION_ORDER,
) -> Tuple[DocType, float]:
    """Best archetype and its score; ``(UNKNOWN, 0.0)`` if none qualifies.

    Only a strictly greater score replaces the current best, so ties keep
    the type evaluated first.
    """
    best_type = DocType.UNKNOWN
    best_score = 0.0
    scores = score_document_types(text, patterns or DOC_TYPE_PATTERNS, order)
    for doc_type in order:
        score = scores.get(doc_type)
        if score is not None and score > best_score:
            best_type, best_score = doc_type, score
    return best_type, best_score


def classify_document(text: str) -> DocType:
    """Structural archetype of ``text``."""
    return classify_document_with_score(text)[0]
