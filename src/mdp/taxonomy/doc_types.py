"""Structural archetype patterns used by the document-type classifier."""

from dataclasses import dataclass
import re
from typing import Dict, Tuple

from ..core.models import DocType


@dataclass(frozen=True)
class DocTypePattern:
    """Heading-like patterns for one archetype.

    ``min_matches`` distinct patterns must be present before the type is
    considered at all; ``weight`` scales the tally of present patterns.
    """

    doc_type: DocType
    patterns: Tuple[re.Pattern, ...]
    min_matches: int
    weight: float


def _compile(*sources: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(s, re.IGNORECASE) for s in sources)


DOC_TYPE_PATTERNS: Dict[DocType, DocTypePattern] = {
    DocType.PAPER_LIKE: DocTypePattern(
        doc_type=DocType.PAPER_LIKE,
        patterns=_compile(
            r"\babstract\b",
            r"\bintroduction\b",
            r"\bmethodology|methods\b",
            r"\bresults\b",
            r"\bdiscussion\b",
            r"\bconclusion\b",
            r"\breferences\b",
        ),
        min_matches=3,
        weight=1.0,
    ),
    DocType.REPORT_LIKE: DocTypePattern(
        doc_type=DocType.REPORT_LIKE,
        patterns=_compile(
            r"\bexecutive summary\b",
            r"\bfindings\b",
            r"\brecommendations\b",
            r"\banalysis\b",
            r"\bconclusion\b",
        ),
        min_matches=2,
        weight=0.85,
    ),
    DocType.MEMO_LIKE: DocTypePattern(
        doc_type=DocType.MEMO_LIKE,
        patterns=_compile(
            r"\bto:\s*",
            r"\bfrom:\s*",
            r"\bdate:\s*",
            r"\bsubject:\s*",
            r"\bre:\s*",
        ),
        min_matches=3,
        weight=0.70,
    ),
    DocType.PROTOCOL_LIKE: DocTypePattern(
        doc_type=DocType.PROTOCOL_LIKE,
        patterns=_compile(
            r"\bprotocol\b",
            r"\bprocedure\b",
            r"\bstep\s+\d+",
            r"\bmethod\b",
            r"\binstruction\b",
        ),
        min_matches=2,
        weight=0.80,
    ),
    DocType.PROPOSAL_LIKE: DocTypePattern(
        doc_type=DocType.PROPOSAL_LIKE,
        patterns=_compile(
            r"\bproposal\b",
            r"\bbudget\b",
            r"\btimeline\b",
            r"\bobjective\b",
            r"\bdeliverable\b",
        ),
        min_matches=2,
        weight=0.75,
    ),
}

# Ties go to the earliest type in this order.
EVALUATION_ORDER: Tuple[DocType, ...] = (
    DocType.PAPER_LIKE,
    DocType.REPORT_LIKE,
    DocType.MEMO_LIKE,
    DocType.PROTOCOL_LIKE,
    DocType.PROPOSAL_LIKE,
)

DOC_TYPE_BONUS: Dict[DocType, float] = {
    DocType.PAPER_LIKE: 0.15,
    DocType.PROTOCOL_LIKE: 0.12,
    DocType.REPORT_LIKE: 0.10,
    DocType.PROPOSAL_LIKE: 0.08,
    DocType.MEMO_LIKE: 0.05,
    DocType.UNKNOWN: 0.0,
}
