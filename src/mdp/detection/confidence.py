"""Bounded confidence score blending concept density, citations and doc type.

The base score is the *mean* of the weighted concept hits, not their
sum: one concentrated concept can score as high as many shallow ones,
and repetition alone is not rewarded. Bonuses are added on top and the
total is clamped to 1.0, so the value saturates quickly. It is a gate;
ranking uses :attr:`AnalysisResult.signal` instead.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping

from ..core.models import CitationSignals, DocType
from ..taxonomy.doc_types import DOC_TYPE_BONUS

DOI_BONUS = 0.15
PMID_BONUS = 0.15
ARXIV_BONUS = 0.10


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero (``0.125 -> 0.13``), unlike built-in ``round``."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def base_score(concept_hits: Mapping[str, float]) -> float:
    """Mean weighted hit clamped to ``[0, 1]``; ``0`` when nothing matched."""
    if not concept_hits:
        return 0.0
    mean = sum(concept_hits.values()) / len(concept_hits)
    return max(0.0, min(mean, 1.0))


def citation_bonus(citations: CitationSignals) -> float:
    bonus = 0.0
    if citations.has_doi:
        bonus += DOI_BONUS
    if citations.has_pmid:
        bonus += PMID_BONUS
    if citations.has_arxiv:
        bonus += ARXIV_BONUS
    return bonus


def calculate_confidence(
    concept_hits: Mapping[str, float],
    citations: CitationSignals,
    doc_type: DocType,
) -> float:
    """Confidence in ``[0, 1]``, rounded to two decimals."""
    total = base_score(concept_hits) + citation_bonus(citations) + DOC_TYPE_BONUS.get(doc_type, 0.0)
    return round_half_up(min(total, 1.0))
