"""
Static taxonomy tables consumed by the detection engine.

* :data:`TAXONOMY` – every medical concept keyed by its unique name,
  each tagged with a :class:`~mdp.core.models.ConceptTier`.
* :data:`DOC_TYPE_PATTERNS` – heading patterns, thresholds and weights
  per document archetype.
* :data:`DOC_TYPE_BONUS` – confidence bonus per archetype.
"""

from .concepts import TAXONOMY, build_taxonomy, concepts_by_tier
from .doc_types import DOC_TYPE_BONUS, DOC_TYPE_PATTERNS, EVALUATION_ORDER, DocTypePattern

__all__ = [
    "TAXONOMY",
    "build_taxonomy",
    "concepts_by_tier",
    "DOC_TYPE_BONUS",
    "DOC_TYPE_PATTERNS",
    "EVALUATION_ORDER",
    "DocTypePattern",
]
