"""Weighted alias matching against the concept taxonomy.

Each surface form (alias, or concrete example for interventions) is
escaped and anchored so it only matches as a whole token, ignoring case.
Literal symbols such as ``NAD+`` or ``CoQ10`` therefore match exactly,
never as regex syntax.
"""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Set, Tuple

from ..core.models import MedicalConcept
from ..taxonomy.concepts import TAXONOMY


def compile_alias(alias: str) -> re.Pattern:
    """Compile a literal surface form into a whole-token, case-insensitive pattern.

    ``(?<!\\w)`` / ``(?!\\w)`` behave like ``\\b`` when the alias starts
    or ends with a word character, and still anchor aliases that start
    or end with a symbol (``NAD+``), where ``\\b`` would never match.
    """
    return re.compile(rf"(?<!\w){re.escape(alias)}(?!\w)", re.IGNORECASE)


class PatternMatcher:
    """Count alias occurrences per concept.

    Patterns are compiled once at construction. The matcher holds no
    mutable state afterwards and can be shared between threads.
    """

    def __init__(self, taxonomy: Optional[Mapping[str, MedicalConcept]] = None) -> None:
        self.taxonomy: Dict[str, MedicalConcept] = dict(taxonomy if taxonomy is not None else TAXONOMY)
        self._compiled: Tuple[Tuple[MedicalConcept, Tuple[re.Pattern, ...]], ...] = tuple(
            (concept, tuple(compile_alias(form) for form in concept.surface_forms if form))
            for concept in self.taxonomy.values()
        )

    def count_occurrences(self, text: str) -> Dict[str, int]:
        """Raw occurrence count per concept, summed across its surface forms."""
        counts: Dict[str, int] = {}
        if not text:
            return counts
        for concept, patterns in self._compiled:
            count = sum(len(p.findall(text)) for p in patterns)
            if count > 0:
                counts[concept.name] = count
        return counts

    def score_concept_hits(self, text: str) -> Dict[str, float]:
        """Weighted hit count per matched concept; unmatched concepts are omitted."""
        return {
            name: count * self.taxonomy[name].weight
            for name, count in self.count_occurrences(text).items()
        }

    def extract_medical_terms(self, text: str) -> Set[str]:
        """Lowercased names of concepts with at least one surface-form match."""
        terms: Set[str] = set()
        if not text:
            return terms
        for concept, patterns in self._compiled:
            if any(p.search(text) for p in patterns):
                terms.add(concept.name.lower())
        return terms

    def matched_forms(self, text: str, concept_name: str) -> List[str]:
        """Surface forms of one concept that occur in ``text``, for explanations."""
        concept = self.taxonomy.get(concept_name)
        if concept is None or not text:
            return []
        return [form for form in concept.surface_forms if form and compile_alias(form).search(text)]
