"""Medical relevance detector composing matching, citations, doc type and noise.

:class:`MedicalDetector` is the single entry point of the scoring core.
``analyze`` is pure: no I/O, no clock, no randomness, and the detector
holds only the read-only taxonomy and compiled patterns, so one instance
can serve concurrent callers. Any input, including an empty string or a
non-string, yields a result rather than an exception.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Set

from ..core.models import (
    AnalysisResult,
    CitationSignals,
    DocType,
    DocumentIntent,
    ExtractedEntities,
    MedicalConcept,
)
from ..core.normalization import coerce_text
from .citations import detect_citations, extract_dates
from .classifier import classify_document
from .confidence import calculate_confidence
from .entities import extract_entities
from .intent import classify_document_intent
from .matcher import PatternMatcher
from .noise import is_noise


class MedicalDetector:
    """Rule-based medical relevance analyzer.

    Example:
        >>> detector = MedicalDetector()
        >>> result = detector.analyze("Mitochondrial decline ... PMID: 123456")
        >>> result.citations.has_pmid
        True
    """

    def __init__(self, taxonomy: Optional[Mapping[str, MedicalConcept]] = None) -> None:
        self.matcher = PatternMatcher(taxonomy)

    @property
    def taxonomy(self) -> Dict[str, MedicalConcept]:
        return self.matcher.taxonomy

    def score_concept_hits(self, text: str) -> Dict[str, float]:
        return self.matcher.score_concept_hits(coerce_text(text))

    def extract_medical_terms(self, text: str) -> Set[str]:
        return self.matcher.extract_medical_terms(coerce_text(text))

    def detect_citations(self, text: str) -> CitationSignals:
        return detect_citations(coerce_text(text))

    def extract_dates(self, text: str) -> Set[str]:
        return extract_dates(coerce_text(text))

    def classify_document(self, text: str) -> DocType:
        return classify_document(coerce_text(text))

    def is_noise(self, text: str) -> bool:
        return is_noise(coerce_text(text))

    def classify_intent(self, text: str) -> DocumentIntent:
        return classify_document_intent(coerce_text(text))

    def extract_entities(self, text: str) -> ExtractedEntities:
        """Emails, amounts, dates and names. Not part of :meth:`analyze`."""
        return extract_entities(coerce_text(text))

    def calculate_confidence(
        self,
        concept_hits: Mapping[str, float],
        citations: CitationSignals,
        doc_type: DocType,
    ) -> float:
        return calculate_confidence(concept_hits, citations, doc_type)

    def analyze(self, text: Any) -> AnalysisResult:
        """Run every sub-scorer over ``text`` and blend them into one result."""
        text = coerce_text(text)
        concept_hits = self.matcher.score_concept_hits(text)
        citations = detect_citations(text)
        doc_type = classify_document(text)
        return AnalysisResult(
            medical_terms=frozenset(self.matcher.extract_medical_terms(text)),
            concept_hits=concept_hits,
            citations=citations,
            doc_type=doc_type,
            dates=frozenset(extract_dates(text)),
            confidence=calculate_confidence(concept_hits, citations, doc_type),
            is_noise=is_noise(text),
        )


# Shared default instance
medical_detector = MedicalDetector()
