"""Unit tests for the MedicalDetector orchestrator."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import ValidationError

from mdp.core.models import AnalysisResult, CitationSignals, DocType
from mdp.detection.detector import MedicalDetector, medical_detector

PAPER_TEXT = """Abstract
Mitochondrial dysfunction drives cellular senescence.
Introduction
Methods
Results
References
doi: 10.1038/s41586-020-1234-5
PMID: 31234567
"""


@pytest.fixture
def detector() -> MedicalDetector:
    return MedicalDetector()


class TestAnalyze:
    """Tests for MedicalDetector.analyze."""

    def test_paper_with_citations(self, detector: MedicalDetector) -> None:
        result = detector.analyze(PAPER_TEXT)
        assert result.medical_terms == {"mitochondria", "senescence"}
        assert result.concept_hits == {
            "MITOCHONDRIA": pytest.approx(1.0),
            "SENESCENCE": pytest.approx(0.95),
        }
        assert result.citations == CitationSignals(has_doi=True, has_pmid=True, has_arxiv=False)
        assert result.doc_type == DocType.PAPER_LIKE
        assert result.dates == frozenset()
        assert result.confidence == 1.0
        assert result.is_noise is False

    def test_signal_is_sum_of_hits(self, detector: MedicalDetector) -> None:
        result = detector.analyze(PAPER_TEXT)
        assert result.signal == pytest.approx(1.95)

    def test_dates_collected(self, detector: MedicalDetector) -> None:
        result = detector.analyze("Sirolimus trial started 2019-03-01, ended 2021-06-30.")
        assert result.dates == {"2019-03-01", "2021-06-30"}
        assert result.medical_terms == {"rapamycin"}

    def test_idempotent(self, detector: MedicalDetector) -> None:
        first = detector.analyze(PAPER_TEXT)
        second = detector.analyze(PAPER_TEXT)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_noise_is_independent_of_confidence(self, detector: MedicalDetector) -> None:
        result = detector.analyze("Mitochondrial function matters more than any energy drink.")
        assert "mitochondria" in result.medical_terms
        assert result.confidence > 0
        assert result.is_noise is True

    @pytest.mark.parametrize("text", ["", None, 42, b"bytes"])
    def test_never_raises(self, detector: MedicalDetector, text) -> None:
        result = detector.analyze(text)
        assert result == AnalysisResult()
        assert result.confidence == 0.0
        assert result.doc_type == DocType.UNKNOWN

    def test_result_is_frozen(self, detector: MedicalDetector) -> None:
        result = detector.analyze(PAPER_TEXT)
        with pytest.raises(ValidationError):
            result.confidence = 0.1  # type: ignore[misc]

    def test_concurrent_calls_agree(self) -> None:
        texts = [PAPER_TEXT, "telomerase and NMN", "To: a\nFrom: b\nSubject: c", ""] * 10
        expected = [medical_detector.analyze(t) for t in texts]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(medical_detector.analyze, texts))
        assert results == expected


class TestDelegates:
    """The individual sub-scorers are reachable from the detector."""

    def test_delegates(self, detector: MedicalDetector) -> None:
        assert detector.score_concept_hits("metformin") == {"METFORMIN": pytest.approx(0.75)}
        assert detector.extract_medical_terms("metformin") == {"metformin"}
        assert detector.detect_citations("arXiv:2101.00001").has_arxiv
        assert detector.extract_dates("2020-01-02") == {"2020-01-02"}
        assert detector.classify_document("proposal budget") == DocType.PROPOSAL_LIKE
        assert detector.is_noise("cell phone")
        assert detector.calculate_confidence({}, CitationSignals(), DocType.UNKNOWN) == 0.0

    def test_record_fields(self, detector: MedicalDetector) -> None:
        fields = detector.analyze(PAPER_TEXT).to_record_fields()
        assert fields["medical_terms_found"] == ["mitochondria", "senescence"]
        assert fields["doc_type"] == "PAPER_LIKE"
        assert fields["has_doi"] is True
        assert fields["dates"] == []
