"""Unit tests for intent classification and entity extraction."""

import pytest

from mdp.core.models import DocumentIntent, ExtractedEntities
from mdp.detection.detector import MedicalDetector
from mdp.detection.entities import extract_entities, extract_people
from mdp.detection.intent import classify_document_intent, score_intents


class TestClassifyDocumentIntent:
    """Tests for cue-based intent classification."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Please find attached the study protocol for the clinical trial.", DocumentIntent.RESEARCH_REQUEST),
            ("Let's schedule a call, maybe over coffee.", DocumentIntent.MEETING_REQUEST),
            ("We offer pricing and a demo.", DocumentIntent.SALES_PITCH),
            ("Seeking investment for a capital raise.", DocumentIntent.INVESTMENT_ASK),
            ("We hope to collaborate on a joint project.", DocumentIntent.COLLABORATION),
            ("Grant application for financial support.", DocumentIntent.FUNDING_REQUEST),
        ],
    )
    def test_best_intent(self, text: str, expected: DocumentIntent) -> None:
        assert classify_document_intent(text) == expected

    def test_tie_goes_to_first_listed(self) -> None:
        text = "Please find attached our partnership terms."
        scores = score_intents(text)
        assert scores[DocumentIntent.INFO_SHARING] == scores[DocumentIntent.COLLABORATION] == 1
        assert classify_document_intent(text) == DocumentIntent.INFO_SHARING

    def test_repeated_cue_counts_once(self) -> None:
        assert score_intents("donation donation donation")[DocumentIntent.FUNDING_REQUEST] == 1

    @pytest.mark.parametrize("text", ["", "Quarterly notes for the regional office.", None, 42])
    def test_no_cue_is_unknown(self, text) -> None:
        assert classify_document_intent(text) == DocumentIntent.UNKNOWN


class TestExtractEntities:
    """Tests for email, amount, date and name extraction."""

    TEXT = (
        "From jane.smith@lab.org: Maria Lopez approved $1,500,000 and $3 million on 03/14/2023. "
        "Next review March 5, 2024 with Maria Lopez. Dear Colleague, see you in New York."
    )

    def test_all_kinds(self) -> None:
        entities = extract_entities(self.TEXT)
        assert entities.emails == ["jane.smith@lab.org"]
        assert entities.amounts == ["$1,500,000", "$3 million"]
        assert entities.dates == ["03/14/2023", "March 5, 2024"]
        assert entities.people == ["Maria Lopez"]

    def test_greetings_and_places_are_not_people(self) -> None:
        assert extract_people("Dear Colleague, Best Regards from New York") == []

    @pytest.mark.parametrize("text", ["", None, 3.5])
    def test_empty_input(self, text) -> None:
        assert extract_entities(text) == ExtractedEntities()


def test_detector_delegates() -> None:
    detector = MedicalDetector()
    assert detector.classify_intent("Let's schedule a call") == DocumentIntent.MEETING_REQUEST
    assert detector.extract_entities(None) == ExtractedEntities()
    assert detector.extract_entities("mail bob@example.com").emails == ["bob@example.com"]
