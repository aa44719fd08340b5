"""
Detection subpackage: the rule-based medical relevance engine.

The components are independent and can be used on their own:

* :class:`PatternMatcher` – weighted, whole-token alias counting per
  taxonomy concept.
* :func:`detect_citations` / :func:`extract_dates` – DOI, PubMed and
  arXiv presence flags and strict ISO dates.
* :func:`classify_document` – greedy archetype classification
  (paper, report, memo, protocol, proposal).
* :func:`is_noise` – known false-positive phrases.
* :func:`calculate_confidence` – bounded gate score.
* :func:`classify_document_intent` / :func:`extract_entities` – what a
  document asks of its reader, and the emails, amounts, dates and names
  it mentions. These describe a document; they do not affect scoring.

:class:`MedicalDetector` composes them into ``analyze(text)``, which
returns an immutable :class:`~mdp.core.models.AnalysisResult`.
"""

from .citations import detect_citations, extract_dates
from .classifier import classify_document, classify_document_with_score
from .confidence import calculate_confidence, round_half_up
from .detector import MedicalDetector, medical_detector
from .entities import extract_entities
from .intent import classify_document_intent, score_intents
from .matcher import PatternMatcher, compile_alias
from .noise import is_noise, noise_matches

__all__ = [
    "detect_citations",
    "extract_dates",
    "classify_document",
    "classify_document_with_score",
    "calculate_confidence",
    "round_half_up",
    "extract_entities",
    "classify_document_intent",
    "score_intents",
    "MedicalDetector",
    "medical_detector",
    "PatternMatcher",
    "compile_alias",
    "is_noise",
    "noise_matches",
]
