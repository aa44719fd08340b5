"""Turn fetched documents into validated discovery records.

The crawler, downloader and text extractor are collaborators: this
module receives their already-fetched text as :class:`SourceDocument`
objects, runs the detector, applies the relevance gates and assembles a
:class:`DiscoveryResult` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from ..config.settings import settings
from ..core.models import AnalysisResult, DocType
from ..core.normalization import make_snippet
from ..detection.detector import MedicalDetector, medical_detector
from ..utils.logging import get_logger
from .models import DiscoveredFile, DiscoveryResult, SourceDocument
from .validator import SchemaValidator, compute_statistics, schema_validator

logger = get_logger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _passes_page_gates(document: SourceDocument, analysis: AnalysisResult, min_confidence: float) -> bool:
    if analysis.is_noise:
        logger.debug(f"Dropping {document.file_url}: noise phrase")
        return False
    if analysis.confidence < min_confidence:
        logger.debug(f"Dropping {document.file_url}: confidence {analysis.confidence} < {min_confidence}")
        return False
    return True


def _page_record(
    document: SourceDocument,
    analysis: AnalysisResult,
    snippet_length: int,
    timestamp: Optional[str],
) -> DiscoveredFile:
    return DiscoveredFile(
        file_url=document.file_url,
        source=document.source,
        title=document.title,
        snippet=make_snippet(document.text, snippet_length),
        timestamp=timestamp or utc_timestamp(),
        **analysis.to_record_fields(),
    )


def build_discovered_file(
    document: SourceDocument,
    detector: Optional[MedicalDetector] = None,
    min_confidence: Optional[float] = None,
    snippet_length: Optional[int] = None,
    timestamp: Optional[str] = None,
) -> Optional[DiscoveredFile]:
    """Analyze one document and build its record, or ``None`` if it fails a gate.

    A document is dropped when it is flagged as noise, when its
    confidence is below ``min_confidence`` or when no concept matched.
    """
    detector = detector or medical_detector
    min_confidence = settings.min_confidence if min_confidence is None else min_confidence
    snippet_length = snippet_length or settings.snippet_length

    analysis = detector.analyze(document.text)
    if not _passes_page_gates(document, analysis, min_confidence) or not analysis.medical_terms:
        return None
    return _page_record(document, analysis, snippet_length, timestamp)


def pdf_filename(pdf_url: str) -> str:
    return pdf_url.split("/")[-1]


def build_pdf_record(
    pdf_url: str,
    document: SourceDocument,
    detector: Optional[MedicalDetector] = None,
    min_confidence: Optional[float] = None,
    timestamp: Optional[str] = None,
) -> Optional[DiscoveredFile]:
    """Record for a PDF linked from ``document``, judged on its filename and the page title.

    Nothing is known about the PDF body, so the doc type is ``UNKNOWN``,
    citation flags are false and there are no dates. The noise gate is
    applied to the linking page, not to the link.
    """
    detector = detector or medical_detector
    min_confidence = settings.min_confidence if min_confidence is None else min_confidence

    filename = pdf_filename(pdf_url)
    analysis = detector.analyze(f"{filename} {document.title}")
    if not analysis.medical_terms or analysis.confidence < min_confidence:
        return None

    return DiscoveredFile(
        file_url=pdf_url,
        source=document.source,
        title=filename,
        medical_terms_found=sorted(analysis.medical_terms),
        concept_hits=dict(analysis.concept_hits),
        confidence=analysis.confidence,
        snippet=f"PDF from: {document.title}",
        doc_type=DocType.UNKNOWN.value,
        timestamp=timestamp or utc_timestamp(),
    )


def discover_document(
    document: SourceDocument,
    detector: Optional[MedicalDetector] = None,
    min_confidence: Optional[float] = None,
    snippet_length: Optional[int] = None,
    timestamp: Optional[str] = None,
) -> List[DiscoveredFile]:
    """Records for a page and the PDFs it links to.

    When the page is noise or below ``min_confidence`` its links are not
    considered either. A page without matched terms yields no record of
    its own but its links are still scored.
    """
    detector = detector or medical_detector
    min_confidence = settings.min_confidence if min_confidence is None else min_confidence
    snippet_length = snippet_length or settings.snippet_length

    analysis = detector.analyze(document.text)
    if not _passes_page_gates(document, analysis, min_confidence):
        return []

    records: List[DiscoveredFile] = []
    if analysis.medical_terms:
        records.append(_page_record(document, analysis, snippet_length, timestamp))
    for pdf_url in document.pdf_links:
        record = build_pdf_record(pdf_url, document, detector, min_confidence, timestamp)
        if record is not None:
            records.append(record)
    return records


def filter_results(
    files: Iterable[DiscoveredFile],
    min_confidence: Optional[float] = None,
    max_files: Optional[int] = None,
) -> List[DiscoveredFile]:
    """Keep confident records with at least one term, capped at ``max_files``."""
    min_confidence = settings.min_confidence if min_confidence is None else min_confidence
    max_files = settings.max_files if max_files is None else max_files
    kept = [f for f in files if f.confidence >= min_confidence and f.medical_terms_found]
    return kept[:max_files]


def create_result(files: List[DiscoveredFile], timestamp: Optional[str] = None) -> DiscoveryResult:
    """Wrap records into a snapshot with provenance and statistics."""
    sources = list(dict.fromkeys(f.source for f in files))
    return DiscoveryResult(
        version=settings.pipeline_version,
        timestamp=timestamp or utc_timestamp(),
        model_version=settings.model_version,
        sources_scanned=sources,
        total_files_found=len(files),
        files=files,
        statistics=compute_statistics(files),
    )


@dataclass
class DiscoveryRun:
    """Outcome of :meth:`DiscoveryPipeline.run`."""

    result: DiscoveryResult
    documents_seen: int = 0
    validation_errors: List[str] = field(default_factory=list)


class DiscoveryPipeline:
    """Analyze, gate, validate and aggregate a batch of documents."""

    def __init__(
        self,
        detector: Optional[MedicalDetector] = None,
        validator: Optional[SchemaValidator] = None,
        min_confidence: Optional[float] = None,
        max_files: Optional[int] = None,
    ) -> None:
        self.detector = detector or medical_detector
        self.validator = validator or schema_validator
        self.min_confidence = settings.min_confidence if min_confidence is None else min_confidence
        self.max_files = settings.max_files if max_files is None else max_files

    def run(self, documents: Iterable[SourceDocument]) -> DiscoveryRun:
        discovered: List[DiscoveredFile] = []
        seen = 0
        for document in documents:
            seen += 1
            discovered.extend(discover_document(document, self.detector, self.min_confidence))
        logger.info(
            "Discovery pass complete",
            extra={"documents_seen": seen, "records": len(discovered), "min_confidence": self.min_confidence},
        )

        filtered = filter_results(discovered, self.min_confidence, self.max_files)

        validation_errors: List[str] = []
        for record in filtered:
            validation = self.validator.validate_file(record)
            validation_errors.extend(f"{e.path}: {e.message}" for e in validation.errors)
        if validation_errors:
            logger.warning("Validation errors in discovered files", extra={"errors": len(validation_errors)})

        return DiscoveryRun(
            result=create_result(filtered),
            documents_seen=seen,
            validation_errors=validation_errors,
        )
