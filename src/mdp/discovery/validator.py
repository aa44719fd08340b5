"""Schema validation, normalization and statistics for discovered files.

Validation is strict and reports every problem as data: missing
required fields, wrong primitive types and out-of-range confidence are
errors, thin evidence is a warning. Normalization is lenient: it fills
defaults for optional fields and replaces malformed collections with
empty ones so records can be stored, then rejects whatever still fails
validation.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from ..core.models import DocType
from ..detection.confidence import round_half_up
from ..utils.logging import get_logger
from .models import (
    DiscoveredFile,
    DiscoveryStatistics,
    FieldError,
    FieldWarning,
    ValidationResult,
)

logger = get_logger(__name__)


REQUIRED_FIELDS: List[str] = [
    "file_url",
    "source",
    "title",
    "medical_terms_found",
    "concept_hits",
    "confidence",
    "snippet",
    "doc_type",
    "timestamp",
]

CITATION_FLAGS: List[str] = ["has_doi", "has_pmid", "has_arxiv"]

FIELD_TYPES: Dict[str, str] = {
    "file_url": "string",
    "source": "string",
    "title": "string",
    "medical_terms_found": "array",
    "concept_hits": "object",
    "confidence": "number",
    "snippet": "string",
    "has_doi": "boolean",
    "has_pmid": "boolean",
    "has_arxiv": "boolean",
    "doc_type": "string",
    "dates": "array",
    "timestamp": "string",
}

MIN_SNIPPET_LENGTH = 20


def type_name(value: Any) -> str:
    """JSON-style type name of a Python value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


class SchemaValidator:
    """Validate and normalize discovered-file records.

    Records are plain mappings as they come out of JSON or a storage
    layer; :class:`DiscoveredFile` instances are accepted too.
    """

    def validate_file(self, record: Any) -> ValidationResult:
        """Check one record's shape and value ranges."""
        if isinstance(record, DiscoveredFile):
            record = record.model_dump()
        errors: List[FieldError] = []
        warnings: List[FieldWarning] = []

        if not isinstance(record, Mapping):
            errors.append(FieldError(path="", message="File must be an object", value=type_name(record)))
            return ValidationResult(valid=False, errors=errors, warnings=warnings)

        for field in REQUIRED_FIELDS:
            if field not in record:
                errors.append(FieldError(path=field, message=f"Missing required field: {field}"))

        for field, expected in FIELD_TYPES.items():
            if field not in record:
                continue
            actual = type_name(record[field])
            if actual != expected:
                errors.append(
                    FieldError(
                        path=field,
                        message=f"Field {field} has wrong type. Expected {expected}, got {actual}",
                        value=record[field],
                    )
                )

        confidence = record.get("confidence")
        if type_name(confidence) == "number" and not 0.0 <= confidence <= 1.0:
            errors.append(
                FieldError(path="confidence", message="Confidence must be between 0 and 1", value=confidence)
            )

        terms = record.get("medical_terms_found")
        if isinstance(terms, (list, tuple)) and len(terms) == 0:
            warnings.append(
                FieldWarning(
                    path="medical_terms_found",
                    message="medical_terms_found is empty - may indicate false positive",
                    suggestion="Consider filtering out this result",
                )
            )

        snippet = record.get("snippet")
        if isinstance(snippet, str) and len(snippet) < MIN_SNIPPET_LENGTH:
            warnings.append(
                FieldWarning(
                    path="snippet",
                    message="Snippet is very short - may not contain enough context",
                    suggestion="Consider increasing snippet size",
                )
            )

        for flag in CITATION_FLAGS:
            if flag not in record:
                warnings.append(
                    FieldWarning(
                        path=flag,
                        message=f"Missing optional field {flag}",
                        suggestion="Run citation detection to populate this field",
                    )
                )

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def validate_discovery_result(self, result: Any) -> ValidationResult:
        """Check a whole snapshot; file issues are reported as ``files[i].<path>``."""
        errors: List[FieldError] = []
        warnings: List[FieldWarning] = []

        if hasattr(result, "model_dump"):
            result = result.model_dump(mode="json")
        if not isinstance(result, Mapping):
            errors.append(
                FieldError(path="", message="Discovery result must be an object", value=type_name(result))
            )
            return ValidationResult(valid=False, errors=errors, warnings=warnings)

        for field in ("version", "timestamp", "files"):
            if field not in result:
                errors.append(FieldError(path=field, message=f"Missing required field: {field}"))

        if "statistics" not in result:
            warnings.append(
                FieldWarning(
                    path="statistics",
                    message="Missing optional field: statistics",
                    suggestion="Run compute_statistics() to populate",
                )
            )

        files = result.get("files")
        if isinstance(files, (list, tuple)):
            for i, record in enumerate(files):
                file_result = self.validate_file(record)
                errors.extend(
                    e.model_copy(update={"path": f"files[{i}].{e.path}" if e.path else f"files[{i}]"})
                    for e in file_result.errors
                )
                warnings.extend(
                    w.model_copy(update={"path": f"files[{i}].{w.path}"}) for w in file_result.warnings
                )
        elif "files" in result:
            errors.append(FieldError(path="files", message="files must be an array", value=type_name(files)))

        return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

    def apply_defaults(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Fill missing optional fields; values already present win."""
        return {
            "has_doi": False,
            "has_pmid": False,
            "has_arxiv": False,
            "dates": [],
            **record,
        }

    def normalize_file(self, record: Any) -> Optional[DiscoveredFile]:
        """Repair a record for storage, or ``None`` if it cannot be repaired.

        Collection fields and citation flags holding the wrong type are
        reset to empty values / ``False`` first; what remains (missing
        required fields, wrong scalar types, confidence out of range)
        rejects the record.
        """
        if isinstance(record, DiscoveredFile):
            record = record.model_dump()
        if not isinstance(record, Mapping):
            logger.warning(f"Normalization failed: expected an object, got {type_name(record)}")
            return None

        normalized = self.apply_defaults(record)
        for field in ("medical_terms_found", "dates"):
            if field in normalized and not isinstance(normalized[field], (list, tuple)):
                normalized[field] = []
        if "concept_hits" in normalized and not isinstance(normalized["concept_hits"], Mapping):
            normalized["concept_hits"] = {}
        for flag in CITATION_FLAGS:
            if not isinstance(normalized[flag], bool):
                normalized[flag] = False

        validation = self.validate_file(normalized)
        if not validation.valid:
            logger.warning(
                f"Normalization failed: {'; '.join(f'{e.path}: {e.message}' for e in validation.errors)}"
            )
            return None

        try:
            return DiscoveredFile.model_validate(normalized)
        except ValidationError as exc:
            logger.warning(f"Normalization failed for {normalized.get('file_url')}: {exc}")
            return None

    def normalize_files(self, records: Sequence[Any]) -> List[DiscoveredFile]:
        """Normalize a batch, dropping rejected records."""
        normalized = [self.normalize_file(r) for r in records]
        kept = [f for f in normalized if f is not None]
        if len(kept) < len(records):
            logger.info(f"Normalized {len(kept)}/{len(records)} records ({len(records) - len(kept)} rejected)")
        return kept


UNKNOWN_SOURCE = "unknown"


def _get(record: Union[DiscoveredFile, Mapping[str, Any]], field: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(field, default)
    return getattr(record, field, default)


def _label(record: Union[DiscoveredFile, Mapping[str, Any]], field: str, fallback: str) -> str:
    value = _get(record, field)
    if isinstance(value, str) and value:
        return value
    logger.warning(f"Record without a usable {field}; counted as {fallback}", extra={"value": value})
    return fallback


def compute_statistics(files: Sequence[Union[DiscoveredFile, Mapping[str, Any]]]) -> DiscoveryStatistics:
    """Counts per source, concept and doc type; mean confidence; cited files.

    Plain mappings are tolerated: a missing or non-string ``source`` or
    ``doc_type`` is counted under ``unknown`` / ``UNKNOWN``, non-string
    terms are skipped and a non-numeric confidence is left out of the
    mean.
    """
    by_source: Dict[str, int] = {}
    by_concept: Dict[str, int] = {}
    by_doc_type: Dict[str, int] = {}
    total_confidence = 0.0
    scored = 0
    cited_files = 0

    for record in files:
        source = _label(record, "source", UNKNOWN_SOURCE)
        by_source[source] = by_source.get(source, 0) + 1

        doc_type = _label(record, "doc_type", DocType.UNKNOWN.value)
        by_doc_type[doc_type] = by_doc_type.get(doc_type, 0) + 1

        terms = _get(record, "medical_terms_found")
        if isinstance(terms, (list, tuple)):
            for term in terms:
                if isinstance(term, str):
                    by_concept[term] = by_concept.get(term, 0) + 1

        confidence = _get(record, "confidence")
        if isinstance(confidence, (int, float)) and not isinstance(confidence, bool):
            total_confidence += confidence
            scored += 1
        else:
            logger.warning("Record confidence is not a number; left out of the mean", extra={"value": confidence})

        if any(_get(record, flag) is True for flag in CITATION_FLAGS):
            cited_files += 1

    return DiscoveryStatistics(
        by_source=by_source,
        by_concept=by_concept,
        by_doc_type=by_doc_type,
        avg_confidence=round_half_up(total_confidence / scored) if scored else 0.0,
        cited_files=cited_files,
    )


# Shared default instance
schema_validator = SchemaValidator()
