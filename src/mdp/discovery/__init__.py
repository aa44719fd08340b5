"""
Discovery subpackage: acceptance contract for analyzer output.

* :class:`SchemaValidator` – strict record validation with errors and
  warnings, plus lenient normalization for storage.
* :func:`compute_statistics` – per-source, per-concept and per-doc-type
  counts, mean confidence and cited-file count.
* :class:`DiscoveryPipeline` – run the detector over fetched documents,
  apply the confidence, noise and empty-terms gates and build a
  :class:`DiscoveryResult` snapshot. PDF links found on a page become
  records of their own, scored on filename and page title.
"""

from .models import (
    DiscoveredFile,
    DiscoveryResult,
    DiscoveryStatistics,
    FieldError,
    FieldWarning,
    SourceDocument,
    ValidationResult,
)
from .pipeline import (
    DiscoveryPipeline,
    DiscoveryRun,
    build_discovered_file,
    build_pdf_record,
    create_result,
    discover_document,
    filter_results,
)
from .validator import SchemaValidator, compute_statistics, schema_validator

__all__ = [
    "DiscoveredFile",
    "DiscoveryResult",
    "DiscoveryStatistics",
    "FieldError",
    "FieldWarning",
    "SourceDocument",
    "ValidationResult",
    "DiscoveryPipeline",
    "DiscoveryRun",
    "build_discovered_file",
    "build_pdf_record",
    "discover_document",
    "create_result",
    "filter_results",
    "SchemaValidator",
    "compute_statistics",
    "schema_validator",
]
