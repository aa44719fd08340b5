"""Discovery record and validation models.

These models describe the persisted JSON shape consumed by downstream
viewers. Array and mapping fields always default to empty collections
so a serialized record never contains ``null`` for them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceDocument(BaseModel):
    """Already-fetched text handed over by a crawl or extraction collaborator.

    ``pdf_links`` are PDF URLs found on the page. Only their filename and
    the page title are available for analysis.
    """

    file_url: str
    source: str
    title: str = ""
    text: str = ""
    pdf_links: List[str] = Field(default_factory=list)


class DiscoveredFile(BaseModel):
    """A document that passed the relevance gates, with provenance."""

    model_config = ConfigDict(extra="ignore")

    file_url: str
    source: str
    title: str
    medical_terms_found: List[str] = Field(default_factory=list)
    concept_hits: Dict[str, float] = Field(default_factory=dict)
    confidence: float = Field(..., ge=0.0, le=1.0)
    snippet: str
    has_doi: bool = False
    has_pmid: bool = False
    has_arxiv: bool = False
    doc_type: str
    dates: List[str] = Field(default_factory=list)
    timestamp: str


class DiscoveryStatistics(BaseModel):
    """Aggregate counts over a set of discovered files."""

    by_source: Dict[str, int] = Field(default_factory=dict)
    by_concept: Dict[str, int] = Field(default_factory=dict)
    by_doc_type: Dict[str, int] = Field(default_factory=dict)
    avg_confidence: float = 0.0
    cited_files: int = 0


class DiscoveryResult(BaseModel):
    """Snapshot of one discovery run."""

    version: str
    timestamp: str
    model_version: str
    sources_scanned: List[str] = Field(default_factory=list)
    total_files_found: int = 0
    files: List[DiscoveredFile] = Field(default_factory=list)
    statistics: DiscoveryStatistics = Field(default_factory=DiscoveryStatistics)


class FieldError(BaseModel):
    """Hard validation failure on one field path."""

    path: str
    message: str
    value: Optional[Any] = None


class FieldWarning(BaseModel):
    """Soft quality issue; the record is still accepted."""

    path: str
    message: str
    suggestion: str


class ValidationResult(BaseModel):
    valid: bool
    errors: List[FieldError] = Field(default_factory=list)
    warnings: List[FieldWarning] = Field(default_factory=list)
