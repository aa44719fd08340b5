"""Core domain models for concepts, citation signals and analysis results."""

from enum import Enum
from typing import Dict, FrozenSet, List, Any
from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ConceptTier(str, Enum):
    """Taxonomy tier a concept belongs to."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    INTERVENTION = "intervention"


class DocType(str, Enum):
    """Coarse structural archetype of a document."""

    PAPER_LIKE = "PAPER_LIKE"
    REPORT_LIKE = "REPORT_LIKE"
    MEMO_LIKE = "MEMO_LIKE"
    PROTOCOL_LIKE = "PROTOCOL_LIKE"
    PROPOSAL_LIKE = "PROPOSAL_LIKE"
    UNKNOWN = "UNKNOWN"


class DocumentIntent(str, Enum):
    """What the author of a document wants from its reader."""

    INVESTMENT_ASK = "investment_ask"
    RESEARCH_REQUEST = "research_request"
    MEETING_REQUEST = "meeting_request"
    INFO_SHARING = "info_sharing"
    SALES_PITCH = "sales_pitch"
    COLLABORATION = "collaboration"
    FUNDING_REQUEST = "funding_request"
    UNKNOWN = "unknown"


class MedicalConcept(BaseModel):
    """A named medical/longevity theme with weighted alias surface forms.

    ``co_terms`` are contextual hints kept for reference only; scoring
    never consults them. ``examples`` is only populated for intervention
    concepts and is scored exactly like ``aliases``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    tier: ConceptTier
    aliases: List[str] = Field(default_factory=list)
    co_terms: List[str] = Field(default_factory=list)
    weight: float = Field(..., gt=0.0, le=1.0)
    examples: List[str] = Field(default_factory=list)

    @property
    def surface_forms(self) -> List[str]:
        """Aliases followed by concrete examples, in declaration order."""
        return [*self.aliases, *self.examples]


class CitationSignals(BaseModel):
    """Presence flags for scholarly identifiers found in a text."""

    model_config = ConfigDict(frozen=True)

    has_doi: bool = False
    has_pmid: bool = False
    has_arxiv: bool = False

    @property
    def has_any(self) -> bool:
        return self.has_doi or self.has_pmid or self.has_arxiv


class AnalysisResult(BaseModel):
    """Full medical analysis of one text. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    medical_terms: FrozenSet[str] = Field(default_factory=frozenset)
    concept_hits: Dict[str, float] = Field(default_factory=dict)
    citations: CitationSignals = Field(default_factory=CitationSignals)
    doc_type: DocType = DocType.UNKNOWN
    dates: FrozenSet[str] = Field(default_factory=frozenset)
    confidence: float = Field(0.0, ge=0.0, le=1.0)
    is_noise: bool = False

    @field_serializer("medical_terms", "dates")
    def _sorted(self, value: FrozenSet[str]) -> List[str]:
        return sorted(value)

    @property
    def signal(self) -> float:
        """Raw sum of weighted concept hits, used for ranking."""
        return sum(self.concept_hits.values())

    def to_record_fields(self) -> Dict[str, Any]:
        """Fields shared with a persisted ``DiscoveredFile`` record."""
        return {
            "medical_terms_found": sorted(self.medical_terms),
            "concept_hits": dict(self.concept_hits),
            "confidence": self.confidence,
            "has_doi": self.citations.has_doi,
            "has_pmid": self.citations.has_pmid,
            "has_arxiv": self.citations.has_arxiv,
            "doc_type": self.doc_type.value,
            "dates": sorted(self.dates),
        }


class ExtractedEntities(BaseModel):
    """Surface entities found in a text, de-duplicated in order of appearance."""

    model_config = ConfigDict(frozen=True)

    people: List[str] = Field(default_factory=list)
    dates: List[str] = Field(default_factory=list)
    amounts: List[str] = Field(default_factory=list)
    emails: List[str] = Field(default_factory=list)
