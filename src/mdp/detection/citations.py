"""Scholarly citation and ISO date detection."""

import re
from typing import Set

from ..core.models import CitationSignals

DOI_PATTERN = re.compile(r"\b10\.\d{4,}/\S+")
DOI_URL_PATTERN = re.compile(r"\bhttps?://doi\.org/\S+", re.IGNORECASE)
PMID_PATTERN = re.compile(
    r"\b(?:PMID:\s*\d+|PubMed ID:\s*\d+|pubmed\.ncbi\.nlm\.nih\.gov/\d+)\b",
    re.IGNORECASE,
)
ARXIV_PATTERN = re.compile(r"\b(?:arxiv\.org/abs/\d+\.\d+|arXiv:\d+\.\d+)\b", re.IGNORECASE)

# Strict YYYY-MM-DD only; free-form dates are out of scope.
ISO_DATE_PATTERN = re.compile(r"\b\d{4}-\d{2}-\d{2}\b")


def detect_citations(text: str) -> CitationSignals:
    """Presence flags for DOI, PubMed and arXiv identifiers."""
    if not text:
        return CitationSignals()
    return CitationSignals(
        has_doi=bool(DOI_PATTERN.search(text) or DOI_URL_PATTERN.search(text)),
        has_pmid=bool(PMID_PATTERN.search(text)),
        has_arxiv=bool(ARXIV_PATTERN.search(text)),
    )


def extract_dates(text: str) -> Set[str]:
    """Distinct ``YYYY-MM-DD`` tokens found in ``text``."""
    if not text:
        return set()
    return set(ISO_DATE_PATTERN.findall(text))
