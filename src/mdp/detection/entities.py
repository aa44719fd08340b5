"""Lightweight entity extraction: emails, money amounts, dates and names.

These are surface patterns, not NER. Names are any two adjacent
capitalized words, minus a few greeting and place phrases, so expect
false positives on headings.
"""

import re
from typing import Iterable, List

from ..core.models import ExtractedEntities

EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
AMOUNT_PATTERN = re.compile(r"\$\d+(?:,\d{3})*(?:\.\d{2})?(?:\s*(?:million|billion|m|b))?\b", re.IGNORECASE)
DATE_PATTERN = re.compile(
    r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"
    r"|\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\s+\d{1,2},?\s+\d{4}\b",
    re.IGNORECASE,
)
NAME_PATTERN = re.compile(r"\b[A-Z][a-z]+\s+[A-Z][a-z]+\b")

# Capitalized pairs that are not people
NAME_STOPWORDS = ("dear", "best", "thank", "new york", "united states")


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def extract_people(text: str) -> List[str]:
    names = (m.group(0) for m in NAME_PATTERN.finditer(text))
    return _unique(n for n in names if not any(stop in n.lower() for stop in NAME_STOPWORDS))


def extract_entities(text: str) -> ExtractedEntities:
    if not isinstance(text, str) or not text:
        return ExtractedEntities()
    return ExtractedEntities(
        people=extract_people(text),
        dates=_unique(m.group(0) for m in DATE_PATTERN.finditer(text)),
        amounts=_unique(m.group(0) for m in AMOUNT_PATTERN.finditer(text)),
        emails=_unique(m.group(0) for m in EMAIL_PATTERN.finditer(text)),
    )
