"""Text normalization utilities."""

import re
from typing import Any, Optional

_WS_RE = re.compile(r"\s+")


def coerce_text(text: Any) -> str:
    """Return ``text`` if it is a string, otherwise an empty string."""
    return text if isinstance(text, str) else ""


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace into single spaces."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def make_snippet(text: Optional[str], max_length: int = 500) -> str:
    """Build a display snippet from the start of a document."""
    return normalize_whitespace(text)[:max_length]
