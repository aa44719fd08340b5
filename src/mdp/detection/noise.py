"""Known homonym collisions that signal a non-medical context.

The noise flag is advisory. It is reported next to the confidence score
and never changes it; callers discard a result when either gate fails.
"""

import re
from typing import List, Tuple

NOISE_PATTERNS: Tuple[re.Pattern, ...] = (
    re.compile(r"\benergy\s+drink\b", re.IGNORECASE),  # not cellular energy
    re.compile(r"\btherapy\s+(?:dog|animal)\b", re.IGNORECASE),  # not medical therapy
    re.compile(r"\bgas\s+(?:station|pump)\b", re.IGNORECASE),  # not cellular respiration
    re.compile(r"\bcell\s+phone\b", re.IGNORECASE),  # not a biological cell
)


def noise_matches(text: str) -> List[str]:
    """Noise phrases found in ``text``, first occurrence of each pattern."""
    if not text:
        return []
    found: List[str] = []
    for pattern in NOISE_PATTERNS:
        match = pattern.search(text)
        if match:
            found.append(match.group(0))
    return found


def is_noise(text: str) -> bool:
    if not text:
        return False
    return any(pattern.search(text) for pattern in NOISE_PATTERNS)
