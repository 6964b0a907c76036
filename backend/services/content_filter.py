"""Offensive-language matching against the fixed lexicon."""

import re
from enum import IntEnum

from services.lexicons import OFFENSIVE_WORDS

# Fragments shorter than this never match
MIN_MATCH_LENGTH = 5


class Sensitivity(IntEnum):
    """Detection strictness; values match the extension's stored settings (1-3)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


# Minimum number of lexicon hits required to flag text. Medium and High are equally strict.
OFFENSIVE_MATCH_THRESHOLDS = {
    Sensitivity.LOW: 2,
    Sensitivity.MEDIUM: 1,
    Sensitivity.HIGH: 1,
}

_OFFENSIVE_PATTERNS = tuple(re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE | re.ASCII) for word in OFFENSIVE_WORDS)


def count_offensive_matches(text: str) -> int:
    """Count whole-word occurrences of every offensive term; each repeat counts."""
    if not text or len(text) < MIN_MATCH_LENGTH:
        return 0

    lowered = text.lower()
    return sum(len(pattern.findall(lowered)) for pattern in _OFFENSIVE_PATTERNS)


def is_offensive(text: str, sensitivity: Sensitivity = Sensitivity.MEDIUM) -> bool:
    return count_offensive_matches(text) >= OFFENSIVE_MATCH_THRESHOLDS[Sensitivity(sensitivity)]
