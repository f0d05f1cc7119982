"""Shannon entropy of character distributions."""

from __future__ import annotations

import math
from collections import Counter

# Bits per character above which a token is treated as random-looking.
HIGH_ENTROPY_THRESHOLD = 4.5


def shannon_entropy(value: str) -> float:
    """Entropy of ``value`` in bits per character."""
    if not value:
        raise ValueError("Entropy is undefined for an empty string")
    length = len(value)
    entropy = 0.0
    for count in Counter(value).values():
        p = count / length
        entropy -= p * math.log2(p)
    return entropy


def is_high_entropy(value: str, min_length: int = 16) -> bool:
    if len(value) < min_length:
        return False
    return shannon_entropy(value) > HIGH_ENTROPY_THRESHOLD
