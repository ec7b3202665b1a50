"""Per-line text measurements used by predicates."""

from __future__ import annotations
import math
from collections import Counter
from typing import NamedTuple


class CharClassCounts(NamedTuple):
    digits: int
    lower: int
    upper: int
    special: int


def char_entropy(text: str) -> float:
    """Character-level Shannon entropy in bits.

Repeated characters ("aaaa") give 0.0; k distinct characters used once each
give log2(k). The empty string is defined as 0.0.
"""
    if not text:
        return 0.0
    c = Counter(text)
    n = len(text)
    return -sum((v/n) * math.log2(v/n) for v in c.values())

def char_class_counts(text: str) -> CharClassCounts:
    """Count digits, lowercase, uppercase and special (non-alphanumeric) characters in one scan."""
    digits = lower = upper = special = 0
    for ch in text:
        if ch.isdigit():
            digits += 1
        elif ch.islower():
            lower += 1
        elif ch.isupper():
            upper += 1
        elif not ch.isalnum():
            special += 1
    return CharClassCounts(digits, lower, upper, special)

def has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)
