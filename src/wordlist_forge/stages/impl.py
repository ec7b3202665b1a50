"""Built-in predicates.

These implement:
- length gate (characters, so multi-byte text is measured correctly)
- character-class gate (digits / lowercase / uppercase / special)
- entropy gate (Shannon entropy over character frequencies)
- regex include / exclude
- whitespace gate (require / forbid)

Bounds are inclusive: a line exactly at min or max passes.
"""

from __future__ import annotations
from typing import Optional, Pattern
from ..pipeline.context import Decision
from ..utils.text import char_class_counts, char_entropy, has_whitespace
from .base import Predicate

def _below(value: float, lo: Optional[float]) -> bool:
    return lo is not None and value < lo

def _above(value: float, hi: Optional[float]) -> bool:
    return hi is not None and value > hi

class LengthGate(Predicate):
    name = "length_gate"

    def __init__(self, min_length: Optional[int] = None, max_length: Optional[int] = None):
        self.min_length = min_length
        self.max_length = max_length

    def apply(self, line: str) -> Decision:
        n = len(line)
        if _below(n, self.min_length):
            return self._reject("TOO_SHORT")
        if _above(n, self.max_length):
            return self._reject("TOO_LONG")
        return self._accept()

class CharClassGate(Predicate):
    """All configured class bounds in one scan of the line."""
    name = "char_class_gate"

    CLASSES = ("digits", "lower", "upper", "special")

    def __init__(self, **bounds: Optional[int]):
        # bounds: min_digits, max_digits, min_lower, ... ; None means unset
        self.bounds = {
            cls: (bounds.get(f"min_{cls}"), bounds.get(f"max_{cls}"))
            for cls in self.CLASSES
            if bounds.get(f"min_{cls}") is not None or bounds.get(f"max_{cls}") is not None
        }

    def apply(self, line: str) -> Decision:
        counts = char_class_counts(line)._asdict()
        for cls, (lo, hi) in self.bounds.items():
            if _below(counts[cls], lo):
                return self._reject(f"TOO_FEW_{cls.upper()}")
            if _above(counts[cls], hi):
                return self._reject(f"TOO_MANY_{cls.upper()}")
        return self._accept()

class EntropyGate(Predicate):
    name = "entropy_gate"

    def __init__(self, min_entropy: Optional[float] = None, max_entropy: Optional[float] = None):
        self.min_entropy = min_entropy
        self.max_entropy = max_entropy

    def apply(self, line: str) -> Decision:
        e = char_entropy(line)
        if _below(e, self.min_entropy):
            return self._reject("ENTROPY_TOO_LOW")
        if _above(e, self.max_entropy):
            return self._reject("ENTROPY_TOO_HIGH")
        return self._accept()

class RegexInclude(Predicate):
    name = "regex_include"

    def __init__(self, pattern: Pattern[str]):
        self.pattern = pattern

    def apply(self, line: str) -> Decision:
        if self.pattern.search(line) is None:
            return self._reject("REGEX_NO_MATCH")
        return self._accept()

class RegexExclude(Predicate):
    name = "regex_exclude"

    def __init__(self, pattern: Pattern[str]):
        self.pattern = pattern

    def apply(self, line: str) -> Decision:
        if self.pattern.search(line) is not None:
            return self._reject("REGEX_EXCLUDED")
        return self._accept()

class WhitespaceGate(Predicate):
    name = "whitespace_gate"

    def __init__(self, require: bool):
        self.require = require

    def apply(self, line: str) -> Decision:
        ws = has_whitespace(line)
        if self.require and not ws:
            return self._reject("WHITESPACE_MISSING")
        if not self.require and ws:
            return self._reject("WHITESPACE_PRESENT")
        return self._accept()
