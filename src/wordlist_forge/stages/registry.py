"""Predicate registry.

Builds the active predicate chain from a FilterSpec. Only checks with at
least one bound (or pattern, or non-"any" policy) get a predicate, so a spec
with nothing configured yields an empty chain that accepts every line.

Order is cheapest-first; since predicates are ANDed the order never changes
which lines survive, only which predicate a rejection is attributed to.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple

from ..config.filter_spec import FilterSpec, WhitespacePolicy
from ..pipeline.context import Decision
from .base import Predicate
from .impl import CharClassGate, EntropyGate, LengthGate, RegexExclude, RegexInclude, WhitespaceGate

def _any_set(*values) -> bool:
    return any(v is not None for v in values)

def make_predicates(spec: FilterSpec) -> List[Predicate]:
    preds: List[Predicate] = []
    if _any_set(spec.min_length, spec.max_length):
        preds.append(LengthGate(spec.min_length, spec.max_length))
    if spec.whitespace_policy is not WhitespacePolicy.ANY:
        preds.append(WhitespaceGate(require=spec.whitespace_policy is WhitespacePolicy.REQUIRE))
    if _any_set(spec.min_digits, spec.max_digits, spec.min_lower, spec.max_lower,
                spec.min_upper, spec.max_upper, spec.min_special, spec.max_special):
        preds.append(CharClassGate(
            min_digits=spec.min_digits, max_digits=spec.max_digits,
            min_lower=spec.min_lower, max_lower=spec.max_lower,
            min_upper=spec.min_upper, max_upper=spec.max_upper,
            min_special=spec.min_special, max_special=spec.max_special,
        ))
    if spec.regex_include is not None:
        preds.append(RegexInclude(spec.regex_include))
    if spec.regex_exclude is not None:
        preds.append(RegexExclude(spec.regex_exclude))
    if _any_set(spec.min_entropy, spec.max_entropy):
        preds.append(EntropyGate(spec.min_entropy, spec.max_entropy))
    return preds

class Evaluator:
    """AND of all active predicates for one spec."""

    def __init__(self, predicates: Iterable[Predicate]):
        self.predicates: Tuple[Predicate, ...] = tuple(predicates)

    @classmethod
    def from_spec(cls, spec: FilterSpec) -> "Evaluator":
        return cls(make_predicates(spec))

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.predicates]

    def decide(self, line: str) -> Tuple[Optional[Decision], List[Decision]]:
        """Return (first rejection or None, decisions made up to and including it)."""
        made: List[Decision] = []
        for p in self.predicates:
            d = p.apply(line)
            made.append(d)
            if not d.accepted:
                return d, made
        return None, made

    def __call__(self, line: str) -> bool:
        return all(p.apply(line).accepted for p in self.predicates)

@lru_cache(maxsize=32)
def _evaluator_for(spec: FilterSpec) -> Evaluator:
    return Evaluator.from_spec(spec)

def evaluate(line: str, spec: FilterSpec) -> bool:
    """True if the line passes every active predicate of spec."""
    return _evaluator_for(spec)(line)
