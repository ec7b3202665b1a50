"""Predicate interface.

Predicates must:
- accept a single line (str, no trailing newline)
- return a Decision (accept/reject + reason code)
- be pure: no logging, no mutation of the line or of themselves

Only *active* predicates are instantiated; an unset bound has no predicate,
so inactive checks can never reject.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from ..pipeline.context import Decision

class Predicate(ABC):
    name: str = "predicate"

    @abstractmethod
    def apply(self, line: str) -> Decision:
        ...

    def __call__(self, line: str) -> bool:
        return self.apply(line).accepted

    def _accept(self) -> Decision:
        return Decision(True, self.name)

    def _reject(self, reason_code: str) -> Decision:
        return Decision(False, self.name, reason_code)
