"""Error taxonomy.

Every error names the stage that failed so callers can tell a bad
configuration from an unreadable source or a failed write:

- InvalidSpec: configuration rejected by the builder (stage=config)
- SourceUnavailable: line source missing, unreadable, or already consumed (stage=read)
- WriteFailure: output could not be written (stage=write|partition)
- ConflictRequiresConfirmation: existing artifacts would be overwritten (stage=partition)

Rejected lines are not errors; filtering never raises.
"""

from __future__ import annotations
from typing import List, Optional, Sequence


class WordlistError(Exception):
    stage: str = "filter"

    def __init__(self, detail: str, *, stage: Optional[str] = None):
        if stage is not None:
            self.stage = stage
        self.detail = detail
        super().__init__(f"[{self.stage}] {detail}")


class InvalidSpec(WordlistError):
    stage = "config"


class SourceUnavailable(WordlistError):
    stage = "read"


class WriteFailure(WordlistError):
    stage = "write"

    def __init__(self, detail: str, *, stage: Optional[str] = None, completed: Sequence = ()):
        super().__init__(detail, stage=stage)
        # artifacts fully written before the failure; left on disk
        self.completed: List = list(completed)


class ConflictRequiresConfirmation(WordlistError):
    stage = "partition"

    def __init__(self, paths: Sequence[str]):
        self.paths: List[str] = list(paths)
        shown = ", ".join(self.paths[:5])
        if len(self.paths) > 5:
            shown += f", ... ({len(self.paths)} files)"
        super().__init__(f"output exists and overwrite was not confirmed: {shown}")
