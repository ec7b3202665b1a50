"""Core pipeline data model.

- Decision: outcome of one predicate on one line
- PipelineStats: counters collected while streaming
- OutputArtifact: one produced file (or stdout), immutable once written
- RunResult: success/failure of a whole run, with the artifacts completed
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import WordlistError

STDOUT_NAME = "<stdout>"

@dataclass(frozen=True)
class Decision:
    accepted: bool
    stage: str
    reason_code: str = ""

@dataclass(frozen=True)
class OutputArtifact:
    name: str
    lines: int
    size_bytes: int
    # requested and actual share of the total, percentage splits only
    requested_pct: Optional[float] = None
    actual_pct: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lines": self.lines,
            "size_bytes": self.size_bytes,
            "requested_pct": self.requested_pct,
            "actual_pct": self.actual_pct,
        }

@dataclass
class PipelineStats:
    lines_read: int = 0
    lines_accepted: int = 0
    lines_rejected: int = 0
    duplicates_removed: int = 0
    lines_emitted: int = 0
    # first failing predicate per rejected line
    rejections: Dict[str, int] = field(default_factory=dict)
    # input/accepted/rejected per predicate, in evaluation order
    stage_counts: Dict[str, Dict[str, int]] = field(default_factory=dict)
    # predicate -> reason code -> count
    reasons: Dict[str, Dict[str, int]] = field(default_factory=dict)

    def record(self, decision: Decision) -> None:
        c = self.stage_counts.setdefault(decision.stage, {"in": 0, "acc": 0, "rej": 0})
        c["in"] += 1
        if decision.accepted:
            c["acc"] += 1
        else:
            c["rej"] += 1

    def reject(self, decision: Decision) -> None:
        self.lines_rejected += 1
        self.rejections[decision.stage] = self.rejections.get(decision.stage, 0) + 1
        by_reason = self.reasons.setdefault(decision.stage, {})
        code = decision.reason_code or "REJECT"
        by_reason[code] = by_reason.get(code, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lines_read": self.lines_read,
            "lines_accepted": self.lines_accepted,
            "lines_rejected": self.lines_rejected,
            "duplicates_removed": self.duplicates_removed,
            "lines_emitted": self.lines_emitted,
            "rejections": dict(self.rejections),
            "reasons": {k: dict(v) for k, v in self.reasons.items()},
        }

@dataclass
class RunResult:
    ok: bool
    artifacts: List[OutputArtifact] = field(default_factory=list)
    stats: PipelineStats = field(default_factory=PipelineStats)
    error: Optional[WordlistError] = None
    mode: str = "single"
    run_id: str = "run"

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    @property
    def total_lines(self) -> int:
        return sum(a.lines for a in self.artifacts)

    @property
    def failed_stage(self) -> Optional[str]:
        return self.error.stage if self.error is not None else None
