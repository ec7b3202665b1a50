"""Analytics event schemas.

One small event per predicate (and one for dedup) per run. Events are stored
to Parquet by AnalyticsSink and are meant for comparing filter presets across
runs, e.g. "which predicate removes most of rockyou".
"""

from __future__ import annotations
from typing import Dict, Any
import time

def make_event(
    *,
    run_id: str,
    stage: str,
    source: str,
    counts: Dict[str, int],
    rejection_breakdown: Dict[str, int] | None = None,
) -> Dict[str, Any]:
    return {
        "run_id": run_id,
        "stage": stage,
        "source": source,
        "timestamp_ms": int(time.time() * 1000),
        "input_lines": int(counts.get("input_lines", 0)),
        "accepted_lines": int(counts.get("accepted_lines", 0)),
        "rejected_lines": int(counts.get("rejected_lines", 0)),
        "rejection_breakdown": dict(rejection_breakdown or {}),
    }
