"""Analytics sink.

Raw events are appended to Parquet, partitioned by stage:

  <out_dir>/analytics/events/stage=<name>/events.parquet

Each run appends its rows; an unreadable existing file is replaced rather
than blocking the run.
"""

from __future__ import annotations
import logging
import os
from typing import Any, Dict, Iterable, List

import pyarrow as pa
import pyarrow.parquet as pq

from ..pipeline.context import PipelineStats
from .schemas import make_event

log = logging.getLogger("wordlist_forge.analytics")

def _event_schema() -> pa.Schema:
    return pa.schema([
        ("run_id", pa.string()),
        ("stage", pa.string()),
        ("source", pa.string()),
        ("timestamp_ms", pa.int64()),
        ("input_lines", pa.int64()),
        ("accepted_lines", pa.int64()),
        ("rejected_lines", pa.int64()),
        ("rejection_breakdown", pa.map_(pa.string(), pa.int64())),
    ])

class AnalyticsSink:
    def __init__(self, out_dir: str, run_id: str):
        self.out_dir = out_dir
        self.run_id = run_id
        self.events_dir = os.path.join(out_dir, "analytics", "events")
        os.makedirs(self.events_dir, exist_ok=True)

    def emit(self, event: Dict[str, Any]) -> str:
        p = os.path.join(self.events_dir, f"stage={event['stage']}", "events.parquet")
        os.makedirs(os.path.dirname(p), exist_ok=True)
        self._append_parquet(p, [event])
        return p

    def emit_stats(self, stats: PipelineStats, source: str, stage_names: Iterable[str], *, dedup: bool = False) -> List[str]:
        """One event per predicate (in evaluation order), plus one for dedup when enabled."""
        paths = []
        for name in stage_names:
            c = stats.stage_counts.get(name, {"in": 0, "acc": 0, "rej": 0})
            paths.append(self.emit(make_event(
                run_id=self.run_id,
                stage=name,
                source=source,
                counts={"input_lines": c["in"], "accepted_lines": c["acc"], "rejected_lines": c["rej"]},
                rejection_breakdown=stats.reasons.get(name, {}),
            )))
        if not dedup:
            return paths
        unique_in = stats.lines_accepted
        paths.append(self.emit(make_event(
            run_id=self.run_id,
            stage="dedup",
            source=source,
            counts={
                "input_lines": unique_in,
                "accepted_lines": unique_in - stats.duplicates_removed,
                "rejected_lines": stats.duplicates_removed,
            },
        )))
        return paths

    def _append_parquet(self, path: str, rows: List[Dict[str, Any]]) -> None:
        schema = _event_schema()
        for r in rows:
            r["rejection_breakdown"] = list(r.get("rejection_breakdown", {}).items())
        table = pa.Table.from_pylist(rows, schema=schema)
        if os.path.exists(path) and os.path.getsize(path) > 0:
            try:
                existing = pq.read_table(path, schema=schema)
                table = pa.concat_tables([existing, table])
            except (pa.ArrowException, OSError) as e:
                log.warning(f"replacing unreadable analytics file {path}: {e}")
        pq.write_table(table, path, compression="zstd")
