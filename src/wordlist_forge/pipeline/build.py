"""Pipeline runner.

One run, in order:
1. open the line source (fails fast with SourceUnavailable, nothing written)
2. partitioner preflight: output != input, directory writable, existing
   artifacts confirmed by the caller's policy
3. stream: filter -> dedup -> sort -> randomize (see pipeline.stream)
4. partition into artifacts
5. optional analytics events, manifest and summary report

Errors from the taxonomy in `wordlist_forge.errors` become a failed RunResult
listing only the artifacts that were completed; they are never swallowed.

This module is the entrypoint for library callers; the CLI is a thin layer
on top of `run_wordlist`.
"""

from __future__ import annotations
from typing import Any, BinaryIO, Dict, Optional
import logging
import os
import sys
import time

from tqdm import tqdm

from ..config.filter_spec import FilterSpec
from ..errors import WordlistError
from ..sources.base import LineSource
from ..stages.registry import Evaluator
from ..storage.writer import write_manifest
from ..writers.base import ConfirmPolicy
from ..writers.registry import get_partitioner
from .context import PipelineStats, RunResult
from .stream import apply_stages, materialize

log = logging.getLogger("wordlist_forge.build")

def run_wordlist(
    spec: FilterSpec,
    source: LineSource,
    *,
    confirm: Optional[ConfirmPolicy] = None,
    stdout: Optional[BinaryIO] = None,
    run_id: str = "run",
    analytics_dir: Optional[str] = None,
    progress: bool = False,
) -> RunResult:
    """Run one filtering job and return its result (never raises WordlistError)."""
    start_ms = int(time.time() * 1000)
    stats = PipelineStats()
    partitioner = get_partitioner(spec.output_mode, stdout=stdout)
    evaluator = Evaluator.from_spec(spec)
    result = RunResult(ok=False, stats=stats, mode=spec.output_mode.kind, run_id=run_id)

    if spec.needs_materialization:
        log.info("sort/randomize/percentage split hold all surviving lines in memory")
    log.info(
        f"Starting run={run_id} source={source.name} predicates={evaluator.names or ['none']} "
        f"dedup={spec.dedup} sort={spec.sort} randomize={spec.randomize} output={spec.output_mode.kind}"
    )

    try:
        with source:
            partitioner.preflight(input_path=getattr(source, "path", None), confirm=confirm)
            bar = tqdm(
                source.lines(), desc=source.name, unit=" lines", unit_scale=True,
                file=sys.stderr, disable=not progress, leave=False,
            )
            try:
                seq = apply_stages(
                    bar, evaluator,
                    dedup=spec.dedup, sort=spec.sort, randomize=spec.randomize,
                    seed=spec.seed, stats=stats,
                )
                if partitioner.needs_total:
                    seq = materialize(seq)
                result.artifacts = partitioner.write(seq)
            finally:
                bar.close()
        result.ok = True
    except WordlistError as e:
        log.error(f"Run {run_id} failed: {e}")
        result.error = e
        result.artifacts = list(partitioner.completed)

    stats.lines_emitted = result.total_lines
    log.info(
        f"Run {run_id} {'complete' if result.ok else 'failed'}: read={stats.lines_read} "
        f"kept={stats.lines_accepted} rejected={stats.lines_rejected} "
        f"duplicates={stats.duplicates_removed} emitted={stats.lines_emitted} artifacts={len(result.artifacts)}"
    )

    if analytics_dir:
        _write_run_outputs(analytics_dir, spec, source, evaluator, result, start_ms)
    return result

def _write_run_outputs(
    out_dir: str,
    spec: FilterSpec,
    source: LineSource,
    evaluator: Evaluator,
    result: RunResult,
    start_ms: int,
) -> None:
    # Analytics, manifest and report are secondary: a failure here is logged
    # and does not change the outcome of the run.
    from ..analytics.sink import AnalyticsSink
    from ..tools.summary_report import generate_summary_report

    try:
        sink = AnalyticsSink(out_dir=out_dir, run_id=result.run_id)
        sink.emit_stats(result.stats, source.name, evaluator.names, dedup=spec.dedup)
        manifest_path = os.path.join(out_dir, "manifests", f"{result.run_id}.json")
        write_manifest(manifest_path, _manifest(spec, source, result, start_ms))
        report_path = generate_summary_report(out_dir, result)
        log.info(f"Manifest: {manifest_path} Summary report: {report_path}")
    except (OSError, ValueError) as e:
        log.warning(f"Could not write analytics for run {result.run_id}: {e}")

def _manifest(spec: FilterSpec, source: LineSource, result: RunResult, start_ms: int) -> Dict[str, Any]:
    return {
        "run_id": result.run_id,
        "ok": result.ok,
        "error": None if result.error is None else {
            "stage": result.error.stage,
            "type": type(result.error).__name__,
            "message": result.message,
        },
        "start_time_ms": start_ms,
        "end_time_ms": int(time.time() * 1000),
        "source": source.metadata(),
        "filter": spec.to_dict(),
        "stats": result.stats.to_dict(),
        "artifacts": [a.to_dict() for a in result.artifacts],
    }
