"""Run summary report.

Renders a RunResult as:
- plain lines (same wording for every caller, also written to reports/)
- a rich table for interactive use (stderr)

Percentage splits show both the requested and the actual share of lines so
rounding differences stay visible.
"""

from __future__ import annotations
import os
from datetime import datetime
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..pipeline.context import STDOUT_NAME, RunResult
from ..utils.sizes import format_size


def summary_lines(result: RunResult) -> List[str]:
    """Human-readable summary, one string per line."""
    lines: List[str] = []
    arts = result.artifacts
    if not result.ok:
        lines.append(f"Error: {result.message}")
        if arts:
            lines.append(f"Completed before failure ({len(arts)} files):")
            for a in arts:
                lines.append(f"  {a.name}: {a.lines} words ({format_size(a.size_bytes)})")
        return lines

    total = result.total_lines
    if result.mode == "pct_split":
        lines.append(f"Splitting {total} words into {len(arts)} percentage-based files:")
        for a in arts:
            lines.append(f"  {a.name}: {a.lines} words ({a.actual_pct:.1f}%, {format_size(a.size_bytes)})")
        lines.append(f"Total: {total} words split into {len(arts)} files")
    elif result.mode == "size_split":
        lines.append(f"Processed wordlist split into {len(arts)} files:")
        for a in arts:
            lines.append(f"  {a.name}: {a.lines} words ({format_size(a.size_bytes)})")
        lines.append(f"Total: {total} words")
    else:
        for a in arts:
            if a.name == STDOUT_NAME:
                lines.append(f"Processed wordlist written to stdout ({a.lines} words)")
            else:
                lines.append(f"Processed wordlist saved to '{a.name}' ({a.lines} words)")
    st = result.stats
    if st.lines_read:
        lines.append(
            f"Read {st.lines_read} lines: {st.lines_accepted} kept, {st.lines_rejected} rejected"
            + (f", {st.duplicates_removed} duplicates removed" if st.duplicates_removed else "")
        )
    return lines


def render_table(result: RunResult, console: Optional[Console] = None) -> None:
    """Print the artifact table (and rejection breakdown) to console (stderr by default)."""
    console = console or Console(stderr=True)
    pct = result.mode == "pct_split"

    title = "Artifacts" if result.ok else f"[red]Failed[/red] ({result.failed_stage}): completed artifacts"
    table = Table(title=title, box=box.SIMPLE_HEAVY)
    table.add_column("Artifact", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Bytes", justify="right")
    table.add_column("Size", justify="right")
    if pct:
        table.add_column("Requested %", justify="right")
        table.add_column("Actual %", justify="right")
    for a in result.artifacts:
        row = [escape(a.name), f"{a.lines:,}", f"{a.size_bytes:,}", format_size(a.size_bytes)]
        if pct:
            row += [f"{a.requested_pct:g}", f"{a.actual_pct:.1f}"]
        table.add_row(*row)
    if result.artifacts:
        total_bytes = sum(a.size_bytes for a in result.artifacts)
        footer = ["Total", f"{result.total_lines:,}", f"{total_bytes:,}", format_size(total_bytes)]
        if pct:
            footer += ["100", "100.0" if result.total_lines else "0.0"]
        table.add_row(*footer, style="bold")
    console.print(table)

    st = result.stats
    if st.rejections:
        rej = Table(title="Rejections by predicate", box=box.SIMPLE)
        rej.add_column("Predicate")
        rej.add_column("Reason")
        rej.add_column("Lines", justify="right")
        for name, reasons in st.reasons.items():
            for code, n in sorted(reasons.items(), key=lambda kv: -kv[1]):
                rej.add_row(escape(name), code, f"{n:,}")
        console.print(rej)
    if not result.ok:
        console.print(f"[bold red]{escape(result.message)}[/bold red]")


def generate_summary_report(out_dir: str, result: RunResult) -> str:
    """Write `<out_dir>/reports/<run_id>_summary.txt` and return its path."""
    report_path = os.path.join(out_dir, "reports", f"{result.run_id}_summary.txt")
    os.makedirs(os.path.dirname(report_path), exist_ok=True)
    lines = [
        "=" * 70,
        "WORDLIST RUN SUMMARY",
        "=" * 70,
        f"Run ID: {result.run_id}",
        f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"Status: {'ok' if result.ok else 'FAILED at ' + str(result.failed_stage)}",
        "",
    ]
    lines.extend(summary_lines(result))
    with open(report_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return report_path
