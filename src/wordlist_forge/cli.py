"""CLI entrypoint.

Commands:
- `wordlist filter [OPTIONS] <file|->`
- `wordlist config-diff --a <file.yaml> --b <file.yaml>`

Examples:
  wordlist filter -su words.txt                      # sort + unique to stdout
  wordlist filter --min 8 --min-num 1 -o out.txt in.txt
  wordlist filter --split 10MB -o parts.txt in.txt   # parts_part_01.txt, ...
  wordlist filter --split-pct "30 30 40" -o p.txt in.txt
  cat words.txt | wordlist filter -r --seed 7 -
  wordlist filter --config presets/strict.yaml --max 16 in.txt

Flags override values loaded from --config.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from .config.builder import build_filter_spec
from .config.diff import main as config_diff_main
from .config.loader import load_yaml
from .errors import InvalidSpec
from .logging_ import setup_logging
from .pipeline.build import run_wordlist
from .run_id import resolve_run_id
from .sources.base import STDIN_SENTINEL
from .sources.registry import make_source
from .tools.summary_report import render_table, summary_lines
from .utils.regex import SYNTAXES
from .writers.base import ConfirmPolicy

# argparse dest -> FilterSpec builder key
_SPEC_ARGS = {
    "min_length": "min_length", "max_length": "max_length",
    "min_entropy": "min_entropy", "max_entropy": "max_entropy",
    "min_num": "min_digits", "max_num": "max_digits",
    "min_lower": "min_lower", "max_lower": "max_lower",
    "min_upper": "min_upper", "max_upper": "max_upper",
    "min_special": "min_special", "max_special": "max_special",
    "regex": "regex_include", "not_regex": "regex_exclude",
    "regex_syntax": "regex_syntax", "case_insensitive": "case_insensitive",
    "whitespace": "whitespace_policy",
    "sort": "sort", "unique": "dedup", "randomize": "randomize", "seed": "seed",
    "output": "output", "split": "split_size", "split_pct": "split_percentages",
}
_SPLIT_KEYS = ("split_size", "split_percentages")


def _add_filter_parser(sub) -> argparse.ArgumentParser:
    pf = sub.add_parser("filter", help="Filter, reorder and split a wordlist")
    pf.add_argument("input", help="Input file, or '-' for standard input")
    pf.add_argument("--config", help="YAML file with filter settings")

    g = pf.add_argument_group("ordering")
    g.add_argument("-s", "--sort", action="store_true", default=None, help="Sort the wordlist")
    g.add_argument("-u", "--unique", action="store_true", default=None, help="Remove duplicate entries")
    g.add_argument("-r", "--randomize", action="store_true", default=None, help="Randomize word order")
    g.add_argument("--seed", type=int, help="Seed for -r (reproducible order)")

    g = pf.add_argument_group("length and entropy")
    g.add_argument("--min", dest="min_length", metavar="N", help="Keep words with minimum N characters")
    g.add_argument("--max", dest="max_length", metavar="N", help="Keep words with maximum N characters")
    g.add_argument("--min-entropy", metavar="E", help="Keep words with minimum entropy E")
    g.add_argument("--max-entropy", metavar="E", help="Keep words with maximum entropy E")

    g = pf.add_argument_group("character classes")
    for cls, label in (("num", "numbers"), ("lower", "lowercase letters"),
                       ("upper", "uppercase letters"), ("special", "special characters")):
        g.add_argument(f"--min-{cls}", metavar="N", help=f"Keep words with minimum N {label}")
        g.add_argument(f"--max-{cls}", metavar="N", help=f"Keep words with maximum N {label}")

    g = pf.add_argument_group("patterns")
    g.add_argument("--regex", metavar="PATTERN", help="Keep words matching regex pattern")
    g.add_argument("--not-regex", metavar="PATTERN", help="Exclude words matching regex pattern")
    g.add_argument("--regex-syntax", choices=SYNTAXES, help="POSIX regex flavour (default: extended)")
    g.add_argument("-i", dest="case_insensitive", action="store_true", default=None,
                   help="Case-insensitive regex matching")
    g.add_argument("-I", dest="case_insensitive", action="store_false", default=None,
                   help="Case-sensitive regex matching (default)")
    ws = g.add_mutually_exclusive_group()
    ws.add_argument("--keep-ws", dest="whitespace", action="store_const", const="require",
                    help="Keep only words containing whitespace")
    ws.add_argument("--remove-ws", dest="whitespace", action="store_const", const="forbid",
                    help="Remove words containing whitespace")

    g = pf.add_argument_group("output")
    g.add_argument("-o", "--output", metavar="FILE", help="Save output to file instead of stdout")
    split = g.add_mutually_exclusive_group()
    split.add_argument("--split", metavar="SIZE", help="Split output into files of max SIZE (e.g. 100MB, 1G)")
    split.add_argument("--split-pct", metavar='"X Y Z"', help="Split output into files with X%%, Y%%, Z%% of words")
    g.add_argument("-f", "--force", action="store_true", help="Overwrite existing output without asking")
    g.add_argument("--details", action="store_true", help="Show artifact and rejection tables on stderr")

    g = pf.add_argument_group("run")
    g.add_argument("--run-id", help="Run identifier (default: <input>_<timestamp>)")
    g.add_argument("--analytics-dir", help="Write analytics events, manifest and report here")
    g.add_argument("--log-dir", help="Also write logs to <log-dir>/<run-id>.log")
    g.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    return pf


def create_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wordlist", description="Streaming wordlist filtering and splitting.")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)
    _add_filter_parser(sub)

    pd = sub.add_parser("config-diff", help="Diff two YAML filter configurations")
    pd.add_argument("--a", required=True)
    pd.add_argument("--b", required=True)
    return p


def spec_values(args: argparse.Namespace) -> Dict[str, Any]:
    """Builder keyword values: --config file first, then command-line overrides."""
    values: Dict[str, Any] = load_yaml(args.config) if args.config else {}
    overrides = {key: getattr(args, dest) for dest, key in _SPEC_ARGS.items() if getattr(args, dest) is not None}
    if any(k in overrides for k in _SPLIT_KEYS):
        # a split mode given on the command line replaces the config file's
        for k in _SPLIT_KEYS:
            values.pop(k, None)
    values.update(overrides)
    return values


def make_confirm_policy(force: bool, input_is_stdin: bool, console: Console) -> Optional[ConfirmPolicy]:
    """--force always overwrites; otherwise ask only when a terminal can answer."""
    if force:
        return lambda paths: True
    if input_is_stdin or not sys.stdin.isatty():
        return None

    def ask(paths: List[str]) -> bool:
        shown = ", ".join(paths[:5]) + (f", ... ({len(paths)} files)" if len(paths) > 5 else "")
        return Confirm.ask(f"Output exists: {escape(shown)}. Overwrite?", default=False, console=console)

    return ask


def run_filter(args: argparse.Namespace, console: Console) -> int:
    try:
        spec = build_filter_spec(**spec_values(args))
    except InvalidSpec as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1

    run_id = resolve_run_id(args.input, args.run_id)
    setup_logging(getattr(logging, args.log_level), run_id=run_id, log_dir=args.log_dir)
    is_stdin = args.input == STDIN_SENTINEL
    result = run_wordlist(
        spec,
        make_source(args.input),
        confirm=make_confirm_policy(args.force, is_stdin, console),
        run_id=run_id,
        analytics_dir=args.analytics_dir,
        progress=not args.no_progress and sys.stderr.isatty(),
    )

    if not result.ok:
        render_table(result, console)
        return 1
    if spec.output_mode.path is not None:
        print("\n".join(summary_lines(result)))
    if args.details:
        render_table(result, console)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.cmd == "config-diff":
        setup_logging(getattr(logging, args.log_level))
        try:
            print(config_diff_main(args.a, args.b))
        except InvalidSpec as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        return 0

    return run_filter(args, Console(stderr=True))


if __name__ == "__main__":
    sys.exit(main())
