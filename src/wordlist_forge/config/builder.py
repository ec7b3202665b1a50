"""FilterSpec builder.

Turns loosely-typed values (CLI flags, YAML keys) into a validated FilterSpec.
All spec-level validation lives here so the pipeline and partitioners can
assume a valid spec:

- numeric bounds parse and are non-negative
- min <= max for every pair that has both ends set
- at most one split mode; split modes need an output path
- percentages are non-negative and sum to 100 (+/- 0.01)
- regex patterns compile (POSIX extended or basic syntax)

Every failure raises InvalidSpec with a message naming the offending key.
"""

from __future__ import annotations
import re
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import InvalidSpec
from ..utils.regex import EXTENDED, SYNTAXES, compile_posix
from ..utils.sizes import parse_size
from .filter_spec import FilterSpec, PctSplit, SingleOutput, SizeSplit, WhitespacePolicy

PCT_TOLERANCE = Decimal("0.01")

_INT_BOUNDS = (
    "min_length", "max_length",
    "min_digits", "max_digits",
    "min_lower", "max_lower",
    "min_upper", "max_upper",
    "min_special", "max_special",
)
_FLOAT_BOUNDS = ("min_entropy", "max_entropy")
_PAIRS = (
    ("min_length", "max_length"),
    ("min_entropy", "max_entropy"),
    ("min_digits", "max_digits"),
    ("min_lower", "max_lower"),
    ("min_upper", "max_upper"),
    ("min_special", "max_special"),
)
_FLAGS = ("sort", "dedup", "randomize", "case_insensitive")

# every key accepted by build_filter_spec (and therefore by YAML configs)
CONFIG_KEYS = frozenset(
    _INT_BOUNDS + _FLOAT_BOUNDS + _FLAGS + (
        "regex_include", "regex_exclude", "regex_syntax",
        "whitespace_policy", "seed",
        "output", "split_size", "split_percentages",
    )
)


def _as_int(key: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    text = str(value).strip()
    if isinstance(value, bool) or not (text.isascii() and text.isdigit()):
        raise InvalidSpec(f"{key} requires a non-negative integer, got {value!r}")
    return int(text)

def _as_bool(key: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidSpec(f"{key} requires true or false, got {value!r}")
    return value

def _as_float(key: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        raise InvalidSpec(f"{key} requires a non-negative number, got {value!r}") from None
    if f < 0 or f != f:
        raise InvalidSpec(f"{key} requires a non-negative number, got {value!r}")
    return f

def parse_percentages(value: Union[str, Iterable[Any]]) -> Tuple[float, ...]:
    """Parse "30 30 40" (or a list) into a tuple of percentages summing to 100."""
    items: Sequence[Any] = value.split() if isinstance(value, str) else list(value)
    if not items:
        raise InvalidSpec("split_percentages requires at least one percentage")
    pcts: List[float] = []
    for item in items:
        try:
            p = float(item)
        except (TypeError, ValueError):
            raise InvalidSpec(f"invalid percentage {item!r}; use numbers only") from None
        if p < 0 or p != p:
            raise InvalidSpec(f"invalid percentage {item!r}; must be non-negative")
        pcts.append(p)
    # exact decimal sum so "33.33 33.33 33.34" is 100, not 99.99999999999999
    total = sum(Decimal(str(p)) for p in pcts)
    if abs(total - 100) > PCT_TOLERANCE:
        raise InvalidSpec(f"percentages must sum to 100, current sum: {total:g}")
    return tuple(pcts)

def _output_mode(output: Optional[str], split_size: Any, split_percentages: Any):
    if split_size is not None and split_percentages is not None:
        raise InvalidSpec("split_size and split_percentages are mutually exclusive")
    if split_size is not None:
        if not output:
            raise InvalidSpec("split_size requires an output file name")
        if isinstance(split_size, int) and not isinstance(split_size, bool):
            max_bytes = split_size
        else:
            try:
                max_bytes = parse_size(split_size)
            except ValueError as e:
                raise InvalidSpec(str(e)) from None
        if max_bytes <= 0:
            raise InvalidSpec(f"split_size must be positive, got {split_size!r}")
        return SizeSplit(path=output, max_bytes=max_bytes)
    if split_percentages is not None:
        if not output:
            raise InvalidSpec("split_percentages requires an output file name")
        return PctSplit(path=output, percentages=parse_percentages(split_percentages))
    return SingleOutput(path=output or None)

def _whitespace(value: Any) -> WhitespacePolicy:
    if value is None:
        return WhitespacePolicy.ANY
    if isinstance(value, WhitespacePolicy):
        return value
    try:
        return WhitespacePolicy(str(value).lower())
    except ValueError:
        allowed = ", ".join(p.value for p in WhitespacePolicy)
        raise InvalidSpec(f"whitespace_policy must be one of {allowed}, got {value!r}") from None

def _compile(key: str, pattern: Optional[str], syntax: str, case_insensitive: bool):
    if pattern is None:
        return None
    if pattern == "":
        raise InvalidSpec(f"{key} requires a pattern")
    try:
        return compile_posix(pattern, syntax=syntax, case_insensitive=case_insensitive)
    except re.error as e:
        raise InvalidSpec(f"{key}: invalid pattern {pattern!r}: {e}") from None

def build_filter_spec(**values: Any) -> FilterSpec:
    """Validate values and return a FilterSpec. Keys are listed in CONFIG_KEYS."""
    unknown = sorted(set(values) - CONFIG_KEYS)
    if unknown:
        raise InvalidSpec(f"unknown configuration keys: {', '.join(unknown)}")

    kw: Dict[str, Any] = {}
    for key in _INT_BOUNDS:
        kw[key] = _as_int(key, values.get(key))
    for key in _FLOAT_BOUNDS:
        kw[key] = _as_float(key, values.get(key))
    for lo, hi in _PAIRS:
        if kw[lo] is not None and kw[hi] is not None and kw[lo] > kw[hi]:
            raise InvalidSpec(f"{lo} ({kw[lo]}) cannot be greater than {hi} ({kw[hi]})")

    for key in _FLAGS:
        kw[key] = _as_bool(key, values.get(key))

    syntax = values.get("regex_syntax") or EXTENDED
    if syntax not in SYNTAXES:
        raise InvalidSpec(f"regex_syntax must be one of {', '.join(SYNTAXES)}, got {syntax!r}")
    ci = kw["case_insensitive"]
    kw["regex_include"] = _compile("regex_include", values.get("regex_include"), syntax, ci)
    kw["regex_exclude"] = _compile("regex_exclude", values.get("regex_exclude"), syntax, ci)

    kw["whitespace_policy"] = _whitespace(values.get("whitespace_policy"))
    seed = values.get("seed")
    kw["seed"] = None if seed is None else _as_int("seed", seed)
    kw["output_mode"] = _output_mode(
        values.get("output"), values.get("split_size"), values.get("split_percentages"),
    )
    return FilterSpec(**kw)
