"""Config diff tool.

Resolves two YAML filter configurations through the builder and lists the
settings that differ. Comparing resolved specs rather than raw YAML means:
- `split_size: 10MB` and `split_size: 10000000` are the same setting
- a key left out and a key set to its default are the same setting
- an invalid or unknown key fails with InvalidSpec instead of being diffed

Usage:
`wordlist config-diff --a presets/strict.yaml --b presets/loose.yaml`
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from .builder import build_filter_spec
from .loader import load_yaml

# key path, value in a, value in b
DiffRow = Tuple[str, Any, Any]


class _Unset:
    def __repr__(self) -> str:
        return "(unset)"


UNSET = _Unset()


def resolve(path: str) -> Dict[str, Any]:
    """Validated settings of one YAML config, as plain data."""
    return build_filter_spec(**load_yaml(path)).to_dict()


def diff_settings(a: Dict[str, Any], b: Dict[str, Any], prefix: str = "") -> List[DiffRow]:
    """Rows for every setting whose resolved value differs, in key order.

    Nested mappings (the output mode) are compared key by key; a key present
    on one side only (e.g. `max_bytes` vs `percentages`) is reported with
    UNSET on the other.
    """
    rows: List[DiffRow] = []
    for key in sorted(set(a) | set(b)):
        path = f"{prefix}.{key}" if prefix else key
        old, new = a.get(key, UNSET), b.get(key, UNSET)
        if isinstance(old, dict) and isinstance(new, dict):
            rows.extend(diff_settings(old, new, path))
        elif old != new:
            rows.append((path, old, new))
    return rows


def render(rows: List[DiffRow]) -> str:
    if not rows:
        return "no differences"
    width = max(len(path) for path, _, _ in rows)
    return "\n".join(f"{path:<{width}}  {old!r} -> {new!r}" for path, old, new in rows)


def main(a_path: str, b_path: str) -> str:
    return render(diff_settings(resolve(a_path), resolve(b_path)))
