"""Byte-size parsing and formatting.

Suffixes follow GNU `split`:
- K, M, G, T        -> powers of 1024
- KB, MB, GB, TB    -> powers of 1000
Case-insensitive. A bare number is bytes.
"""

from __future__ import annotations
import re

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmgt])?(b)?\s*$", re.IGNORECASE)
_EXP = {"k": 1, "m": 2, "g": 3, "t": 4}

def parse_size(value: str) -> int:
    """Parse '10MB', '1G', '50000' into a byte count. Raises ValueError."""
    m = _SIZE_RE.match(str(value))
    if not m:
        raise ValueError(f"invalid size {value!r}; use N, NK, NM, NG, NT or NKB, NMB, NGB, NTB")
    number, unit, b = m.groups()
    if unit is None:
        if b:
            raise ValueError(f"invalid size {value!r}; 'B' needs a unit prefix")
        return int(number)
    base = 1000 if b else 1024
    return int(number) * base ** _EXP[unit.lower()]

def format_size(num_bytes: int) -> str:
    """Human-readable size in the style of `ls -lh` (0B, 512B, 1.5K, 10M)."""
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            if unit == "B":
                return f"{int(size)}B"
            return f"{size:.1f}{unit}" if size < 10 else f"{size:.0f}{unit}"
        size /= 1024
    return f"{num_bytes}B"
