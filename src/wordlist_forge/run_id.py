"""Run ID resolution: explicit, or generated from the input name and a timestamp.

Example: `rockyou_20261018_094312` for `wordlist ... rockyou.txt`.
"""

from __future__ import annotations
import os
import re
from datetime import datetime, timezone
from typing import Optional

from .sources.base import STDIN_SENTINEL


def _input_name(identifier: str) -> str:
    """Short name for the input: file stem, or 'stdin'."""
    if identifier == STDIN_SENTINEL:
        return "stdin"
    name = os.path.splitext(os.path.basename(os.path.normpath(identifier)))[0]
    # Safe for run_id: alphanumeric and underscore
    name = re.sub(r"[^\w\-]", "_", name)
    return name or "run"


def generate_run_id(identifier: str, *, now: Optional[datetime] = None, separator: str = "_") -> str:
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%d" + separator + "%H%M%S")
    return separator.join([_input_name(identifier), ts])


def resolve_run_id(identifier: str, explicit: Optional[str] = None) -> str:
    """Return explicit run id when given (non-blank), otherwise a generated one."""
    if explicit is not None and str(explicit).strip():
        return str(explicit).strip()
    return generate_run_id(identifier)
