"""Logging utilities.

We use Python's standard `logging` module.

- Console handler writes to stderr: stdout carries the wordlist itself when
  no output file is given.
- Optionally also logs to `<log_dir>/<run_id>.log`.
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"

def setup_logging(level: int = logging.INFO, run_id: str = "run", log_dir: Optional[str] = None) -> None:
    """
    Setup logging configuration.

    Args:
        level: Root log level
        run_id: Run identifier, used for the log file name
        log_dir: Directory for a per-run log file (None disables file logging)
    """
    root = logging.getLogger()
    root.setLevel(level)
    # repeated calls (one per CLI invocation) replace the handlers added here
    for h in [h for h in root.handlers if getattr(h, "_wordlist_forge", False)]:
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    # Console
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    ch._wordlist_forge = True
    root.addHandler(ch)

    # File
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, f"{run_id}.log"), encoding="utf-8")
        fh.setFormatter(fmt)
        fh._wordlist_forge = True
        root.addHandler(fh)
