"""Line source interface.

A line source yields decoded lines (no trailing newline) exactly once.

- FileLineSource may be reopened, but the pipeline never needs to
- StdinLineSource refuses a second read: standard input cannot be rewound

Lines are read as bytes, split on b"\\n", a trailing b"\\r" is dropped, and
the bytes are decoded as UTF-8 with "surrogateescape" so that undecodable
bytes are written back to the output unchanged (see `encode_line`).
"""

from __future__ import annotations
import os
from typing import Any, BinaryIO, Dict, Iterator, Optional

from ..errors import SourceUnavailable

ENCODING = "utf-8"
ERRORS = "surrogateescape"

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

STDIN_SENTINEL = "-"

def decode_line(raw: bytes) -> str:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw.decode(ENCODING, ERRORS)

def encode_line(line: str) -> bytes:
    """Bytes written for one line, newline included."""
    return line.encode(ENCODING, ERRORS) + b"\n"

class LineSource:
    """Base interface for all line sources."""
    name: str
    reopenable: bool = True

    def metadata(self) -> Dict[str, Any]:
        return {"name": self.name}

    def open(self) -> None:
        """Acquire the underlying handle; raises SourceUnavailable."""
        raise NotImplementedError

    def lines(self) -> Iterator[str]:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "LineSource":
        self.open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

def iter_handle(handle: BinaryIO, name: str) -> Iterator[str]:
    """Decode lines from a binary handle, wrapping read errors as SourceUnavailable."""
    try:
        for raw in handle:
            yield decode_line(raw)
    except OSError as e:
        raise SourceUnavailable(f"error reading {name}: {e.strerror or e}") from e

def size_hint(handle: Optional[BinaryIO]) -> Optional[int]:
    """Total size in bytes when the handle is a regular file, else None."""
    if handle is None:
        return None
    try:
        return os.fstat(handle.fileno()).st_size
    except (OSError, ValueError, AttributeError):
        return None
