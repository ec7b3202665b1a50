"""Local line sources: a regular file, or standard input.

Usage:
- FileLineSource("words.txt")
- StdinLineSource()            # `wordlist ... -`
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Any, BinaryIO, Dict, Iterator, Optional

from ..errors import SourceUnavailable
from .base import BUFFER_SIZE, LineSource, iter_handle, size_hint

log = logging.getLogger("wordlist_forge.sources.local")

class FileLineSource(LineSource):
    def __init__(self, path: str):
        self.path = path
        self.name = path
        self._handle: Optional[BinaryIO] = None

    def metadata(self) -> Dict[str, Any]:
        return {
            "kind": "file",
            "path": self.path,
            "size_bytes": os.path.getsize(self.path) if os.path.isfile(self.path) else None,
        }

    def open(self) -> None:
        if not os.path.exists(self.path):
            raise SourceUnavailable(f"file '{self.path}' not found")
        if not os.path.isfile(self.path):
            raise SourceUnavailable(f"'{self.path}' is not a regular file")
        try:
            self._handle = open(self.path, "rb", buffering=BUFFER_SIZE)
        except OSError as e:
            raise SourceUnavailable(f"cannot open '{self.path}': {e.strerror or e}") from e
        log.debug(f"opened {self.path} ({size_hint(self._handle)} bytes)")

    def lines(self) -> Iterator[str]:
        if self._handle is None:
            self.open()
        return iter_handle(self._handle, self.path)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

class StdinLineSource(LineSource):
    """Standard input; readable exactly once per process."""
    name = "<stdin>"
    reopenable = False

    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream
        self._consumed = False

    def metadata(self) -> Dict[str, Any]:
        return {"kind": "stdin", "consumed": self._consumed}

    def open(self) -> None:
        if self._consumed:
            raise SourceUnavailable("standard input has already been consumed")
        if self._stream is None:
            self._stream = getattr(sys.stdin, "buffer", None)
        if self._stream is None or getattr(self._stream, "closed", False):
            raise SourceUnavailable("standard input is not available")

    def lines(self) -> Iterator[str]:
        self.open()
        self._consumed = True
        return iter_handle(self._stream, self.name)
