"""Partitioner interface.

A partitioner turns the final line sequence into one or more OutputArtifacts:

- preflight(): target directory writable, output is not the input, existing
  artifacts found and handed to the caller's confirmation policy
- write(): materializes artifacts in index order

Artifacts are recorded in `completed` as each one is closed, so a WriteFailure
part-way through reports exactly the files that were fully written. Nothing
is rolled back.
"""

from __future__ import annotations
import logging
import os
import sys
from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, List, Optional, Sequence

from ..errors import ConflictRequiresConfirmation, WriteFailure
from ..output_layout import ensure_writable_dir, is_same_file
from ..pipeline.context import STDOUT_NAME, OutputArtifact
from ..pipeline.stream import LineSequence
from ..sources.base import BUFFER_SIZE, encode_line

log = logging.getLogger("wordlist_forge.writers")

# Receives the conflicting paths; True means "overwrite".
ConfirmPolicy = Callable[[List[str]], bool]


class ArtifactWriter:
    """Writes encoded lines to one file (or stdout) and counts lines and bytes."""

    def __init__(self, path: Optional[str], *, stdout: Optional[BinaryIO] = None):
        self.path = path
        self.name = path if path is not None else STDOUT_NAME
        self.lines = 0
        self.size_bytes = 0
        self._stdout = stdout
        self._handle: Optional[BinaryIO] = None

    def open(self) -> "ArtifactWriter":
        if self.path is None:
            self._handle = self._stdout or sys.stdout.buffer
        else:
            self._handle = open(self.path, "wb", buffering=BUFFER_SIZE)
        return self

    def write_encoded(self, data: bytes) -> None:
        self._handle.write(data)
        self.lines += 1
        self.size_bytes += len(data)

    def write(self, line: str) -> None:
        self.write_encoded(encode_line(line))

    def close(self, **extra) -> OutputArtifact:
        if self._handle is not None:
            if self.path is None:
                self._handle.flush()
            else:
                self._handle.close()
            self._handle = None
        return OutputArtifact(name=self.name, lines=self.lines, size_bytes=self.size_bytes, **extra)

    def abort(self) -> None:
        """Release the handle after a failure; errors while closing are secondary."""
        handle, self._handle = self._handle, None
        if handle is not None and self.path is not None:
            try:
                handle.close()
            except OSError as e:
                log.debug(f"close after failure on {self.name}: {e}")


class Partitioner(ABC):
    name: str = "partitioner"
    # True when the total line count must be known before writing
    needs_total: bool = False

    def __init__(self) -> None:
        self.completed: List[OutputArtifact] = []

    @property
    @abstractmethod
    def output_path(self) -> Optional[str]:
        """Requested output name (None for stdout)."""
        raise NotImplementedError

    @abstractmethod
    def conflicts(self) -> List[str]:
        """Existing files this run would overwrite."""
        raise NotImplementedError

    @abstractmethod
    def write(self, seq: LineSequence) -> List[OutputArtifact]:
        raise NotImplementedError

    def clear_conflicts(self, paths: Sequence[str]) -> None:
        """Called after the caller confirmed overwriting `paths`."""

    def preflight(self, *, input_path: Optional[str] = None, confirm: Optional[ConfirmPolicy] = None) -> None:
        path = self.output_path
        if path is None:
            return
        existing = self.conflicts()
        for target in [path] + existing:
            if is_same_file(target, input_path):
                raise WriteFailure(f"output file '{target}' cannot be the same as input file", stage="partition")
        ensure_writable_dir(path)
        if existing:
            if confirm is None or not confirm(list(existing)):
                raise ConflictRequiresConfirmation(existing)
            log.info(f"overwriting {len(existing)} existing file(s)")
            self.clear_conflicts(existing)

    def _fail(self, writer: Optional[ArtifactWriter], exc: OSError) -> WriteFailure:
        if writer is not None:
            writer.abort()
        name = writer.name if writer is not None else self.output_path
        return WriteFailure(f"failed writing '{name}': {exc.strerror or exc}", completed=self.completed)


def remove_files(paths: Sequence[str]) -> None:
    for p in paths:
        try:
            os.remove(p)
        except FileNotFoundError:
            continue
        except OSError as e:
            raise WriteFailure(f"cannot remove existing file '{p}': {e.strerror or e}", stage="partition") from e
