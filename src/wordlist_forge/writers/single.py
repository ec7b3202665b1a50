"""Single-output partitioner: every line to one file, or to stdout."""

from __future__ import annotations
import os
from typing import BinaryIO, List, Optional

from ..config.filter_spec import SingleOutput
from ..errors import WordlistError
from ..pipeline.context import OutputArtifact
from ..pipeline.stream import LineSequence
from .base import ArtifactWriter, Partitioner

class SinglePartitioner(Partitioner):
    name = "single"

    def __init__(self, mode: SingleOutput, *, stdout: Optional[BinaryIO] = None):
        super().__init__()
        self.mode = mode
        self._stdout = stdout

    @property
    def output_path(self) -> Optional[str]:
        return self.mode.path

    def conflicts(self) -> List[str]:
        path = self.mode.path
        return [path] if path is not None and os.path.exists(path) else []

    def write(self, seq: LineSequence) -> List[OutputArtifact]:
        writer = ArtifactWriter(self.mode.path, stdout=self._stdout)
        try:
            writer.open()
            for line in seq:
                writer.write(line)
            self.completed.append(writer.close())
        except OSError as e:
            raise self._fail(writer, e) from e
        except WordlistError:
            writer.abort()
            raise
        return list(self.completed)
