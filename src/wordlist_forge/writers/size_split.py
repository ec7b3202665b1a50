"""Size-bounded split.

Lines go to `<base>_part_01<ext>`, `<base>_part_02<ext>`, ... in order. A new
artifact is started whenever the next line (newline included) would push the
current one past `max_bytes`. Lines are never cut: a line larger than
`max_bytes` is written alone to its own artifact.

Single forward pass; no buffering beyond what upstream stages already did.
An empty input still produces one empty artifact.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ..config.filter_spec import SizeSplit
from ..errors import WordlistError
from ..output_layout import existing_parts, part_path
from ..pipeline.context import OutputArtifact
from ..pipeline.stream import LineSequence
from ..sources.base import encode_line
from .base import ArtifactWriter, Partitioner, remove_files

log = logging.getLogger("wordlist_forge.writers.size_split")

class SizeSplitPartitioner(Partitioner):
    name = "size_split"

    def __init__(self, mode: SizeSplit):
        super().__init__()
        self.mode = mode

    @property
    def output_path(self) -> Optional[str]:
        return self.mode.path

    def conflicts(self) -> List[str]:
        return existing_parts(self.mode.path)

    def clear_conflicts(self, paths) -> None:
        remove_files(paths)

    def _next_writer(self) -> ArtifactWriter:
        path = part_path(self.mode.path, len(self.completed) + 1)
        log.debug(f"starting artifact {path}")
        return ArtifactWriter(path)

    def write(self, seq: LineSequence) -> List[OutputArtifact]:
        limit = self.mode.max_bytes
        writer: Optional[ArtifactWriter] = None
        try:
            writer = self._next_writer()
            writer.open()
            for line in seq:
                data = encode_line(line)
                if writer.lines and writer.size_bytes + len(data) > limit:
                    self.completed.append(writer.close())
                    writer = self._next_writer()
                    writer.open()
                writer.write_encoded(data)
            self.completed.append(writer.close())
        except OSError as e:
            raise self._fail(writer, e) from e
        except WordlistError:
            if writer is not None:
                writer.abort()
            raise
        return list(self.completed)
