"""Percentage split.

Needs the total surviving line count up front, so the sequence is always
materialized. For percentages p_1..p_n and total N:

- artifact i < n receives floor(N * p_i / 100) lines
- artifact n receives everything left, absorbing all rounding

so the artifact counts always sum to N. Percentages are taken as exact
decimals (Decimal(str(p))) so 33 stays 33 and not 32.999... . An artifact
allocated 0 lines is still created, empty.

Each artifact reports its requested and actual percentage (count / N * 100,
one decimal); the two may differ and both are shown.
"""

from __future__ import annotations
import logging
import math
from itertools import islice
from decimal import Decimal
from typing import List, Optional, Sequence

from ..config.filter_spec import PctSplit
from ..errors import WordlistError
from ..output_layout import existing_parts, part_path
from ..pipeline.context import OutputArtifact
from ..pipeline.stream import LineSequence, materialize
from .base import ArtifactWriter, Partitioner, remove_files

log = logging.getLogger("wordlist_forge.writers.pct_split")

def allocate_counts(total: int, percentages: Sequence[float]) -> List[int]:
    """Lines per artifact; the last one takes the remainder."""
    counts: List[int] = []
    assigned = 0
    for p in percentages[:-1]:
        n = math.floor(total * Decimal(str(p)) / 100)
        # percentages may sum to 100.01; never hand out more than is left
        n = min(n, total - assigned)
        counts.append(n)
        assigned += n
    counts.append(total - assigned)
    return counts

def actual_percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count * 100 / total, 1)

class PctSplitPartitioner(Partitioner):
    name = "pct_split"
    needs_total = True

    def __init__(self, mode: PctSplit):
        super().__init__()
        self.mode = mode

    @property
    def output_path(self) -> Optional[str]:
        return self.mode.path

    def conflicts(self) -> List[str]:
        return existing_parts(self.mode.path)

    def clear_conflicts(self, paths) -> None:
        remove_files(paths)

    def write(self, seq: LineSequence) -> List[OutputArtifact]:
        buf = materialize(seq)
        total = len(buf)
        counts = allocate_counts(total, self.mode.percentages)
        log.info(f"Splitting {total} words into {len(counts)} percentage-based files")
        writer: Optional[ArtifactWriter] = None
        # one iterator shared by all artifacts: each takes the next `count` lines
        remaining = iter(buf.lines)
        try:
            for idx, (pct, count) in enumerate(zip(self.mode.percentages, counts), start=1):
                writer = ArtifactWriter(part_path(self.mode.path, idx))
                writer.open()
                for line in islice(remaining, count):
                    writer.write(line)
                self.completed.append(writer.close(
                    requested_pct=float(pct),
                    actual_pct=actual_percentage(count, total),
                ))
        except OSError as e:
            raise self._fail(writer, e) from e
        except WordlistError:
            if writer is not None:
                writer.abort()
            raise
        return list(self.completed)
