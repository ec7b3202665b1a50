"""Streaming stages and the materialization boundary.

Two line-sequence types make the memory contract explicit:

- StreamingLines: single-pass iterator, O(line) memory. Produced by filtering
  and by order-preserving dedup (which itself holds O(distinct survivors)).
- BufferedLines: every surviving line held in a list, O(total survivors).
  Produced only by `materialize`, which sort, randomize and percentage
  splitting require.

Stage order is fixed: filter -> dedup -> sort -> randomize.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Union

from .context import PipelineStats
from ..stages.registry import Evaluator


@dataclass
class StreamingLines:
    lines: Iterator[str]
    buffered = False

    def __iter__(self) -> Iterator[str]:
        return self.lines


@dataclass
class BufferedLines:
    lines: List[str]
    buffered = True

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


LineSequence = Union[StreamingLines, BufferedLines]


def filter_lines(lines: Iterable[str], evaluator: Evaluator, stats: Optional[PipelineStats] = None) -> Iterator[str]:
    """Yield lines accepted by every predicate; rejected lines are dropped silently."""
    if stats is None:
        for line in lines:
            if evaluator(line):
                yield line
        return
    for line in lines:
        stats.lines_read += 1
        rejected, made = evaluator.decide(line)
        for d in made:
            stats.record(d)
        if rejected is None:
            stats.lines_accepted += 1
            yield line
        else:
            stats.reject(rejected)


def dedup_lines(lines: Iterable[str], stats: Optional[PipelineStats] = None) -> Iterator[str]:
    """First-seen order; each unique line is yielded as soon as it is seen."""
    seen: Set[str] = set()
    for line in lines:
        if line in seen:
            if stats is not None:
                stats.duplicates_removed += 1
            continue
        seen.add(line)
        yield line


def materialize(seq: Union[LineSequence, Iterable[str]]) -> BufferedLines:
    if isinstance(seq, BufferedLines):
        return seq
    return BufferedLines(list(seq))


def sort_lines(seq: LineSequence) -> BufferedLines:
    """Lexicographic (code point) order."""
    buf = materialize(seq)
    buf.lines.sort()
    return buf


def randomize_lines(seq: LineSequence, rng: Optional[random.Random] = None) -> BufferedLines:
    """Uniform random permutation (Fisher-Yates via random.shuffle)."""
    buf = materialize(seq)
    (rng or random.Random()).shuffle(buf.lines)
    return buf


def apply_stages(
    lines: Iterable[str],
    evaluator: Evaluator,
    *,
    dedup: bool = False,
    sort: bool = False,
    randomize: bool = False,
    seed: Optional[int] = None,
    stats: Optional[PipelineStats] = None,
) -> LineSequence:
    """Compose filter -> dedup -> sort -> randomize.

    Returns StreamingLines when no order-breaking stage is requested,
    otherwise BufferedLines.
    """
    it: Iterator[str] = filter_lines(lines, evaluator, stats)
    if dedup:
        it = dedup_lines(it, stats)
    seq: LineSequence = StreamingLines(it)
    if sort:
        seq = sort_lines(seq)
    if randomize:
        seq = randomize_lines(seq, random.Random(seed))
    return seq
