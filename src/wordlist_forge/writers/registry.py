"""Partitioner registry.

Maps an output mode (by its `kind`) to a partitioner factory. Add new modes
without changing pipeline code by registering them here.
"""

from __future__ import annotations
from typing import Any, Callable, Dict

from ..config.filter_spec import OutputMode
from .base import Partitioner
from .pct_split import PctSplitPartitioner
from .single import SinglePartitioner
from .size_split import SizeSplitPartitioner

_PARTITIONERS: Dict[str, Callable[..., Partitioner]] = {
    "single": SinglePartitioner,
    "size_split": lambda mode, **_: SizeSplitPartitioner(mode),
    "pct_split": lambda mode, **_: PctSplitPartitioner(mode),
}

def register_partitioner(kind: str, factory: Callable[..., Partitioner]) -> None:
    """Register a new output mode dynamically."""
    if kind in _PARTITIONERS:
        raise ValueError(f"Partitioner '{kind}' already registered")
    _PARTITIONERS[kind] = factory

def list_partitioners() -> list[str]:
    return list(_PARTITIONERS.keys())

def get_partitioner(mode: OutputMode, **options: Any) -> Partitioner:
    """Build the partitioner for mode; options (e.g. stdout=) go to the factory."""
    if mode.kind not in _PARTITIONERS:
        raise KeyError(
            f"Unknown output mode: {mode.kind}. "
            f"Available: {list(_PARTITIONERS)}. "
            f"Register with register_partitioner()"
        )
    return _PARTITIONERS[mode.kind](mode, **options)
