"""Filter configuration: data model, builder, YAML loading."""

from .filter_spec import FilterSpec, PctSplit, SingleOutput, SizeSplit, WhitespacePolicy
from .builder import build_filter_spec

__all__ = [
    "FilterSpec", "WhitespacePolicy", "SingleOutput", "SizeSplit", "PctSplit",
    "build_filter_spec",
]
