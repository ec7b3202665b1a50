"""Source registry.

`make_source` maps an input identifier to a LineSource:
- "-"          -> standard input
- anything else -> path to a regular file

Other kinds (compressed files, remote lists) can be added with register_source()
under a URI-style prefix, e.g. "gz:" -> factory(path).
"""

from __future__ import annotations
from typing import Callable, Dict, Optional, BinaryIO

from .base import LineSource, STDIN_SENTINEL
from .local import FileLineSource, StdinLineSource

_PREFIX_REGISTRY: Dict[str, Callable[[str], LineSource]] = {}

def register_source(prefix: str, factory: Callable[[str], LineSource]) -> None:
    """Register a factory for inputs written as '<prefix>:<rest>'."""
    if prefix in _PREFIX_REGISTRY:
        raise ValueError(f"Source prefix '{prefix}' is already registered")
    _PREFIX_REGISTRY[prefix] = factory

def unregister_source(prefix: str) -> None:
    _PREFIX_REGISTRY.pop(prefix, None)

def make_source(identifier: str, *, stdin: Optional[BinaryIO] = None) -> LineSource:
    if identifier == STDIN_SENTINEL:
        return StdinLineSource(stdin)
    prefix, sep, rest = identifier.partition(":")
    if sep and prefix in _PREFIX_REGISTRY:
        return _PREFIX_REGISTRY[prefix](rest)
    return FileLineSource(identifier)
