from .base import LineSource, STDIN_SENTINEL, decode_line, encode_line
from .local import FileLineSource, StdinLineSource
from .registry import make_source, register_source

__all__ = [
    "LineSource", "STDIN_SENTINEL", "decode_line", "encode_line",
    "FileLineSource", "StdinLineSource", "make_source", "register_source",
]
