"""Output naming and pre-write checks.

Split outputs are named from the requested output file:

  words.txt  ->  words_part_01.txt, words_part_02.txt, ...
  words      ->  words_part_01, words_part_02, ...

The index is 1-based and zero-padded to two digits (it widens past 99).
Base and extension come from splitting the name at its last extension
separator (`os.path.splitext`, so directories and dotfiles are safe).
"""

from __future__ import annotations
import glob
import os
from typing import List, Optional, Tuple

from .errors import WriteFailure

PART_MARKER = "_part_"
INDEX_WIDTH = 2


def split_output_name(path: str) -> Tuple[str, str]:
    """Return (base, ext) with ext including the dot, or '' when there is none."""
    return os.path.splitext(path)


def part_path(path: str, index: int) -> str:
    """Path of the index-th (1-based) artifact for a split output."""
    base, ext = split_output_name(path)
    return f"{base}{PART_MARKER}{index:0{INDEX_WIDTH}d}{ext}"


def existing_parts(path: str) -> List[str]:
    """Existing files named `<base>_part_<digits><ext>` for a split output.

    The index must be all digits and the extension exact, so `words_part_01.txt`
    is not a part of output `words`.
    """
    base, ext = split_output_name(path)
    pattern = glob.escape(base) + PART_MARKER + "[0-9]*" + glob.escape(ext)
    index_at = len(base) + len(PART_MARKER)
    parts = []
    for p in glob.glob(pattern):
        index = p[index_at:len(p) - len(ext)]
        if index.isascii() and index.isdigit() and os.path.isfile(p):
            parts.append(p)
    return sorted(parts)


def ensure_writable_dir(path: str) -> None:
    """Raise WriteFailure unless the directory that will hold `path` is writable."""
    out_dir = os.path.dirname(path) or "."
    if not os.path.isdir(out_dir):
        raise WriteFailure(f"output directory '{out_dir}' does not exist")
    if not os.access(out_dir, os.W_OK):
        raise WriteFailure(f"cannot write to directory '{out_dir}'")


def is_same_file(a: Optional[str], b: Optional[str]) -> bool:
    """True when both paths exist and refer to the same file."""
    if not a or not b:
        return False
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
