"""POSIX regular expressions on top of Python `re`.

Patterns are written the way they would be passed to `grep -E` (extended) or
plain `grep` (basic). They are translated once into Python syntax:

- bracket expressions: POSIX classes ([[:space:]], [[:digit:]], ...) expanded,
  backslash and '[' inside brackets taken literally
- basic syntax: \\( \\) \\{ \\} \\| \\+ \\? are the operators, the bare characters
  are literals, and a leading '*' is literal
- GNU word anchors \\< and \\> become \\b

Matching is a search anywhere in the line, as with grep.

[[:space:]] is Unicode whitespace (Python \\s), the same test the whitespace
policy applies. The other classes are the ASCII ranges of the C locale, so
[[:alpha:]] does not match "\u00e9" while the lowercase counter does.
"""

from __future__ import annotations
import re
from typing import Pattern

EXTENDED = "extended"
BASIC = "basic"
SYNTAXES = (EXTENDED, BASIC)

_POSIX_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": "\\s",
    "blank": " \\t",
    "punct": re.escape("!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"),
    "xdigit": "0-9A-Fa-f",
    "cntrl": "\\x00-\\x1f\\x7f",
    "print": "\\x20-\\x7e",
    "graph": "\\x21-\\x7e",
}

# characters that are operators in ERE but literals in BRE (and vice versa when escaped)
_BRE_SWAPPED = set("(){}|+?")
# characters with special meaning inside a Python character class
_CLASS_ESCAPE = set("\\[&~|")


def _translate_bracket(pattern: str, i: int) -> tuple[str, int]:
    """Translate the bracket expression starting at pattern[i] == '['.

    Returns (python_class, index after the closing ']').
    """
    n = len(pattern)
    j = i + 1
    out = ["["]
    if j < n and pattern[j] == "^":
        out.append("^")
        j += 1
    # a ']' right after '[' or '[^' is a literal
    if j < n and pattern[j] == "]":
        out.append("\\]")
        j += 1
    while j < n:
        ch = pattern[j]
        if ch == "]":
            out.append("]")
            return "".join(out), j + 1
        if ch == "[" and j + 1 < n and pattern[j + 1] in ":.=":
            kind = pattern[j + 1]
            end = pattern.find(kind + "]", j + 2)
            if end == -1:
                raise re.error(f"unterminated [{kind} in bracket expression", pattern, j)
            name = pattern[j + 2:end]
            if kind == ":":
                if name not in _POSIX_CLASSES:
                    raise re.error(f"unknown character class [:{name}:]", pattern, j)
                out.append(_POSIX_CLASSES[name])
            else:
                # collating symbols / equivalence classes: single characters only
                out.append(re.escape(name))
            j = end + 2
            continue
        if ch in _CLASS_ESCAPE:
            out.append("\\" + ch)
        else:
            out.append(ch)
        j += 1
    raise re.error("unterminated bracket expression", pattern, i)


def translate_posix(pattern: str, syntax: str = EXTENDED) -> str:
    """Translate a POSIX ERE/BRE pattern into Python `re` syntax."""
    if syntax not in SYNTAXES:
        raise ValueError(f"unknown regex syntax {syntax!r}; expected one of {SYNTAXES}")
    basic = syntax == BASIC
    out = []
    i = 0
    n = len(pattern)
    # position where a '*' would have nothing to repeat (BRE treats it literally)
    atom_start = True
    while i < n:
        ch = pattern[i]
        if ch == "\\" and i + 1 < n:
            nxt = pattern[i + 1]
            i += 2
            if nxt in "<>":
                out.append("\\b")
                atom_start = False
            elif basic and nxt in _BRE_SWAPPED:
                out.append(nxt)
                atom_start = nxt in "(|"
            else:
                out.append("\\" + nxt)
                atom_start = False
            continue
        if ch == "[":
            cls, i = _translate_bracket(pattern, i)
            out.append(cls)
            atom_start = False
            continue
        if basic:
            if ch in _BRE_SWAPPED:
                out.append("\\" + ch)
                atom_start = False
            elif ch == "*" and atom_start:
                out.append("\\*")
                atom_start = False
            else:
                out.append(ch)
                atom_start = ch == "^" and i == 0
        else:
            out.append(ch)
            atom_start = False
        i += 1
    return "".join(out)


def compile_posix(pattern: str, *, syntax: str = EXTENDED, case_insensitive: bool = False) -> Pattern[str]:
    """Translate and compile; raises re.error on an invalid pattern."""
    flags = re.IGNORECASE if case_insensitive else 0
    return re.compile(translate_posix(pattern, syntax), flags)
