# descent/errors.py
"""Error taxonomy.

- ParseError subclasses are ordinary, recoverable outcomes of `Parser.parse`
  and carry the input text plus the offset where parsing stopped.
- GrammarError subclasses are configuration defects (undefined rule,
  malformed grammar source). They are never reported as a failed match.
"""

from __future__ import annotations
from typing import Tuple


def line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """[start, end) range of the line containing pos."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end

def line_col(src: str, pos: int) -> Tuple[int, int]:
    """1-based (line, col) of an absolute offset."""
    start, _ = line_bounds(src, pos)
    return src.count("\n", 0, pos) + 1, (pos - start) + 1

def caret_snippet(src: str, pos: int) -> str:
    """Line containing pos with a caret (^) under it."""
    start, end = line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


class DescentError(Exception):
    """Base class of every error raised by descent."""


# ---- parse outcomes ----

class ParseError(DescentError, SyntaxError):
    """The input does not belong to the language of the start rule."""
    reason = "parse error"

    def __init__(self, text: str, offset: int) -> None:
        line, col = line_col(text, offset)
        super().__init__(f"{self.reason} at {line}:{col} (offset {offset})")
        # set after super().__init__ so the SyntaxError fields carry the parse position
        self.text = text
        self.offset = offset

    def snippet(self) -> str:
        return caret_snippet(self.text, self.offset)

class EmptyInput(ParseError):
    reason = "empty input"

class NoRuleMatched(ParseError):
    reason = "no rule matched"

class TrailingCharacters(ParseError):
    reason = "trailing characters"


# ---- configuration defects ----

class GrammarError(DescentError):
    """The grammar table (or its source) is malformed."""

class UndefinedRuleError(GrammarError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"undefined rule '{self.name}'"

class GrammarSyntaxError(GrammarError, SyntaxError):
    """Malformed textual grammar."""
