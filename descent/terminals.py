# descent/terminals.py
"""Terminal matchers.

A terminal matcher is any callable ``(text, offset) -> Optional[(node, new_offset)]``.
It reads only ``text[offset:]``, keeps no state, returns None when nothing
matches (including at end of input) and never skips leading whitespace;
the engine does that before every rule of a sequence.
"""

from __future__ import annotations
import logging
from typing import Callable, Dict, Mapping, Optional, Tuple

import regex as re

from .errors import GrammarError
from .nodes import LiteralFloat, LiteralSigned, LiteralStr, LiteralUnsigned, Node, Token

LOGGER = logging.getLogger(__name__)

Match = Optional[Tuple[Node, int]]
TerminalMatcher = Callable[[str, int], Match]

U64_MAX = 2**64 - 1
I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_FLOAT_RE = re.compile(r"[+-]?[0-9]+\.[0-9]+")


class TokenMatcher:
    """Matches a fixed keyword/symbol and yields ``Token(literal)``."""
    __slots__ = ("literal",)

    def __init__(self, literal: str):
        if not literal:
            raise GrammarError("token literal must not be empty")
        self.literal = literal

    def __call__(self, text: str, offset: int) -> Match:
        LOGGER.debug("Parsing token %r from input %r", self.literal, text[offset:])
        if text.startswith(self.literal, offset):
            return Token(self.literal), offset + len(self.literal)
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TokenMatcher) and other.literal == self.literal

    def __hash__(self) -> int:
        return hash((TokenMatcher, self.literal))

    def __repr__(self) -> str:
        return f"token({self.literal!r})"


def token(literal: str) -> TokenMatcher:
    return TokenMatcher(literal)


def _digit_run(text: str, offset: int) -> int:
    end = offset
    n = len(text)
    while end < n and "0" <= text[end] <= "9":
        end += 1
    return end


def word(text: str, offset: int) -> Match:
    """Maximal run of non-whitespace characters."""
    LOGGER.debug("Parsing word from input %r", text[offset:])
    end = offset
    n = len(text)
    while end < n and not text[end].isspace():
        end += 1
    if end == offset:
        return None
    return LiteralStr(text[offset:end]), end


def unsigned(text: str, offset: int) -> Match:
    """Maximal run of ASCII digits, as an unsigned 64-bit integer."""
    LOGGER.debug("Parsing unsigned integer from input %r", text[offset:])
    end = _digit_run(text, offset)
    if end == offset:
        return None
    value = int(text[offset:end])
    if value > U64_MAX:
        LOGGER.debug("\tErr: %d overflows u64", value)
        return None
    return LiteralUnsigned(value), end


def signed(text: str, offset: int) -> Match:
    """Maximal run of ASCII digits, as a signed 64-bit integer.

    No sign character is consumed; compose a sign token in the grammar or
    use `optionally_signed`.
    """
    LOGGER.debug("Parsing signed integer from input %r", text[offset:])
    end = _digit_run(text, offset)
    if end == offset:
        return None
    value = int(text[offset:end])
    if value > I64_MAX:
        LOGGER.debug("\tErr: %d overflows i64", value)
        return None
    return LiteralSigned(value), end


def optionally_signed(text: str, offset: int) -> Match:
    """Optional '+'/'-' immediately followed by an ASCII digit run."""
    LOGGER.debug("Parsing optionally signed integer from input %r", text[offset:])
    start = offset
    if offset < len(text) and text[offset] in "+-":
        start += 1
    end = _digit_run(text, start)
    if end == start:
        return None
    value = int(text[offset:end])
    if not I64_MIN <= value <= I64_MAX:
        LOGGER.debug("\tErr: %d out of i64 range", value)
        return None
    return LiteralSigned(value), end


def decimal(text: str, offset: int) -> Match:
    """``[+-]?digits.digits`` anchored at offset."""
    LOGGER.debug("Parsing float from input %r", text[offset:])
    m = _FLOAT_RE.match(text, offset)
    if m is None:
        return None
    return LiteralFloat(float(m.group(0))), m.end()


# ---- name registry (used by `@name` in textual grammars) ----

BUILTIN_MATCHERS: Mapping[str, TerminalMatcher] = {
    "word": word,
    "unsigned": unsigned,
    "signed": signed,
    "optionally_signed": optionally_signed,
    "decimal": decimal,
    "float": decimal,
}


def lookup_matcher(name: str, extra: Optional[Mapping[str, TerminalMatcher]] = None) -> TerminalMatcher:
    """Resolve a matcher name; caller supplied matchers shadow built-ins."""
    table: Dict[str, TerminalMatcher] = dict(BUILTIN_MATCHERS)
    if extra:
        table.update(extra)
    try:
        return table[name]
    except KeyError:
        known = ", ".join(sorted(table))
        raise GrammarError(f"unknown terminal matcher '@{name}' (known: {known})") from None
