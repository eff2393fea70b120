# descent/engine.py
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .grammar.table import Alternative, GrammarTable, NonTerminal, Terminal
from .nodes import Expr, Node

LOGGER = logging.getLogger(__name__)

# Recursive-descent unifier:
# - Ordered choice: the first alternative that matches wins, even if a later
#   one would consume more input.
# - Whitespace is skipped before every rule of a sequence, never after the last.
# - No memoization and no left-recursion support; a cycle of non-terminals with
#   no consuming terminal ends in RecursionError.
# - Holds no per-parse state, so a single instance can serve several threads.


def skip_whitespace(text: str, offset: int) -> int:
    n = len(text)
    while offset < n and text[offset].isspace():
        offset += 1
    return offset


class Unifier:
    def __init__(self, grammar: GrammarTable):
        self.grammar = grammar

    # ---- Rule resolution ----
    def resolve(self, name: str, text: str, offset: int) -> Optional[Tuple[Node, int]]:
        LOGGER.debug("Unifying key %r, for input %r", name, text[offset:])
        # undefined rule is a grammar defect: UndefinedRuleError propagates
        alternatives = self.grammar.require(name)
        for alt in alternatives:
            result = self.match_sequence(alt, text, offset)
            if result is not None:
                return result
        LOGGER.debug("\tno alternative of %r matched at %d", name, offset)
        return None

    # ---- Sequence matching ----
    def match_sequence(self, alt: Alternative, text: str, offset: int) -> Optional[Tuple[Node, int]]:
        LOGGER.debug("Unifying ruleset %r, for input %r", alt, text[offset:])
        out: List[Node] = []
        cur = offset
        for rule in alt:
            cur = skip_whitespace(text, cur)
            if isinstance(rule, NonTerminal):
                result = self.resolve(rule.name, text, cur)
            elif isinstance(rule, Terminal):
                result = rule.matcher(text, cur)
            else:
                raise TypeError(f"unknown rule: {rule!r}")
            if result is None:
                return None
            node, cur = result
            out.append(node)

        if not out:
            return None
        if len(out) == 1:
            return out[0], cur
        return Expr(tuple(out)), cur
