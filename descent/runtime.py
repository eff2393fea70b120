# descent/runtime.py
"""Parser facade.

`Parser.parse(start, text)` trims leading whitespace, rejects empty input,
runs the unifier from the start rule and insists on full consumption
(only whitespace may follow the match):

    Start -> (empty check) -> Resolving -> (full consumption check) -> Node | ParseError

Each call is independent; the only state is the read-only grammar table.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Tuple, Union

from .engine import Unifier, skip_whitespace
from .errors import EmptyInput, NoRuleMatched, TrailingCharacters
from .grammar.check import GrammarProblem, check_grammar
from .grammar.loader import load_grammar_text
from .grammar.parser import parse_grammar
from .grammar.table import GrammarTable
from .nodes import Node
from .terminals import TerminalMatcher

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParserOptions:
    """Behaviour knobs.

    require_full_consumption
        When False a matched prefix is a success and trailing input is ignored.
    empty_input_is_error
        When False an empty/all-whitespace input yields None instead of EmptyInput.
    """
    require_full_consumption: bool = True
    empty_input_is_error: bool = True


class Parser:
    def __init__(self, grammar: GrammarTable, options: Optional[ParserOptions] = None):
        self.grammar = grammar
        self.options = options or ParserOptions()
        self._unifier = Unifier(grammar)

    @classmethod
    def from_source(
        cls,
        src: str,
        matchers: Optional[Mapping[str, TerminalMatcher]] = None,
        options: Optional[ParserOptions] = None,
    ) -> "Parser":
        return cls(parse_grammar(src, matchers), options)

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        matchers: Optional[Mapping[str, TerminalMatcher]] = None,
        options: Optional[ParserOptions] = None,
    ) -> "Parser":
        return cls.from_source(load_grammar_text(path), matchers, options)

    def check(self, start: Optional[str] = None) -> List[GrammarProblem]:
        return check_grammar(self.grammar, start)

    def parse_prefix(self, start: str, text: str, offset: int = 0) -> Optional[Tuple[Node, int]]:
        """Match `start` at offset (after whitespace) without the full-consumption check."""
        return self._unifier.resolve(start, text, skip_whitespace(text, offset))

    def parse(self, start: str, text: str) -> Optional[Node]:
        LOGGER.debug("Parsing expression: %r", text)
        offset = skip_whitespace(text, 0)
        if offset == len(text):
            LOGGER.debug("Is empty after trimming")
            if self.options.empty_input_is_error:
                raise EmptyInput(text, offset)
            return None

        result = self._unifier.resolve(start, text, offset)
        if result is None:
            raise NoRuleMatched(text, offset)

        node, end = result
        # trailing whitespace counts as consumed; the error points at the
        # first character that is not
        rest = skip_whitespace(text, end)
        if rest < len(text) and self.options.require_full_consumption:
            LOGGER.debug("Stopped at %d of %d", rest, len(text))
            raise TrailingCharacters(text, rest)
        return node
