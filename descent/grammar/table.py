# descent/grammar/table.py
from __future__ import annotations
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from ..errors import GrammarError, UndefinedRuleError
from ..terminals import TerminalMatcher, TokenMatcher

# ---- Rule definitions ----

@dataclass(frozen=True)
class NonTerminal:
    name: str  # resolved recursively against the table

@dataclass(frozen=True)
class Terminal:
    matcher: TerminalMatcher

    def __repr__(self) -> str:
        m = self.matcher
        return f"Terminal({m!r})" if isinstance(m, TokenMatcher) else f"Terminal({getattr(m, '__name__', m)!r})"

Rule = Union[NonTerminal, Terminal]
Alternative = Tuple[Rule, ...]


class GrammarTable(Mapping[str, Tuple[Alternative, ...]]):
    """Rule name -> ordered alternatives (first match wins).

    Read-only once built; one table may be shared by any number of parsers
    and threads.
    """

    def __init__(self, rules: Mapping[str, Sequence[Sequence[Rule]]]):
        frozen: Dict[str, Tuple[Alternative, ...]] = {}
        for name, alternatives in rules.items():
            frozen[sys.intern(name)] = tuple(tuple(alt) for alt in alternatives)
        self._rules = MappingProxyType(frozen)

    def __getitem__(self, name: str) -> Tuple[Alternative, ...]:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def require(self, name: str) -> Tuple[Alternative, ...]:
        try:
            return self._rules[name]
        except KeyError:
            raise UndefinedRuleError(name) from None

    def __repr__(self) -> str:
        return f"GrammarTable({dict(self._rules)!r})"


# ---- builder ----

def _to_rule(item: Any, owner: str) -> Rule:
    if isinstance(item, (NonTerminal, Terminal)):
        return item
    if isinstance(item, str):
        if not item:
            raise GrammarError(f"rule '{owner}': empty rule reference")
        return NonTerminal(sys.intern(item))
    if callable(item):
        return Terminal(item)
    raise GrammarError(f"rule '{owner}': cannot use {item!r} as a rule")

def _to_alternative(alt: Any, owner: str) -> Alternative:
    if isinstance(alt, (list, tuple)):
        return tuple(_to_rule(item, owner) for item in alt)
    return (_to_rule(alt, owner),)


def build_grammar(spec: Mapping[str, Any]) -> GrammarTable:
    """Build a `GrammarTable` from plain Python data.

    Each entry maps a rule name to either a single item or a list of
    alternatives; each alternative is a single item or a list/tuple of
    items. An item is a rule name (``str``), a ``token("...")``, any other
    terminal matcher callable, or a prebuilt `NonTerminal`/`Terminal`::

        build_grammar({
            "expr":   [["term", "add_op", "expr"], "term"],
            "add_op": [token("+"), token("-")],
            "term":   signed,
        })
    """
    rules: Dict[str, List[Alternative]] = {}
    for name, entry in spec.items():
        if not isinstance(name, str) or not name:
            raise GrammarError(f"rule names must be non-empty strings, got {name!r}")
        alts = entry if isinstance(entry, list) else [entry]
        rules[name] = [_to_alternative(alt, name) for alt in alts]
    return GrammarTable(rules)
