# descent/__init__.py
"""Table-driven recursive-descent parsing for embedding in other programs.

This package provides:
- parse tree nodes (leaf literals, tokens, composite `Expr`)
- grammar tables, a Python-data builder and a small `.g` text format
- built-in terminal matchers (token, word, integers, decimal float)
- the unification engine and the `Parser` facade

Grammars are ordered-choice: list longer alternatives before shorter ones.
"""

from .nodes import (
    LiteralStr, LiteralUnsigned, LiteralSigned, LiteralFloat, Token, Expr,
    Node, format_tree,
)
from .errors import (
    DescentError, ParseError, EmptyInput, NoRuleMatched, TrailingCharacters,
    GrammarError, UndefinedRuleError, GrammarSyntaxError,
)
from .terminals import (
    TerminalMatcher, TokenMatcher, token, word, unsigned, signed,
    optionally_signed, decimal, BUILTIN_MATCHERS, lookup_matcher,
)
from .grammar import (
    NonTerminal, Terminal, GrammarTable, build_grammar, parse_grammar,
    load_grammar_text, check_grammar, GrammarProblem,
)
from .engine import Unifier
from .runtime import Parser, ParserOptions

__version__ = "0.1.0"
