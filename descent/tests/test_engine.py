from __future__ import annotations
import logging

import pytest

from descent import (
    Expr, GrammarTable, LiteralStr, LiteralUnsigned, NonTerminal, Terminal,
    Token, Unifier, UndefinedRuleError, build_grammar, token, unsigned, word,
)
from descent.engine import skip_whitespace


def test_skip_whitespace():
    assert skip_whitespace("  \t\nx", 0) == 4
    assert skip_whitespace("x  ", 1) == 3
    assert skip_whitespace("", 0) == 0


def test_first_alternative_wins_even_if_later_consumes_more():
    g = build_grammar({
        "start": [token("a"), (token("a"), token("b"))],
    })
    assert Unifier(g).resolve("start", "ab", 0) == (Token("a"), 1)


def test_later_alternative_used_when_earlier_fails():
    g = build_grammar({
        "start": [(token("a"), token("c")), (token("a"), token("b"))],
    })
    assert Unifier(g).resolve("start", "ab", 0) == (Expr([Token("a"), Token("b")]), 2)


def test_backtracking_restarts_from_rule_offset():
    g = build_grammar({
        "start": [("pair", token("!")), "pair"],
        "pair": (word, unsigned),
    })
    u = Unifier(g)
    assert u.resolve("start", "x 1", 0) == (Expr([LiteralStr("x"), LiteralUnsigned(1)]), 3)


def test_single_child_collapses():
    g = build_grammar({"start": "inner", "inner": "leaf", "leaf": unsigned})
    assert Unifier(g).resolve("start", "7", 0) == (LiteralUnsigned(7), 1)


def test_empty_alternative_fails():
    g = GrammarTable({"start": [(), (Terminal(unsigned),)]})
    u = Unifier(g)
    assert u.match_sequence((), "1", 0) is None
    # the empty alternative is skipped, the next one matches
    assert u.resolve("start", "1", 0) == (LiteralUnsigned(1), 1)


def test_rule_with_no_alternatives_fails():
    g = GrammarTable({"start": []})
    assert Unifier(g).resolve("start", "1", 0) is None


def test_whitespace_skipped_before_each_rule_but_not_after_last():
    g = build_grammar({"start": (token("a"), token("b"))})
    assert Unifier(g).resolve("start", "a \n b  ", 0) == (Expr([Token("a"), Token("b")]), 5)


def test_terminal_failure_aborts_sequence():
    calls = []

    def spy(text, offset):
        calls.append(offset)
        return None

    g = build_grammar({"start": (token("x"), spy, token("y"))})
    assert Unifier(g).resolve("start", "x y", 0) is None
    assert calls == [2]


def test_undefined_rule_raises():
    g = GrammarTable({"start": [(NonTerminal("missing"),)]})
    with pytest.raises(UndefinedRuleError):
        Unifier(g).resolve("start", "abc", 0)


def test_nested_recursion_builds_right_leaning_tree():
    g = build_grammar({
        "list": [(unsigned, token(","), "list"), unsigned],
    })
    node, end = Unifier(g).resolve("list", "1, 2, 3", 0)
    assert end == 7
    assert node == Expr([
        LiteralUnsigned(1), Token(","),
        Expr([LiteralUnsigned(2), Token(","), LiteralUnsigned(3)]),
    ])


def test_debug_trace_is_logged(caplog):
    g = build_grammar({"start": (token("a"), "rest"), "rest": unsigned})
    with caplog.at_level(logging.DEBUG, logger="descent"):
        Unifier(g).resolve("start", "a 1", 0)
    messages = [r.getMessage() for r in caplog.records]
    assert "Unifying key 'start', for input 'a 1'" in messages
    assert "Unifying key 'rest', for input '1'" in messages
