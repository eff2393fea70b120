from __future__ import annotations

import pytest

from descent import (
    GrammarError, GrammarSyntaxError, GrammarTable, NonTerminal, Terminal,
    UndefinedRuleError, build_grammar, check_grammar, load_grammar_text,
    parse_grammar, signed, token, word,
)
from descent.terminals import TokenMatcher


# ---- builder ----

def test_build_grammar_shapes():
    g = build_grammar({
        "a": "b",                                  # single reference
        "b": [token("x"), ("c", token("y"))],      # two alternatives
        "c": [[word]],                             # one alternative, one item
    })
    assert g["a"] == ((NonTerminal("b"),),)
    assert g["b"] == (
        (Terminal(token("x")),),
        (NonTerminal("c"), Terminal(token("y"))),
    )
    assert g["c"] == ((Terminal(word),),)


def test_build_grammar_rejects_bad_items():
    with pytest.raises(GrammarError):
        build_grammar({"a": [[42]]})
    with pytest.raises(GrammarError):
        build_grammar({"": "b"})
    with pytest.raises(GrammarError):
        build_grammar({"a": [[""]]})


def test_table_is_read_only():
    g = build_grammar({"a": signed})
    with pytest.raises(TypeError):
        g["b"] = ()  # type: ignore[index]
    assert len(g) == 1
    assert list(g) == ["a"]


def test_require_undefined():
    g = build_grammar({"a": signed})
    with pytest.raises(UndefinedRuleError) as exc:
        g.require("zzz")
    assert str(exc.value) == "undefined rule 'zzz'"


# ---- text format ----

def test_parse_grammar_file(expr_g):
    g = parse_grammar(load_grammar_text(expr_g))
    assert set(g) == {"expr", "term", "fact", "add_op", "mul_op", "number"}
    assert g["fact"] == (
        (NonTerminal("number"),),
        (Terminal(TokenMatcher("(")), NonTerminal("expr"), Terminal(TokenMatcher(")"))),
    )
    assert g["number"] == ((Terminal(signed),),)


def test_parse_grammar_comments_and_escapes():
    g = parse_grammar(
        "# hash comment\n"
        "s : 'it\\'s' /* inline */ \"\\n\" // tail\n"
        "  | @word ;\n"
    )
    assert g["s"] == (
        (Terminal(TokenMatcher("it's")), Terminal(TokenMatcher("\n"))),
        (Terminal(word),),
    )


def test_load_grammar_text_normalises_newlines(tmp_path):
    p = tmp_path / "g.g"
    p.write_bytes(b"a : 'x' ;\r\nb : 'y' ;\r")
    assert load_grammar_text(p) == "a : 'x' ;\nb : 'y' ;\n"


@pytest.mark.parametrize(
    "src, message",
    [
        ("a : 'x'\nb : 'y' ;", "Missing ';'"),
        ("a : 'x' ; a : 'y' ;", "duplicate rule 'a'"),
        ("a : ;", "empty alternative"),
        ("a : 'x' | ;", "empty alternative"),
        ("a : '' ;", "empty token literal"),
        ("a : @nope ;", "unknown terminal matcher"),
        ("a : 'x' $ ;", "Unexpected char"),
        ("", "empty grammar"),
        ("'x' ;", "Expected IDENT"),
    ],
)
def test_parse_grammar_errors(src, message):
    with pytest.raises(GrammarSyntaxError, match=message):
        parse_grammar(src)


def test_grammar_syntax_error_has_position():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_grammar("a : 'x' ;\nb : @nope ;")
    assert "2:6" in str(exc.value)
    assert isinstance(exc.value, SyntaxError)
    assert isinstance(exc.value, GrammarError)


# ---- check ----

def test_check_grammar_reports_problems(broken_g):
    g = parse_grammar(load_grammar_text(broken_g))
    problems = [str(p) for p in check_grammar(g, "stmt")]
    assert problems == [
        "stmt: alternative #1 references undefined rule 'value'",
        "orphan: unreachable from start rule 'stmt'",
    ]


def test_check_grammar_empty_rules():
    g = GrammarTable({"a": [], "b": [()]})
    problems = [str(p) for p in check_grammar(g)]
    assert problems == [
        "a: rule has no alternatives and can never match",
        "b: alternative #1 is empty and can never match",
    ]


def test_check_grammar_undefined_start():
    g = build_grammar({"a": signed})
    assert [p.message for p in check_grammar(g, "b")][0] == "start rule is not defined"


def test_load_grammar_text_rejects_non_utf8(tmp_path):
    p = tmp_path / "g.g"
    p.write_bytes(b"a : 'x' ;\r\nb : '\xff' ;")
    with pytest.raises(GrammarError, match=r"not valid UTF-8 at 2:6 \(byte 0xff\)"):
        load_grammar_text(p)


def test_load_grammar_text_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_grammar_text(tmp_path / "absent.g")
