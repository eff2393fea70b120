from __future__ import annotations
from pathlib import Path

import pytest

from descent import Parser, build_grammar, signed, token

GRAMMAR_DIR = Path(__file__).parent / "grammar_test"


def math_expression_grammar():
    return build_grammar({
        "expr":   [["term", "add_op", "expr"], "term"],
        "term":   [["fact", "mul_op", "term"], "fact"],
        "fact":   ["number", [token("("), "expr", token(")")]],
        "add_op": [token("+"), token("-")],
        "mul_op": [token("*"), token("/")],
        "number": [[signed]],
    })


@pytest.fixture
def math_parser() -> Parser:
    return Parser(math_expression_grammar())


@pytest.fixture
def expr_g() -> Path:
    return GRAMMAR_DIR / "expr.g"


@pytest.fixture
def broken_g() -> Path:
    return GRAMMAR_DIR / "broken.g"
