"""descent 문법 파서 (.g)
- 규칙: RuleName : item item ... | item ... ;
- item: IDENT(규칙 참조) / "lit" 또는 'lit'(토큰) / @name(터미널 매처)
- 주석: // ..., # ..., /* ... */
- 세미콜론(;)은 모든 규칙 종료에 **반드시 필요**
"""

from __future__ import annotations
import ast as _pyast
import regex as re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from ..errors import GrammarError, GrammarSyntaxError, caret_snippet
from ..terminals import TerminalMatcher, TokenMatcher, lookup_matcher
from .table import Alternative, GrammarTable, NonTerminal, Rule, Terminal

# ---- Lexer 토큰 ----
_TOKEN_SPEC = [
    ("AT",       r"@"),
    ("WS",       r"[ \t\f\r]+"),
    ("NEWLINE",  r"\n"),
    ("COMMENT",  r"(?://|#)[^\n]*"),
    ("MCOMMENT", r"/\*.*?\*/"),
    ("COLON",    r":"),
    ("SEMI",     r";"),
    ("OR",       r"\|"),
    ("STRING",   r'"(?:\\.|[^"\\])*"'),
    ("SSTRING",  r"'(?:\\.|[^'\\])*'"),
    ("IDENT",    r"[A-Za-z_][A-Za-z0-9_]*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC), re.S)

_SKIP = ("WS", "COMMENT", "MCOMMENT", "NEWLINE")

@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    end: int
    line: int
    col: int

def _scan(src: str) -> List[Tok]:
    """공백/주석/개행은 줄·칼럼만 갱신하고 토큰스트림에는 넣지 않는다."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise GrammarSyntaxError(
                f"Unexpected char {src[i]!r} at {line}:{col}\n" + caret_snippet(src, i)
            )
        kind = m.lastgroup or ""
        lex = m.group(0)
        start, end = i, m.end()

        if kind not in _SKIP:
            toks.append(Tok(kind, lex, start, end, line, col))

        nl_count = lex.count("\n")
        if nl_count:
            line += nl_count
            col = len(lex) - lex.rfind("\n")
        else:
            col += len(lex)
        i = end

    toks.append(Tok("EOF", "", len(src), len(src), line, col))
    return toks


# --- 토큰 스트림 ---
class _TS:
    def __init__(self, toks: List[Tok], src: str):
        self.toks = toks
        self.i = 0
        self.src = src

    def la(self) -> Tok:
        return self.toks[self.i]

    def err(self, msg: str, tok: Optional[Tok] = None) -> GrammarSyntaxError:
        t = tok or self.la()
        return GrammarSyntaxError(f"{msg} at {t.line}:{t.col}\n" + caret_snippet(self.src, t.start))

    def eat(self, kind: str) -> Tok:
        t = self.la()
        if t.kind != kind:
            raise self.err(f"Expected {kind}, got {t.kind}")
        self.i += 1
        return t

    def match(self, kind: str) -> Optional[Tok]:
        if self.la().kind == kind:
            return self.eat(kind)
        return None


def _require_semi(ts: _TS, rule: str, anchor: Tok) -> None:
    """세미콜론 강제. 캐럿은 직전 토큰(anchor)의 끝 위치에 찍는다."""
    if ts.match("SEMI"):
        return
    got = ts.la()
    found = "EOF" if got.kind == "EOF" else got.kind
    raise GrammarSyntaxError(
        f"Missing ';' after rule '{rule}' (semicolon is mandatory).\n"
        f"- Found: {found} at {got.line}:{got.col}\n\n"
        + caret_snippet(ts.src, anchor.end)
    )


class _GrammarParser:
    def __init__(self, src: str, matchers: Optional[Mapping[str, TerminalMatcher]]):
        self.ts = _TS(_scan(src), src)
        self.matchers = matchers

    def parse(self) -> GrammarTable:
        rules: Dict[str, List[Alternative]] = {}
        ts = self.ts
        while ts.la().kind != "EOF":
            head = ts.eat("IDENT")
            if head.lexeme in rules:
                raise ts.err(f"duplicate rule '{head.lexeme}'", head)
            ts.eat("COLON")
            alts = [self._alternative(head.lexeme)]
            while ts.match("OR"):
                alts.append(self._alternative(head.lexeme))
            _require_semi(ts, head.lexeme, ts.toks[ts.i - 1])
            rules[head.lexeme] = alts
        if not rules:
            raise GrammarSyntaxError("empty grammar: at least one rule is required")
        return GrammarTable(rules)

    def _alternative(self, owner: str) -> Alternative:
        items: List[Rule] = []
        while True:
            item = self._item()
            if item is None:
                break
            items.append(item)
        if not items:
            raise self.ts.err(f"empty alternative in rule '{owner}'")
        return tuple(items)

    def _item(self) -> Optional[Rule]:
        ts = self.ts
        t = ts.la()
        if t.kind == "IDENT":
            # `name :` 은 다음 규칙의 머리이므로 여기서 멈춘다 (세미콜론 누락)
            if ts.toks[ts.i + 1].kind == "COLON":
                return None
            ts.eat("IDENT")
            return NonTerminal(t.lexeme)
        if t.kind in ("STRING", "SSTRING"):
            ts.eat(t.kind)
            text = _pyast.literal_eval(t.lexeme)
            if not text:
                raise ts.err("empty token literal", t)
            return Terminal(TokenMatcher(text))
        if t.kind == "AT":
            ts.eat("AT")
            name = ts.eat("IDENT")
            try:
                return Terminal(lookup_matcher(name.lexeme, self.matchers))
            except GrammarError as e:
                raise ts.err(str(e), name) from None
        return None


def parse_grammar(src: str, matchers: Optional[Mapping[str, TerminalMatcher]] = None) -> GrammarTable:
    """Parse grammar source text into a `GrammarTable`.

    `matchers` registers extra `@name` terminals; they shadow the built-ins.
    """
    return _GrammarParser(src, matchers).parse()
