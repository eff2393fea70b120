# descent/descentc.py
"""descentc – descent CLI

사용 예)
    $ python -m descent.descentc check descent/tests/grammar_test/expr.g --start expr
    $ python -m descent.descentc parse descent/tests/grammar_test/expr.g --start expr --text "3*(2+4)"
    $ python -m descent.descentc parse grammar.g --start doc --input doc.txt -D

기능
----
- check : 문법을 읽어 정의되지 않은 규칙 참조, 빈 대안, 도달 불가 규칙을 보고
- parse : 문법으로 입력을 파싱해 트리를 출력

디버그 모드(-D/--debug)를 켜면 엔진의 규칙 해석 과정을 stderr로 로깅합니다.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional

from .errors import GrammarError, ParseError
from .nodes import format_tree
from .runtime import Parser, ParserOptions

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_parser(path: str, options: Optional[ParserOptions] = None) -> Parser:
    parser = Parser.from_file(path, options=options)
    logging.getLogger(__name__).debug("grammar ready | rules=%d", len(parser.grammar))
    return parser

# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    try:
        parser = _load_parser(args.file)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except (GrammarError, OSError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    problems = parser.check(args.start)
    if problems:
        _eprint(f"[CHECK FAILED] {len(problems)} problem(s)")
        for p in problems:
            _eprint(f"  {p}")
        return 2

    print(f"[CHECK OK] rules={len(parser.grammar)}")
    return 0


def cmd_parse(args) -> int:
    options = ParserOptions(require_full_consumption=not args.allow_trailing)
    try:
        parser = _load_parser(args.file, options)
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2
    except (GrammarError, OSError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.text is not None:
        text = args.text
    else:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2

    try:
        node = parser.parse(args.start, text)
    except ParseError as e:
        _eprint("[PARSE ERROR]", str(e))
        _eprint(e.snippet())
        return 1
    except GrammarError as e:
        _eprint("[GRAMMAR ERROR]", str(e))
        return 2

    print(format_tree(node))
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="descentc", description="descent recursive-descent parser CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 검사해 문제 목록을 출력합니다")
    p_check.add_argument("file", help=".g 문법 파일")
    p_check.add_argument("--start", help="시작 규칙(지정 시 도달 불가 규칙도 검사)")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_parse = sub.add_parser("parse", help="문법으로 입력을 파싱해 트리를 출력합니다")
    p_parse.add_argument("file", help=".g 문법 파일")
    p_parse.add_argument("--start", required=True, help="시작 규칙")
    src_group = p_parse.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="입력 텍스트 파일 경로")
    p_parse.add_argument("--allow-trailing", action="store_true", help="남은 입력이 있어도 성공으로 처리")
    p_parse.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_parse.set_defaults(func=cmd_parse)

    args = ap.parse_args(argv)
    _setup_logging(args.debug)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
