# descent/nodes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Union

# ---- Parse tree node definitions ----

@dataclass(frozen=True)
class LiteralStr:
    text: str  # free-form word, sliced from the input

@dataclass(frozen=True)
class LiteralUnsigned:
    value: int  # 0 <= value < 2**64

@dataclass(frozen=True)
class LiteralSigned:
    value: int  # -2**63 <= value < 2**63

@dataclass(frozen=True)
class LiteralFloat:
    value: float

@dataclass(frozen=True)
class Token:
    text: str  # matched keyword/symbol

@dataclass(frozen=True)
class Expr:
    children: Tuple["Node", ...]

    def __post_init__(self) -> None:
        # lists are accepted for convenience, stored as a tuple
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

Node = Union[LiteralStr, LiteralUnsigned, LiteralSigned, LiteralFloat, Token, Expr]

LEAF_TYPES = (LiteralStr, LiteralUnsigned, LiteralSigned, LiteralFloat, Token)


def _leaf_label(node: Node) -> str:
    if isinstance(node, (LiteralStr, Token)):
        return f"{type(node).__name__} {node.text!r}"
    return f"{type(node).__name__} {node.value!r}"


def format_tree(node: Node, indent: str = "  ") -> str:
    """Render a tree as indented text, one node per line.

    >>> print(format_tree(Expr([LiteralSigned(3), Token("+"), LiteralSigned(2)])))
    Expr
      LiteralSigned 3
      Token '+'
      LiteralSigned 2
    """
    lines: List[str] = []

    def walk(n: Node, depth: int) -> None:
        pad = indent * depth
        if isinstance(n, Expr):
            lines.append(f"{pad}Expr")
            for child in n.children:
                walk(child, depth + 1)
        elif isinstance(n, LEAF_TYPES):
            lines.append(pad + _leaf_label(n))
        else:
            raise TypeError(f"not a parse tree node: {n!r}")

    walk(node, 0)
    return "\n".join(lines)
