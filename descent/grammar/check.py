# descent/grammar/check.py
"""Static checks over a grammar table, run before any input is parsed.

Reports undefined rule references, rules without alternatives, empty
alternatives and (given a start rule) unreachable rules. Left recursion and
ambiguity are not analysed.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Set

from .table import GrammarTable, NonTerminal


@dataclass(frozen=True)
class GrammarProblem:
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.rule}: {self.message}"


def _reachable(g: GrammarTable, start: str) -> Set[str]:
    seen: Set[str] = set()
    stack = [start]
    while stack:
        name = stack.pop()
        if name in seen or name not in g:
            continue
        seen.add(name)
        for alt in g[name]:
            for rule in alt:
                if isinstance(rule, NonTerminal):
                    stack.append(rule.name)
    return seen


def check_grammar(g: GrammarTable, start: Optional[str] = None) -> List[GrammarProblem]:
    problems: List[GrammarProblem] = []
    if start is not None and start not in g:
        problems.append(GrammarProblem(start, "start rule is not defined"))

    for name, alternatives in g.items():
        if not alternatives:
            problems.append(GrammarProblem(name, "rule has no alternatives and can never match"))
        for i, alt in enumerate(alternatives, 1):
            if not alt:
                problems.append(GrammarProblem(name, f"alternative #{i} is empty and can never match"))
            for rule in alt:
                if isinstance(rule, NonTerminal) and rule.name not in g:
                    problems.append(
                        GrammarProblem(name, f"alternative #{i} references undefined rule '{rule.name}'")
                    )

    if start is not None and start in g:
        live = _reachable(g, start)
        for name in g:
            if name not in live:
                problems.append(GrammarProblem(name, f"unreachable from start rule '{start}'"))
    return problems
