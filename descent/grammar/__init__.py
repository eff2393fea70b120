# descent/grammar/__init__.py
"""Grammar tables and the ways to author them.

- `build_grammar` : plain Python data -> GrammarTable
- `parse_grammar` : `.g` source text -> GrammarTable
- `check_grammar` : static problems (undefined references, empty alternatives, ...)
"""

from .table import NonTerminal, Terminal, Rule, Alternative, GrammarTable, build_grammar
from .check import GrammarProblem, check_grammar
from .loader import load_grammar_text
from .parser import parse_grammar
