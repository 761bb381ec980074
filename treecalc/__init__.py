"""treecalc — an AVL ordered set and an interactive expression calculator.

Two independent cores: AvlTree, a height-balanced binary search tree with
insert/remove/contains, and Calculator, a single-pass recursive-descent
evaluator with functions, constants, ten memory slots and `_` for the last
result.

Usage:
    python -m treecalc calc                  # REPL
    python -m treecalc calc -e "sin(pi/2)"   # One-shot evaluation
    python -m treecalc tree 5 3 8 -r 3       # Tree summary
    python -m treecalc demo                  # AVL walkthrough
"""

from treecalc.avl import AvlTree
from treecalc.calculator import Calculator, format_result
from treecalc.errors import CalculatorError

__all__ = ["AvlTree", "Calculator", "CalculatorError", "format_result"]
