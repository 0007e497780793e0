"""
gametree - Minimax evaluation of explicit two-player game trees.

Reads a game tree from a small text format, checks that it is a single
rooted acyclic tree, and computes the optimal move at the root with
plain minimax or alpha-beta pruning.

Usage:
    from gametree.tree import load_tree, validate_tree
    from gametree.search import solve
    from gametree.utils import EvaluationConfig

    tree = validate_tree(load_tree("game.txt"))
    outcome = solve(tree, EvaluationConfig(use_alpha_beta_pruning=True))
    print(outcome.summary)  # e.g. "max(A) chooses C for 5"
"""

__version__ = "0.1.0"

from . import errors
from . import tree
from . import search
from . import utils

__all__ = [
    "errors",
    "tree",
    "search",
    "utils",
    "__version__",
]
