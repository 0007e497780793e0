"""
Minimax search with optional alpha-beta pruning.

The search:
1. Leaf: return its payoff, there is no move to report
2. Internal: evaluate children in declared order with the player flipped,
   keeping the first child that strictly improves on the running best
3. Pruning: once alpha >= beta the remaining children cannot change the
   decision, so the loop stops

Internal nodes are kept on an explicit stack of frames, so tree depth is
not bounded by the interpreter recursion limit.

Infinity is replaced by a finite score bound from the configuration.
The bound must be larger than the magnitude of every leaf value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..tree import Node, Tree
from ..utils.config import EvaluationConfig


@dataclass(frozen=True)
class Result:
    """Value of a node and the child label chosen there."""

    value: int
    move: Optional[str] = None  # None for leaves


@dataclass
class SearchStats:
    """Counters collected during one search."""

    nodes_visited: int = 0
    leaves_evaluated: int = 0
    cutoffs: int = 0  # Internal nodes whose remaining children were skipped
    max_depth: int = 0


@dataclass
class SearchOutcome:
    """Everything one search produces."""

    result: Result
    summary: str  # Root decision line
    trace: List[str] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)


@dataclass
class _Frame:
    """An internal node whose children are still being evaluated."""

    node: Node
    is_max_player: bool
    alpha: int
    beta: int
    depth: int
    best: int
    best_move: Optional[str] = None
    index: int = 0  # Next child to evaluate


def player_name(is_max_player: bool) -> str:
    return "max" if is_max_player else "min"


def format_decision(label: str, is_max_player: bool, result: Result) -> str:
    """Format a decision as ``max(A) chooses C for 5``."""
    return f"{player_name(is_max_player)}({label}) chooses {result.move} for {result.value}"


class Minimax:
    """
    Minimax evaluator over a validated tree.

    Args:
        config: Player, pruning, trace and score bound settings
    """

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig()
        self.trace: List[str] = []
        self.stats = SearchStats()
        self._root: Optional[Node] = None

    def _enter(
        self,
        node: Node,
        is_max_player: bool,
        alpha: int,
        beta: int,
        depth: int,
    ) -> Union[Result, _Frame]:
        """Visit a node: leaves resolve at once, internal nodes get a frame."""
        self.stats.nodes_visited += 1
        self.stats.max_depth = max(self.stats.max_depth, depth)

        if node.is_leaf:
            self.stats.leaves_evaluated += 1
            return Result(node.value, None)

        bound = self.config.score_bound
        best = -bound if is_max_player else bound
        return _Frame(node, is_max_player, alpha, beta, depth, best)

    def _fold(self, frame: _Frame, child_result: Result) -> None:
        """Fold a finished child into its parent's frame."""
        child = frame.node.children[frame.index]
        frame.index += 1

        if frame.is_max_player and child_result.value > frame.best:
            frame.best = child_result.value
            frame.best_move = child.label
            frame.alpha = max(frame.alpha, frame.best)
        elif not frame.is_max_player and child_result.value < frame.best:
            frame.best = child_result.value
            frame.best_move = child.label
            frame.beta = min(frame.beta, frame.best)

        if self.config.use_alpha_beta_pruning and frame.alpha >= frame.beta:
            if frame.index < len(frame.node.children):
                self.stats.cutoffs += 1
            frame.index = len(frame.node.children)

    def _finish(self, frame: _Frame) -> Result:
        result = Result(frame.best, frame.best_move)

        # The root's decision is reported by search(), not traced
        if self.config.verbose and frame.node is not self._root:
            if not self.config.use_alpha_beta_pruning or frame.alpha < frame.beta:
                self.trace.append(format_decision(frame.node.label, frame.is_max_player, result))

        return result

    def evaluate(
        self,
        node: Node,
        is_max_player: bool,
        alpha: int,
        beta: int,
        depth: int = 0,
    ) -> Result:
        """
        Compute the value and best move at ``node``.

        Every frame narrows its own copy of the alpha/beta window; a child
        frame starts from its parent's window at the time it is entered.

        Args:
            node: Node to evaluate
            is_max_player: Whether the player to move at ``node`` maximizes
            alpha: Lower edge of the window
            beta: Upper edge of the window
            depth: Distance from the search root (for stats only)

        Returns:
            Result with the node's minimax value and chosen child label
        """
        entry = self._enter(node, is_max_player, alpha, beta, depth)
        if isinstance(entry, Result):
            return entry

        stack = [entry]
        result: Optional[Result] = None

        while stack:
            frame = stack[-1]

            if result is not None:
                self._fold(frame, result)
                result = None

            if frame.index < len(frame.node.children):
                child = frame.node.children[frame.index]
                entry = self._enter(
                    child,
                    not frame.is_max_player,
                    frame.alpha,
                    frame.beta,
                    frame.depth + 1,
                )
                if isinstance(entry, Result):
                    result = entry
                else:
                    stack.append(entry)
                continue

            stack.pop()
            result = self._finish(frame)

        return result

    def search(self, root: Node) -> SearchOutcome:
        """
        Evaluate from ``root`` with the full window.

        Args:
            root: Root of a validated tree

        Returns:
            SearchOutcome with the root result, summary line, trace and stats
        """
        self.trace = []
        self.stats = SearchStats()
        self._root = root

        bound = self.config.score_bound
        is_max = self.config.root_is_max_player
        try:
            result = self.evaluate(root, is_max, -bound, bound)
        finally:
            self._root = None

        return SearchOutcome(
            result=result,
            summary=format_decision(root.label, is_max, result),
            trace=self.trace,
            stats=self.stats,
        )


def solve(tree: Tree, config: Optional[EvaluationConfig] = None) -> SearchOutcome:
    """Run minimax on a validated tree."""
    return Minimax(config).search(tree.root)
