"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

from rich.console import Console
from rich.table import Table
from rich.tree import Tree as RichTree
from rich.markup import escape

if TYPE_CHECKING:
    from ..tree import Node, Tree
    from ..search import SearchOutcome, SearchStats


# Labels are user text, so no :emoji: codes
console = Console(emoji=False)
err_console = Console(stderr=True, emoji=False)


@dataclass
class RunRecord:
    """One solved tree, as written to the run log."""

    input_path: str
    root: str
    player: str
    alpha_beta: bool
    score_bound: int
    value: int
    move: Optional[str]
    num_nodes: int
    stats: Dict[str, int] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()


class RunLogger:
    """
    Appends a JSON line per solved tree.

    Args:
        log_dir: Directory for log files
    """

    def __init__(self, log_dir: str = "runs"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.log_file = self.log_dir / f"solve_{timestamp}.jsonl"

    def log_run(self, record: RunRecord) -> None:
        """Log one run."""
        with open(self.log_file, "a") as f:
            f.write(json.dumps(asdict(record)) + "\n")


def record_from_outcome(
    outcome: SearchOutcome,
    tree: Tree,
    input_path: str,
    is_max_player: bool,
    alpha_beta: bool,
    score_bound: int,
) -> RunRecord:
    """Build a RunRecord from a finished search."""
    return RunRecord(
        input_path=input_path,
        root=tree.root.label,
        player="max" if is_max_player else "min",
        alpha_beta=alpha_beta,
        score_bound=score_bound,
        value=outcome.result.value,
        move=outcome.result.move,
        num_nodes=len(tree),
        stats=asdict(outcome.stats),
    )


def print_line(text: str) -> None:
    """Print text verbatim: no markup, emoji, highlighting or wrapping."""
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


def print_error(message: str) -> None:
    """Print a single red error line."""
    console.print(
        f"[red]Error: {escape(message)}[/]", emoji=False, highlight=False, soft_wrap=True
    )


def print_warning(message: str) -> None:
    err_console.print(
        f"[yellow]{escape(message)}[/]", emoji=False, highlight=False, soft_wrap=True
    )


def print_stats(stats: SearchStats, title: str = "Search") -> None:
    """Print search counters as a table."""
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Nodes visited", str(stats.nodes_visited))
    table.add_row("Leaves", str(stats.leaves_evaluated))
    table.add_row("Cutoffs", str(stats.cutoffs))
    table.add_row("Max depth", str(stats.max_depth))

    console.print(table)


def _leaf_label(node: Node) -> str:
    return f"{escape(node.label)} [green](leaf: {node.value})[/]"


def print_tree(tree: Tree) -> None:
    """Print the tree from its root, leaves annotated with their value."""
    root = tree.root
    if root.is_leaf:
        console.print(_leaf_label(root))
        return

    rich_tree = RichTree(f"[bold]{escape(root.label)}[/]")
    stack = [(rich_tree, root)]
    while stack:
        branch, node = stack.pop()
        for child in node.children:
            if child.is_leaf:
                branch.add(_leaf_label(child))
            else:
                stack.append((branch.add(escape(child.label)), child))
    console.print(rich_tree)


def print_config(config: Any) -> None:
    """Print configuration in a nice format."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)
