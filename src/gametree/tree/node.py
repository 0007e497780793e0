"""
Game tree data structures.

A node is either a leaf (terminal position with a known payoff) or an
internal node whose value is derived from its children. Children are
kept in declared order since that order decides move iteration and
tie-breaks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(eq=False)
class Node:
    """
    One game position.

    Nodes compare and hash by identity, so the same label referenced
    from several parents is one shared object.
    """

    label: str
    value: Optional[int] = None  # Set only for leaves
    children: List[Node] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        """Leaf: has a payoff and no children."""
        return self.value is not None and not self.children

    @property
    def is_internal(self) -> bool:
        """Internal: has children and no payoff."""
        return self.value is None and bool(self.children)

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Node({self.label!r}, value={self.value})"
        kids = ", ".join(child.label for child in self.children)
        return f"Node({self.label!r}, children=[{kids}])"


@dataclass
class Tree:
    """A validated node collection with its unique root."""

    nodes: Dict[str, Node]
    root: Node

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes.values())

