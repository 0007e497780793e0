"""
Structural validation of a parsed node collection.

The checks run in a fixed order and the first failure raises. Nothing
is evaluated unless every check passes:

1. no cycles anywhere in the collection
2. exactly one node that nobody lists as a child
3. every child reference resolves to a leaf or an internal node
4. no undefined leaf-shaped child mixed in with internal siblings
5. no node that is both a leaf and internal, or neither
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .node import Node, Tree
from ..errors import (
    CycleError,
    NoRootError,
    MultipleRootsError,
    MissingChildError,
    InvalidNodeError,
)


def find_cycle(nodes: Dict[str, Node]) -> Optional[List[str]]:
    """
    Depth-first search from every node for a back edge.

    Uses an explicit stack, so tree depth is not bounded by the
    interpreter recursion limit.

    Returns:
        Labels along the cycle (first label repeated at the end), or
        None if the collection is acyclic
    """
    visited: set[Node] = set()
    on_stack: set[Node] = set()

    for start in nodes.values():
        if start in visited:
            continue

        visited.add(start)
        on_stack.add(start)
        stack: List[Tuple[Node, Iterator[Node]]] = [(start, iter(start.children))]

        while stack:
            node, children = stack[-1]
            child = next(children, None)

            if child is None:
                # All children done
                on_stack.discard(node)
                stack.pop()
                continue

            if child in on_stack:
                path = [n.label for n, _ in stack]
                return path[path.index(child.label):] + [child.label]

            if child not in visited:
                visited.add(child)
                on_stack.add(child)
                stack.append((child, iter(child.children)))

    return None


def find_root(nodes: Dict[str, Node]) -> Node:
    """
    Return the only node that is not a child of any other node.

    Raises:
        NoRootError: if every node has a parent (or there are no nodes)
        MultipleRootsError: listing all candidates in collection order
    """
    referenced = {child for node in nodes.values() for child in node.children}
    roots = [node for node in nodes.values() if node not in referenced]

    if not roots:
        raise NoRootError()
    if len(roots) > 1:
        raise MultipleRootsError([node.label for node in roots])
    return roots[0]


def check_children(nodes: Dict[str, Node]) -> None:
    """Every child must have a value or children of its own."""
    for parent in nodes.values():
        for child in parent.children:
            if child.value is None and not child.children:
                raise MissingChildError(child.label, parent.label)


def check_siblings(nodes: Dict[str, Node]) -> None:
    """
    Reject leaf-shaped children without a value next to internal siblings.

    Catches a child label that was referenced but whose own line never
    defined it, when the parent also has subtrees.
    """
    for parent in nodes.values():
        children = parent.children
        if not children:
            continue

        has_internal = any(child.children for child in children)
        leaf_shaped = [child for child in children if not child.children]
        if not (has_internal and leaf_shaped):
            continue

        for child in leaf_shaped:
            if child.value is None:
                raise MissingChildError(child.label, parent.label)


def check_shapes(nodes: Dict[str, Node]) -> None:
    """Each node must be exactly one of leaf or internal."""
    for node in nodes.values():
        if node.is_leaf or node.is_internal:
            continue
        if node.value is not None:
            raise InvalidNodeError(node.label, "has both a value and children")
        raise InvalidNodeError(node.label, "has neither a value nor children")


def validate_tree(nodes: Dict[str, Node]) -> Tree:
    """
    Run every structural check and return the validated tree.

    Args:
        nodes: Label -> Node mapping as produced by the parser

    Returns:
        Tree holding the same nodes and the unique root

    Raises:
        TreeError: the first failed check (see module docstring)
    """
    cycle = find_cycle(nodes)
    if cycle is not None:
        raise CycleError(cycle)

    root = find_root(nodes)
    check_children(nodes)
    check_siblings(nodes)
    check_shapes(nodes)

    return Tree(nodes=dict(nodes), root=root)
