"""Tree module - data model, text parser and structural validation."""

from .node import Node, Tree
from .parser import parse_lines, parse_text, load_tree
from .validate import (
    find_cycle,
    find_root,
    check_children,
    check_siblings,
    check_shapes,
    validate_tree,
)

__all__ = [
    "Node",
    "Tree",
    "parse_lines",
    "parse_text",
    "load_tree",
    "find_cycle",
    "find_root",
    "check_children",
    "check_siblings",
    "check_shapes",
    "validate_tree",
]
