"""
Parser for the text tree format.

    # comment
    A: [B, C]
    B = 3
    C = 5

A line containing ``=`` sets a leaf value, otherwise a line containing
``:`` sets a children list. Labels may be referenced before they are
defined. A later children list for the same label replaces the earlier
one; leaf values are tracked separately.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .node import Node
from ..errors import ParseError

_INT_RE = re.compile(r"[+-]?\d+")


def _get_or_create(nodes: Dict[str, Node], label: str) -> Node:
    node = nodes.get(label)
    if node is None:
        node = Node(label=label)
        nodes[label] = node
    return node


def _parse_label(raw: str, line_no: int) -> str:
    label = raw.strip()
    if not label:
        raise ParseError("missing node label", line_no)
    return label


def parse_lines(
    lines: Iterable[str],
    skipped: Optional[List[int]] = None,
) -> Dict[str, Node]:
    """
    Build the node collection from lines of the tree format.

    Args:
        lines: Input lines (trailing newlines are fine)
        skipped: If given, receives the numbers of non-blank lines that
            were neither a leaf nor a children definition

    Returns:
        Label -> Node mapping in order of first appearance
    """
    nodes: Dict[str, Node] = {}

    for line_no, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue

        if "=" in text:
            raw_label, _, raw_value = text.partition("=")
            label = _parse_label(raw_label, line_no)
            raw_value = raw_value.strip()
            if not _INT_RE.fullmatch(raw_value):
                raise ParseError(f"invalid value {raw_value!r} for {label!r}", line_no)
            _get_or_create(nodes, label).value = int(raw_value)

        elif ":" in text:
            raw_label, _, raw_children = text.partition(":")
            node = _get_or_create(nodes, _parse_label(raw_label, line_no))
            raw_children = raw_children.replace("[", "").replace("]", "")
            children = []
            for entry in raw_children.split(","):
                child_label = entry.strip()
                if child_label:
                    children.append(_get_or_create(nodes, child_label))
            node.children = children

        elif skipped is not None:
            skipped.append(line_no)

    return nodes


def parse_text(text: str, skipped: Optional[List[int]] = None) -> Dict[str, Node]:
    """Parse a whole tree description held in a string."""
    return parse_lines(text.splitlines(), skipped)


def load_tree(
    path: Union[str, Path],
    skipped: Optional[List[int]] = None,
) -> Dict[str, Node]:
    """
    Read and parse a UTF-8 tree file.

    I/O errors are not caught here; undecodable bytes raise ParseError
    with the line they are on.
    """
    with open(path, "rb") as f:
        raw = f.read()

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        line_no = raw.count(b"\n", 0, e.start) + 1
        raise ParseError("input is not valid UTF-8", line_no) from e

    return parse_text(text, skipped)
