"""Exception hierarchy shared by the parser, validator and CLI."""

from __future__ import annotations

from typing import Optional


class GameTreeError(Exception):
    """Base class for every error reported by gametree."""


class ArgumentError(GameTreeError):
    """Malformed command-line tokens (e.g. a bad ``-range`` value)."""


class ParseError(GameTreeError):
    """A line of the tree description could not be parsed."""

    def __init__(self, message: str, line_no: int = 0):
        self.line_no = line_no
        if line_no:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class TreeError(GameTreeError):
    """The parsed node collection is not a valid game tree."""


class CycleError(TreeError):
    def __init__(self, cycle: Optional[list[str]] = None):
        self.cycle = list(cycle or [])
        super().__init__("The tree has a cycle.")


class NoRootError(TreeError):
    def __init__(self):
        super().__init__("No root node found or the tree has a cycle")


class MultipleRootsError(TreeError):
    def __init__(self, labels: list[str]):
        self.labels = list(labels)
        joined = " and ".join(f'"{label}"' for label in self.labels)
        super().__init__(f"Multiple roots found: {joined}")


class MissingChildError(TreeError):
    def __init__(self, child: str, parent: str):
        self.child = child
        self.parent = parent
        super().__init__(f'Child node "{child}" of "{parent}" not found.')


class InvalidNodeError(TreeError):
    def __init__(self, label: str, reason: str):
        self.label = label
        super().__init__(f'Node "{label}" {reason}.')
