"""Search module."""

from .minimax import (
    Result,
    SearchStats,
    SearchOutcome,
    Minimax,
    player_name,
    format_decision,
    solve,
)

__all__ = [
    "Result",
    "SearchStats",
    "SearchOutcome",
    "Minimax",
    "player_name",
    "format_decision",
    "solve",
]
