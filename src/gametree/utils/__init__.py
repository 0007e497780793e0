"""Utilities module."""

from .config import (
    DEFAULT_SCORE_BOUND,
    Config,
    EvaluationConfig,
    OutputConfig,
    get_default_config,
)
from .logging import (
    RunLogger,
    RunRecord,
    record_from_outcome,
    console,
    print_line,
    print_error,
    print_warning,
    print_stats,
    print_tree,
    print_config,
)

__all__ = [
    "DEFAULT_SCORE_BOUND",
    "Config",
    "EvaluationConfig",
    "OutputConfig",
    "get_default_config",
    "RunLogger",
    "RunRecord",
    "record_from_outcome",
    "console",
    "print_line",
    "print_error",
    "print_warning",
    "print_stats",
    "print_tree",
    "print_config",
]
