"""
Configuration management for gametree.

Uses dataclasses for configuration with defaults matching the original
command line (MAX at the root, no pruning, no trace, 32-bit bound).
Supports loading from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Optional
import yaml

DEFAULT_SCORE_BOUND = 2**31 - 1


@dataclass
class EvaluationConfig:
    """Minimax evaluation settings."""

    root_is_max_player: bool = True
    use_alpha_beta_pruning: bool = False
    verbose: bool = False  # Emit one trace line per internal decision
    # Stands in for infinity; must exceed every |leaf value|
    score_bound: int = DEFAULT_SCORE_BOUND


@dataclass
class OutputConfig:
    """Reporting settings."""

    show_stats: bool = False
    log_dir: Optional[str] = None  # JSONL run log, disabled when None


@dataclass
class Config:
    """Full solver configuration."""

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise TypeError(f"expected a mapping, got {type(data).__name__}")

        return cls(
            evaluation=EvaluationConfig(**(data.get("evaluation") or {})),
            output=OutputConfig(**(data.get("output") or {})),
        )


def get_default_config() -> Config:
    """Get the default configuration."""
    return Config()
