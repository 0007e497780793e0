"""
Command-line interface for gametree.

Commands:
- solve: Evaluate a tree file with minimax / alpha-beta
- check: Parse and validate a tree file
- show: Print a tree file as a tree
- init-config: Write a default YAML config

``solve`` reads the classic flag set as raw tokens:

    gametree solve [-v] [-ab] [-range N] [min|max] FILE
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Sequence
import typer
import yaml

from .errors import ArgumentError, GameTreeError
from .utils import (
    Config,
    EvaluationConfig,
    console,
    print_config,
    print_error,
    print_line,
    print_warning,
)

app = typer.Typer(
    name="gametree",
    help="gametree - Minimax and alpha-beta over explicit game trees",
    no_args_is_help=True,
)

_INT_RE = re.compile(r"[+-]?\d+")


@dataclass
class RunArgs:
    """Settings given as raw tokens; None means "not given"."""

    verbose: bool = False
    alpha_beta: bool = False
    score_bound: Optional[int] = None
    root_is_max_player: Optional[bool] = None
    path: Optional[str] = None

    def apply(self, config: EvaluationConfig) -> EvaluationConfig:
        """Overlay the tokens on a loaded evaluation config."""
        return replace(
            config,
            verbose=config.verbose or self.verbose,
            use_alpha_beta_pruning=config.use_alpha_beta_pruning or self.alpha_beta,
            score_bound=(
                config.score_bound if self.score_bound is None else self.score_bound
            ),
            root_is_max_player=(
                config.root_is_max_player
                if self.root_is_max_player is None
                else self.root_is_max_player
            ),
        )


def parse_args(tokens: Sequence[str]) -> RunArgs:
    """
    Interpret solve tokens.

    ``-v`` traces, ``-ab`` prunes, ``-range N`` sets the score bound,
    ``min``/``max`` pick the root player and anything else is the input
    file (last one wins).

    Raises:
        ArgumentError: -range without a value or with a non-integer one
    """
    args = RunArgs()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == "-v":
            args.verbose = True
        elif token == "-ab":
            args.alpha_beta = True
        elif token == "-range":
            if i + 1 >= len(tokens):
                raise ArgumentError("Missing range value")
            i += 1
            if not _INT_RE.fullmatch(tokens[i]):
                raise ArgumentError("Invalid range value.")
            args.score_bound = int(tokens[i])
        elif token == "min":
            args.root_is_max_player = False
        elif token == "max":
            args.root_is_max_player = True
        else:
            args.path = token
        i += 1
    return args


def _describe(exc: Exception) -> str:
    """One-line description of a reportable error."""
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename:
            return f"{exc.strerror}: {exc.filename}"
        return exc.strerror
    return str(exc)


def _load_config(config_path: Optional[Path]) -> Config:
    if config_path is None:
        return Config()
    try:
        return Config.load(str(config_path))
    except (OSError, yaml.YAMLError, TypeError) as e:
        print_error(f"Invalid config {config_path}: {_describe(e)}")
        raise typer.Exit(code=1)


def _load_valid_tree(path: str, warn: bool = False):
    """Parse and validate, turning failures into one error line."""
    from .tree import load_tree, validate_tree

    skipped: List[int] = []
    try:
        nodes = load_tree(path, skipped)
        tree = validate_tree(nodes)
    except (GameTreeError, OSError) as e:
        print_error(_describe(e))
        raise typer.Exit(code=1)

    if warn and skipped:
        lines = ", ".join(str(n) for n in skipped)
        print_warning(f"Skipped unrecognised lines: {lines}")
    return tree


@app.command(context_settings={"ignore_unknown_options": True})
def solve(
    tokens: Optional[List[str]] = typer.Argument(
        None,
        metavar="TOKENS",
        help="Tree file plus flags: -v (trace), -ab (alpha-beta), -range N (score bound), min or max (root player)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config YAML file"
    ),
    stats: bool = typer.Option(False, "--stats", help="Print search counters"),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Append a JSONL record of the run here"
    ),
) -> None:
    """Evaluate a game tree and print the root decision."""
    from .search import solve as run_search
    from .utils import RunLogger, record_from_outcome, print_stats

    config = _load_config(config_path)

    try:
        args = parse_args(tokens or [])
        if args.path is None:
            raise ArgumentError("No input file given.")
    except ArgumentError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    evaluation = args.apply(config.evaluation)
    tree = _load_valid_tree(args.path, warn=evaluation.verbose)

    outcome = run_search(tree, evaluation)

    for line in outcome.trace:
        print_line(line)
    print_line(outcome.summary)

    if stats or config.output.show_stats:
        print_stats(outcome.stats)

    run_log_dir = str(log_dir) if log_dir else config.output.log_dir
    if run_log_dir:
        logger = RunLogger(log_dir=run_log_dir)
        logger.log_run(record_from_outcome(
            outcome,
            tree,
            input_path=args.path,
            is_max_player=evaluation.root_is_max_player,
            alpha_beta=evaluation.use_alpha_beta_pruning,
            score_bound=evaluation.score_bound,
        ))


@app.command()
def check(
    path: Path = typer.Argument(..., help="Tree file"),
) -> None:
    """Parse and validate a tree file without evaluating it."""
    tree = _load_valid_tree(str(path), warn=True)
    print_line(f'Tree OK: root "{tree.root.label}", {len(tree)} nodes')


@app.command()
def show(
    path: Path = typer.Argument(..., help="Tree file"),
) -> None:
    """Print a validated tree file as a tree."""
    from .utils import print_tree

    tree = _load_valid_tree(str(path), warn=True)
    print_tree(tree)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("gametree.yaml"), help="Where to write the config"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write the default configuration as YAML."""
    if path.exists() and not force:
        print_error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(code=1)

    config = Config()
    path.parent.mkdir(parents=True, exist_ok=True)
    config.save(str(path))
    print_config(config)
    console.print(f"[green]Wrote {path}[/]")


if __name__ == "__main__":
    app()
