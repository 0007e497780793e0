"""Tests for the command-line interface."""

import json

import pytest
from typer.testing import CliRunner

from gametree.cli import app, parse_args, RunArgs
from gametree.errors import ArgumentError
from gametree.utils import Config, EvaluationConfig

runner = CliRunner()

SIMPLE = "A: [B, C]\nB = 3\nC = 5\n"

SCENARIO_C = """# pruning example
A: [B, C]
B: [D, E]
C: [F, G]
D = 3
E = 5
F = 2
G = 9
"""


@pytest.fixture
def write_tree(tmp_path):
    def write(text: str, name: str = "tree.txt") -> str:
        path = tmp_path / name
        path.write_text(text)
        return str(path)

    return write


def output_lines(result):
    return [line for line in result.output.splitlines() if line.strip()]


class TestParseArgs:
    def test_defaults(self):
        assert parse_args([]) == RunArgs()

    def test_all_flags(self):
        args = parse_args(["-v", "-ab", "-range", "100", "min", "tree.txt"])
        assert args.verbose
        assert args.alpha_beta
        assert args.score_bound == 100
        assert args.root_is_max_player is False
        assert args.path == "tree.txt"

    def test_last_path_wins(self):
        assert parse_args(["a.txt", "max", "b.txt"]).path == "b.txt"

    def test_last_player_wins(self):
        assert parse_args(["min", "max"]).root_is_max_player is True

    def test_negative_range(self):
        assert parse_args(["-range", "-5"]).score_bound == -5

    def test_missing_range(self):
        with pytest.raises(ArgumentError, match="Missing range value"):
            parse_args(["tree.txt", "-range"])

    def test_invalid_range(self):
        with pytest.raises(ArgumentError, match="Invalid range value"):
            parse_args(["-range", "ten", "tree.txt"])

    def test_range_consumes_next_token(self):
        # The original command line did the same
        with pytest.raises(ArgumentError, match="Invalid range value"):
            parse_args(["-range", "tree.txt"])

    def test_apply_overrides(self):
        base = EvaluationConfig(verbose=True, score_bound=50)
        merged = parse_args(["-ab", "min"]).apply(base)
        assert merged.verbose
        assert merged.use_alpha_beta_pruning
        assert not merged.root_is_max_player
        assert merged.score_bound == 50

    def test_apply_keeps_config_when_unset(self):
        base = EvaluationConfig(root_is_max_player=False)
        assert parse_args([]).apply(base) == base


class TestSolve:
    def test_max(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree(SIMPLE)])
        assert result.exit_code == 0
        assert output_lines(result) == ["max(A) chooses C for 5"]

    def test_min(self, write_tree):
        result = runner.invoke(app, ["solve", "min", write_tree(SIMPLE)])
        assert result.exit_code == 0
        assert output_lines(result) == ["min(A) chooses B for 3"]

    def test_verbose_trace(self, write_tree):
        result = runner.invoke(app, ["solve", "-v", write_tree(SCENARIO_C)])
        assert result.exit_code == 0
        assert output_lines(result) == [
            "min(B) chooses D for 3",
            "min(C) chooses F for 2",
            "max(A) chooses B for 3",
        ]

    def test_verbose_alpha_beta_trace(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree(SCENARIO_C), "-v", "-ab"])
        assert result.exit_code == 0
        assert output_lines(result) == [
            "min(B) chooses D for 3",
            "max(A) chooses B for 3",
        ]

    def test_range(self, write_tree):
        result = runner.invoke(app, ["solve", "-range", "10", write_tree(SIMPLE)])
        assert result.exit_code == 0
        assert output_lines(result) == ["max(A) chooses C for 5"]

    def test_invalid_range(self, write_tree):
        result = runner.invoke(app, ["solve", "-range", "x", write_tree(SIMPLE)])
        assert result.exit_code == 1
        assert output_lines(result) == ["Error: Invalid range value."]

    def test_missing_range(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree(SIMPLE), "-range"])
        assert result.exit_code == 1
        assert output_lines(result) == ["Error: Missing range value"]

    def test_no_file(self):
        result = runner.invoke(app, ["solve", "-v"])
        assert result.exit_code == 1
        assert output_lines(result) == ["Error: No input file given."]

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["solve", str(tmp_path / "absent.txt")])
        assert result.exit_code == 1
        lines = output_lines(result)
        assert len(lines) == 1
        assert lines[0].startswith("Error: ")

    def test_undefined_child(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A: [B, X]\nB = 1\n")])
        assert result.exit_code == 1
        assert output_lines(result) == ['Error: Child node "X" of "A" not found.']

    def test_cycle(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A: [B]\nB: [A]\n")])
        assert result.exit_code == 1
        assert output_lines(result) == ["Error: The tree has a cycle."]

    def test_multiple_roots(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A = 1\nB = 2\n")])
        assert result.exit_code == 1
        assert output_lines(result) == ['Error: Multiple roots found: "A" and "B"']

    def test_parse_error(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A: [B]\nB = x\n")])
        assert result.exit_code == 1
        assert "line 2" in result.output

    def test_config_file(self, write_tree, tmp_path):
        config_path = tmp_path / "config.yaml"
        Config(evaluation=EvaluationConfig(root_is_max_player=False)).save(str(config_path))

        result = runner.invoke(
            app, ["solve", "--config", str(config_path), write_tree(SIMPLE)]
        )
        assert result.exit_code == 0
        assert output_lines(result) == ["min(A) chooses B for 3"]

        # Tokens override the file
        result = runner.invoke(
            app, ["solve", "--config", str(config_path), "max", write_tree(SIMPLE)]
        )
        assert output_lines(result) == ["max(A) chooses C for 5"]

    def test_stats(self, write_tree):
        result = runner.invoke(app, ["solve", "--stats", "-ab", write_tree(SCENARIO_C)])
        assert result.exit_code == 0
        assert output_lines(result)[0] == "max(A) chooses B for 3"
        assert "Cutoffs" in result.output

    def test_run_log(self, write_tree, tmp_path):
        log_dir = tmp_path / "runs"
        result = runner.invoke(
            app, ["solve", "--log-dir", str(log_dir), "-ab", write_tree(SCENARIO_C)]
        )
        assert result.exit_code == 0

        files = list(log_dir.glob("solve_*.jsonl"))
        assert len(files) == 1
        record = json.loads(files[0].read_text().splitlines()[0])
        assert record["root"] == "A"
        assert record["move"] == "B"
        assert record["value"] == 3
        assert record["alpha_beta"] is True
        assert record["num_nodes"] == 7
        assert record["stats"]["cutoffs"] == 1


class TestOtherCommands:
    def test_check_ok(self, write_tree):
        result = runner.invoke(app, ["check", write_tree(SCENARIO_C)])
        assert result.exit_code == 0
        assert 'Tree OK: root "A", 7 nodes' in result.output

    def test_check_error(self, write_tree):
        result = runner.invoke(app, ["check", write_tree("A: [X]\n")])
        assert result.exit_code == 1
        assert 'Child node "X" of "A" not found.' in result.output

    def test_show(self, write_tree):
        result = runner.invoke(app, ["show", write_tree(SCENARIO_C)])
        assert result.exit_code == 0
        assert "A" in result.output
        assert "leaf: 9" in result.output

    def test_init_config(self, tmp_path):
        path = tmp_path / "gametree.yaml"
        result = runner.invoke(app, ["init-config", str(path)])
        assert result.exit_code == 0
        assert Config.load(str(path)) == Config()

        result = runner.invoke(app, ["init-config", str(path)])
        assert result.exit_code == 1

        result = runner.invoke(app, ["init-config", str(path), "--force"])
        assert result.exit_code == 0


class TestBundledExample:
    def test_scenario_file(self):
        from pathlib import Path

        path = Path(__file__).parent / "data" / "scenario_c.txt"
        plain = runner.invoke(app, ["solve", "-v", str(path)])
        pruned = runner.invoke(app, ["solve", "-v", "-ab", str(path)])

        assert output_lines(plain)[-1] == output_lines(pruned)[-1] == "max(A) chooses B for 3"
        assert "min(C) chooses F for 2" in output_lines(plain)
        assert "min(C) chooses F for 2" not in output_lines(pruned)


class TestOutputContract:
    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "tree.txt"
        path.write_bytes(b"A: [B, C]\nB = 3\nC = 5\n# \xff\xfe\n")

        result = runner.invoke(app, ["solve", str(path)])
        assert result.exit_code == 1
        lines = output_lines(result)
        assert len(lines) == 1
        assert lines[0].startswith("Error: line 4:")

    def test_emoji_code_label_printed_verbatim(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A: [:fire:, C]\n:fire: = 9\nC = 5\n")])
        assert result.exit_code == 0
        assert output_lines(result) == ["max(A) chooses :fire: for 9"]

    def test_emoji_code_label_in_error(self, write_tree):
        result = runner.invoke(app, ["solve", write_tree("A: [:fire:, C]\nC = 5\n")])
        assert result.exit_code == 1
        assert output_lines(result) == ['Error: Child node ":fire:" of "A" not found.']

    def test_deep_chain(self, write_tree):
        lines = [f"n{i}: [n{i + 1}]" for i in range(3000)] + ["n3000 = 1"]
        path = write_tree("\n".join(lines) + "\n")

        result = runner.invoke(app, ["solve", "-ab", path])
        assert result.exit_code == 0
        assert output_lines(result) == ["max(n0) chooses n1 for 1"]

    @pytest.mark.parametrize("content", ["- 1\n- 2\n", "42\n", "evaluation: [1, 2]\n"])
    def test_config_not_a_mapping(self, write_tree, tmp_path, content):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(content)

        result = runner.invoke(app, ["solve", "--config", str(config_path), write_tree(SIMPLE)])
        assert result.exit_code == 1
        lines = output_lines(result)
        assert len(lines) == 1
        assert lines[0].startswith("Error: Invalid config")
