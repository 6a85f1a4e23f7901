"""Smoke tests: imports work, the CLI lays out edge lists."""

import pytest
from click.testing import CliRunner

from layered_layout.__main__ import main, parse_edge_list, parse_size
from layered_layout.types import Point


def test_import():
    import layered_layout

    assert layered_layout.VisualGraph is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "edge list" in result.output


def test_cli_lays_out_stdin():
    runner = CliRunner()
    result = runner.invoke(main, [], input="A -> B\n")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("view ")
    assert sum(1 for line in lines if line.startswith("rect ")) == 2
    assert sum(1 for line in lines if line.startswith("arrow ")) == 1


def test_cli_reads_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("# comment\nA -> B\nB -> C\n\nZ\n")
    runner = CliRunner()
    result = runner.invoke(main, [str(path), "-o", "LR", "-s", "40x20"])
    assert result.exit_code == 0
    assert sum(1 for line in result.output.splitlines() if line.startswith("rect ")) == 4


def test_cli_debug_emits_outlines():
    runner = CliRunner()
    result = runner.invoke(main, ["--debug"], input="A -> B\n")
    assert result.exit_code == 0
    assert any(line.startswith("line ") for line in result.output.splitlines())


def test_cli_window_scales_output():
    runner = CliRunner()
    result = runner.invoke(main, ["-s", "100x100", "-w", "490x490"], input="A -> B\n")
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "view (210, 490)"
    assert "rect (0, 280) (200, 200)" in lines


def test_cli_bad_window():
    runner = CliRunner()
    result = runner.invoke(main, ["-w", "big"], input="A -> B\n")
    assert result.exit_code == 1
    assert "WxH" in result.output


def test_cli_bad_orientation():
    runner = CliRunner()
    result = runner.invoke(main, ["-o", "XX"], input="A -> B\n")
    assert result.exit_code == 1
    assert "unknown orientation" in result.output


def test_cli_cycle_rejected():
    runner = CliRunner()
    result = runner.invoke(main, [], input="A -> B\nB -> A\n")
    assert result.exit_code == 1
    assert "cycle" in result.output


def test_cli_bad_line():
    runner = CliRunner()
    result = runner.invoke(main, [], input="A ->\n")
    assert result.exit_code == 1
    assert "line 1" in result.output


class TestParsers:
    def test_edge_list(self):
        text = "A -> B\n  # skipped\n\nC\nB->C\n"
        assert parse_edge_list(text) == [("A", "B"), ("C", ""), ("B", "C")]

    def test_edge_list_error(self):
        with pytest.raises(ValueError, match="line 2"):
            parse_edge_list("A -> B\n-> C\n")

    def test_size(self):
        assert parse_size("120x40") == Point(120.0, 40.0)
        assert parse_size("10X5") == Point(10.0, 5.0)

    def test_size_error(self):
        with pytest.raises(ValueError):
            parse_size("100")
