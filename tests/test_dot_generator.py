"""
Tests for DOT diagram generator.

These tests verify that Flash programs are correctly converted to
Graphviz DOT control-flow graphs.

Tests cover:
    - Line nodes and START/END markers
    - Sequential, branch and goto edges
    - Halting paths routed to END
    - Simple vs. detailed modes
"""

from flashlang.backends.dot_generator import DotMode, generate_dot, save_dot_file
from flashlang.examples import build_counting_loop
from flashlang.model import Program


def dot_for(*lines, mode=DotMode.SIMPLE):
    return generate_dot(Program(list(lines)), mode=mode)


class TestDotBasicStructure:
    """Test basic DOT graph structure."""

    def test_empty_program_generates_valid_dot(self):
        """Should generate valid DOT even for an empty program."""
        dot = generate_dot(Program())
        assert dot.startswith("digraph flash {")
        assert dot.endswith("}")
        assert "START -> END;" in dot

    def test_lines_become_nodes(self):
        dot = dot_for("show a", "show b")
        assert 'L1 [label="1"];' in dot
        assert 'L2 [label="2"];' in dot

    def test_sequential_edges(self):
        dot = dot_for("show a", "show b")
        assert "START -> L1;" in dot
        assert "L1 -> L2;" in dot
        assert "L2 -> END;" in dot


class TestDotBranches:
    """Test edges for if / else / goto."""

    def test_if_has_two_edges(self):
        dot = dot_for("if a isequal b", "show a", "else", "show b", "endif")
        assert "L1 -> L2;" in dot
        assert "L1 -> L4;" in dot
        assert "L3 -> END;" in dot

    def test_goto_edge(self):
        dot = dot_for("show a", "goto 1")
        assert "L2 -> L1;" in dot

    def test_invalid_goto_goes_to_end(self):
        dot = dot_for("goto 9", "show a")
        assert "L1 -> END;" in dot
        assert "L1 -> L2;" not in dot

    def test_unclosed_if_goes_to_end(self):
        dot = dot_for("if a isequal b", "show a")
        assert "L1 -> L2;" in dot
        assert "L1 -> END;" in dot


class TestDotModes:
    def test_detailed_labels(self):
        dot = dot_for("if a isless b", "show a", "endif", mode=DotMode.DETAILED)
        assert 'label="1: if a isless b"' in dot
        assert 'L1 -> L2 [label="true"];' in dot
        assert 'L1 -> END [label="false"];' in dot

    def test_detailed_escapes_quotes(self):
        dot = dot_for('show "quoted"', mode=DotMode.DETAILED)
        assert '\\"quoted\\"' in dot

    def test_counting_loop(self):
        dot = generate_dot(Program.from_text(build_counting_loop()), mode=DotMode.DETAILED)
        assert 'L5 -> L8 [label="goto"];' in dot
        assert 'L7 -> L2 [label="goto"];' in dot


def test_save_dot_file(tmp_path):
    path = tmp_path / "loop.dot"
    save_dot_file(Program(["show a"]), str(path))
    assert path.read_text().startswith("digraph flash {")
