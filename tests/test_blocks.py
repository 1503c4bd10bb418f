"""
Tests for if / else / endif block matching.

Block matching is the easiest part of the engine to get wrong, so we
test nesting, else at different depths and unclosed blocks directly.
"""

from flashlang.blocks import skip_else_branch, skip_false_branch
from flashlang.model import Program


def program(*lines):
    return Program(list(lines))


class TestSkipFalseBranch:
    """Test the scan after a false if."""

    def test_jumps_past_endif(self):
        p = program("if 1 isequal 2", "show a", "endif", "show b")
        assert skip_false_branch(p, 0) == 3

    def test_stops_after_else(self):
        p = program("if 1 isequal 2", "show a", "else", "show b", "endif")
        assert skip_false_branch(p, 0) == 3

    def test_ignores_nested_else(self):
        """An else inside a nested if belongs to that if."""
        p = program(
            "if 1 isequal 2",     # 0
            "if 3 isequal 3",     # 1
            "show a",             # 2
            "else",               # 3
            "show b",             # 4
            "endif",              # 5
            "else",               # 6
            "show c",             # 7
            "endif",              # 8
        )
        assert skip_false_branch(p, 0) == 7

    def test_nested_without_else(self):
        p = program("if a isless b", "if c isless d", "endif", "show x", "endif", "show y")
        assert skip_false_branch(p, 0) == 5

    def test_malformed_if_still_nests(self):
        """Only the first token matters to the scan."""
        p = program("if a isless b", "if", "endif", "show x", "endif", "show y")
        assert skip_false_branch(p, 0) == 5

    def test_keywords_any_case(self):
        p = program("If a isless b", "show x", "ELSE", "show y", "EndIf")
        assert skip_false_branch(p, 0) == 3

    def test_unclosed(self):
        p = program("if 1 isequal 2", "show a", "show b")
        assert skip_false_branch(p, 0) is None

    def test_unclosed_nested(self):
        p = program("if 1 isequal 2", "if 1 isequal 1", "endif")
        assert skip_false_branch(p, 0) is None

    def test_endif_on_last_line(self):
        """Resume index may equal program length (normal end)."""
        p = program("if 1 isequal 2", "show a", "endif")
        assert skip_false_branch(p, 0) == 3


class TestSkipElseBranch:
    """Test the scan when execution falls into an else."""

    def test_jumps_past_endif(self):
        p = program("if 1 isequal 1", "show a", "else", "show b", "endif", "show c")
        assert skip_else_branch(p, 2) == 5

    def test_ignores_nested_blocks(self):
        p = program("else", "if a isequal b", "else", "endif", "endif", "show c")
        assert skip_else_branch(p, 0) == 5

    def test_unclosed(self):
        p = program("if 1 isequal 1", "else", "show b")
        assert skip_else_branch(p, 1) is None
