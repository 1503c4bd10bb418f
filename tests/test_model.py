"""
Tests for the session model (Program, VariableStore, Session).

These tests verify:
    - Blank-line filtering and 1-based numbering
    - Variable store semantics
    - Session reset on load
"""

import pytest
from flashlang.model import Program, Session, VariableStore
from flashlang.values import Number, Text


class TestProgram:
    """Test the Program store."""

    def test_blank_lines_are_dropped(self):
        """Whitespace-only lines are not part of the program."""
        program = Program.from_text("show a\n\n   \n\tshow b\n")
        assert program.length() == 2
        assert program.get(1) == "\tshow b"

    def test_empty_text(self):
        """Empty text yields a zero-line program."""
        assert Program.from_text("").length() == 0

    def test_windows_line_endings(self):
        program = Program.from_text("show a\r\n\r\nshow b\r\n")
        assert program.lines == ["show a", "show b"]

    def test_only_newlines_split_lines(self):
        """Form feeds and other separators stay inside a line."""
        program = Program.from_text("show a\x0cb\ngoto 1\x1cx\nshow c\u2028d")
        assert len(program) == 3
        assert program.get(0) == "show a\x0cb"
        assert program.get(2) == "show c\u2028d"

    def test_get_out_of_range(self):
        program = Program(["show a"])
        with pytest.raises(IndexError):
            program.get(1)
        with pytest.raises(IndexError):
            program.get(-1)

    def test_line_number_is_one_based(self):
        assert Program.line_number(0) == 1

    def test_lines_is_a_copy(self):
        program = Program(["show a"])
        program.lines.append("show b")
        assert len(program) == 1


class TestVariableStore:
    """Test VariableStore objects."""

    def test_first_assignment_creates(self):
        store = VariableStore()
        assert store.get("x") is None
        store.set("x", Number(1.0))
        assert "x" in store
        assert store.get("x") == Number(1.0)

    def test_reassignment_overwrites_type(self):
        store = VariableStore()
        store.set("x", Number(1.0))
        store.set("x", Text("one"))
        assert store.get("x") == Text("one")

    def test_names_are_case_sensitive(self):
        store = VariableStore()
        store.set("Name", Text("a"))
        assert "name" not in store


class TestSession:
    """Test Session objects."""

    def test_load_resets_everything(self):
        session = Session()
        session.load("show a")
        session.variables.set("x", Number(1.0))
        session.cursor = 1
        session.pending_input = "x"
        session.finished = True

        session.load("show b\nshow c")

        assert len(session.program) == 2
        assert len(session.variables) == 0
        assert session.cursor == 0
        assert session.pending_input is None
        assert not session.awaiting_input
        assert not session.finished

    def test_awaiting_input_follows_target(self):
        """Suspension flag and target name cannot disagree."""
        session = Session()
        assert not session.awaiting_input
        session.pending_input = "age"
        assert session.awaiting_input

    def test_halt(self):
        session = Session()
        session.load("show a\nshow b")
        session.halt()
        assert session.cursor == 2
        assert session.at_end
