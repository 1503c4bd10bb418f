"""
Tests for serialization and deserialization of Flash sessions.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `flashlang.serialization`, and that a
restored session resumes where it stopped.
"""

import pytest
from flashlang.engine import Interpreter
from flashlang.model import Program, Session, VariableStore
from flashlang.serialization import (
    SnapshotError,
    session_from_dict,
    session_from_json,
    session_from_yaml,
    session_to_dict,
    session_to_json,
    session_to_yaml,
)
from flashlang.values import Number, Text


def build_sample_session() -> Session:
    variables = VariableStore()
    variables.set("count", Number(2.5))
    variables.set("name", Text("Ada"))
    return Session(
        program=Program(["store 1 in count", "get input for name with prompt Who?", "show name"]),
        variables=variables,
        cursor=2,
        pending_input="name",
    )


def test_json_roundtrip():
    session = build_sample_session()
    before = session_to_dict(session)
    restored = session_from_json(session_to_json(session))
    assert session_to_dict(restored) == before


def test_yaml_roundtrip():
    session = build_sample_session()
    before = session_to_dict(session)
    restored = session_from_yaml(session_to_yaml(session))
    assert session_to_dict(restored) == before


def test_value_types_survive():
    restored = session_from_json(session_to_json(build_sample_session()))
    assert restored.variables.get("count") == Number(2.5)
    assert restored.variables.get("name") == Text("Ada")
    assert restored.awaiting_input


def test_restored_session_resumes():
    interp = Interpreter()
    interp.run("get input for n with prompt N?\ncalculate sum to n from n and 1\nshow n")
    interp.run_until_blocked()
    snapshot = session_to_yaml(interp.session)

    resumed = Interpreter.from_session(session_from_yaml(snapshot))
    assert resumed.is_awaiting_input()
    resumed.deliver_input("41")
    resumed.run_until_blocked()
    assert resumed.transcript == ["> 41", "42", "--- Flash Execution Finished ---"]


def test_cursor_out_of_range():
    d = session_to_dict(build_sample_session())
    d["cursor"] = 10
    with pytest.raises(SnapshotError):
        session_from_dict(d)


def test_unknown_value_type():
    d = session_to_dict(build_sample_session())
    d["variables"]["count"] = {"type": "boolean", "value": True}
    with pytest.raises(SnapshotError):
        session_from_dict(d)


def test_not_a_mapping():
    with pytest.raises(SnapshotError):
        session_from_yaml("- just\n- a list\n")


@pytest.mark.parametrize("lines", ["show a", [1, 2], ["show a", None], {"show": "a"}])
def test_lines_must_be_strings(lines):
    d = session_to_dict(build_sample_session())
    d["lines"] = lines
    d["cursor"] = 0
    with pytest.raises(SnapshotError):
        session_from_dict(d)


@pytest.mark.parametrize("pending", [5, ["name"], {"name": 1}])
def test_pending_input_must_be_a_name(pending):
    d = session_to_dict(build_sample_session())
    d["pending_input"] = pending
    with pytest.raises(SnapshotError):
        session_from_dict(d)


def test_cursor_cannot_be_bool():
    d = session_to_dict(build_sample_session())
    d["cursor"] = True
    with pytest.raises(SnapshotError):
        session_from_dict(d)


def test_finished_must_be_bool():
    d = session_to_dict(build_sample_session())
    d["finished"] = "no"
    with pytest.raises(SnapshotError):
        session_from_dict(d)


def test_variable_names_must_be_strings():
    with pytest.raises(SnapshotError):
        session_from_yaml("lines: [show a]\nvariables:\n  1: {type: number, value: 2}\ncursor: 0\n")


def test_bad_snapshot_does_not_reach_the_engine():
    """A malformed snapshot is rejected before an Interpreter can step it."""
    with pytest.raises(SnapshotError):
        session_from_json('{"lines": [1, 2], "cursor": 0}')
