"""
Serialization helpers for Flash sessions (Program, variables, run state).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
A restored session can be handed to ``Interpreter.from_session`` and
continues exactly where it stopped, including a pending input request.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from flashlang.model import Program, Session, VariableStore
from flashlang.values import Number, Text, Value, ValueKind


class SnapshotError(Exception):
    """Raised when a snapshot cannot be turned back into a Session."""
    pass


def value_to_dict(v: Value) -> Dict[str, Any]:
    if isinstance(v, Number):
        return {"type": ValueKind.NUMBER.value, "value": v.value}
    if isinstance(v, Text):
        return {"type": ValueKind.TEXT.value, "value": v.value}
    raise TypeError(f"Unsupported Value type: {type(v)}")


def value_from_dict(d: Dict[str, Any]) -> Value:
    try:
        kind = ValueKind(d.get("type"))
    except ValueError:
        raise SnapshotError(f"Unsupported value dict type: {d.get('type')}")
    if kind == ValueKind.NUMBER:
        return Number(float(d["value"]))
    return Text(str(d["value"]))


def session_to_dict(s: Session) -> Dict[str, Any]:
    return {
        "lines": s.program.lines,
        "variables": {name: value_to_dict(v) for name, v in s.variables.as_dict().items()},
        "cursor": s.cursor,
        "pending_input": s.pending_input,
        "finished": s.finished,
    }


def session_from_dict(d: Dict[str, Any]) -> Session:
    if not isinstance(d, dict):
        raise SnapshotError(f"Snapshot must be a mapping, got {type(d).__name__}")

    lines = d.get("lines", [])
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        raise SnapshotError("Snapshot lines must be a list of strings")
    program = Program([line for line in lines if line.strip()])

    variables = VariableStore()
    try:
        for name, v in d.get("variables", {}).items():
            if not isinstance(name, str):
                raise TypeError(f"variable name {name!r} is not a string")
            variables.set(name, value_from_dict(v))
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        raise SnapshotError(f"Invalid variables in snapshot: {e}")

    cursor = d.get("cursor", 0)
    if not isinstance(cursor, int) or isinstance(cursor, bool) or not 0 <= cursor <= len(program):
        raise SnapshotError(f"Cursor {cursor!r} out of range for a {len(program)}-line program")

    pending_input = d.get("pending_input")
    if pending_input is not None and not isinstance(pending_input, str):
        raise SnapshotError(f"pending_input must be a variable name or null, got {pending_input!r}")

    finished = d.get("finished", False)
    if not isinstance(finished, bool):
        raise SnapshotError(f"finished must be true or false, got {finished!r}")

    return Session(
        program=program,
        variables=variables,
        cursor=cursor,
        pending_input=pending_input,
        finished=finished,
    )


def session_to_json(s: Session) -> str:
    return json.dumps(session_to_dict(s), sort_keys=True)


def session_from_json(s: str) -> Session:
    d = json.loads(s)
    return session_from_dict(d)


def session_to_yaml(s: Session) -> str:
    return yaml.safe_dump(session_to_dict(s))


def session_from_yaml(s: str) -> Session:
    d = yaml.safe_load(s)
    return session_from_dict(d)
