"""
Core Session Model Objects

Defines the state one Flash run works on:
    - Program (the filtered, 1-indexed source lines)
    - VariableStore (name -> Value)
    - Session (program + variables + cursor + suspension state)

ARCHITECTURAL RULE:
    These objects hold state only.
    Command semantics live in the engine layer.
    A Session is owned by exactly one Interpreter.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .values import Value


class Program:
    """
    Ordered sequence of non-blank source lines.

    Blank and whitespace-only lines are dropped before indexing, so the
    line numbers used by ``goto`` and in error messages count only the
    lines kept here.

    Internally indices are 0-based; ``line_number(i)`` gives the
    1-based number shown to users.
    """

    def __init__(self, lines: Optional[List[str]] = None):
        self._lines: List[str] = list(lines or [])

    @classmethod
    def from_text(cls, text: str) -> "Program":
        lines = [line.rstrip("\r") for line in text.split("\n")]
        return cls([line for line in lines if line.strip()])

    def get(self, index: int) -> str:
        """
        Retrieve the line at a 0-based index.

        Raises:
            IndexError: If index is outside 0 <= index < length
        """
        if not 0 <= index < len(self._lines):
            raise IndexError(f"Line index {index} out of range (program has {len(self._lines)} lines)")
        return self._lines[index]

    def length(self) -> int:
        return len(self._lines)

    @staticmethod
    def line_number(index: int) -> int:
        return index + 1

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)


class VariableStore:
    """
    Maps variable name -> Value.

    Names are case-sensitive. There is no declaration step and no
    deletion: the first assignment creates an entry and later ones
    overwrite both type and value.
    """

    def __init__(self) -> None:
        self._vars: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        return self._vars.get(name)

    def set(self, name: str, value: Value) -> None:
        self._vars[name] = value

    def clear(self) -> None:
        self._vars.clear()

    def as_dict(self) -> Dict[str, Value]:
        return dict(self._vars)

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"VariableStore({self._vars!r})"


@dataclass
class Session:
    """
    Complete mutable state of one Flash run.

    Properties:
        program:
            The Program being executed. Replaced only by ``load``.

        variables:
            The run's VariableStore.

        cursor:
            0-based index of the next line to execute.
            Invariant: 0 <= cursor <= len(program);
            cursor == len(program) means the program has ended.

        pending_input:
            Name of the variable awaiting input, or None.
            The session is suspended exactly when this is set, so the
            suspension flag and its target can never disagree.

        finished:
            True once the finish marker has been emitted.
    """

    program: Program = field(default_factory=Program)
    variables: VariableStore = field(default_factory=VariableStore)
    cursor: int = 0
    pending_input: Optional[str] = None
    finished: bool = False

    def load(self, text: str) -> None:
        """
        Replace the program and reset every piece of run state.

        Any text is acceptable; empty text yields a zero-line program
        that ends on its first step.
        """
        self.program = Program.from_text(text)
        self.variables = VariableStore()
        self.cursor = 0
        self.pending_input = None
        self.finished = False

    @property
    def awaiting_input(self) -> bool:
        return self.pending_input is not None

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.program)

    def halt(self) -> None:
        """Force the cursor to end-of-program."""
        self.cursor = len(self.program)
