"""
Execution Engine: a resumable, single-step Flash interpreter.

The engine is an explicit state machine. Callers drive it:

    interp = Interpreter(on_output=print)
    interp.load(source)
    interp.run()                    # reset + start marker
    interp.run_until_blocked()      # step until finished or suspended
    if interp.is_awaiting_input():
        interp.deliver_input("42")
        interp.run_until_blocked()

Each ``step()`` executes exactly one line. Everything a step does is
observable only through emitted lines, variable changes, the cursor,
and the suspension state.

ERROR HANDLING:
    Command failures are raised internally as FlashRuntimeError (local:
    report and continue) or FlashFatalError (report and halt), and are
    translated into output lines at the step boundary. ``step()``,
    ``run()`` and ``deliver_input()`` never raise for program errors.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from flashlang.blocks import skip_else_branch, skip_false_branch
from flashlang.commands import (
    Command,
    Operation,
    Condition,
    Store,
    Show,
    GetInput,
    Calculate,
    If,
    Else,
    EndIf,
    Goto,
    Unknown,
)
from flashlang.config import InterpreterConfig
from flashlang.line_parser import FlashSyntaxError, parse_line
from flashlang.model import Session
from flashlang.values import (
    Number,
    Value,
    classify_literal,
    format_value,
    loosely_equal,
)


logger = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]


class FlashRuntimeError(Exception):
    """Recoverable error: reported, then execution continues."""
    pass


class FlashFatalError(FlashRuntimeError):
    """Structural error: reported, then the run is halted."""
    pass


class Interpreter:
    """
    Owns one Session and executes it line by line.

    Args:
        on_output: Called once per emitted line, in emission order
        config: Markers, prefixes and step limit
        session: Existing session to resume (defaults to a fresh one)

    Every emitted line is also kept in ``transcript``.
    """

    def __init__(
        self,
        on_output: Optional[OutputCallback] = None,
        config: Optional[InterpreterConfig] = None,
        session: Optional[Session] = None,
    ):
        self.config = config or InterpreterConfig()
        self.session = session or Session()
        self.transcript: List[str] = []
        self._on_output = on_output
        self._source = "\n".join(self.session.program.lines)

    @classmethod
    def from_session(
        cls,
        session: Session,
        on_output: Optional[OutputCallback] = None,
        config: Optional[InterpreterConfig] = None,
    ) -> "Interpreter":
        """Resume a restored session, including one suspended on input."""
        return cls(on_output=on_output, config=config, session=session)

    # ------------------------------------------------------------------
    # Boundary operations
    # ------------------------------------------------------------------

    def load(self, source: str) -> None:
        """Set the program text for subsequent runs and reset the session."""
        self._source = source
        self.session.load(source)

    def run(self, source: Optional[str] = None) -> None:
        """
        Start a fresh run.

        Resets program, variables, cursor and suspension state, abandoning
        any earlier run (even one waiting for input), then emits the start
        marker. Stepping is left to the caller.
        """
        if source is not None:
            self._source = source
        self.session.load(self._source)
        logger.info("Run started (%d lines)", len(self.session.program))
        self._emit(self.config.start_marker)

    def is_awaiting_input(self) -> bool:
        return self.session.awaiting_input

    @property
    def finished(self) -> bool:
        return self.session.finished

    def step(self) -> None:
        """Execute one line, or emit the finish marker at end-of-program."""
        session = self.session
        if session.awaiting_input or session.finished:
            logger.debug("step() ignored (awaiting_input=%s, finished=%s)",
                         session.awaiting_input, session.finished)
            return

        if session.at_end:
            session.finished = True
            logger.info("Run finished")
            self._emit(self.config.finish_marker)
            return

        index = session.cursor
        line = session.program.get(index)
        session.cursor = index + 1
        logger.debug("Line %d: %s", index + 1, line.strip())

        try:
            self._execute(parse_line(line), index)
        except FlashSyntaxError as e:
            self._report(index, str(e))
            if e.fatal:
                self._halt(index)
        except FlashFatalError as e:
            self._report(index, str(e))
            self._halt(index)
        except FlashRuntimeError as e:
            self._report(index, str(e))

    def deliver_input(self, text: str) -> None:
        """
        Hand one line of user input to a suspended run.

        The text is echoed, classified as a Number or Text literal and
        stored in the pending variable. Stepping may then resume at the
        line after the ``get input for``.

        Input that arrives while nothing is pending is reported as a local
        error against the most recently executed line.
        """
        session = self.session
        if not session.awaiting_input:
            logger.warning("Input %r delivered while not waiting for input", text)
            self._report(max(session.cursor - 1, 0), f"No input was requested; '{text}' ignored.")
            return

        target = session.pending_input
        self._emit(f"{self.config.echo_prefix}{text}")
        session.variables.set(target, classify_literal(text.strip()))
        session.pending_input = None
        logger.debug("Input stored in %s, resuming at line %d", target, session.cursor + 1)

    def run_until_blocked(self, max_steps: Optional[int] = None) -> int:
        """
        Step until the run finishes or suspends for input.

        Args:
            max_steps: Step limit for this call; defaults to
                       ``config.max_steps``. Reaching it is a fatal error.

        Returns:
            Number of steps taken
        """
        limit = max_steps if max_steps is not None else self.config.max_steps
        session = self.session
        steps = 0
        while not session.finished and not session.awaiting_input:
            if limit is not None and steps >= limit and not session.at_end:
                self._report(session.cursor, f"Step limit of {limit} reached, execution halted.")
                self._halt(session.cursor)
            self.step()
            steps += 1
        return steps

    # ------------------------------------------------------------------
    # Command semantics
    # ------------------------------------------------------------------

    def _execute(self, command: Command, index: int) -> None:
        if isinstance(command, Store):
            self.session.variables.set(command.name, classify_literal(command.value))

        elif isinstance(command, Show):
            stored = self.session.variables.get(command.key)
            self._emit(command.key if stored is None else format_value(stored))

        elif isinstance(command, GetInput):
            self._emit(f"{self.config.prompt_prefix}{command.prompt}")
            self.session.pending_input = command.name
            logger.debug("Suspended waiting for input into %s", command.name)

        elif isinstance(command, Calculate):
            self._calculate(command)

        elif isinstance(command, If):
            if not self._condition_met(command):
                target = skip_false_branch(self.session.program, index)
                if target is None:
                    raise FlashFatalError("Unclosed 'if' block: no matching 'endif' found.")
                self._jump(target)

        elif isinstance(command, Else):
            target = skip_else_branch(self.session.program, index)
            if target is None:
                raise FlashFatalError("Unclosed 'else' block: no matching 'endif' found.")
            self._jump(target)

        elif isinstance(command, EndIf):
            pass

        elif isinstance(command, Goto):
            length = len(self.session.program)
            if not 1 <= command.target <= length:
                raise FlashFatalError(
                    f"Invalid goto target {command.target}: program has {length} lines."
                )
            self._jump(command.target - 1)

        elif isinstance(command, Unknown):
            raise FlashRuntimeError(f"Unknown command '{command.keyword}'.")

        else:
            raise TypeError(f"Unsupported command type: {type(command)}")

    def _resolve(self, token: str) -> Value:
        stored = self.session.variables.get(token)
        if stored is not None:
            return stored
        return classify_literal(token)

    def _calculate(self, command: Calculate) -> None:
        left = self._resolve(command.left)
        right = self._resolve(command.right)
        if not isinstance(left, Number) or not isinstance(right, Number):
            raise FlashRuntimeError(
                f"'{command.operation}' operation needs valid numbers. "
                f"Got '{format_value(left)}' and '{format_value(right)}'."
            )

        try:
            operation = Operation(command.operation.lower())
        except ValueError:
            raise FlashRuntimeError(f"Unknown operation type '{command.operation}'.")

        a, b = left.value, right.value
        if operation == Operation.SUM:
            result = a + b
        elif operation == Operation.DIFFERENCE:
            result = a - b
        elif operation == Operation.PRODUCT:
            result = a * b
        else:
            if b == 0:
                raise FlashRuntimeError("Cannot divide by zero.")
            result = a / b

        self.session.variables.set(command.result, Number(result))

    def _condition_met(self, command: If) -> bool:
        left = self._resolve(command.left)
        right = self._resolve(command.right)

        try:
            condition = Condition(command.condition.lower())
        except ValueError:
            raise FlashRuntimeError(f"Unknown condition '{command.condition}'.")

        if condition == Condition.IS_EQUAL:
            return loosely_equal(left, right)

        if not isinstance(left, Number) or not isinstance(right, Number):
            raise FlashRuntimeError(f"'{command.condition}' needs numbers for comparison.")
        if condition == Condition.IS_GREATER:
            return left.value > right.value
        return left.value < right.value

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _jump(self, index: int) -> None:
        logger.debug("Jump to line %d", index + 1)
        self.session.cursor = index

    def _halt(self, index: int) -> None:
        logger.warning("Run halted by fatal error on line %d", index + 1)
        self.session.halt()

    def _report(self, index: int, message: str) -> None:
        self._emit(self.config.format_error(index + 1, message))

    def _emit(self, line: str) -> None:
        self.transcript.append(line)
        if self._on_output is not None:
            self._on_output(line)


__all__ = [
    "FlashRuntimeError",
    "FlashFatalError",
    "Interpreter",
    "OutputCallback",
]
