"""
Command Variants for Flash

Each source line is parsed once into exactly one of the variants below.
The engine dispatches over these types; it never indexes raw token lists.

    store <value> in <name>                            -> Store
    show <rest...>                                     -> Show
    get input for <name> with prompt <rest...>         -> GetInput
    calculate <op> to <result> from <a> and <b>        -> Calculate
    if <a> <cond> <b>                                  -> If
    else                                               -> Else
    endif                                              -> EndIf
    goto <line>                                        -> Goto
    anything else                                      -> Unknown

ARCHITECTURAL RULE:
    Variants hold tokens, not resolved values.
    Resolution against the variable store happens at execution time.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Command(ABC):
    """Base class for all parsed command lines."""
    pass


class Operation(Enum):
    """Arithmetic operations accepted by ``calculate``."""
    SUM = "sum"
    DIFFERENCE = "difference"
    PRODUCT = "product"
    QUOTIENT = "quotient"


class Condition(Enum):
    """Comparisons accepted by ``if``."""
    IS_EQUAL = "isequal"
    IS_GREATER = "isgreater"
    IS_LESS = "isless"


@dataclass(frozen=True)
class Store(Command):
    """
    Assign a literal to a variable.

    Properties:
        value: Literal token, never looked up as a variable name
        name: Target variable
    """

    value: str
    name: str


@dataclass(frozen=True)
class Show(Command):
    """Emit a variable's value, or the joined tokens verbatim."""

    tokens: Tuple[str, ...]

    @property
    def key(self) -> str:
        return " ".join(self.tokens)


@dataclass(frozen=True)
class GetInput(Command):
    """
    Emit a prompt and suspend until one line of input arrives.

    Properties:
        name: Variable that receives the input
        prompt: Prompt text (tokens re-joined with single spaces)
    """

    name: str
    prompt: str


@dataclass(frozen=True)
class Calculate(Command):
    """
    Arithmetic on two operands.

    Properties:
        operation: Name of the operation as written. It is checked
                   against Operation when the line runs, so an unknown
                   operation is a runtime error rather than a parse error.
        result: Variable that receives the Number result
        left: Operand token (variable name or literal)
        right: Operand token (variable name or literal)
    """

    operation: str
    result: str
    left: str
    right: str


@dataclass(frozen=True)
class If(Command):
    """Conditional block header. ``condition`` is kept as written."""

    left: str
    condition: str
    right: str


@dataclass(frozen=True)
class Else(Command):
    """Start of the alternative branch of an ``if`` block."""
    pass


@dataclass(frozen=True)
class EndIf(Command):
    """End of an ``if`` block. No-op when executed."""
    pass


@dataclass(frozen=True)
class Goto(Command):
    """Unconditional jump to a 1-based line number."""

    target: int


@dataclass(frozen=True)
class Unknown(Command):
    """A line whose first token is not a Flash keyword."""

    keyword: str


__all__ = [
    "Command",
    "Operation",
    "Condition",
    "Store",
    "Show",
    "GetInput",
    "Calculate",
    "If",
    "Else",
    "EndIf",
    "Goto",
    "Unknown",
]
