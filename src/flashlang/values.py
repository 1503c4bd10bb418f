"""
Value System for Flash

Every value a Flash program can hold is one of exactly two kinds:

    - Number: a double-precision float
    - Text:   a raw string token

There is no boolean, no "none", and no third type. Programs that want
a flag store the text ``true`` and compare against it.

ARCHITECTURAL RULE:
    Classification happens once, when a literal token is read.
    Nothing downstream re-guesses the type of a stored value.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


NUMBER_PATTERN = re.compile(r'^[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?$')


class ValueKind(Enum):
    """Tag carried by every value."""
    NUMBER = "number"
    TEXT = "text"


@dataclass(frozen=True)
class Number:
    """
    A numeric value.

    Properties:
        value: The float payload. Integral literals are still floats
               (``5`` is stored as ``5.0`` and printed back as ``5``).
    """

    value: float

    @property
    def kind(self) -> ValueKind:
        return ValueKind.NUMBER


@dataclass(frozen=True)
class Text:
    """
    A textual value.

    Properties:
        value: The token exactly as written, case preserved.
    """

    value: str

    @property
    def kind(self) -> ValueKind:
        return ValueKind.TEXT


Value = Union[Number, Text]


def parse_number(token: str) -> Optional[float]:
    """
    Parse a token as a decimal floating-point literal.

    The whole token must match; ``12abc``, ``inf`` and ``1_000`` are not
    numbers here even though Python's ``float()`` would accept some of them.

    Returns:
        The float, or None if the token is not a numeric literal
    """
    if not NUMBER_PATTERN.match(token):
        return None
    return float(token)


def classify_literal(token: str) -> Value:
    """Classify a raw token as a Number or Text literal."""
    number = parse_number(token)
    if number is None:
        return Text(token)
    return Number(number)


def format_number(number: float) -> str:
    """Render a float the way Flash prints numbers."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == int(number) and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def format_value(value: Value) -> str:
    """Render any value for output."""
    if isinstance(value, Number):
        return format_number(value.value)
    return value.value


def loosely_equal(left: Value, right: Value) -> bool:
    """
    Equality used by ``isequal``.

    Number vs Number compares numerically and Text vs Text compares
    strings. A mixed pair compares numerically when the Text holds a
    numeric literal, and is unequal otherwise. So ``5`` equals ``5.0``,
    but ``5`` never equals ``five``.
    """
    if isinstance(left, Number) and isinstance(right, Number):
        return left.value == right.value
    if isinstance(left, Text) and isinstance(right, Text):
        return left.value == right.value

    number, text = (left, right) if isinstance(left, Number) else (right, left)
    parsed = parse_number(text.value)
    if parsed is None:
        return False
    return number.value == parsed


__all__ = [
    "ValueKind",
    "Number",
    "Text",
    "Value",
    "parse_number",
    "classify_literal",
    "format_number",
    "format_value",
    "loosely_equal",
]
