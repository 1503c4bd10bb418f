"""
Line Parser for Flash (raw source line -> Command variant).

Syntax Notes:
    - Tokens are separated by runs of whitespace
    - The first token is the command keyword, matched case-insensitively
    - Grammar words (in, to, from, and, with, prompt, ...) are also
      matched case-insensitively
    - Variable names and literals keep their case

A line with an unrecognized keyword parses to Unknown. A recognized
keyword with the wrong shape raises FlashSyntaxError; the engine turns
that into an error line when the offending line executes.
"""

import re
from typing import List, Optional

from flashlang.commands import (
    Command,
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


class FlashSyntaxError(Exception):
    """
    Raised when a known command has the wrong shape.

    Properties:
        fatal: True when the malformed line must halt the run
               (a broken ``goto`` cannot be skipped safely)
    """

    def __init__(self, message: str, fatal: bool = False):
        super().__init__(message)
        self.fatal = fatal


INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')


def tokenize(line: str) -> List[str]:
    """Split a line on runs of whitespace."""
    return line.split()


def keyword_of(line: str) -> Optional[str]:
    """
    Lower-cased first token of a line, or None for a blank line.

    Used by the block scans, which look at keywords only and never
    validate the rest of the line.
    """
    tokens = tokenize(line)
    if not tokens:
        return None
    return tokens[0].lower()


def _is_word(token: str, word: str) -> bool:
    return token.lower() == word


def _parse_store(tokens: List[str]) -> Command:
    if len(tokens) != 4 or not _is_word(tokens[2], "in"):
        raise FlashSyntaxError(
            "'store' command syntax error. Expected 'store [value] in [name]'."
        )
    return Store(value=tokens[1], name=tokens[3])


def _parse_show(tokens: List[str]) -> Command:
    if len(tokens) < 2:
        raise FlashSyntaxError("'show' command needs a value or variable name.")
    return Show(tokens=tuple(tokens[1:]))


def _parse_get_input(tokens: List[str]) -> Command:
    shape_ok = (
        len(tokens) >= 7
        and _is_word(tokens[1], "input")
        and _is_word(tokens[2], "for")
        and _is_word(tokens[4], "with")
        and _is_word(tokens[5], "prompt")
    )
    if not shape_ok:
        raise FlashSyntaxError(
            "'get input for' command syntax error. "
            "Expected 'get input for [name] with prompt [message]'."
        )
    return GetInput(name=tokens[3], prompt=" ".join(tokens[6:]))


def _parse_calculate(tokens: List[str]) -> Command:
    shape_ok = (
        len(tokens) == 8
        and _is_word(tokens[2], "to")
        and _is_word(tokens[4], "from")
        and _is_word(tokens[6], "and")
    )
    if not shape_ok:
        raise FlashSyntaxError(
            "'calculate' command syntax error. "
            "Expected 'calculate [operation] to [result] from [a] and [b]'."
        )
    return Calculate(
        operation=tokens[1],
        result=tokens[3],
        left=tokens[5],
        right=tokens[7],
    )


def _parse_if(tokens: List[str]) -> Command:
    if len(tokens) != 4:
        raise FlashSyntaxError(
            "'if' command syntax error. Expected 'if [a] [condition] [b]'."
        )
    return If(left=tokens[1], condition=tokens[2], right=tokens[3])


def _parse_bare(tokens: List[str], command: Command) -> Command:
    if len(tokens) != 1:
        raise FlashSyntaxError(f"'{tokens[0].lower()}' takes no arguments.")
    return command


def _parse_goto(tokens: List[str]) -> Command:
    if len(tokens) != 2:
        raise FlashSyntaxError(
            "'goto' command syntax error. Expected 'goto [line number]'.",
            fatal=True,
        )
    if not INTEGER_PATTERN.match(tokens[1]):
        raise FlashSyntaxError(
            f"Invalid goto target '{tokens[1]}': not a line number.",
            fatal=True,
        )
    return Goto(target=int(tokens[1]))


_PARSERS = {
    "store": _parse_store,
    "show": _parse_show,
    "get": _parse_get_input,
    "calculate": _parse_calculate,
    "if": _parse_if,
    "else": lambda tokens: _parse_bare(tokens, Else()),
    "endif": lambda tokens: _parse_bare(tokens, EndIf()),
    "goto": _parse_goto,
}


def parse_line(line: str) -> Command:
    """
    Parse one non-blank source line into a Command.

    Args:
        line: Raw line text (surrounding whitespace is ignored)

    Returns:
        Command variant; Unknown if the keyword is not recognized

    Raises:
        FlashSyntaxError: If a known command has the wrong shape
    """
    tokens = tokenize(line)
    if not tokens:
        raise FlashSyntaxError("Empty line.")

    keyword = tokens[0].lower()
    parser = _PARSERS.get(keyword)
    if parser is None:
        return Unknown(keyword=tokens[0])
    return parser(tokens)


__all__ = [
    "FlashSyntaxError",
    "tokenize",
    "keyword_of",
    "parse_line",
]
