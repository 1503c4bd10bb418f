"""
Block matching for if / else / endif.

Both scans start on the line after the one that triggered them and keep
a nesting depth that begins at 1. Only the first token of each line is
inspected, lower-cased; a malformed ``if`` still opens a level.

They return the 0-based index of the line to resume at, or None when the
program ends before the block is closed.
"""

from typing import Optional

from flashlang.line_parser import keyword_of
from flashlang.model import Program


def _scan(program: Program, start: int, stop_at_else: bool) -> Optional[int]:
    depth = 1
    for index in range(start, len(program)):
        keyword = keyword_of(program.get(index))
        if keyword == "if":
            depth += 1
        elif keyword == "endif":
            depth -= 1
            if depth == 0:
                return index + 1
        elif keyword == "else" and stop_at_else and depth == 1:
            return index + 1
    return None


def skip_false_branch(program: Program, if_index: int) -> Optional[int]:
    """
    Find where execution continues after a false ``if``.

    Returns the line after the ``else`` at the same nesting level, or the
    line after the matching ``endif`` when there is no such ``else``.
    """
    return _scan(program, if_index + 1, stop_at_else=True)


def skip_else_branch(program: Program, else_index: int) -> Optional[int]:
    """Find the line after the ``endif`` that closes an ``else`` branch."""
    return _scan(program, else_index + 1, stop_at_else=False)


__all__ = ["skip_false_branch", "skip_else_branch"]
