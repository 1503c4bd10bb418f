"""
Graphviz DOT diagram generator for Flash programs.

Converts a Program into a control-flow graph in DOT format.

Supports two modes:
    - SIMPLE: Line numbers only
    - DETAILED: Line text as labels, edges labelled true/false/goto

Nodes are START, one node per line (L1..Ln) and END. Where execution
would halt (an unclosed block or an invalid goto) the edge goes to END.
"""

from enum import Enum
from typing import List, Optional, Tuple

from flashlang.blocks import skip_else_branch, skip_false_branch
from flashlang.commands import Else, Goto, If
from flashlang.line_parser import FlashSyntaxError, parse_line
from flashlang.model import Program


class DotMode(Enum):
    """Visualization modes for DOT output."""
    SIMPLE = "simple"      # Just line flow
    DETAILED = "detailed"  # Line text and branch labels


def _escape_dot_string(s: str) -> str:
    """Escape special characters for DOT labels."""
    if not s:
        return '""'
    s = s.replace('\\', '\\\\')
    s = s.replace('"', '\\"')
    s = s.replace('\n', '\\n')
    return f'"{s}"'


def _node_id(program: Program, index: Optional[int]) -> str:
    if index is None or index >= len(program):
        return "END"
    return f"L{program.line_number(index)}"


def _edges_for_line(program: Program, index: int) -> List[Tuple[Optional[int], str]]:
    """Successor indices of one line, each with a branch label."""
    following = index + 1
    try:
        command = parse_line(program.get(index))
    except FlashSyntaxError as e:
        if e.fatal:
            return [(None, "error")]
        return [(following, "")]

    if isinstance(command, If):
        return [
            (following, "true"),
            (skip_false_branch(program, index), "false"),
        ]
    if isinstance(command, Else):
        return [(skip_else_branch(program, index), "")]
    if isinstance(command, Goto):
        if 1 <= command.target <= len(program):
            return [(command.target - 1, "goto")]
        return [(None, "error")]
    return [(following, "")]


def generate_dot(program: Program, mode: DotMode = DotMode.SIMPLE) -> str:
    """
    Generate Graphviz DOT format for a program's control flow.

    Args:
        program: Program to visualize
        mode: Visualization mode (SIMPLE, DETAILED)

    Returns:
        String containing DOT graph definition
    """
    lines = []

    lines.append("digraph flash {")
    lines.append("  rankdir=TB;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    lines.append('  START [shape=ellipse, fillcolor=lightgreen, label="START"];')
    lines.append('  END [shape=ellipse, fillcolor=lightpink, label="END"];')

    for index, text in enumerate(program):
        number = program.line_number(index)
        label = f"{number}: {text.strip()}" if mode == DotMode.DETAILED else str(number)
        lines.append(f"  {_node_id(program, index)} [label={_escape_dot_string(label)}];")

    lines.append(f"  START -> {_node_id(program, 0)};")

    for index in range(len(program)):
        source = _node_id(program, index)
        for target, branch in _edges_for_line(program, index):
            edge_attr = ""
            if branch and mode == DotMode.DETAILED:
                edge_attr = f" [label={_escape_dot_string(branch)}]"
            lines.append(f"  {source} -> {_node_id(program, target)}{edge_attr};")

    lines.append("}")

    return "\n".join(lines)


def save_dot_file(program: Program, filename: str, mode: DotMode = DotMode.SIMPLE) -> None:
    """
    Generate DOT and save to file.

    Args:
        program: Program to visualize
        filename: Output file path (.dot extension recommended)
        mode: Visualization mode
    """
    dot = generate_dot(program, mode=mode)
    with open(filename, 'w') as f:
        f.write(dot)


__all__ = ["DotMode", "generate_dot", "save_dot_file"]
