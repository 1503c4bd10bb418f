"""
Command-line runner for Flash programs.

    flashlang run program.flash --input Ada --input 36
    flashlang run program.flash --config flash.yaml --dump-state yaml
    flashlang dot program.flash --mode detailed -o program.dot

``run`` answers each prompt from the ``--input`` values in order, then
from lines read on stdin. Output lines are printed as they are emitted.
"""

import argparse
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from flashlang import __version__
from flashlang.backends import DotMode, generate_dot, save_dot_file
from flashlang.config import ConfigError, InterpreterConfig, load_config
from flashlang.engine import Interpreter
from flashlang.model import Program
from flashlang.serialization import session_to_json, session_to_yaml


logger = logging.getLogger(__name__)


def _read_source(filepath: str) -> str:
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Flash program not found: {filepath}")


def _input_lines(preset: List[str], stream: TextIO) -> Iterator[str]:
    yield from preset
    for line in stream:
        yield line.rstrip("\n")


def run_program(
    source: str,
    inputs: List[str],
    config: Optional[InterpreterConfig] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Interpreter:
    """
    Run a program to completion, feeding prompts from ``inputs`` then ``stdin``.

    Returns the Interpreter so callers can inspect the final session.
    If input runs out while the program is suspended, the session is
    left suspended.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    interp = Interpreter(on_output=lambda line: print(line, file=stdout, flush=True), config=config)
    interp.run(source)
    answers = _input_lines(inputs, stdin)

    while True:
        interp.run_until_blocked()
        if not interp.is_awaiting_input():
            break
        try:
            answer = next(answers)
        except StopIteration:
            logger.warning("Input exhausted while waiting for %s", interp.session.pending_input)
            break
        interp.deliver_input(answer)

    return interp


def _cmd_run(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else None
    interp = run_program(_read_source(args.program), args.input or [], config=config)

    if args.dump_state == "json":
        print(session_to_json(interp.session))
    elif args.dump_state == "yaml":
        print(session_to_yaml(interp.session), end="")

    return 1 if interp.is_awaiting_input() else 0


def _cmd_dot(args: argparse.Namespace) -> int:
    program = Program.from_text(_read_source(args.program))
    mode = DotMode(args.mode)
    if args.output:
        save_dot_file(program, args.output, mode=mode)
        print(f"Saved to: {args.output}")
    else:
        print(generate_dot(program, mode=mode))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flashlang", description="Run and inspect Flash programs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level for interpreter diagnostics (stderr)")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Execute a Flash program")
    run.add_argument("program", help="Path to the Flash source file")
    run.add_argument("--input", action="append", metavar="TEXT",
                     help="Answer for the next prompt (repeatable)")
    run.add_argument("--config", help="YAML file with interpreter settings")
    run.add_argument("--dump-state", choices=["json", "yaml"],
                     help="Print the final session snapshot")
    run.set_defaults(handler=_cmd_run)

    dot = sub.add_parser("dot", help="Render a program's control flow as Graphviz DOT")
    dot.add_argument("program", help="Path to the Flash source file")
    dot.add_argument("--mode", choices=[m.value for m in DotMode], default=DotMode.SIMPLE.value)
    dot.add_argument("-o", "--output", help="Write DOT to this file instead of stdout")
    dot.set_defaults(handler=_cmd_dot)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.handler(args)
    except (FileNotFoundError, ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
