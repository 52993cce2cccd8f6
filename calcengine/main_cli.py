"""Command line calculator.

Evaluates the expressions given as arguments, or reads them line by line.
Lines starting with ':' are commands: ':deg', ':rad', ':toggle', ':mode', ':quit'.
"""

import argparse
import sys
from typing import Iterable, Optional, TextIO

from calcengine.exceptions import ExpressionError, InvalidInputError
from calcengine.session import CalculatorSession


def run_line(session: CalculatorSession, line: str) -> Optional[str]:
    """Process one input line; None means the user asked to quit."""
    command = line.strip()

    if command in (":quit", ":q"):
        return None
    if command == ":deg":
        return f"mode: {session.set_angle_mode('deg').label}"
    if command == ":rad":
        return f"mode: {session.set_angle_mode('rad').label}"
    if command == ":mode":
        return f"mode: {session.angle_mode.label}"
    if command == ":toggle":
        return f"mode: {session.toggle_angle_mode().label}"

    try:
        return repr(session.evaluate(command))
    except ExpressionError as e:
        return f"{e.kind.value} error: {e.message}"


def repl(session: CalculatorSession, lines: Iterable[str], out: TextIO) -> int:
    for line in lines:
        if not line.strip():
            continue
        response = run_line(session, line)
        if response is None:
            break
        print(response, file=out)
    return 0


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="calcengine command line calculator")
    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate (reads stdin if omitted)")
    parser.add_argument(
        "--angle-mode",
        type=str,
        default=None,
        help="deg or rad (default: CALCENGINE_ANGLE_MODE, or deg)",
    )
    args = parser.parse_args(argv)

    try:
        session = CalculatorSession(args.angle_mode)
    except InvalidInputError as e:
        parser.error(e.message)

    if args.expressions:
        status = 0
        for expression in args.expressions:
            try:
                print(repr(session.evaluate(expression)))
            except ExpressionError as e:
                print(f"{e.kind.value} error: {e.message}", file=sys.stderr)
                status = 1
        return status

    return repl(session, sys.stdin, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
