""" s-expression based symbolic differentiation

    symdiff repl                       d/dx, simplify, print loop
    symdiff d/dx "(+ (^ x 2) 3)"       derivative in x, unsimplified
    symdiff simplify "(+ 1 2 (^ x 1))" normalize to a flat sum of monomials
"""

import argparse
import atexit
import builtins
import logging
import os
import sys
from contextlib import contextmanager
from typing import Callable, Optional

from rich.console import Console

from . import __version__
from .differentiate import differentiate
from .errors import (
    InvariantViolation,
    OutputError,
    ParseError,
    SemanticError,
    SymdiffError,
    VariableMismatchError,
)
from .expression import is_symbol, poly_from_string, poly_to_string
from .rainbow import rainbow_parens
from .simplification import simplify

try:
    import readline
except ImportError:  # pragma: no cover
    readline = None

LOG_LEVEL = logging.ERROR
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"
logger = logging.getLogger(__name__)

DEFAULT_VARIABLE = "x"
HISTORY_PATH = os.path.expanduser("~/.symdiff_history")

ERROR_CONTEXT = {
    ParseError: "Error parsing user input as sexp",
    SemanticError: "Error parsing user input as polynomial",
    VariableMismatchError: "Error taking derivative",
    OutputError: "Error printing result",
    InvariantViolation: "Internal error",
}


def describe_error(exc: SymdiffError) -> str:
    for kind, context in ERROR_CONTEXT.items():
        if isinstance(exc, kind):
            return f"{context}: {exc}"
    return f"Error: {exc}"


@contextmanager
def nesting_limit():
    """Report trees too deep for the recursive tree walks as a SemanticError."""
    try:
        yield
    except RecursionError as exc:
        raise SemanticError(
            f"expression nested too deeply, limit is {sys.getrecursionlimit()} frames"
        ) from exc


def diff(raw: str, var: str = DEFAULT_VARIABLE) -> str:
    """Differentiate, simplify and print back as text."""
    with nesting_limit():
        ast = poly_from_string(raw)
        derivative = differentiate(var, ast)
        logger.debug(f"d/d{var} {ast} = {derivative}")
        return poly_to_string(simplify(derivative))


def make_console(color: bool = True, stderr: bool = False) -> Console:
    return Console(highlight=False, soft_wrap=True, no_color=not color, stderr=stderr)


def show(console: Console, text: str, color: bool = True) -> None:
    if color:
        console.print(rainbow_parens(text))
    else:
        console.print(text, markup=False)


class Repl:
    def __init__(
        self,
        var: str = DEFAULT_VARIABLE,
        console: Optional[Console] = None,
        color: bool = True,
    ):
        self.var = var
        self.color = color
        self.console = console if console is not None else make_console(color)

    def input(self, line: str) -> str:
        return diff(line, self.var)

    def run(self, read: Optional[Callable[[str], str]] = None) -> None:
        read = read or builtins.input
        prompt = f"d/d{self.var} "
        self.console.print(f"\nd/d{self.var}, simplify, print\n", markup=False)
        while True:
            try:
                line = read(prompt)
            except EOFError:
                break
            except KeyboardInterrupt:
                self.console.print()
                continue
            if line.strip().lower() in {"exit", "quit"}:
                break
            if not line.strip():
                continue
            try:
                result = self.input(line)
            except SymdiffError as exc:
                logger.debug(f"failed on {line!r}", exc_info=True)
                self.console.print(describe_error(exc), markup=False)
                continue
            show(self.console, result, self.color)


def _setup_history(history_path: str = HISTORY_PATH) -> None:
    if readline is None:
        return
    readline.parse_and_bind("tab: complete")
    try:
        readline.read_history_file(history_path)
    except FileNotFoundError:
        pass
    except (OSError, ValueError):
        logger.warning(f"could not read history file {history_path}")

    def _persist_history():
        try:
            readline.write_history_file(history_path)
        except OSError:
            logger.warning(f"could not write history file {history_path}")

    atexit.register(_persist_history)


def _symbol(value: str) -> str:
    if not is_symbol(value):
        raise argparse.ArgumentTypeError(f"{value!r} is not an alphabetic symbol")
    return value


def _run_repl(args, console: Console) -> int:
    _setup_history()
    Repl(var=args.var, console=console, color=args.color).run()
    return 0


def _run_ddx(args, console: Console) -> int:
    with nesting_limit():
        derivative = differentiate(args.var, poly_from_string(args.expr))
        text = poly_to_string(derivative)
    show(console, text, args.color)
    return 0


def _run_simplify(args, console: Console) -> int:
    with nesting_limit():
        text = poly_to_string(simplify(poly_from_string(args.expr)))
    show(console, text, args.color)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="symdiff",
        description="s-expression based symbolic differentiation",
    )
    parser.add_argument(
        "-x",
        "--var",
        type=_symbol,
        default=DEFAULT_VARIABLE,
        help="Bound variable to differentiate in (default: %(default)s).",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Print without coloring matching parentheses.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every pipeline stage."
    )
    parser.add_argument("--version", action="version", version=__version__)

    commands = parser.add_subparsers(dest="command", metavar="command")
    repl = commands.add_parser("repl", help="d/dx, simplify, print loop")
    repl.set_defaults(run=_run_repl)
    ddx = commands.add_parser(
        "d/dx", aliases=["ddx"], help="Take the derivative in the bound variable"
    )
    ddx.add_argument("expr", help="Polynomial S-expression, e.g. '(^ x 3)'.")
    ddx.set_defaults(run=_run_ddx)
    simp = commands.add_parser("simplify", help="Run polynomial simplification")
    simp.add_argument("expr", help="Polynomial S-expression, e.g. '(+ 1 2)'.")
    simp.set_defaults(run=_run_simplify)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL, format=LOG_FORMAT
    )

    if args.command is None:
        parser.print_help()
        return 0

    console = make_console(args.color)
    try:
        return args.run(args, console)
    except SymdiffError as exc:
        logger.debug("command failed", exc_info=True)
        make_console(args.color, stderr=True).print(
            f"error running symdiff: {describe_error(exc)}", markup=False
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
