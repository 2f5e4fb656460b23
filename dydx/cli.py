"""
dydx command line.

    dydx                                   start the interactive shell
    dydx "x^x" --at x=6.8                  differentiate once and print
    dydx "sin(x*y)" --wrt y --at x=1 --at y=2
    dydx "log(x^3)" --dot                  print the tree as GraphViz DOT
"""
import argparse
import logging
import sys

from .config import ShellConfig
from .debugger import graph_to_dot
from .errors import ExpressionTooDeep, SymbolicError
from .shell import start
from .workspace import Workspace

logger = logging.getLogger(__name__)


def _binding(text):
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name.isidentifier():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")


def _dot(node):
    try:
        return graph_to_dot(node)
    except RecursionError:
        raise ExpressionTooDeep() from None


def build_parser(config):
    parser = argparse.ArgumentParser(prog="dydx", description="Symbolic differentiation shell")
    parser.add_argument("expression", nargs="?", help="Expression to differentiate (omit for the shell)")
    parser.add_argument("--wrt", default=config.variable, help="Differentiation variable")
    parser.add_argument("--at", type=_binding, action="append", default=[], metavar="NAME=VALUE",
                        help="Bind a variable for evaluation (repeatable)")
    parser.add_argument("--no-prune", action="store_true", help="Print the derivative unsimplified")
    parser.add_argument("--dot", action="store_true", help="Print the expression tree as DOT and exit")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    return parser


def main(argv=None, stdin=None, stdout=None):
    config = ShellConfig.from_env()
    args = build_parser(config).parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config.bindings.update(dict(args.at))
    workspace = Workspace(variable=args.wrt, prune=config.prune and not args.no_prune,
                          bindings=config.bindings)

    if args.expression is None:
        logger.info("Starting shell (d/d%s)", workspace.variable)
        start(stdin, stdout, workspace, prompt=config.prompt)
        return 0

    try:
        if args.dot:
            stdout.write(_dot(workspace.parser.parse(args.expression)) + "\n")
        else:
            stdout.write(workspace.report(args.expression) + "\n")
    except SymbolicError as e:
        logger.error("Failed on %r: %s", args.expression, e)
        stdout.write(f"error: {e}\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
