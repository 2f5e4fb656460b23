"""
dydx Shell - line-oriented REPL.

Each input line is either a `:command` or something the Workspace can run
(an expression, or an assignment `name = expr`).
"""
import logging

from .debugger import format_tree, graph_to_dot
from .errors import ExpressionTooDeep, SymbolicError
from .expression import parse
from .tokens import TokenType, lookup_ident
from .workspace import Workspace

logger = logging.getLogger(__name__)

PROMPT = ">> "

HELP = """\
<expr>          differentiate, prune and (if bound) evaluate an expression
name = <expr>   bind a variable to the value of a closed expression
:wrt NAME       differentiate with respect to NAME
:vars           show bindings
:clear          drop all bindings
:tree <expr>    print the expression tree
:dot <expr>     print the expression tree in GraphViz DOT format
:help           show this message
:quit           leave the shell"""


class Shell:
    def __init__(self, workspace=None, prompt=PROMPT):
        self.workspace = workspace or Workspace()
        self.prompt = prompt
        self.commands = {
            'wrt': self._cmd_wrt,
            'vars': self._cmd_vars,
            'clear': self._cmd_clear,
            'tree': self._cmd_tree,
            'dot': self._cmd_dot,
            'help': self._cmd_help,
        }

    def handle(self, line):
        """
        Handle one line of input.
        Returns the text to print, or None when the session should end.
        """
        line = line.strip()
        if not line:
            return ""
        if line.startswith(':'):
            name, _, arg = line[1:].partition(' ')
            if name in ('quit', 'exit', 'q'):
                return None
            command = self.commands.get(name)
            if command is None:
                return f"error: unknown command ':{name}' (try :help)"
            try:
                return command(arg.strip())
            except RecursionError:
                raise ExpressionTooDeep() from None
        return self.workspace.report(line)

    def _cmd_wrt(self, arg):
        if not arg[:1].isalpha() or not arg.isidentifier() or lookup_ident(arg) != TokenType.IDENT:
            return "error: usage :wrt NAME"
        self.workspace.variable = arg
        return f"differentiating with respect to {arg}"

    def _cmd_vars(self, arg):
        return self.workspace.summary()

    def _cmd_clear(self, arg):
        self.workspace.clear()
        return "bindings cleared"

    def _cmd_tree(self, arg):
        return format_tree(parse(arg))

    def _cmd_dot(self, arg):
        return graph_to_dot(parse(arg))

    def _cmd_help(self, arg):
        return HELP


def start(stdin, stdout, workspace=None, prompt=PROMPT):
    """Run the read-eval-print loop until end of input or :quit."""
    shell = Shell(workspace, prompt)
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return

        try:
            output = shell.handle(line)
        except SymbolicError as e:
            logger.debug("Line %r failed", line, exc_info=True)
            output = f"error: {e}"

        if output is None:
            return
        if output:
            stdout.write(output + "\n")
