"""
dydx Workspace - session state for the shell.

Holds the numeric bindings and the differentiation variable, and runs one
line of input at a time: either an assignment `name = expr`, which binds a
number, or an expression, which is differentiated, pruned and (when every
variable is bound) evaluated.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import ExpressionTooDeep, UnboundVariable
from .expression import ExpressionParser
from .symbolic import SymbolicNode

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Outcome of running one line in a Workspace."""
    expression: SymbolicNode
    variable: str
    derivative: Optional[SymbolicNode] = None
    pruned: Optional[SymbolicNode] = None
    value: Optional[float] = None
    slope: Optional[float] = None
    assigned: Optional[str] = None

    def lines(self):
        if self.assigned is not None:
            return [f"{self.assigned} = {self.value:g}"]
        out = [f"expression: {self.expression}", f"d/d{self.variable}: {self.derivative}"]
        if self.pruned is not None:
            out.append(f"pruned: {self.pruned}")
        if self.value is not None:
            out.append(f"value: {self.value:g}")
            out.append(f"slope: {self.slope:g}")
        return out

    def __str__(self):
        return "\n".join(self.lines())


class Workspace:
    """
    A persistent environment for a differentiation session.

    Attributes:
        variable: Name of the variable derivatives are taken against.
        prune: Whether derivatives are simplified.
        bindings: A dictionary of {name: float} used for evaluation.
    """
    def __init__(self, variable='x', prune=True, bindings=None):
        self.variable = variable
        self.prune = prune
        self.bindings = dict(bindings or {})
        self.parser = ExpressionParser()

    def save(self, name, value):
        """Bind a numeric value to a variable name."""
        self.bindings[name] = float(value)
        logger.debug("Bound %s = %r", name, self.bindings[name])

    def load(self, name):
        """Retrieve a bound value."""
        if name not in self.bindings:
            raise UnboundVariable(name, sorted(self.bindings))
        return self.bindings[name]

    def is_bound(self, node):
        """True if every variable of `node` has a binding."""
        return node.free_variables() <= set(self.bindings)

    def run(self, line):
        """
        Run one line of input.
        Returns a StepResult; parse and evaluation errors propagate.
        """
        try:
            return self._run(line)
        except RecursionError:
            raise ExpressionTooDeep() from None

    def report(self, line):
        """Run one line and render its StepResult as text."""
        result = self.run(line)
        try:
            return str(result)
        except RecursionError:
            raise ExpressionTooDeep() from None

    def _run(self, line):
        name, node = self.parser.parse_statement(line)
        if name is not None:
            value = node.evaluate(self.bindings)
            self.save(name, value)
            return StepResult(node, self.variable, value=value, assigned=name)

        derivative = node.diff(self.variable)
        pruned = derivative.simplify() if self.prune else None
        result = StepResult(node, self.variable, derivative, pruned)
        logger.debug("d/d%s %s -> %s", self.variable, node, derivative)

        if self.is_bound(node):
            result.value = node.evaluate(self.bindings)
            result.slope = (pruned if pruned is not None else derivative).evaluate(self.bindings)
        return result

    def clear(self):
        """Drop all bindings."""
        self.bindings = {}

    def summary(self):
        """Return a human-readable summary of the session state."""
        lines = [f"=== dydx workspace (d/d{self.variable}, prune={'on' if self.prune else 'off'}) ==="]
        for k, v in sorted(self.bindings.items()):
            lines.append(f"{k} = {v:g}")
        return "\n".join(lines)
