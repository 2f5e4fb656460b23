"""
dydx Errors - typed failures raised by the symbolic kernel and its parser.
"""


class SymbolicError(Exception):
    """Base class for every error raised by dydx."""


class IndeterminateForm(SymbolicError, ArithmeticError):
    """Raised when simplification meets 0^0."""
    def __init__(self, message="0 ^ 0 is not well-defined"):
        super().__init__(message)


class UnboundVariable(SymbolicError, KeyError):
    """Raised when a variable has no value in the evaluation bindings."""
    def __init__(self, name, available=()):
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self):
        available = ", ".join(self.available) or "none"
        return f"No binding provided for variable '{self.name}' (available: {available})"


class DomainError(SymbolicError, ValueError):
    """Raised when a function is evaluated outside its real domain."""


class ParseError(SymbolicError, ValueError):
    """Raised by the parser; `position` is the character offset of the problem."""
    def __init__(self, message, position=None):
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)


class ExpressionTooDeep(SymbolicError):
    """Raised when a tree is too deep to differentiate, prune, evaluate or print."""
    def __init__(self, message="expression nested too deeply"):
        super().__init__(message)
