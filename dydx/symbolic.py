"""
Symbolic expression trees for dydx.

Every node is an immutable value. The three tree walks live on the nodes
themselves:
    diff(var)          -> new tree, the derivative with respect to `var`
    simplify()         -> new tree, pruned of structural zeros and ones
    evaluate(bindings) -> number (float64 via torch)
"""
import torch
from dataclasses import dataclass

from .errors import IndeterminateForm, UnboundVariable, DomainError


def is_one(node):
    """True if `node` is the literal 1."""
    return isinstance(node, ExprConst) and node.value == 1


def _as_tensor(value):
    if torch.is_tensor(value):
        return value if value.is_floating_point() else value.to(torch.float64)
    return torch.tensor(float(value), dtype=torch.float64)


class SymbolicNode:
    """Base class for all symbolic nodes in the expression tree."""

    # Operator sugar only builds nodes; nothing is simplified here.
    def __add__(self, other): return ExprAdd(self, self._wrap(other))
    def __radd__(self, other): return ExprAdd(self._wrap(other), self)
    def __sub__(self, other): return ExprAdd(self, -self._wrap(other))
    def __rsub__(self, other): return ExprAdd(self._wrap(other), -self)
    def __mul__(self, other): return ExprMul(self, self._wrap(other))
    def __rmul__(self, other): return ExprMul(self._wrap(other), self)
    def __truediv__(self, other): return ExprMul(self, ExprPow(self._wrap(other), ExprConst(-1.0)))
    def __rtruediv__(self, other): return ExprMul(self._wrap(other), ExprPow(self, ExprConst(-1.0)))
    def __pow__(self, other): return ExprPow(self, self._wrap(other))
    def __rpow__(self, other): return ExprPow(self._wrap(other), self)

    def __neg__(self):
        if isinstance(self, ExprConst): return ExprConst(-self.value)
        return ExprMul(ExprConst(-1.0), self)

    def _wrap(self, other):
        if isinstance(other, SymbolicNode): return other
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return ExprConst(float(other))
        raise TypeError(f"Cannot use {type(other).__name__} in a symbolic expression")

    def __str__(self):
        return self.__repr__()

    def evaluate(self, bindings=None):
        """
        Numerically evaluate the tree.

        Args:
            bindings: dict of {variable name: number | tensor}
        Returns:
            A float for scalar results, otherwise the resulting tensor
            (batched bindings, or bindings that require grad).
        """
        result = self._evaluate(bindings or {})
        if result.dim() == 0 and not result.requires_grad:
            return float(result.item())
        return result

    def free_variables(self):
        """Names of all variables referenced by the tree."""
        return frozenset()

    def _evaluate(self, bindings):
        raise NotImplementedError()

    def diff(self, var='x'):
        raise NotImplementedError()

    def simplify(self):
        raise NotImplementedError()

    def is_zero(self):
        """Structural check: True only if the tree is built in a shape known to be 0."""
        raise NotImplementedError()


@dataclass(frozen=True, repr=False)
class ExprConst(SymbolicNode):
    value: float

    def _evaluate(self, bindings):
        return torch.tensor(float(self.value), dtype=torch.float64)

    def diff(self, var='x'):
        return ExprConst(0.0)

    def simplify(self):
        return self

    def is_zero(self):
        return self.value == 0

    def __repr__(self): return f"{self.value:f}"


@dataclass(frozen=True, repr=False)
class ExprVar(SymbolicNode):
    name: str = 'x'

    def _evaluate(self, bindings):
        if self.name not in bindings:
            raise UnboundVariable(self.name, sorted(bindings))
        return _as_tensor(bindings[self.name])

    def diff(self, var='x'):
        return ExprConst(1.0) if self.name == var else ExprConst(0.0)

    def simplify(self):
        return self

    def is_zero(self):
        return False

    def free_variables(self):
        return frozenset([self.name])

    def __repr__(self): return self.name


@dataclass(frozen=True, repr=False)
class ExprAdd(SymbolicNode):
    left: SymbolicNode
    right: SymbolicNode

    def _evaluate(self, bindings):
        return self.left._evaluate(bindings) + self.right._evaluate(bindings)

    def diff(self, var='x'):
        return ExprAdd(self.left.diff(var), self.right.diff(var))

    def simplify(self):
        left, right = self.left.simplify(), self.right.simplify()
        if left.is_zero() and right.is_zero():
            return ExprConst(0.0)
        if left.is_zero():
            return right
        if right.is_zero():
            return left
        if left is self.left and right is self.right:
            return self
        return ExprAdd(left, right)

    def is_zero(self):
        return self.left.is_zero() and self.right.is_zero()

    def free_variables(self):
        return self.left.free_variables() | self.right.free_variables()

    def __repr__(self): return f"({self.left} + {self.right})"


@dataclass(frozen=True, repr=False)
class ExprMul(SymbolicNode):
    left: SymbolicNode
    right: SymbolicNode

    def _evaluate(self, bindings):
        return self.left._evaluate(bindings) * self.right._evaluate(bindings)

    def diff(self, var='x'):
        # (uv)' = u'v + uv'
        return ExprAdd(ExprMul(self.left.diff(var), self.right), ExprMul(self.left, self.right.diff(var)))

    def simplify(self):
        left, right = self.left.simplify(), self.right.simplify()
        if left.is_zero() or right.is_zero():
            return ExprConst(0.0)
        if is_one(left):
            return right
        if is_one(right):
            return left
        if left is self.left and right is self.right:
            return self
        return ExprMul(left, right)

    def is_zero(self):
        return self.left.is_zero() or self.right.is_zero()

    def free_variables(self):
        return self.left.free_variables() | self.right.free_variables()

    def __repr__(self): return f"({self.left} * {self.right})"


@dataclass(frozen=True, repr=False)
class ExprPow(SymbolicNode):
    base: SymbolicNode
    exp: SymbolicNode

    def _evaluate(self, bindings):
        # IEEE semantics: negative bases with fractional exponents give NaN
        return torch.pow(self.base._evaluate(bindings), self.exp._evaluate(bindings))

    def diff(self, var='x'):
        base, exp = self.base.simplify(), self.exp.simplify()
        power = ExprPow(base, exp)

        # 1. c^g(x)    : ln(c) * c^g * g'
        # 2. f(x)^n    : n * f^(n-1) * f'
        # 3. f(x)^g(x) : logarithmic differentiation, f^g * (g * ln f)'
        if isinstance(base, ExprConst):
            dexp = exp.diff(var)
            if dexp.is_zero():
                # Constant power: log(c) is never built, so c <= 0 stays valid
                return ExprConst(0.0)
            return ExprMul(ExprLog(base), ExprMul(power, dexp))
        if isinstance(exp, ExprConst):
            return ExprMul(exp, ExprMul(ExprPow(base, ExprConst(exp.value - 1)), base.diff(var)))
        return ExprMul(power, ExprMul(ExprLog(base), exp).diff(var))

    def simplify(self):
        base, exp = self.base.simplify(), self.exp.simplify()
        if exp.is_zero() and base.is_zero():
            raise IndeterminateForm()
        if exp.is_zero():
            return ExprConst(1.0)
        if base.is_zero():
            return ExprConst(0.0)
        if is_one(exp):
            return base
        if base is self.base and exp is self.exp:
            return self
        return ExprPow(base, exp)

    def is_zero(self):
        return self.base.is_zero() and not self.exp.is_zero()

    def free_variables(self):
        return self.base.free_variables() | self.exp.free_variables()

    def __repr__(self): return f"{self.base}^({self.exp})"


@dataclass(frozen=True, repr=False)
class ExprFunc(SymbolicNode):
    """A named function of a single argument."""
    arg: SymbolicNode

    name = None

    def free_variables(self):
        return self.arg.free_variables()

    def simplify(self):
        arg = self.arg.simplify()
        return self if arg is self.arg else type(self)(arg)

    def __repr__(self): return f"{self.name} ({self.arg})"


class ExprLog(ExprFunc):
    """Natural logarithm."""
    name = 'log'

    def _evaluate(self, bindings):
        value = self.arg._evaluate(bindings)
        if bool((value <= 0).any()):
            raise DomainError(f"log(u) requires u > 0, got u={value.min().item():g}")
        return torch.log(value)

    def diff(self, var='x'):
        f = self.arg
        if isinstance(f, ExprPow):
            # log(b^e) = e * log(b)
            return ExprMul(f.exp, ExprLog(f.base)).diff(var)
        if isinstance(f, ExprMul):
            # log(pq) = log(p) + log(q)
            return ExprAdd(ExprLog(f.left), ExprLog(f.right)).diff(var)
        # log'(f) = f' / f
        return ExprMul(f.diff(var), ExprPow(f, ExprConst(-1.0)))

    def simplify(self):
        f = self.arg
        if isinstance(f, ExprPow):
            return ExprMul(f.exp, ExprLog(f.base)).simplify()
        if isinstance(f, ExprMul):
            return ExprAdd(ExprLog(f.left), ExprLog(f.right)).simplify()
        return super().simplify()

    def is_zero(self):
        return is_one(self.arg)


class ExprSin(ExprFunc):
    name = 'sin'

    def _evaluate(self, bindings):
        return torch.sin(self.arg._evaluate(bindings))

    def diff(self, var='x'):
        return ExprMul(ExprCos(self.arg), self.arg.diff(var))

    def is_zero(self):
        # Only sin(0); the other zeros of the sinusoid are not modeled
        return self.arg.is_zero()


class ExprCos(ExprFunc):
    name = 'cos'

    def _evaluate(self, bindings):
        return torch.cos(self.arg._evaluate(bindings))

    def diff(self, var='x'):
        return ExprMul(ExprMul(ExprSin(self.arg), ExprConst(-1.0)), self.arg.diff(var))

    def is_zero(self):
        # Zeros at pi/2 + k*pi are not modeled
        return False
