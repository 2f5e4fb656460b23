import torch
from dydx.symbolic import ExprConst, ExprVar, ExprLog
from dydx.debugger import print_tree


def demo_derivatives():
    print("=== dydx: Symbolic Differentiation Demo ===")
    x = ExprVar('x')

    # f(x) = 1.1*3.3 + 2.2*x + x^3
    print("[1] Polynomial")
    f = ExprConst(1.1) * ExprConst(3.3) + ExprConst(2.2) * x + x ** 3
    df = f.diff('x')
    print(f"Expression: {f}")
    print(f"Derivative: {df}")
    print(f"Derivative (pruned): {df.simplify()}")

    d2f = df.diff('x')
    print(f"2nd derivative: {d2f}")
    print(f"2nd derivative (pruned): {d2f.simplify()}")

    print("\n[2] Reciprocal")
    recip = x ** -1
    print(f"d/dx {recip} = {recip.diff('x').simplify()}")

    print("\n[3] Log of a cubic")
    g = ExprLog(x ** 3)
    print(f"Log of cubic (pruned): {g.simplify()}")
    print(f"Derivative: {g.diff('x')}")
    print(f"Derivative, pruned: {g.diff('x').simplify()}")
    print(f"Derivative of pruned: {g.simplify().diff('x').simplify()}")
    print_tree(g.simplify())

    # Symbolic slope vs autograd over a batch of points
    print("\n[4] Checking against autograd")
    points = torch.linspace(0.5, 3.0, 6, dtype=torch.float64, requires_grad=True)
    f.evaluate({'x': points}).sum().backward()
    symbolic = df.simplify().evaluate({'x': points.detach()})
    print(f"symbolic: {symbolic}")
    print(f"autograd: {points.grad}")
    print(f"max error: {(symbolic - points.grad).abs().max().item():.3g}")


if __name__ == "__main__":
    demo_derivatives()
