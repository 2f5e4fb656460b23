import os
import tempfile
import unittest

from dydx.debugger import graph_to_dot, export_to_file, format_tree
from dydx.symbolic import ExprConst, ExprVar, ExprAdd, ExprMul, ExprPow, ExprSin


class TestDebugger(unittest.TestCase):
    def test_dot_structure(self):
        dot = graph_to_dot(ExprPow(ExprVar('x'), ExprConst(2)), name="power")
        self.assertTrue(dot.startswith("digraph power {"))
        self.assertTrue(dot.endswith("}"))
        self.assertIn('n0 [label="^"', dot)
        self.assertIn('n0 -> n1 [label="base"];', dot)
        self.assertIn('n0 -> n2 [label="exp"];', dot)

    def test_shared_subtree_drawn_once(self):
        x = ExprVar('x')
        dot = graph_to_dot(ExprMul(x, x))
        self.assertEqual(dot.count('[label="x"'), 1)
        self.assertIn('n0 -> n1 [label="L"];', dot)
        self.assertIn('n0 -> n1 [label="R"];', dot)

    def test_export_to_file(self):
        expr = ExprSin(ExprVar('x'))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sin.dot")
            self.assertEqual(export_to_file(expr, path), path)
            with open(path) as f:
                self.assertEqual(f.read(), graph_to_dot(expr))

    def test_format_tree(self):
        self.assertEqual(format_tree(ExprSin(ExprVar('x'))), "sin(\n  Var(x)\n)")
        self.assertEqual(
            format_tree(ExprAdd(ExprVar('x'), ExprConst(1.0))),
            "Add(\n  Var(x)\n  Const(1.0)\n)",
        )


if __name__ == "__main__":
    unittest.main()
