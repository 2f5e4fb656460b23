import math
import unittest

from dydx.errors import ParseError
from dydx.expression import ExpressionParser, parse
from dydx.symbolic import (
    ExprConst, ExprVar, ExprAdd, ExprMul, ExprPow, ExprLog, ExprSin, ExprCos,
)

x = ExprVar('x')


class TestExpressionParser(unittest.TestCase):
    def test_atoms(self):
        self.assertEqual(parse("4.5"), ExprConst(4.5))
        self.assertEqual(parse("x"), x)
        self.assertEqual(parse("e"), ExprConst(math.e))
        self.assertEqual(parse("((x))"), x)

    def test_chains_lean_left(self):
        self.assertEqual(parse("1 + 2 + 3"), ExprAdd(ExprAdd(ExprConst(1), ExprConst(2)), ExprConst(3)))
        self.assertEqual(parse("x * x * x"), ExprMul(ExprMul(x, x), x))

    def test_power_is_right_associative(self):
        self.assertEqual(parse("2^3^2"), ExprPow(ExprConst(2), ExprPow(ExprConst(3), ExprConst(2))))
        self.assertEqual(parse("2^3^2").evaluate(), 512.0)

    def test_precedence(self):
        self.assertEqual(parse("2 + 3 * x").evaluate({'x': 2}), 8.0)
        self.assertEqual(parse("(2 + 3) * x").evaluate({'x': 2}), 10.0)
        self.assertEqual(parse("2 * x^2").evaluate({'x': 3}), 18.0)

    def test_negation(self):
        self.assertEqual(parse("-x^2"), ExprMul(ExprConst(-1), ExprPow(x, ExprConst(2))))
        self.assertEqual(parse("x^-1"), ExprPow(x, ExprConst(-1)))
        self.assertEqual(parse("--2"), ExprConst(2))

    def test_subtraction_and_division(self):
        y = ExprVar('y')
        self.assertEqual(parse("x - y"), ExprAdd(x, ExprMul(ExprConst(-1), y)))
        self.assertEqual(parse("x / y"), ExprMul(x, ExprPow(y, ExprConst(-1))))
        self.assertAlmostEqual(parse("x / 4 - 1").evaluate({'x': 10}), 1.5)

    def test_functions(self):
        self.assertEqual(parse("sin(x)"), ExprSin(x))
        self.assertEqual(parse("cos(x + 1)"), ExprCos(ExprAdd(x, ExprConst(1))))
        self.assertEqual(parse("log(x)"), ExprLog(x))
        self.assertEqual(parse("ln(x)"), ExprLog(x))
        self.assertAlmostEqual(parse("tan(x)").evaluate({'x': 0.7}), math.tan(0.7))
        self.assertAlmostEqual(parse("sec(x)").evaluate({'x': 0.7}), 1 / math.cos(0.7))
        self.assertAlmostEqual(parse("root(x)").evaluate({'x': 9}), 3.0)
        self.assertAlmostEqual(parse("e^x").evaluate({'x': 2}), math.exp(2))

    def test_parse_statement(self):
        parser = ExpressionParser()
        self.assertEqual(parser.parse_statement("y = 2*3"), ('y', ExprMul(ExprConst(2), ExprConst(3))))
        self.assertEqual(parser.parse_statement("x + 1"), (None, ExprAdd(x, ExprConst(1))))

    def test_parser_is_reusable(self):
        parser = ExpressionParser()
        self.assertEqual(parser.parse("x"), x)
        self.assertEqual(parser.parse("2"), ExprConst(2))

    def test_errors(self):
        cases = {
            "x +": "unexpected end of input",
            "(x": "Expected ')'",
            "x )": "Unexpected trailing input",
            "sin x": "Expected '('",
            "2x": "Unexpected trailing input",
            "x $ 1": "Illegal character '$'",
            "1.2.3": "Illegal character '1.2.3'",
            "* x": "Expected a number",
            "": "unexpected end of input",
        }
        for text, message in cases.items():
            with self.subTest(text=text):
                with self.assertRaises(ParseError) as cm:
                    parse(text)
                self.assertIn(message, str(cm.exception))

    def test_deep_nesting_is_a_parse_error(self):
        for text in ("(" * 1000 + "x" + ")" * 1000, "-" * 1500 + "x", "sin(" * 500 + "x" + ")" * 500):
            with self.subTest(text=text[:10]):
                with self.assertRaises(ParseError) as cm:
                    parse(text)
                self.assertIn("nested too deeply", str(cm.exception))
        self.assertEqual(parse("(" * 20 + "x" + ")" * 20), x)

    def test_error_position(self):
        with self.assertRaises(ParseError) as cm:
            parse("x $ 1")
        self.assertEqual(cm.exception.position, 2)

    def test_parse_then_differentiate(self):
        self.assertAlmostEqual(parse("x^x").diff().evaluate({'x': 6.8}), 6.8 ** 6.8 * (math.log(6.8) + 1), delta=1e-4)
        self.assertAlmostEqual(parse("log(x^3)").diff().evaluate({'x': 4.5}), 3 / 4.5)
        self.assertAlmostEqual(parse("tan(x)").diff().evaluate({'x': 0.3}), 1 / math.cos(0.3) ** 2)
        self.assertAlmostEqual(parse("x / (x + 2)").diff().evaluate({'x': 1}), 2 / 9)


if __name__ == "__main__":
    unittest.main()
