"""
Expression parser for dydx.
Turns text such as "x^2 * sin(x) - 3" into a SymbolicNode tree, using the
Lexer's token stream and a recursive-descent grammar:

    expr   := term (('+' | '-') term)*
    term   := unary (('*' | '/') unary)*
    unary  := '-' unary | power
    power  := atom ('^' unary)?
    atom   := NUMBER | IDENT | 'e' | '(' expr ')' | FUNC '(' expr ')'

Everything is lowered onto the closed node set: subtraction and negation
become products with -1, division a power of -1, tan/sec/root are rewritten
in terms of sin, cos and powers.
"""
import math

from .errors import ParseError
from .lexer import Lexer
from .tokens import TokenType, FUNCTIONS
from .symbolic import ExprConst, ExprVar, ExprPow, ExprLog, ExprSin, ExprCos


def _tan(u): return ExprSin(u) * ExprPow(ExprCos(u), ExprConst(-1.0))
def _sec(u): return ExprPow(ExprCos(u), ExprConst(-1.0))
def _root(u): return ExprPow(u, ExprConst(0.5))


_FUNCTION_BUILDERS = {
    TokenType.SIN: ExprSin,
    TokenType.COS: ExprCos,
    TokenType.LOG: ExprLog,
    TokenType.LN: ExprLog,
    TokenType.TAN: _tan,
    TokenType.SEC: _sec,
    TokenType.ROOT: _root,
}


class ExpressionParser:
    """
    Parses string-based math expressions into symbolic trees.
    Example: "x^2 - 2*x + 1" -> ((x^(2.000000) + (-1.000000 * (2.000000 * x))) + 1.000000)
    """
    def __init__(self):
        self.tokens = []
        self.index = 0

    def parse(self, text):
        """Main entry point: parse a single expression."""
        self._reset(text)
        node = self._nested(self._expr)
        self._expect_end()
        return node

    def parse_statement(self, text):
        """
        Parse either `expr` or `name = expr`.
        Returns (name, node); name is None for a bare expression.
        """
        self._reset(text)
        name = None
        if self._current.type == TokenType.IDENT and self._peek.type == TokenType.ASSIGN:
            name = self._current.literal
            self._advance()
            self._advance()
        node = self._nested(self._expr)
        self._expect_end()
        return name, node

    def _reset(self, text):
        self.tokens = Lexer(text).tokenize()
        self.index = 0

    def _nested(self, rule):
        # Nesting deeper than the interpreter stack
        try:
            return rule()
        except RecursionError:
            raise ParseError("expression nested too deeply", self._current.position) from None

    @property
    def _current(self):
        return self.tokens[self.index]

    @property
    def _peek(self):
        return self.tokens[min(self.index + 1, len(self.tokens) - 1)]

    def _advance(self):
        tok = self._current
        if tok.type != TokenType.EOF:
            self.index += 1
        return tok

    def _expect(self, token_type):
        tok = self._current
        if tok.type != token_type:
            raise self._unexpected(tok, f"Expected '{token_type.value}'")
        return self._advance()

    def _expect_end(self):
        tok = self._current
        if tok.type != TokenType.EOF:
            raise self._unexpected(tok, "Unexpected trailing input")

    def _unexpected(self, tok, context):
        if tok.type == TokenType.ILLEGAL:
            return ParseError(f"Illegal character '{tok.literal}'", tok.position)
        if tok.type == TokenType.EOF:
            return ParseError(f"{context}: unexpected end of input", tok.position)
        return ParseError(f"{context}: got '{tok.literal}'", tok.position)

    def _expr(self):
        node = self._term()
        while self._current.type in (TokenType.PLUS, TokenType.MINUS):
            op = self._advance()
            right = self._term()
            node = node + right if op.type == TokenType.PLUS else node - right
        return node

    def _term(self):
        node = self._unary()
        while self._current.type in (TokenType.ASTERISK, TokenType.SLASH):
            op = self._advance()
            right = self._unary()
            node = node * right if op.type == TokenType.ASTERISK else node / right
        return node

    def _unary(self):
        if self._current.type == TokenType.MINUS:
            self._advance()
            return -self._unary()
        return self._power()

    def _power(self):
        base = self._atom()
        if self._current.type == TokenType.POWER:
            self._advance()
            # Right associative: a^b^c == a^(b^c)
            return ExprPow(base, self._unary())
        return base

    def _atom(self):
        tok = self._current

        # 1. Constants
        if tok.type == TokenType.NUMBER:
            self._advance()
            return ExprConst(float(tok.literal))
        if tok.type == TokenType.E:
            self._advance()
            return ExprConst(math.e)

        # 2. Variables
        if tok.type == TokenType.IDENT:
            self._advance()
            return ExprVar(tok.literal)

        # 3. Parenthesized sub-expressions
        if tok.type == TokenType.LPAREN:
            self._advance()
            node = self._expr()
            self._expect(TokenType.RPAREN)
            return node

        # 4. Functions (sin(x), log(x), ...)
        if tok.type in FUNCTIONS:
            self._advance()
            self._expect(TokenType.LPAREN)
            arg = self._expr()
            self._expect(TokenType.RPAREN)
            return _FUNCTION_BUILDERS[tok.type](arg)

        raise self._unexpected(tok, "Expected a number, variable, function or '('")


def parse(text):
    """Parse `text` into a symbolic tree."""
    return ExpressionParser().parse(text)
