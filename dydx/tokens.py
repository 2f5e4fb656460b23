"""Token types for the dydx expression lexer."""
from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENTIFIER"  # x, y, theta, ...
    NUMBER = "NUMBER"     # 1343456.78

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    POWER = "^"

    LPAREN = "("
    RPAREN = ")"

    # Keywords
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SEC = "sec"
    LOG = "log"
    LN = "ln"
    ROOT = "root"
    E = "e"


KEYWORDS = {
    "sin": TokenType.SIN,
    "cos": TokenType.COS,
    "tan": TokenType.TAN,
    "sec": TokenType.SEC,
    "log": TokenType.LOG,
    "ln": TokenType.LN,
    "root": TokenType.ROOT,
    "e": TokenType.E,
}

# Keywords that are applied to a parenthesized argument
FUNCTIONS = frozenset([
    TokenType.SIN, TokenType.COS, TokenType.TAN, TokenType.SEC,
    TokenType.LOG, TokenType.LN, TokenType.ROOT,
])

SINGLE_CHAR_TOKENS = {
    "=": TokenType.ASSIGN,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "^": TokenType.POWER,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    position: int = 0


def lookup_ident(ident):
    """Keyword token type for `ident`, or IDENT for anything else (a variable)."""
    return KEYWORDS.get(ident, TokenType.IDENT)
