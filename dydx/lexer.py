"""
Lexer: turns expression source text into a stream of Tokens.

Unknown characters become ILLEGAL tokens instead of raising, so the parser
decides how to report them. End of input is signalled by an EOF token, which
is returned again on every further call.
"""
from .tokens import Token, TokenType, SINGLE_CHAR_TOKENS, lookup_ident


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0

    def next_token(self):
        self._skip_whitespace()
        if self.pos >= len(self.text):
            return Token(TokenType.EOF, "", self.pos)

        start = self.pos
        ch = self.text[start]

        if ch in SINGLE_CHAR_TOKENS:
            self.pos += 1
            return Token(SINGLE_CHAR_TOKENS[ch], ch, start)
        if ch.isalpha():
            ident = self._read_identifier()
            return Token(lookup_ident(ident), ident, start)
        if _is_digit(ch) or ch == '.':
            literal = self._read_number()
            # "1.2.3" and a lone "." are not numbers
            if literal.count('.') > 1 or literal == '.':
                return Token(TokenType.ILLEGAL, literal, start)
            return Token(TokenType.NUMBER, literal, start)

        self.pos += 1
        return Token(TokenType.ILLEGAL, ch, start)

    def tokenize(self):
        """All remaining tokens, including the trailing EOF."""
        tokens = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                return tokens

    def __iter__(self):
        tok = self.next_token()
        while tok.type != TokenType.EOF:
            yield tok
            tok = self.next_token()

    def _skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _read_identifier(self):
        start = self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isalnum() or self.text[self.pos] == '_'):
            self.pos += 1
        return self.text[start:self.pos]

    def _read_number(self):
        start = self.pos
        while self.pos < len(self.text) and (_is_digit(self.text[self.pos]) or self.text[self.pos] == '.'):
            self.pos += 1
        return self.text[start:self.pos]


def _is_digit(ch):
    return '0' <= ch <= '9'
