"""Scanner for the Lox language.

Turns source text into a list of :class:`~lox.tokens.Token` objects, one
lexeme at a time, always ending with an ``EOF`` token. Comments are kept as
``COMMENT`` tokens; the parser skips them.
"""

from __future__ import annotations

from typing import List

from lox.errors import ScanError, ScanErrors
from lox.tokens import KEYWORDS, KEYWORD_LITERALS, Token, TokenType

SINGLE_CHAR_TOKENS = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '-': TokenType.MINUS,
    '+': TokenType.PLUS,
    ';': TokenType.SEMICOLON,
    '*': TokenType.STAR,
}

# first char -> (token with '=' following, token without)
ONE_OR_TWO_CHAR_TOKENS = {
    '!': (TokenType.BANG_EQUAL, TokenType.BANG),
    '=': (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    '>': (TokenType.GREATER_EQUAL, TokenType.GREATER),
    '<': (TokenType.LESS_EQUAL, TokenType.LESS),
}


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token.simple(TokenType.EOF, self.line))
        if self.errors:
            raise ScanErrors(self.errors)
        return self.tokens

    # Character helpers
    def at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        if c == '\n':
            self.line += 1
        return c

    def peek(self, offset: int = 0) -> str:
        pos = self.current + offset
        if pos >= len(self.source):
            return '\0'
        return self.source[pos]

    def match(self, expected: str) -> bool:
        if self.peek() != expected:
            return False
        self.current += 1
        return True

    def add_token(self, token_type: TokenType, literal=None, line=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, lexeme, literal, self.line if line is None else line))

    def error(self, line: int, message: str):
        self.errors.append(ScanError(line, message))

    # Lexemes
    def scan_token(self):
        line = self.line
        c = self.advance()
        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
        elif c in ONE_OR_TWO_CHAR_TOKENS:
            with_equal, alone = ONE_OR_TWO_CHAR_TOKENS[c]
            self.add_token(with_equal if self.match('=') else alone)
        elif c == '/':
            if self.match('/'):
                self.line_comment()
            elif self.match('*'):
                self.block_comment(line)
            else:
                self.add_token(TokenType.SLASH)
        elif c == '"':
            self.string(line)
        elif is_digit(c):
            self.number()
        elif c.isalpha() or c == '_':
            self.identifier()
        elif c.isspace():
            pass
        else:
            self.error(line, f"Unexpected character {c!r}.")

    def line_comment(self):
        while self.peek() != '\n' and not self.at_end():
            self.current += 1
        self.add_token(TokenType.COMMENT)

    def block_comment(self, line: int):
        depth = 1
        while depth > 0 and not self.at_end():
            if self.peek() == '/' and self.peek(1) == '*':
                self.current += 2
                depth += 1
            elif self.peek() == '*' and self.peek(1) == '/':
                self.current += 2
                depth -= 1
            else:
                self.advance()
        # an unclosed block comment runs to the end of the input
        self.add_token(TokenType.COMMENT, line=line)

    def string(self, line: int):
        chars: List[str] = []
        while self.peek() != '"':
            if self.at_end():
                self.error(line, 'Unterminated string.')
                return
            c = self.advance()
            if c == '\\' and self.peek() in ('"', '\\'):
                c = self.advance()
            chars.append(c)
        self.advance()  # closing quote
        self.add_token(TokenType.STRING, ''.join(chars), line=line)

    def number(self):
        while is_digit(self.peek()):
            self.current += 1
        if self.peek() == '.' and is_digit(self.peek(1)):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1
        self.add_token(TokenType.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while self.peek().isalnum() or self.peek() == '_':
            self.current += 1
        text = self.source[self.start:self.current]
        token_type = KEYWORDS.get(text, TokenType.IDENTIFIER)
        self.add_token(token_type, KEYWORD_LITERALS.get(token_type))


def scan(source: str) -> List[Token]:
    """Scan ``source`` into tokens.

    Raises :class:`~lox.errors.ScanErrors` listing every unterminated string
    and unexpected character once the whole source has been read.
    """
    return Scanner(source).scan_tokens()
