"""Token model for the Lox scanner and parser.

A token records the kind of lexeme that was scanned, the exact source text
it came from, an optional literal payload and the line it started on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TokenType(Enum):
    """Kinds of tokens. The value is the text used in diagnostics."""

    # single-character
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    DOT = '.'
    MINUS = '-'
    PLUS = '+'
    SEMICOLON = ';'
    SLASH = '/'
    STAR = '*'

    # one or two characters
    BANG = '!'
    BANG_EQUAL = '!='
    EQUAL = '='
    EQUAL_EQUAL = '=='
    GREATER = '>'
    GREATER_EQUAL = '>='
    LESS = '<'
    LESS_EQUAL = '<='

    # keywords
    AND = 'and'
    BREAK = 'break'
    CLASS = 'class'
    CONTINUE = 'continue'
    ELSE = 'else'
    FALSE = 'false'
    FOR = 'for'
    FUN = 'fun'
    IF = 'if'
    NIL = 'nil'
    OR = 'or'
    PRINT = 'print'
    RETURN = 'return'
    SUPER = 'super'
    THIS = 'this'
    TRUE = 'true'
    VAR = 'var'
    WHILE = 'while'

    # variable length
    IDENTIFIER = '[identifier]'
    STRING = '[string]'
    NUMBER = '[number]'
    COMMENT = '[comment]'

    EOF = 'EOF'
    INVALID = '[invalid]'

    def __str__(self) -> str:
        return self.value


KEYWORDS: Dict[str, TokenType] = {
    tt.value: tt for tt in (
        TokenType.AND, TokenType.BREAK, TokenType.CLASS, TokenType.CONTINUE,
        TokenType.ELSE, TokenType.FALSE, TokenType.FOR, TokenType.FUN,
        TokenType.IF, TokenType.NIL, TokenType.OR, TokenType.PRINT,
        TokenType.RETURN, TokenType.SUPER, TokenType.THIS, TokenType.TRUE,
        TokenType.VAR, TokenType.WHILE,
    )
}

# Literal payloads carried by the constant keywords.
KEYWORD_LITERALS: Dict[TokenType, Any] = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Any = None
    line: int = 1

    @classmethod
    def simple(cls, token_type: TokenType, line: int) -> 'Token':
        """Build a token whose lexeme is fixed by its type (punctuation, keywords, EOF)."""
        return cls(token_type, token_type.value if token_type is not TokenType.EOF else '',
                   KEYWORD_LITERALS.get(token_type), line)

    def describe(self) -> str:
        if self.type is TokenType.EOF:
            return 'end'
        return f"'{self.lexeme}'"

    def __str__(self) -> str:
        literal = '(none)' if self.literal is None else repr(self.literal)
        return f"<{self.type.name}@{self.line} ({self.lexeme}, {literal})>"
