"""Diagnostics shared by the scanner, the parser and the interpreter."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from lox.tokens import Token, TokenType


class LoxError(Exception):
    """Base class for every diagnostic. Carries a source line and a message."""
    def __init__(self, line: int, message: str):
        super().__init__(message)
        self.line = line
        self.message = message

    @property
    def where(self) -> str:
        return ''

    def __str__(self) -> str:
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ScanError(LoxError):
    """Input the scanner could not turn into a token."""


class ParseError(LoxError):
    """An unexpected token where one of ``expected`` was required."""
    def __init__(self, token: Optional[Token], message: str,
                 expected: Sequence[TokenType] = ()):
        super().__init__(token.line if token is not None else 0, message)
        self.token = token
        self.expected = tuple(expected)

    @property
    def where(self) -> str:
        if self.token is None or self.token.type is TokenType.EOF:
            return ' at end'
        return f" at '{self.token.lexeme}'"


class ErrorKind(Enum):
    UNDEFINED_VARIABLE = 'UndefinedVariable'
    TYPE_MISMATCH = 'TypeMismatch'
    DIVISION_BY_ZERO = 'DivisionByZero'


class LoxRuntimeError(LoxError):
    """Raised by the interpreter; halts the current run."""
    def __init__(self, kind: ErrorKind, token: Token, message: str):
        super().__init__(token.line, message)
        self.kind = kind
        self.token = token

    def __str__(self) -> str:
        return f"[line {self.line}] {self.kind.value}: {self.message}"


class ScanErrors(Exception):
    """Every scan error found in one source, in source order."""
    def __init__(self, errors: List[ScanError]):
        super().__init__('; '.join(str(e) for e in errors))
        self.errors = errors


class ParseErrors(Exception):
    """Every parse error collected by one parse call, in source order."""
    def __init__(self, errors: List[ParseError]):
        super().__init__('; '.join(str(e) for e in errors))
        self.errors = errors
