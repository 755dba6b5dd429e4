# Lox language package
# This package provides the scanner, parser and tree-walking interpreter for Lox.
from .environment import Environment
from .errors import LoxError, LoxRuntimeError, ParseError, ScanError
from .interpreter import Interpreter, interpret, parse_program, run

__all__ = [
    'Environment',
    'Interpreter',
    'LoxError',
    'LoxRuntimeError',
    'ParseError',
    'ScanError',
    'interpret',
    'parse_program',
    'run',
]
