"""Tree-walking interpreter for the Lox language.

This module executes the statement lists produced by :mod:`lox.parser`
against an :class:`~lox.environment.Environment`, and provides the
:func:`run` entry point that takes source text all the way from scanning
to printed output. Runtime failures are raised as
:class:`~lox.errors.LoxRuntimeError`; :func:`run` turns every kind of
failure into a returned list of diagnostics instead.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, TextIO

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Expression, Print, Var, Block, If, While, For,
)
from .environment import Environment
from .errors import ErrorKind, LoxError, LoxRuntimeError, ParseErrors, ScanErrors
from .parser import parse
from .scanner import scan
from .tokens import Token, TokenType
from .types import is_truthy, to_string, type_name, values_equal


def parse_program(source: str) -> List[Stmt]:
    """Scan and parse source text. Raises ScanErrors or ParseErrors."""
    return parse(scan(source))


class Interpreter:
    """Executes Lox statements.

    The environment is owned by the caller and may be shared across many
    :meth:`interpret` calls (one per REPL line, for instance). ``out`` is
    where ``print`` writes; ``None`` means the current ``sys.stdout``.
    """
    def __init__(self, environment: Optional[Environment] = None, out: Optional[TextIO] = None,
                 debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.environment = environment if environment is not None else Environment()
        self.out = out
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, source: str) -> List[LoxError]:
        """Scan, parse and execute one unit of source.

        Returns an empty list on success. Otherwise returns every scan
        error, or every parse error, or the one runtime error that stopped
        execution. Nothing runs unless scanning and parsing both succeed.
        """
        try:
            statements = parse_program(source)
        except (ScanErrors, ParseErrors) as e:
            self.debug(f"rejected source: {len(e.errors)} error(s)")
            return list(e.errors)
        try:
            self.interpret(statements)
        except LoxRuntimeError as e:
            return [e]
        return []

    def interpret(self, statements: Sequence[Stmt]):
        if self.debug_level >= 1:
            self.debug(f"interpret {len(statements)} statement(s)")
        for stmt in statements:
            self.execute(stmt)

    # Statements
    def execute(self, stmt: Stmt):
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
        elif isinstance(stmt, Print):
            value = self.evaluate(stmt.expression)
            print(to_string(value), file=self.out)
        elif isinstance(stmt, Var):
            value = self.evaluate(stmt.initializer) if stmt.initializer is not None else None
            self.environment.define(stmt.name.lexeme, value)
            if self.debug_level >= 2:
                self.debug(f"define {stmt.name.lexeme}: {type_name(value)} = {to_string(value)}")
        elif isinstance(stmt, Block):
            self.execute_block(stmt.statements)
        elif isinstance(stmt, If):
            cond = self.evaluate(stmt.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                self.execute(stmt.else_branch)
        elif isinstance(stmt, While):
            self.execute_loop(stmt.condition, stmt.body, None)
        elif isinstance(stmt, For):
            # the initializer gets a scope of its own around the whole loop
            with self.environment.scope():
                if stmt.initializer is not None:
                    self.execute(stmt.initializer)
                self.execute_loop(stmt.condition, stmt.body, stmt.increment)
        else:
            raise NotImplementedError(f"execute: unexpected node type {type(stmt)}")

    def execute_block(self, statements: Sequence[Stmt]):
        with self.environment.scope():
            for stmt in statements:
                self.execute(stmt)

    def execute_loop(self, condition: Expr, body: Stmt, increment: Optional[Stmt]):
        while True:
            cond = self.evaluate(condition)
            if self.debug_level >= 3:
                self.debug(f"loop condition {to_string(cond)} -> {is_truthy(cond)}")
            if not is_truthy(cond):
                break
            self.execute(body)
            if increment is not None:
                self.execute(increment)

    # Expressions
    def evaluate(self, expr: Expr) -> Any:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Grouping):
            return self.evaluate(expr.expression)
        if isinstance(expr, Variable):
            return self.environment.get(expr.name)
        if isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            if not self.environment.assign(expr.name.lexeme, value):
                raise LoxRuntimeError(ErrorKind.UNDEFINED_VARIABLE, expr.name,
                                      f"Undefined variable '{expr.name.lexeme}'.")
            if self.debug_level >= 2:
                self.debug(f"assign {expr.name.lexeme} = {to_string(value)}")
            return value
        if isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            if expr.operator.type is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)
        if isinstance(expr, Unary):
            right = self.evaluate(expr.right)
            if expr.operator.type is TokenType.BANG:
                return not is_truthy(right)
            if expr.operator.type is TokenType.MINUS:
                if not isinstance(right, float):
                    raise LoxRuntimeError(ErrorKind.TYPE_MISMATCH, expr.operator,
                                          f"Operand must be a number, got {type_name(right)}.")
                return -right
            raise LoxRuntimeError(ErrorKind.TYPE_MISMATCH, expr.operator,
                                  f"Operator '{expr.operator.lexeme}' is not valid in a unary expression.")
        if isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.apply_binary_op(expr.operator, left, right)
        raise NotImplementedError(f"evaluate: unexpected node type {type(expr)}")

    def apply_binary_op(self, op: Token, a: Any, b: Any) -> Any:
        kind = op.type
        if kind is TokenType.EQUAL_EQUAL:
            return values_equal(a, b)
        if kind is TokenType.BANG_EQUAL:
            return not values_equal(a, b)
        if kind is TokenType.PLUS and (isinstance(a, str) or isinstance(b, str)):
            return to_string(a) + to_string(b)
        if not (isinstance(a, float) and isinstance(b, float)):
            raise LoxRuntimeError(ErrorKind.TYPE_MISMATCH, op,
                                  f"Operands of '{op.lexeme}' must be numbers, got {type_name(a)} and {type_name(b)}.")
        if kind is TokenType.PLUS:
            return a + b
        if kind is TokenType.MINUS:
            return a - b
        if kind is TokenType.STAR:
            return a * b
        if kind is TokenType.SLASH:
            if b == 0.0:
                raise LoxRuntimeError(ErrorKind.DIVISION_BY_ZERO, op, 'Division by zero.')
            return a / b
        if kind is TokenType.LESS:
            return a < b
        if kind is TokenType.LESS_EQUAL:
            return a <= b
        if kind is TokenType.GREATER:
            return a > b
        if kind is TokenType.GREATER_EQUAL:
            return a >= b
        raise LoxRuntimeError(ErrorKind.TYPE_MISMATCH, op,
                              f"Operator '{op.lexeme}' is not valid for a binary expression.")


def interpret(environment: Environment, statements: Sequence[Stmt], out: Optional[TextIO] = None):
    """Execute ``statements`` against ``environment``; raises LoxRuntimeError."""
    Interpreter(environment, out).interpret(statements)


def run(source: str, environment: Optional[Environment] = None,
        out: Optional[TextIO] = None) -> List[LoxError]:
    """Run one unit of source text and return its diagnostics (empty on success)."""
    return Interpreter(environment, out).run(source)
