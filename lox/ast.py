"""Abstract Syntax Tree (AST) definitions for the Lox language.

The parser builds these nodes and the interpreter walks them. Nodes are
plain data: all behaviour lives in the interpreter, which dispatches on the
node type. Every node is owned by exactly one parent, so the tree never
shares subtrees or contains cycles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Union

from .tokens import Token


###############################################################################
# Expressions
###############################################################################

@dataclass
class Literal:
    value: Any  # None, bool, float or str


@dataclass
class Grouping:
    expression: 'Expr'


@dataclass
class Unary:
    operator: Token
    right: 'Expr'


@dataclass
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass
class Logical:
    """``and``/``or``; the right operand is only evaluated when needed."""
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass
class Variable:
    name: Token


@dataclass
class Assign:
    name: Token
    value: 'Expr'


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign]


###############################################################################
# Statements
###############################################################################

@dataclass
class Expression:
    expression: Expr


@dataclass
class Print:
    expression: Expr


@dataclass
class Var:
    name: Token
    initializer: Optional[Expr] = None


@dataclass
class Block:
    statements: List['Stmt']


@dataclass
class If:
    condition: Expr
    then_branch: 'Stmt'
    else_branch: Optional['Stmt'] = None


@dataclass
class While:
    condition: Expr
    body: 'Stmt'


@dataclass
class For:
    """C-style loop. Runs as ``{ initializer; while (condition) { body; increment; } }``."""
    initializer: Optional['Stmt']
    condition: Expr
    increment: Optional['Stmt']
    body: 'Stmt'


Stmt = Union[Expression, Print, Var, Block, If, While, For]
