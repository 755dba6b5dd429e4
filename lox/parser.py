"""Recursive-descent parser for the Lox language.

The parser consumes the scanner's token list and produces a list of
statement nodes (see :mod:`lox.ast`). Each grammar rule is one method;
binary operators of equal precedence are folded left-to-right in a loop.

When a declaration fails to parse, the error is recorded and the parser
skips ahead to the next statement boundary before carrying on, so that a
single call reports every independent syntax error. If any error was
recorded, :func:`parse` raises :class:`~lox.errors.ParseErrors`.

Grammar::

    program     := declaration* EOF
    declaration := varDecl | statement
    varDecl     := "var" IDENTIFIER ("=" expression)? ";"
    statement   := ifStmt | forStmt | whileStmt | printStmt | block | exprStmt
    ifStmt      := "if" "(" expression ")" statement ("else" statement)?
    forStmt     := "for" "(" (varDecl | exprStmt | ";") expression? ";" expression? ")" statement
    whileStmt   := "while" "(" expression ")" statement
    block       := "{" declaration* "}"
    printStmt   := "print" expression ";"
    exprStmt    := expression ";"
    expression  := assignment
    assignment  := IDENTIFIER "=" assignment | logic_or
    logic_or    := logic_and ("or" logic_and)*
    logic_and   := equality ("and" equality)*
    equality    := comparison (("==" | "!=") comparison)*
    comparison  := addition (("<" | "<=" | ">" | ">=") addition)*
    addition    := multiplication (("+" | "-") multiplication)*
    multiplication := unary (("*" | "/") unary)*
    unary       := ("!" | "-") unary | primary
    primary     := NUMBER | STRING | "true" | "false" | "nil" | IDENTIFIER | "(" expression ")"
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from .ast import (
    Expr, Stmt, Literal, Grouping, Unary, Binary, Logical, Variable, Assign,
    Expression, Print, Var, Block, If, While, For,
)
from .errors import ParseError, ParseErrors
from .tokens import Token, TokenType

T = TokenType

# Tokens that begin a new declaration; synchronization stops before them.
STATEMENT_STARTS = {T.CLASS, T.FUN, T.VAR, T.FOR, T.IF, T.WHILE, T.PRINT, T.RETURN}

PRIMARY_STARTS = (T.NUMBER, T.STRING, T.TRUE, T.FALSE, T.NIL, T.IDENTIFIER, T.LEFT_PAREN)


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens: List[Token] = [t for t in tokens if t.type is not T.COMMENT]
        if not self.tokens or self.tokens[-1].type is not T.EOF:
            line = self.tokens[-1].line if self.tokens else 1
            self.tokens.append(Token.simple(T.EOF, line))
        self.pos = 0
        self.errors: List[ParseError] = []

    # Token helpers
    def peek(self) -> Token:
        return self.tokens[self.pos]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def at_end(self) -> bool:
        return self.peek().type is T.EOF

    def advance(self) -> Token:
        if not self.at_end():
            self.pos += 1
        return self.previous()

    def check(self, token_type: TokenType) -> bool:
        return self.peek().type is token_type

    def match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self.check(token_type):
                self.advance()
                return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise ParseError(self.peek(), message, (token_type,))

    def synchronize(self):
        """Discard tokens up to the next statement boundary."""
        self.advance()
        while not self.at_end():
            if self.previous().type is T.SEMICOLON:
                return
            if self.peek().type in STATEMENT_STARTS:
                return
            self.advance()

    # Declarations and statements
    def parse_program(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        if self.errors:
            raise ParseErrors(self.errors)
        return statements

    def declaration(self) -> Optional[Stmt]:
        try:
            if self.match(T.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as e:
            self.errors.append(e)
            self.synchronize()
            return None

    def var_declaration(self) -> Var:
        name = self.consume(T.IDENTIFIER, 'Expect variable name.')
        initializer: Optional[Expr] = None
        if self.match(T.EQUAL):
            initializer = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    def statement(self) -> Stmt:
        if self.match(T.IF):
            return self.if_statement()
        if self.match(T.FOR):
            return self.for_statement()
        if self.match(T.WHILE):
            return self.while_statement()
        if self.match(T.PRINT):
            return self.print_statement()
        if self.match(T.LEFT_BRACE):
            return Block(self.block())
        return self.expression_statement()

    def if_statement(self) -> If:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(T.ELSE):
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def for_statement(self) -> For:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'for'.")
        initializer: Optional[Stmt]
        if self.match(T.SEMICOLON):
            initializer = None
        elif self.match(T.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition: Expr = Literal(True)
        if not self.check(T.SEMICOLON):
            condition = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after loop condition.")

        increment: Optional[Stmt] = None
        if not self.check(T.RIGHT_PAREN):
            increment = Expression(self.expression())
        self.consume(T.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()
        return For(initializer, condition, increment, body)

    def while_statement(self) -> While:
        self.consume(T.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(T.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self.statement())

    def print_statement(self) -> Print:
        value = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def block(self) -> List[Stmt]:
        statements: List[Stmt] = []
        while not self.check(T.RIGHT_BRACE) and not self.at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(T.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.consume(T.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # Expressions
    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()
        if self.match(T.EQUAL):
            equals = self.previous()
            value = self.assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # reported without unwinding: the parser is not confused
            self.errors.append(ParseError(equals, 'Invalid assignment target.', (T.IDENTIFIER,)))
        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(T.OR):
            operator = self.previous()
            expr = Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(T.AND):
            operator = self.previous()
            expr = Logical(expr, operator, self.equality())
        return expr

    def binary(self, operand: Callable[[], Expr], *operators: TokenType) -> Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.previous()
            expr = Binary(expr, operator, operand())
        return expr

    def equality(self) -> Expr:
        return self.binary(self.comparison, T.BANG_EQUAL, T.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self.binary(self.addition, T.GREATER, T.GREATER_EQUAL, T.LESS, T.LESS_EQUAL)

    def addition(self) -> Expr:
        return self.binary(self.multiplication, T.MINUS, T.PLUS)

    def multiplication(self) -> Expr:
        return self.binary(self.unary, T.SLASH, T.STAR)

    def unary(self) -> Expr:
        if self.match(T.BANG, T.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match(T.FALSE):
            return Literal(False)
        if self.match(T.TRUE):
            return Literal(True)
        if self.match(T.NIL):
            return Literal(None)
        if self.match(T.NUMBER, T.STRING):
            return Literal(self.previous().literal)
        if self.match(T.IDENTIFIER):
            return Variable(self.previous())
        if self.match(T.LEFT_PAREN):
            expr = self.expression()
            self.consume(T.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise ParseError(self.peek(), 'Expect expression.', PRIMARY_STARTS)


def parse(tokens: Sequence[Token]) -> List[Stmt]:
    """Parse a token list into statements, raising ParseErrors on bad syntax."""
    return Parser(tokens).parse_program()
