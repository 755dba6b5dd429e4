import pytest

from lox.ast import (
    Assign, Binary, Block, Expression, For, Grouping, If, Literal, Logical,
    Print, Unary, Var, Variable, While,
)
from lox.errors import ParseErrors
from lox.interpreter import parse_program
from lox.tokens import TokenType as T


def parse_expr(source):
    [stmt] = parse_program(source + ';')
    assert isinstance(stmt, Expression)
    return stmt.expression


def parse_errors(source):
    with pytest.raises(ParseErrors) as info:
        parse_program(source)
    return info.value.errors


def test_multiplication_binds_tighter_than_addition():
    expr = parse_expr('1 + 2 * 3')
    assert isinstance(expr, Binary)
    assert expr.operator.type is T.PLUS
    assert expr.left == Literal(1.0)
    assert isinstance(expr.right, Binary)
    assert expr.right.operator.type is T.STAR


def test_binary_operators_are_left_associative():
    expr = parse_expr('1 - 2 - 3')
    assert isinstance(expr.left, Binary)
    assert expr.left.left == Literal(1.0)
    assert expr.right == Literal(3.0)


def test_grouping_node():
    expr = parse_expr('(1 + 2) * 3')
    assert expr.operator.type is T.STAR
    assert isinstance(expr.left, Grouping)


def test_unary_nests():
    expr = parse_expr('!-x')
    assert isinstance(expr, Unary)
    assert expr.operator.type is T.BANG
    assert isinstance(expr.right, Unary)
    assert isinstance(expr.right.right, Variable)


def test_and_binds_tighter_than_or():
    expr = parse_expr('a or b and c')
    assert isinstance(expr, Logical)
    assert expr.operator.type is T.OR
    assert isinstance(expr.right, Logical)
    assert expr.right.operator.type is T.AND


def test_comparison_below_equality():
    expr = parse_expr('1 < 2 == true')
    assert expr.operator.type is T.EQUAL_EQUAL
    assert expr.left.operator.type is T.LESS


def test_assignment_is_right_associative():
    expr = parse_expr('a = b = 1')
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == 'a'
    assert isinstance(expr.value, Assign)
    assert expr.value.name.lexeme == 'b'


def test_invalid_assignment_target():
    [error] = parse_errors('1 + 2 = 3;')
    assert error.message == 'Invalid assignment target.'
    assert error.token.type is T.EQUAL


def test_var_declaration():
    [with_init, without] = parse_program('var a = 1; var b;')
    assert isinstance(with_init, Var)
    assert with_init.name.lexeme == 'a'
    assert with_init.initializer == Literal(1.0)
    assert without.initializer is None


def test_if_else_binds_to_nearest_if():
    [stmt] = parse_program('if (a) if (b) print 1; else print 2;')
    assert isinstance(stmt, If)
    assert stmt.else_branch is None
    assert isinstance(stmt.then_branch, If)
    assert isinstance(stmt.then_branch.else_branch, Print)


def test_block_statement():
    [stmt] = parse_program('{ var a = 1; print a; }')
    assert isinstance(stmt, Block)
    assert [type(s) for s in stmt.statements] == [Var, Print]


def test_for_with_all_clauses():
    [stmt] = parse_program('for (var i = 0; i < 3; i = i + 1) print i;')
    assert isinstance(stmt, For)
    assert isinstance(stmt.initializer, Var)
    assert isinstance(stmt.condition, Binary)
    assert isinstance(stmt.increment, Expression)
    assert isinstance(stmt.increment.expression, Assign)
    assert isinstance(stmt.body, Print)


def test_for_with_empty_clauses_defaults_condition_to_true():
    [stmt] = parse_program('for (;;) print 1;')
    assert stmt.initializer is None
    assert stmt.condition == Literal(True)
    assert stmt.increment is None


def test_for_with_expression_initializer():
    [stmt] = parse_program('for (i = 0; i < 3;) print i;')
    assert isinstance(stmt.initializer, Expression)
    assert stmt.increment is None


def test_while_statement():
    [stmt] = parse_program('while (x) x = false;')
    assert isinstance(stmt, While)
    assert isinstance(stmt.body, Expression)


def test_comments_are_skipped():
    statements = parse_program('/* c */ print /* inline */ 1; // done')
    assert statements == [Print(Literal(1.0))]


def test_missing_semicolon_reports_expected_and_found():
    [error] = parse_errors('print 1')
    assert error.expected == (T.SEMICOLON,)
    assert error.token.type is T.EOF
    assert str(error) == "[line 1] Error at end: Expect ';' after value."


def test_unexpected_token_names_the_lexeme():
    [error] = parse_errors('print );')
    assert error.message == 'Expect expression.'
    assert T.NUMBER in error.expected
    assert str(error) == "[line 1] Error at ')': Expect expression."


def test_two_malformed_statements_give_two_errors():
    errors = parse_errors('var = 1; print ;')
    assert len(errors) == 2
    assert errors[0].message == 'Expect variable name.'
    assert errors[1].message == 'Expect expression.'


def test_recovery_resumes_at_statement_keyword():
    errors = parse_errors('var a = (1 + ;\nvar b = ;\nprint 3;')
    assert [e.line for e in errors] == [1, 2]


def test_recovery_inside_block():
    errors = parse_errors('{ var = 1; print 2; }\nprint ;')
    assert len(errors) == 2
    assert errors[1].line == 2


def test_unclosed_block():
    [error] = parse_errors('{ print 1;')
    assert error.message == "Expect '}' after block."


def test_reserved_keywords_are_not_expressions():
    [error] = parse_errors('class Foo;')
    assert error.token.type is T.CLASS
