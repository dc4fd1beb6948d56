import pytest

from stunt.compiler.errors import ErrorCode
from stunt.compiler.parser import parse
from stunt.compiler.scanner import scan_tokens
from stunt.compiler.syntax import (
    Assignment,
    BinaryExpr,
    Block,
    ExprStmt,
    GroupingExpr,
    IfStmt,
    LiteralExpr,
    UnaryExpr,
    VarDecl,
    VariableExpr,
    WhileStmt,
)
from stunt.compiler.tokens import Token, TokenType as T


def parse_source(source):
    tokens, scan_errors = scan_tokens(source)
    assert scan_errors == []
    return parse(tokens)


def parse_ok(source):
    program, errors = parse_source(source)
    assert errors == []
    return program


def parse_expr(source):
    program = parse_ok(source + ";")
    assert len(program.stmts) == 1
    assert isinstance(program.stmts[0], ExprStmt)
    return program.stmts[0].expr


def test_factor_binds_tighter_than_term():
    expr = parse_expr("1 + 2 * 3")

    assert isinstance(expr, BinaryExpr)
    assert expr.op.type is T.PLUS
    assert expr.left.value == 1
    assert isinstance(expr.right, BinaryExpr)
    assert expr.right.op.type is T.STAR


def test_binary_operators_are_left_associative():
    expr = parse_expr("1 - 2 - 3")

    assert expr.op.type is T.MINUS
    assert isinstance(expr.left, BinaryExpr)
    assert expr.left.left.value == 1
    assert expr.right.value == 3


def test_logical_operator_precedence():
    expr = parse_expr("a or b and c == d")

    assert expr.op.type is T.OR
    assert isinstance(expr.left, VariableExpr)
    assert expr.right.op.type is T.AND
    assert expr.right.right.op.type is T.EQUAL_EQUAL


def test_nested_unary():
    expr = parse_expr("- -1")

    assert isinstance(expr, UnaryExpr)
    assert isinstance(expr.right, UnaryExpr)
    assert expr.right.right.value == 1


def test_grouping_and_literals():
    expr = parse_expr('(true != "x")')

    assert isinstance(expr, GroupingExpr)
    assert expr.expr.left.value is True
    assert expr.expr.right.value == "x"


def test_declarations():
    program = parse_ok("let a = 1; const b = a;")

    first, second = program.stmts
    assert isinstance(first, VarDecl) and not first.is_const
    assert first.name.lexeme == "a"
    assert isinstance(second, VarDecl) and second.is_const
    assert isinstance(second.initializer, VariableExpr)


def test_assignment_is_not_equality():
    program = parse_ok("a = 1; a == 1;")

    assert isinstance(program.stmts[0], Assignment)
    assert program.stmts[0].name.lexeme == "a"
    assert isinstance(program.stmts[1], ExprStmt)


def test_if_else_if_else_chain():
    program = parse_ok("if a { 1; } else if b { 2; } else { 3; }")

    stmt = program.stmts[0]
    assert isinstance(stmt, IfStmt)
    assert isinstance(stmt.then_branch, Block)
    assert isinstance(stmt.else_branch, IfStmt)
    assert isinstance(stmt.else_branch.else_branch, Block)
    assert stmt.else_branch.else_branch.stmts[0].expr.value == 3


def test_while_and_nested_blocks():
    program = parse_ok("while x < 3 { { x = x + 1; } }")

    stmt = program.stmts[0]
    assert isinstance(stmt, WhileStmt)
    inner = stmt.body.stmts[0]
    assert isinstance(inner, Block)
    assert isinstance(inner.stmts[0], Assignment)


def test_empty_program():
    assert parse_ok("// nothing here\n").stmts == []


@pytest.mark.parametrize(
    "source, code, position",
    [
        ("1 +;", ErrorCode.EXPECTED_EXPRESSION, 3),
        ("let x = 1", ErrorCode.EXPECTED_SEMICOLON, 9),
        ("(1 + 2;", ErrorCode.MISSING_CLOSING_PARENTHESIS, 0),
        ("let = 1;", ErrorCode.EXPECTED_IDENTIFIER, 4),
        ("let x;", ErrorCode.EXPECTED_INITIALIZER, 5),
        ("if x 1;", ErrorCode.EXPECTED_BLOCK, 5),
        ("{ 1;", ErrorCode.MISSING_CLOSING_BRACE, 0),
        ("1 +", ErrorCode.EXPECTED_EXPRESSION, 3),
    ],
)
def test_syntax_errors(source, code, position):
    _, errors = parse_source(source)

    assert len(errors) == 1
    assert errors[0].code is code
    assert errors[0].position == position
    assert errors[0].is_error


def test_recovers_after_error():
    program, errors = parse_source("1 +;\nlet y = 2;\n2 *;\ny;")

    assert [e.code for e in errors] == [ErrorCode.EXPECTED_EXPRESSION] * 2
    assert [type(s) for s in program.stmts] == [VarDecl, ExprStmt]


def test_recovers_inside_block():
    program, errors = parse_source("{ let = 1; 2; }")

    assert len(errors) == 1
    block = program.stmts[0]
    assert [type(s) for s in block.stmts] == [ExprStmt]


def test_stray_closing_brace():
    program, errors = parse_source("} let a = 1;")

    assert [e.code for e in errors] == [ErrorCode.EXPECTED_EXPRESSION]
    assert len(program.stmts) == 1


def test_token_stream_must_end_with_eof():
    with pytest.raises(ValueError):
        parse([Token(T.NUMBER, "1", 1, 0)])


def test_missing_semicolon_before_closing_brace():
    program, errors = parse_source("{ let x = 1 }")

    assert [e.code for e in errors] == [ErrorCode.EXPECTED_SEMICOLON]
    assert len(program.stmts) == 1
    assert program.stmts[0].stmts == []


def test_missing_semicolon_keeps_following_declaration():
    program, errors = parse_source("1 let y = 2;")

    assert [e.code for e in errors] == [ErrorCode.EXPECTED_SEMICOLON]
    assert [type(s) for s in program.stmts] == [VarDecl]
    assert program.stmts[0].name.lexeme == "y"


def test_error_inside_nested_block_does_not_cascade():
    program, errors = parse_source("if a { { 1 + } b; }")

    assert [e.code for e in errors] == [ErrorCode.EXPECTED_EXPRESSION]
    outer = program.stmts[0].then_branch
    assert [type(s) for s in outer.stmts] == [Block, ExprStmt]
