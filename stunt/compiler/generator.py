#!/usr/bin/env python3
"""
JavaScript code generation from a checked stunt program.
"""
import json
import math
from decimal import Decimal
from typing import List

from .syntax import (
    Assignment,
    BinaryExpr,
    Block,
    ExprStmt,
    GroupingExpr,
    IfStmt,
    LiteralExpr,
    Node,
    NodeVisitor,
    Program,
    UnaryExpr,
    VarDecl,
    VariableExpr,
    WhileStmt,
)
from .tokens import TokenType

BINARY_OPERATORS = {
    TokenType.BANG_EQUAL: "!==",
    TokenType.EQUAL_EQUAL: "===",
    TokenType.GREATER: ">",
    TokenType.GREATER_EQUAL: ">=",
    TokenType.LESS: "<",
    TokenType.LESS_EQUAL: "<=",
    TokenType.MINUS: "-",
    TokenType.PLUS: "+",
    TokenType.SLASH: "/",
    TokenType.STAR: "*",
    TokenType.AND: "&&",
    TokenType.OR: "||",
}

UNARY_OPERATORS = {
    TokenType.BANG: "!",
    TokenType.MINUS: "-",
}


def format_number(value) -> str:
    """Render a number the way JavaScript's Number#toString would for common values"""
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        text = repr(value)
        if "e" not in text:
            return text
        mantissa, exponent = text.split("e")
        if int(exponent) >= -6:
            # JavaScript keeps fixed notation down to 1e-6
            return format(Decimal(text), "f")
        return f"{mantissa}e{int(exponent):+d}"
    return str(value)


class Generator(NodeVisitor):
    """Statements are emitted line by line; expressions are returned as strings"""

    def __init__(self, indent: int = 2):
        self.indent_unit = " " * indent
        self.depth = 0
        self.lines: List[str] = []

    def generate(self, program: Program) -> str:
        self.visit(program)
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def emit(self, line: str) -> None:
        self.lines.append(self.indent_unit * self.depth + line)

    def generic_visit(self, node: Node):
        raise TypeError(f"cannot generate code for {type(node).__name__}")

    # Statements

    def visit_Program(self, program: Program) -> None:
        for stmt in program.stmts:
            self.visit(stmt)

    def visit_VarDecl(self, decl: VarDecl) -> None:
        keyword = "const" if decl.is_const else "let"
        self.emit(f"{keyword} {decl.name.lexeme} = {self.visit(decl.initializer)};")

    def visit_Assignment(self, assignment: Assignment) -> None:
        self.emit(f"{assignment.name.lexeme} = {self.visit(assignment.value)};")

    def visit_ExprStmt(self, stmt: ExprStmt) -> None:
        self.emit(f"{self.visit(stmt.expr)};")

    def visit_Block(self, block: Block) -> None:
        self.emit("{")
        self.emit_body(block)
        self.emit("}")

    def emit_body(self, block: Block) -> None:
        self.depth += 1
        for stmt in block.stmts:
            self.visit(stmt)
        self.depth -= 1

    def visit_IfStmt(self, stmt: IfStmt, prefix: str = "") -> None:
        self.emit(f"{prefix}if ({self.visit(stmt.condition)}) {{")
        self.emit_body(stmt.then_branch)

        else_branch = stmt.else_branch
        if isinstance(else_branch, IfStmt):
            # "} else if (...) {" continues on the closing brace line
            self.visit_IfStmt(else_branch, prefix="} else ")
            return
        if isinstance(else_branch, Block):
            self.emit("} else {")
            self.emit_body(else_branch)
        self.emit("}")

    def visit_WhileStmt(self, stmt: WhileStmt) -> None:
        self.emit(f"while ({self.visit(stmt.condition)}) {{")
        self.emit_body(stmt.body)
        self.emit("}")

    # Expressions

    def visit_BinaryExpr(self, expr: BinaryExpr) -> str:
        op = BINARY_OPERATORS[expr.op.type]
        return f"{self.visit(expr.left)} {op} {self.visit(expr.right)}"

    def visit_UnaryExpr(self, expr: UnaryExpr) -> str:
        op = UNARY_OPERATORS[expr.op.type]
        right = self.visit(expr.right)
        if op == "-" and right.startswith("-"):
            # "--x" would be a decrement
            return f"{op} {right}"
        return f"{op}{right}"

    def visit_GroupingExpr(self, expr: GroupingExpr) -> str:
        return f"({self.visit(expr.expr)})"

    def visit_LiteralExpr(self, expr: LiteralExpr) -> str:
        value = expr.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        return format_number(value)

    def visit_VariableExpr(self, expr: VariableExpr) -> str:
        return expr.name.lexeme


def generate(program: Program, indent: int = 2) -> str:
    """Return JavaScript source for program"""
    return Generator(indent=indent).generate(program)
