#!/usr/bin/env python3
"""
Semantic analysis: name resolution, const checks and unused variables.
"""
import logging
from typing import List

from .environment import Environment, Variable
from .errors import Diagnostic, ErrorCode, Severity
from .syntax import (
    Assignment,
    Block,
    NodeVisitor,
    Program,
    VarDecl,
    VariableExpr,
)
from .tokens import Token

logger = logging.getLogger("stunt.compiler.analyzer")


class Analyzer(NodeVisitor):
    def __init__(self, warn_unused: bool = True):
        self.env = Environment()
        self.errors: List[Diagnostic] = []
        self.warn_unused = warn_unused

    def analyze(self, program: Program) -> List[Diagnostic]:
        self.visit(program)
        self.report_unused(self.env.unused_variables())

        logger.debug(f"Analysis found {len(self.errors)} problems")
        return self.errors

    def visit_Block(self, block: Block) -> None:
        self.env.enter_scope()
        for stmt in block.stmts:
            self.visit(stmt)
        self.report_unused(self.env.exit_scope())

    def visit_VarDecl(self, decl: VarDecl) -> None:
        # The initializer cannot see the variable it initializes
        self.visit(decl.initializer)
        if not self.env.add_variable(decl):
            self.add_error(
                decl.name,
                ErrorCode.MULTIPLE_DECLARATIONS,
                f'Variable "{decl.name.lexeme}" is already declared',
            )

    def visit_Assignment(self, assignment: Assignment) -> None:
        name = assignment.name
        variable = self.env.get_variable(name.lexeme)
        if variable is None:
            self.add_error(
                name,
                ErrorCode.UNDEFINED_VARIABLE,
                f'Variable "{name.lexeme}" is not defined',
            )
        elif variable.is_const:
            self.add_error(
                name,
                ErrorCode.CONSTANT_ASSIGNMENT,
                f'Cannot assign to "{name.lexeme}" because it is a constant',
            )
        self.visit(assignment.value)

    def visit_VariableExpr(self, expr: VariableExpr) -> None:
        if not self.env.add_reference(expr.name.lexeme, expr):
            self.add_error(
                expr.name,
                ErrorCode.UNDEFINED_VARIABLE,
                f'Variable "{expr.name.lexeme}" is not defined',
            )

    def report_unused(self, variables: List[Variable]) -> None:
        if not self.warn_unused:
            return
        for variable in variables:
            self.add_error(
                variable.declaration.name,
                ErrorCode.UNUSED_VARIABLE,
                f'Variable "{variable.name}" is unused',
                severity=Severity.WARNING,
            )

    def add_error(
        self,
        token: Token,
        code: ErrorCode,
        message: str,
        severity: Severity = Severity.ERROR,
    ) -> None:
        self.errors.append(
            Diagnostic(
                code=code,
                message=message,
                position=token.position,
                length=len(token.lexeme),
                severity=severity,
            )
        )


def analyze(program: Program, warn_unused: bool = True) -> List[Diagnostic]:
    """Return the errors and warnings found in program"""
    return Analyzer(warn_unused=warn_unused).analyze(program)
