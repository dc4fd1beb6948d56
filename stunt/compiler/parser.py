#!/usr/bin/env python3
"""
Recursive descent parser for the stunt language.

Grammar:
    program     → declaration* EOF
    declaration → ("let" | "const") IDENT "=" expression ";" | statement
    statement   → ifStmt | whileStmt | block | assignment | exprStmt
    ifStmt      → "if" expression block ("else" (ifStmt | block))?
    whileStmt   → "while" expression block
    block       → "{" declaration* "}"
    assignment  → IDENT "=" expression ";"
    exprStmt    → expression ";"
    expression  → or
    or          → and ("or" and)*
    and         → equality ("and" equality)*
    equality    → comparison (("!=" | "==") comparison)*
    comparison  → term ((">" | ">=" | "<" | "<=") term)*
    term        → factor (("-" | "+") factor)*
    factor      → unary (("/" | "*") unary)*
    unary       → ("!" | "-") unary | primary
    primary     → "true" | "false" | NUMBER | STRING | IDENT | "(" expression ")"
"""
import logging
from typing import Callable, List, Optional, Tuple

from .errors import Diagnostic, ErrorCode
from .syntax import (
    Assignment,
    BinaryExpr,
    Block,
    Expr,
    ExprStmt,
    GroupingExpr,
    IfStmt,
    LiteralExpr,
    Program,
    Stmt,
    UnaryExpr,
    VarDecl,
    VariableExpr,
    WhileStmt,
)
from .tokens import Token, TokenType

logger = logging.getLogger("stunt.compiler.parser")

# Tokens a statement can start with; error recovery stops in front of them
SYNC_TOKENS = {
    TokenType.LET,
    TokenType.CONST,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.LEFT_BRACE,
    TokenType.RIGHT_BRACE,
}


class ParseError(Exception):
    """Unwinds the parser to the enclosing declaration"""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("token stream must end with an EOF token")
        self.tokens = tokens
        self.errors: List[Diagnostic] = []
        self.current = 0

    def parse(self) -> Tuple[Program, List[Diagnostic]]:
        program = Program()
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                program.stmts.append(stmt)

        logger.debug(
            f"Parsed {len(program.stmts)} top-level statements "
            f"with {len(self.errors)} errors"
        )
        return program, self.errors

    # Declarations and statements

    def declaration(self) -> Optional[Stmt]:
        start = self.current
        try:
            if self.match(TokenType.LET, TokenType.CONST):
                return self.var_declaration()
            return self.statement()
        except ParseError as e:
            self.errors.append(e.diagnostic)
            self.synchronize(start)
            return None

    def var_declaration(self) -> VarDecl:
        is_const = self.previous().type is TokenType.CONST
        name = self.consume(
            TokenType.IDENTIFIER,
            ErrorCode.EXPECTED_IDENTIFIER,
            "Expected a variable name",
        )
        self.consume(
            TokenType.EQUAL,
            ErrorCode.EXPECTED_INITIALIZER,
            f'Variable "{name.lexeme}" must be initialized',
        )
        initializer = self.expression()
        self.consume_semicolon()
        return VarDecl(is_const=is_const, name=name, initializer=initializer)

    def statement(self) -> Stmt:
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.check(TokenType.LEFT_BRACE):
            return self.block()
        if self.check(TokenType.IDENTIFIER) and self.check_next(TokenType.EQUAL):
            return self.assignment()
        return self.expression_statement()

    def if_statement(self) -> IfStmt:
        condition = self.expression()
        then_branch = self.block()
        else_branch = None
        if self.match(TokenType.ELSE):
            if self.match(TokenType.IF):
                else_branch = self.if_statement()
            else:
                else_branch = self.block()
        return IfStmt(condition=condition, then_branch=then_branch, else_branch=else_branch)

    def while_statement(self) -> WhileStmt:
        condition = self.expression()
        return WhileStmt(condition=condition, body=self.block())

    def block(self) -> Block:
        opening = self.consume(
            TokenType.LEFT_BRACE, ErrorCode.EXPECTED_BLOCK, 'Expected "{" to start a block'
        )
        block = Block()
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                block.stmts.append(stmt)

        if not self.match(TokenType.RIGHT_BRACE):
            raise self.error_at(
                opening, ErrorCode.MISSING_CLOSING_BRACE, 'This "{" is never closed'
            )
        return block

    def assignment(self) -> Assignment:
        name = self.advance()
        self.advance()  # "="
        value = self.expression()
        self.consume_semicolon()
        return Assignment(name=name, value=value)

    def expression_statement(self) -> ExprStmt:
        expr = self.expression()
        self.consume_semicolon()
        return ExprStmt(expr=expr)

    # Expressions

    def expression(self) -> Expr:
        return self.logic_or()

    def _binary(self, operand: Callable[[], Expr], *types: TokenType) -> Expr:
        expr = operand()
        while self.match(*types):
            op = self.previous()
            expr = BinaryExpr(left=expr, op=op, right=operand())
        return expr

    def logic_or(self) -> Expr:
        return self._binary(self.logic_and, TokenType.OR)

    def logic_and(self) -> Expr:
        return self._binary(self.equality, TokenType.AND)

    def equality(self) -> Expr:
        return self._binary(self.comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def comparison(self) -> Expr:
        return self._binary(
            self.term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def term(self) -> Expr:
        return self._binary(self.factor, TokenType.MINUS, TokenType.PLUS)

    def factor(self) -> Expr:
        return self._binary(self.unary, TokenType.SLASH, TokenType.STAR)

    def unary(self) -> Expr:
        if self.match(TokenType.BANG, TokenType.MINUS):
            op = self.previous()
            return UnaryExpr(op=op, right=self.unary())
        return self.primary()

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return LiteralExpr(value=False)
        if self.match(TokenType.TRUE):
            return LiteralExpr(value=True)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return LiteralExpr(value=self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return VariableExpr(name=self.previous())

        if self.match(TokenType.LEFT_PAREN):
            opening = self.previous()
            expr = self.expression()
            if not self.match(TokenType.RIGHT_PAREN):
                raise self.error_at(
                    opening,
                    ErrorCode.MISSING_CLOSING_PARENTHESIS,
                    'This "(" is never closed',
                )
            return GroupingExpr(expr=expr)

        token = self.peek()
        if token.type is TokenType.EOF:
            message = "Expected an expression before the end of the file"
        else:
            message = f'Expected an expression, found "{token.lexeme}"'
        raise self.error_at(token, ErrorCode.EXPECTED_EXPRESSION, message)

    # Helpers

    def consume_semicolon(self) -> Token:
        if self.check(TokenType.SEMICOLON):
            return self.advance()
        # Point just after the previous token, where the ";" belongs
        prev = self.previous()
        raise ParseError(
            Diagnostic(
                code=ErrorCode.EXPECTED_SEMICOLON,
                message='Expected ";" after this',
                position=prev.position + len(prev.lexeme),
                length=1,
            )
        )

    def consume(self, type: TokenType, code: ErrorCode, message: str) -> Token:
        if self.check(type):
            return self.advance()
        raise self.error_at(self.peek(), code, message)

    def error_at(self, token: Token, code: ErrorCode, message: str) -> ParseError:
        return ParseError(
            Diagnostic(
                code=code,
                message=message,
                position=token.position,
                length=max(1, len(token.lexeme)),
            )
        )

    def synchronize(self, start: int) -> None:
        """
        Skip tokens until a likely statement boundary.

        Stops in front of a statement keyword or brace, or just past a ";".
        A declaration that failed without consuming anything skips its first
        token so the parser always moves forward.
        """
        if self.current == start:
            self.advance()
        while not self.is_at_end():
            if self.peek().type in SYNC_TOKENS:
                return
            if self.previous().type is TokenType.SEMICOLON:
                return
            self.advance()

    def match(self, *types: TokenType) -> bool:
        for type in types:
            if self.check(type):
                self.advance()
                return True
        return False

    def check(self, type: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type is type

    def check_next(self, type: TokenType) -> bool:
        if self.current + 1 >= len(self.tokens):
            return False
        return self.tokens[self.current + 1].type is type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse(tokens: List[Token]) -> Tuple[Program, List[Diagnostic]]:
    """Parse a token stream, returning (program, diagnostics)"""
    return Parser(tokens).parse()
