#!/usr/bin/env python3
"""
Token definitions for the stunt language.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenType(Enum):
    # Single-character tokens
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    COMMA = "COMMA"
    DOT = "DOT"
    MINUS = "MINUS"
    PLUS = "PLUS"
    SEMICOLON = "SEMICOLON"
    SLASH = "SLASH"
    STAR = "STAR"
    # One or two character tokens
    BANG = "BANG"
    BANG_EQUAL = "BANG_EQUAL"
    EQUAL = "EQUAL"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"
    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    # Keywords
    AND = "AND"
    CONST = "CONST"
    ELSE = "ELSE"
    FALSE = "FALSE"
    FN = "FN"
    FOR = "FOR"
    IF = "IF"
    LET = "LET"
    OR = "OR"
    RETURN = "RETURN"
    TRUE = "TRUE"
    WHILE = "WHILE"
    EOF = "EOF"


KEYWORDS = {
    "and": TokenType.AND,
    "const": TokenType.CONST,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "let": TokenType.LET,
    "or": TokenType.OR,
    "return": TokenType.RETURN,
    "true": TokenType.TRUE,
    "while": TokenType.WHILE,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    literal: Optional[Union[int, float, str]]
    position: int

    def __str__(self) -> str:
        return f"{self.type.value} {self.lexeme!r} @{self.position}"
