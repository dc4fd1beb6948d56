#!/usr/bin/env python3
"""
Scanner: turn stunt source text into a flat list of tokens.

Scanning never stops at the first problem. An invalid character is
reported and the rest of its line is skipped, so one run reports every
line that has a lexical error.
"""
import logging
import re
from typing import List, Optional, Tuple, Union

from .errors import Diagnostic, ErrorCode
from .tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger("stunt.compiler.scanner")

# NOTE: order matters, the prefixed forms must be tried before plain decimals
NUMBER_PATTERN = re.compile(
    "|".join(
        [
            r"0b[01](?:[01_]*[01])?",
            r"0o[0-7](?:[0-7_]*[0-7])?",
            r"0x[0-9a-fA-F](?:[0-9a-fA-F_]*[0-9a-fA-F])?",
            r"[0-9](?:[0-9_]*[0-9])?(?:\.[0-9](?:[0-9_]*[0-9])?)?(?:[eE][-+]?[0-9](?:[0-9_]*[0-9])?)?",
        ]
    )
)

SINGLE_CHAR_TOKENS = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (token if followed by "=", token otherwise)
EQUAL_SUFFIX_TOKENS = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

ESCAPES = {"n": "\n", "t": "\t", '"': '"', "\\": "\\"}

WHITESPACE = " \t\r\n"


def parse_number(lexeme: str) -> Union[int, float]:
    """Convert a matched number lexeme into its Python value"""
    digits = lexeme.replace("_", "")
    prefix = digits[:2].lower()
    if prefix == "0b":
        return int(digits[2:], 2)
    if prefix == "0o":
        return int(digits[2:], 8)
    if prefix == "0x":
        return int(digits[2:], 16)
    if "." in digits or "e" in digits or "E" in digits:
        return float(digits)
    return int(digits)


class Scanner:
    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[Diagnostic] = []
        self.start = 0
        self.current = 0

    def scan_tokens(self) -> Tuple[List[Token], List[Diagnostic]]:
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.start = self.current
        self.add_token(TokenType.EOF)

        logger.debug(
            f"Scanned {len(self.tokens)} tokens with {len(self.errors)} errors"
        )
        return self.tokens, self.errors

    def scan_token(self) -> None:
        c = self.advance()

        if c in SINGLE_CHAR_TOKENS:
            self.add_token(SINGLE_CHAR_TOKENS[c])
        elif c in EQUAL_SUFFIX_TOKENS:
            with_equal, alone = EQUAL_SUFFIX_TOKENS[c]
            self.add_token(with_equal if self.match("=") else alone)
        elif c == "/":
            if self.match("/"):
                # A comment goes until the end of the line
                while self.peek() != "\n" and not self.is_at_end():
                    self.advance()
            else:
                self.add_token(TokenType.SLASH)
        elif c in WHITESPACE:
            pass
        elif c == '"':
            self.scan_string()
        elif c.isdigit() and c.isascii():
            self.scan_number()
        elif c.isascii() and (c.isalpha() or c == "_"):
            self.scan_identifier()
        else:
            self.add_error_and_recover(
                ErrorCode.UNEXPECTED_CHARACTER, f'"{c}" is not a valid character'
            )

    def scan_number(self) -> None:
        match = NUMBER_PATTERN.match(self.source, self.start)
        if not match:
            self.add_error_and_recover(
                ErrorCode.UNEXPECTED_CHARACTER, "The format of the number is invalid"
            )
            return

        self.current = match.end()
        self.add_token(TokenType.NUMBER, parse_number(match.group()))

    def scan_string(self) -> None:
        chars = []
        while not self.is_at_end() and self.peek() != '"':
            c = self.advance()
            if c == "\\" and not self.is_at_end():
                escaped = self.advance()
                chars.append(ESCAPES.get(escaped, "\\" + escaped))
            else:
                chars.append(c)

        if self.is_at_end():
            self.errors.append(
                Diagnostic(
                    code=ErrorCode.UNTERMINATED_STRING,
                    message="String is missing its closing quote",
                    position=self.start,
                    length=1,
                )
            )
            return

        self.advance()  # closing quote
        self.add_token(TokenType.STRING, "".join(chars))

    def scan_identifier(self) -> None:
        while self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_"):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    # Helpers

    def add_token(
        self, type: TokenType, literal: Optional[Union[int, float, str]] = None
    ) -> None:
        self.tokens.append(
            Token(
                type=type,
                lexeme=self.source[self.start:self.current],
                literal=literal,
                position=self.start,
            )
        )

    def add_error_and_recover(self, code: ErrorCode, message: str) -> None:
        self.errors.append(
            Diagnostic(
                code=code,
                message=message,
                position=self.start,
                length=self.current - self.start,
            )
        )
        while not self.is_at_end() and self.peek() != "\n":
            self.advance()

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def advance(self) -> str:
        c = self.source[self.current]
        self.current += 1
        return c

    def match(self, expected: str) -> bool:
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return ""
        return self.source[self.current]


def scan_tokens(source: str) -> Tuple[List[Token], List[Diagnostic]]:
    """Scan the whole source, returning (tokens, diagnostics)"""
    return Scanner(source).scan_tokens()
