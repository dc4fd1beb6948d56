#!/usr/bin/env python3
"""
Compiler diagnostics: error codes, severities and source locations.
"""
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class ErrorCode(Enum):
    """Diagnostic codes; the value is the headline shown to the user"""

    # Scanner
    UNEXPECTED_CHARACTER = "Unexpected character"
    UNTERMINATED_STRING = "Unterminated string"
    # Parser
    EXPECTED_EXPRESSION = "Expected expression"
    MISSING_CLOSING_PARENTHESIS = "Missing closing parenthesis"
    EXPECTED_SEMICOLON = "Expected semicolon"
    EXPECTED_IDENTIFIER = "Expected identifier"
    EXPECTED_INITIALIZER = "Expected initializer"
    EXPECTED_BLOCK = "Expected block"
    MISSING_CLOSING_BRACE = "Missing closing brace"
    # Analyzer
    MULTIPLE_DECLARATIONS = "Multiple declarations"
    UNDEFINED_VARIABLE = "Undefined variable"
    CONSTANT_ASSIGNMENT = "Assignment to constant"
    UNUSED_VARIABLE = "Unused variable"

    @property
    def title(self) -> str:
        return self.value


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    code: ErrorCode
    message: str
    position: int
    length: int = 1
    severity: Severity = Severity.ERROR

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


class Location(NamedTuple):
    line_number: int
    column: int
    line: str


def locate(source: str, position: int) -> Location:
    """
    Map a character offset to a 1-based line/column and the text of its line.

    Offsets past the end of the source point just after the last character.
    """
    position = max(0, min(position, len(source)))
    line_start = source.rfind("\n", 0, position) + 1
    line_end = source.find("\n", position)
    if line_end == -1:
        line_end = len(source)

    return Location(
        line_number=source.count("\n", 0, position) + 1,
        column=position - line_start + 1,
        line=source[line_start:line_end],
    )
