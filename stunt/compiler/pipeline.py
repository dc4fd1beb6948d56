#!/usr/bin/env python3
"""
Run the compiler stages in order: scan, parse, analyze, generate.

Each stage only runs if the previous ones reported no errors, so the
diagnostics of a failed compile all come from a single stage.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.source import SourceFile
from .analyzer import analyze
from .errors import Diagnostic, Severity
from .generator import generate
from .parser import parse
from .scanner import scan_tokens
from .syntax import Program
from .tokens import Token

logger = logging.getLogger("stunt.compiler.pipeline")


@dataclass
class CompileResult:
    source: SourceFile
    tokens: List[Token] = field(default_factory=list)
    program: Optional[Program] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    output: Optional[str] = None

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors


def compile_source(
    source: SourceFile,
    warn_unused: bool = True,
    warnings_as_errors: bool = False,
    indent: int = 2,
) -> CompileResult:
    """Compile a source file to JavaScript, collecting every diagnostic"""
    result = CompileResult(source=source)

    result.tokens, scan_errors = scan_tokens(source.content)
    result.diagnostics.extend(scan_errors)
    if scan_errors:
        logger.info(f"{source.filename}: stopping after scanning")
        return result

    result.program, parse_errors = parse(result.tokens)
    result.diagnostics.extend(parse_errors)
    if parse_errors:
        logger.info(f"{source.filename}: stopping after parsing")
        return result

    problems = analyze(result.program, warn_unused=warn_unused)
    if warnings_as_errors:
        for problem in problems:
            problem.severity = Severity.ERROR
    result.diagnostics.extend(problems)
    if not result.ok:
        logger.info(f"{source.filename}: stopping after analysis")
        return result

    result.output = generate(result.program, indent=indent)
    logger.info(
        f"{source.filename}: generated {len(result.output)} characters "
        f"with {len(result.warnings)} warnings"
    )
    return result
