"""
Front-end for the stunt language: scanner, parser, analyzer and a
JavaScript generator.
"""

from .pipeline import CompileResult, compile_source

__all__ = [
    "CompileResult",
    "compile_source",
]
