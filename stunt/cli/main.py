#!/usr/bin/env python3
"""
Stunt CLI

    stunt <input> <output>          read input, greet; output is unused
    stuntc tokenize|check|build     compiler toolchain for the stunt language
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..compiler import CompileResult, compile_source
from ..core.config import get_config_manager
from ..core.errors import ArgumentCountError, StuntError
from ..core.source import SourceFile, read_source
from .config_commands import register_config_commands
from .render import (
    ast_tree,
    print_diagnostics,
    print_lines,
    source_listing,
    summary_line,
    token_table,
)

USAGE_MESSAGE = "Usage: stunt <input> <output>"
GREETING = "Hello, world!"

logger = logging.getLogger("stunt.cli")

# Global CLI app and console
app = typer.Typer(
    name="stuntc", help="🎪 stuntc - compile stunt to JavaScript", add_completion=False
)
console = Console()


# ---------------------------------------------------------------------------
#  stunt <input> <output>
# ---------------------------------------------------------------------------


def run(args: List[str]) -> str:
    """
    Validate the arguments, read the input file and return the greeting.

    The output path is accepted but never opened.
    """
    if len(args) < 2:
        raise ArgumentCountError(USAGE_MESSAGE)

    input_file, output_file = args[0], args[1]
    logger.debug(f"Input {input_file}, output {output_file} (unused)")

    read_source(input_file)
    return GREETING


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point for ``stunt``"""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        message = run(args)
    except StuntError as e:
        console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        sys.exit(e.exit_code)

    console.print(message, markup=False, highlight=False, soft_wrap=True)
    sys.exit(0)


# ---------------------------------------------------------------------------
#  stuntc
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool) -> None:
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, get_config_manager().get_log_level(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("stunt").setLevel(level)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """🎪 stuntc - compile stunt to JavaScript"""
    configure_logging(verbose)


def _load(input_file: Path) -> SourceFile:
    try:
        return read_source(input_file)
    except StuntError as e:
        console.print(f"❌ [red]{e}[/red]")
        raise typer.Exit(e.exit_code)


def _compile(source: SourceFile) -> CompileResult:
    config = get_config_manager()
    options = config.get_analyzer_options()
    return compile_source(
        source,
        warn_unused=options.warn_unused,
        warnings_as_errors=options.warnings_as_errors,
        indent=config.get_indent(),
    )


def _write_output(output_file: Path, text: str) -> None:
    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as e:
        console.print(f"❌ [red]Failed to write output file:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def tokenize(
    input_file: Path = typer.Argument(..., help="stunt source file"),
    output_file: Optional[Path] = typer.Argument(None, help="Where to write JavaScript"),
):
    """🔍 Show source, tokens and syntax tree, then compile"""
    source = _load(input_file)
    show = get_config_manager().get_display_flags()
    result = _compile(source)

    if show["source"]:
        console.print("[bold]Source code:[/bold]")
        print_lines(console, source_listing(source))

    if show["tokens"] and result.tokens:
        console.print()
        console.print(token_table(result.tokens))

    if show["ast"] and result.program is not None:
        console.print()
        console.print("[bold]AST:[/bold]")
        console.print(ast_tree(result.program))

    print_diagnostics(console, result.diagnostics, source)
    if not result.ok:
        raise typer.Exit(1)

    if output_file is None:
        console.print()
        console.print("No output file")
        return

    _write_output(output_file, result.output)
    console.print()
    console.print("[bold]Output code:[/bold]")
    print_lines(console, source_listing(SourceFile(str(output_file), result.output)))


@app.command()
def check(
    input_file: Path = typer.Argument(..., help="stunt source file"),
):
    """✅ Report errors and warnings without writing anything"""
    source = _load(input_file)
    result = _compile(source)

    print_diagnostics(console, result.diagnostics, source)
    summary = summary_line(len(result.errors), len(result.warnings))

    if not result.ok:
        console.print(f"\n❌ [red]{summary}[/red]")
        raise typer.Exit(1)

    if summary:
        console.print(f"\n⚠️ [yellow]{summary}[/yellow]")
    else:
        console.print("✅ [green]No problems found[/green]")


@app.command()
def build(
    input_file: Path = typer.Argument(..., help="stunt source file"),
    output_file: Path = typer.Argument(..., help="Where to write JavaScript"),
):
    """🔨 Compile a file to JavaScript"""
    source = _load(input_file)
    result = _compile(source)

    print_diagnostics(console, result.diagnostics, source)
    if not result.ok:
        raise typer.Exit(1)

    _write_output(output_file, result.output)
    console.print(f"✅ [green]Wrote[/green] {output_file}")


# Register config commands
register_config_commands(app)


if __name__ == "__main__":
    app()
