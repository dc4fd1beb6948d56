#!/usr/bin/env python3
"""
Rich renderables for source listings, tokens, syntax trees and diagnostics.
"""
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..compiler.errors import Diagnostic, Severity, locate
from ..compiler.syntax import (
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
from ..compiler.tokens import Token
from ..core.source import SourceFile

SEVERITY_STYLES = {
    Severity.ERROR: ("Error", "red"),
    Severity.WARNING: ("Warning", "yellow"),
}


def source_listing(source: SourceFile) -> List[Text]:
    """Number every line of the source under a ``┌─ filename`` header"""
    lines = source.content.split("\n")
    pad = len(str(len(lines)))

    rendered = [
        Text(f"{'':>{pad}}┌─ {source.filename}", style="dim"),
        Text(f"{'':>{pad}}|", style="dim"),
    ]
    for number, line in enumerate(lines, start=1):
        text = Text(f"{number:>{pad}}| ", style="dim")
        text.append(line)
        rendered.append(text)
    return rendered


def token_table(tokens: List[Token]) -> Table:
    table = Table(title="Tokens", show_lines=False)
    table.add_column("Type", style="cyan")
    table.add_column("Lexeme")
    table.add_column("Position", justify="right")
    table.add_column("Literal", style="yellow")

    for token in tokens:
        literal = "null" if token.literal is None else repr(token.literal)
        table.add_row(token.type.value, token.lexeme, str(token.position), literal)
    return table


class TreeBuilder(NodeVisitor):
    """Mirror a syntax tree as a rich Tree"""

    def __init__(self):
        self.root = Tree(Text("program", style="cyan"))
        self.parent = self.root

    def build(self, program: Program) -> Tree:
        self.visit(program)
        return self.root

    def visit_Program(self, program: Program) -> None:
        for stmt in program.stmts:
            self.visit(stmt)

    def add(self, node: Node, *parts) -> None:
        """Add a labelled branch for node and visit its children under it"""
        label = Text(type(node).__name__, style="cyan")
        for part, style in parts:
            label.append(" ")
            label.append(part, style=style)

        branch = self.parent.add(label)
        outer, self.parent = self.parent, branch
        self.generic_visit(node)
        self.parent = outer

    def visit_VarDecl(self, decl: VarDecl) -> None:
        keyword = "CONST" if decl.is_const else "LET"
        self.add(decl, (keyword, None), (decl.name.lexeme, "magenta"))

    def visit_Assignment(self, assignment: Assignment) -> None:
        self.add(assignment, (assignment.name.lexeme, "magenta"))

    def visit_ExprStmt(self, stmt: ExprStmt) -> None:
        self.add(stmt)

    def visit_Block(self, block: Block) -> None:
        self.add(block)

    def visit_IfStmt(self, stmt: IfStmt) -> None:
        self.add(stmt)

    def visit_WhileStmt(self, stmt: WhileStmt) -> None:
        self.add(stmt)

    def visit_BinaryExpr(self, expr: BinaryExpr) -> None:
        self.add(expr, (expr.op.type.value, None))

    def visit_UnaryExpr(self, expr: UnaryExpr) -> None:
        self.add(expr, (expr.op.type.value, None))

    def visit_GroupingExpr(self, expr: GroupingExpr) -> None:
        self.add(expr)

    def visit_LiteralExpr(self, expr: LiteralExpr) -> None:
        self.add(expr, (repr(expr.value), "yellow"))

    def visit_VariableExpr(self, expr: VariableExpr) -> None:
        self.add(expr, (expr.name.lexeme, "magenta"))


def ast_tree(program: Program) -> Tree:
    return TreeBuilder().build(program)


def diagnostic_lines(diagnostic: Diagnostic, source: SourceFile) -> List[Text]:
    """
    Render one diagnostic as a headline, a location and the offending line
    with the problem span underlined, e.g.::

        Error: Unexpected character
         ┌─ prog.st:1:5
         |
        1| let @ = 1;
         |     ^ "@" is not a valid character
    """
    label, color = SEVERITY_STYLES[diagnostic.severity]
    location = locate(source.content, diagnostic.position)
    pad = len(str(location.line_number))
    gutter = " " * pad

    start = location.column - 1
    # The underline never runs past the end of the line
    end = max(start + 1, min(start + diagnostic.length, len(location.line)))

    highlighted = Text(f"{location.line_number}| ")
    highlighted.append(location.line[:start])
    highlighted.append(location.line[start:end], style=color)
    highlighted.append(location.line[end:])

    return [
        Text(f"{label}: {diagnostic.code.title}", style=f"bold {color}"),
        Text(
            f"{gutter}┌─ {source.filename}:{location.line_number}:{location.column}"
        ),
        Text(f"{gutter}|"),
        highlighted,
        Text(f"{gutter}| {' ' * start}{'^' * (end - start)} {diagnostic.message}", style=color),
    ]


def print_lines(console: Console, lines: List[Text]) -> None:
    for line in lines:
        console.print(line, soft_wrap=True)


def print_diagnostics(
    console: Console, diagnostics: List[Diagnostic], source: SourceFile
) -> None:
    for diagnostic in diagnostics:
        console.print()
        print_lines(console, diagnostic_lines(diagnostic, source))


def summary_line(errors: int, warnings: int) -> Optional[str]:
    """One-line outcome for `stuntc check`, None when there is nothing to report"""
    if not errors and not warnings:
        return None
    parts = []
    if errors:
        parts.append(f"{errors} error{'s' if errors != 1 else ''}")
    if warnings:
        parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
    return ", ".join(parts)
