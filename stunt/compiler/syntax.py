#!/usr/bin/env python3
"""
Syntax tree nodes for the stunt language, plus a generic visitor.

Nodes compare by identity so they can be used as dictionary keys and
collected in reference lists.
"""
from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional, Union

from .tokens import Token


class Node:
    """Base class of every syntax tree node"""


# Expressions


@dataclass(eq=False)
class BinaryExpr(Node):
    left: "Expr"
    op: Token
    right: "Expr"


@dataclass(eq=False)
class UnaryExpr(Node):
    op: Token
    right: "Expr"


@dataclass(eq=False)
class GroupingExpr(Node):
    expr: "Expr"


@dataclass(eq=False)
class LiteralExpr(Node):
    value: Union[int, float, str, bool]


@dataclass(eq=False)
class VariableExpr(Node):
    name: Token


Expr = Union[BinaryExpr, UnaryExpr, GroupingExpr, LiteralExpr, VariableExpr]


# Declarations and statements


@dataclass(eq=False)
class VarDecl(Node):
    is_const: bool
    name: Token
    initializer: Expr


@dataclass(eq=False)
class Assignment(Node):
    name: Token
    value: Expr


@dataclass(eq=False)
class ExprStmt(Node):
    expr: Expr


@dataclass(eq=False)
class Block(Node):
    stmts: List["Stmt"] = field(default_factory=list)


@dataclass(eq=False)
class IfStmt(Node):
    condition: Expr
    then_branch: Block
    else_branch: Optional[Union[Block, "IfStmt"]] = None


@dataclass(eq=False)
class WhileStmt(Node):
    condition: Expr
    body: Block


Stmt = Union[VarDecl, Assignment, ExprStmt, Block, IfStmt, WhileStmt]


@dataclass(eq=False)
class Program(Node):
    stmts: List[Stmt] = field(default_factory=list)


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of node, in source order"""
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


class NodeVisitor:
    """
    Walk a syntax tree, calling ``visit_<ClassName>`` for each node.

    Nodes without a dedicated method fall back to ``generic_visit``, which
    visits the children. Subclasses that return values should implement a
    method for every node type they expect to see.
    """

    def visit(self, node: Node):
        method = getattr(self, "visit_" + type(node).__name__, self.generic_visit)
        return method(node)

    def generic_visit(self, node: Node):
        for child in iter_child_nodes(node):
            self.visit(child)
