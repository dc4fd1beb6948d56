#!/usr/bin/env python3
"""
Lexical scopes used by the analyzer.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .syntax import VarDecl, VariableExpr


@dataclass
class Variable:
    declaration: VarDecl
    references: List[VariableExpr] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def is_const(self) -> bool:
        return self.declaration.is_const


class Environment:
    """A stack of scopes; the last one is the innermost"""

    def __init__(self):
        self.scopes: List[Dict[str, Variable]] = [{}]

    def enter_scope(self) -> None:
        self.scopes.append({})

    def exit_scope(self) -> List[Variable]:
        """Close the innermost scope and return its unused variables"""
        if len(self.scopes) == 1:
            raise RuntimeError("cannot exit the global scope")
        unused = self.unused_variables()
        self.scopes.pop()
        return unused

    def add_variable(self, declaration: VarDecl) -> bool:
        """Declare in the innermost scope; False if the name is already there"""
        name = declaration.name.lexeme
        scope = self.scopes[-1]
        if name in scope:
            return False
        scope[name] = Variable(declaration=declaration)
        return True

    def get_variable(self, name: str) -> Optional[Variable]:
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def add_reference(self, name: str, reference: VariableExpr) -> bool:
        variable = self.get_variable(name)
        if variable is None:
            return False
        variable.references.append(reference)
        return True

    def unused_variables(self) -> List[Variable]:
        """Variables of the innermost scope that are never read, in declaration order"""
        return [v for v in self.scopes[-1].values() if not v.references]
