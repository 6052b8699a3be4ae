"""Syntax tree for the Go subset read by minigo.

Node classes mirror the shapes the evaluator dispatches on. Every node keeps
``pos``, the absolute source offset of its first token, which a FileSet turns
back into a filename/line/column.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class LitKind(Enum):
    INT = "INT"
    FLOAT = "FLOAT"
    IMAG = "IMAG"
    CHAR = "CHAR"
    STRING = "STRING"

    def __str__(self) -> str:
        return self.value


@dataclass
class Node:
    pos: int

    @property
    def kind_name(self) -> str:
        return type(self).__name__


# -------------------------------
# Expressions
# -------------------------------
@dataclass
class Ident(Node):
    name: str


@dataclass
class BasicLit(Node):
    kind: LitKind
    value: str  # exact lexical text, quotes included for strings


@dataclass
class ParenExpr(Node):
    x: Expr


@dataclass
class SelectorExpr(Node):
    x: Expr
    sel: Ident


@dataclass
class CallExpr(Node):
    fun: Expr
    args: list[Expr] = field(default_factory=list)


@dataclass
class UnaryExpr(Node):
    op: str
    x: Expr


@dataclass
class BinaryExpr(Node):
    x: Expr
    op: str
    y: Expr


Expr = Union[Ident, BasicLit, ParenExpr, SelectorExpr, CallExpr, UnaryExpr, BinaryExpr]


# -------------------------------
# Statements
# -------------------------------
@dataclass
class ExprStmt(Node):
    x: Expr


@dataclass
class BlockStmt(Node):
    stmts: list[Stmt] = field(default_factory=list)


@dataclass
class AssignStmt(Node):
    lhs: list[Expr]
    tok: str  # ":=", "=", "+=", ...
    rhs: list[Expr]


@dataclass
class IncDecStmt(Node):
    x: Expr
    tok: str


@dataclass
class ReturnStmt(Node):
    results: list[Expr] = field(default_factory=list)


@dataclass
class DeclStmt(Node):
    names: list[Ident]
    type: Optional[Expr]
    values: list[Expr] = field(default_factory=list)


@dataclass
class IfStmt(Node):
    init: Optional[Stmt]
    cond: Expr
    body: BlockStmt
    orelse: Optional[Stmt] = None


@dataclass
class ForStmt(Node):
    init: Optional[Stmt]
    cond: Optional[Expr]
    post: Optional[Stmt]
    body: BlockStmt


@dataclass
class EmptyStmt(Node):
    pass


Stmt = Union[ExprStmt, BlockStmt, AssignStmt, IncDecStmt, ReturnStmt, DeclStmt, IfStmt, ForStmt, EmptyStmt]


# -------------------------------
# Declarations
# -------------------------------
@dataclass
class Field(Node):
    names: list[Ident]
    type: Expr


@dataclass
class FuncDecl(Node):
    name: Ident
    params: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)
    body: Optional[BlockStmt] = None


@dataclass
class ImportSpec(Node):
    name: Optional[Ident]
    path: BasicLit

    @property
    def import_path(self) -> str:
        return self.path.value[1:-1]


@dataclass
class File(Node):
    filename: str
    package: Ident
    imports: list[ImportSpec] = field(default_factory=list)
    decls: list[FuncDecl] = field(default_factory=list)
