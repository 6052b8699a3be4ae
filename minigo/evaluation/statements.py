"""Statement handlers.

STATEMENTS maps each supported statement node class to its handler. The
evaluator consults this table and raises UnsupportedConstruct for anything
missing from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from minigo.errors import MinigoError, UnsupportedConstruct
from minigo.reader import ast
from minigo.types.value import INVALID, Value

if TYPE_CHECKING:
    from minigo.evaluation.evaluator import Evaluator


class Return(Exception):
    """Unwinds a function body up to the call that invoked it."""

    def __init__(self, value: Value):
        super().__init__("return outside of a function call")
        self.value = value


def expr_stmt(stmt: ast.ExprStmt, ev: Evaluator) -> None:
    try:
        ev.eval_expr(stmt.x)
    except MinigoError as err:
        err.with_context("failed to eval expr")
        raise


def block_stmt(stmt: ast.BlockStmt, ev: Evaluator) -> None:
    with ev.scope.frame():
        for i, sub in enumerate(stmt.stmts):
            try:
                ev.eval_stmt(sub)
            except MinigoError as err:
                err.with_context(f"in block {i}")
                raise


def assign_stmt(stmt: ast.AssignStmt, ev: Evaluator) -> None:
    """<ident> := <expr> or <ident> = <expr>, bound in the current frame."""
    if len(stmt.lhs) > 1:
        raise UnsupportedConstruct("unsupported assign lhs " + " ".join(["<var>"] * len(stmt.lhs)))
    if len(stmt.rhs) > 1:
        raise UnsupportedConstruct("unsupported assign rhs " + " ".join(["<var>"] * len(stmt.rhs)))
    if stmt.tok not in (":=", "="):
        raise UnsupportedConstruct(f"unsupported assign token: {stmt.tok}")

    target = stmt.lhs[0]
    if not isinstance(target, ast.Ident):
        raise UnsupportedConstruct(f"unsupported assign lhs type: {target.kind_name}")
    try:
        value = ev.eval_expr(stmt.rhs[0])
    except MinigoError as err:
        err.with_context("failed to eval assign")
        raise
    if target.name != "_":
        ev.scope.set(target.name, value)


def return_stmt(stmt: ast.ReturnStmt, ev: Evaluator) -> None:
    if len(stmt.results) > 1:
        raise UnsupportedConstruct(f"unsupported return of {len(stmt.results)} values")
    value = INVALID
    if stmt.results:
        try:
            value = ev.eval_expr(stmt.results[0])
        except MinigoError as err:
            err.with_context("failed to eval return")
            raise
    raise Return(value)


STATEMENTS: dict[type, Callable[[ast.Node, Evaluator], None]] = {
    ast.ExprStmt: expr_stmt,
    ast.BlockStmt: block_stmt,
    ast.AssignStmt: assign_stmt,
    ast.ReturnStmt: return_stmt,
}
