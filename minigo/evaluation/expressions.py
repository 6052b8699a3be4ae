"""Expression handlers.

EXPRESSIONS maps each supported expression node class to its handler;
BINARY_OPS does the same for operator tokens.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Callable

from minigo.errors import ConversionError, MinigoError, TypeMismatch, UnsupportedConstruct
from minigo.evaluation.apply import resolve_callee
from minigo.reader import ast
from minigo.types.value import (
    INT64_MAX, INT64_MIN, Kind, Value,
    bool_val, float_val, int_val, same_kind, string_val,
)

if TYPE_CHECKING:
    from minigo.evaluation.evaluator import Evaluator

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# -------------------------------
# Literals
# -------------------------------
def convert_int(text: str) -> Value:
    """Base-10 conversion of the literal text, limited to int64."""
    if not _INT_TEXT.fullmatch(text):
        raise ConversionError(f"failed to convert int: invalid syntax: {text!r}")
    n = int(text, 10)
    if not INT64_MIN <= n <= INT64_MAX:
        raise ConversionError(f"failed to convert int: value out of range: {text!r}")
    return int_val(n)


def convert_float(text: str) -> Value:
    if not _FLOAT_TEXT.fullmatch(text):
        raise ConversionError(f"failed to convert float: invalid syntax: {text!r}")
    x = float(text)
    if math.isinf(x):
        raise ConversionError(f"failed to convert float: value out of range: {text!r}")
    return float_val(x)


def basic_lit(expr: ast.BasicLit, ev: Evaluator) -> Value:
    if expr.kind is ast.LitKind.INT:
        return convert_int(expr.value)
    if expr.kind is ast.LitKind.FLOAT:
        return convert_float(expr.value)
    if expr.kind is ast.LitKind.STRING:
        return string_val(expr.value[1:-1])
    raise UnsupportedConstruct(f"unsupported basic lit kind: {expr.kind.value}, value={expr.value}")


# -------------------------------
# Names
# -------------------------------
def ident(expr: ast.Ident, ev: Evaluator) -> Value:
    return ev.scope.get(expr.name)


def paren_expr(expr: ast.ParenExpr, ev: Evaluator) -> Value:
    return ev.eval_expr(expr.x)


# -------------------------------
# Binary operators
# -------------------------------
def _add(kind: Kind, x: Value, y: Value) -> Value:
    if kind is Kind.INT:
        return int_val(x.data + y.data)
    if kind is Kind.FLOAT:
        return float_val(x.data + y.data)
    if kind is Kind.STRING:
        return string_val(x.data + y.data)
    raise TypeMismatch(f"unsupported types: {kind}, {kind}")


def _lor(kind: Kind, x: Value, y: Value) -> Value:
    if kind is not Kind.BOOL:
        raise TypeMismatch(f"unsupported types: {kind}, {kind}")
    return bool_val(x.data or y.data)


def _land(kind: Kind, x: Value, y: Value) -> Value:
    if kind is not Kind.BOOL:
        raise TypeMismatch(f"unsupported types: {kind}, {kind}")
    return bool_val(x.data and y.data)


BINARY_OPS: dict[str, Callable[[Kind, Value, Value], Value]] = {
    "+": _add,
    "||": _lor,
    "&&": _land,
}


def binary_expr(expr: ast.BinaryExpr, ev: Evaluator) -> Value:
    # Both operands are always evaluated, left first; there is no short-circuit.
    try:
        x = ev.eval_expr(expr.x)
    except MinigoError as err:
        err.with_context("failed to eval binary expr lhs")
        raise
    try:
        y = ev.eval_expr(expr.y)
    except MinigoError as err:
        err.with_context("failed to eval binary expr rhs")
        raise

    kind = same_kind(x, y)
    op = BINARY_OPS.get(expr.op)
    if op is None:
        raise UnsupportedConstruct(f"unsupported operator: {expr.op}")
    return op(kind, x, y)


# -------------------------------
# Calls
# -------------------------------
def call_expr(expr: ast.CallExpr, ev: Evaluator) -> Value:
    args: list[Value] = []
    for i, arg in enumerate(expr.args):
        try:
            args.append(ev.eval_expr(arg))
        except MinigoError as err:
            err.with_context(f"failed to eval argument[{i}]")
            raise
    fn = resolve_callee(ev, expr.fun)
    return fn.call(args)


EXPRESSIONS: dict[type, Callable[[ast.Node, Evaluator], Value]] = {
    ast.BasicLit: basic_lit,
    ast.Ident: ident,
    ast.ParenExpr: paren_expr,
    ast.BinaryExpr: binary_expr,
    ast.CallExpr: call_expr,
}
