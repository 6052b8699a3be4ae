"""Callee resolution for call expressions.

A bare identifier resolves through the local frames, then through the
functions declared by the file currently executing, then through the root
bindings such as println, which those functions may shadow. A selector
``alias.Name`` resolves ``alias`` through that file's import table, the
import path through the package registry, and ``Name`` among the package's
exported callables.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from minigo.errors import UndefinedReference, UnsupportedConstruct
from minigo.reader import ast
from minigo.types.function import Function
from minigo.types.value import Kind

if TYPE_CHECKING:
    from minigo.evaluation.evaluator import Evaluator


def resolve_callee(ev: Evaluator, fun: ast.Expr) -> Function:
    if isinstance(fun, ast.Ident):
        return resolve_name(ev, fun.name)
    if isinstance(fun, ast.SelectorExpr):
        if isinstance(fun.x, ast.Ident):
            return resolve_qualified(ev, fun.x.name, fun.sel.name)
        raise UnsupportedConstruct(f"unsupported function: <{fun.x.kind_name}>.{fun.sel.name}")
    raise UnsupportedConstruct(f"unsupported function: {fun.kind_name}")


def resolve_name(ev: Evaluator, name: str) -> Function:
    # locals, then the file's own functions, then the root bindings they shadow
    value = ev.scope.find(name, root=False)
    if value is None:
        fn = ev.script_function(name)
        if fn is not None:
            return fn
        value = ev.scope.root.get(name)
    if value is None:
        raise UndefinedReference(f"unsupported function: {name}")
    if value.kind is not Kind.FUNC:
        raise UnsupportedConstruct(f"unsupported function: {name}")
    return value.data


def resolve_qualified(ev: Evaluator, alias: str, name: str) -> Function:
    file = ev.current_file
    if file is None:
        raise UndefinedReference(f"undefined: {alias} (no file is executing)")

    path = file.imports.get(alias)
    if path is None:
        raise UndefinedReference(f"undefined: {alias} (not imported by {file.filename})")

    pkg = ev.registry.get(path)
    if pkg is None:
        raise UndefinedReference(f"package not found: {path!r}")

    fn = pkg.functions.get(name)
    if fn is None:
        raise UndefinedReference(f"undefined: {alias}.{name} (not exported by {path!r})")
    return fn
