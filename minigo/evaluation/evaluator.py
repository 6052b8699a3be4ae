"""Core evaluator for minigo.

Dispatches statements and expressions through the STATEMENTS and EXPRESSIONS
tables, owns the scope and the call history, and invokes script-defined
functions. Evaluation is synchronous and depth-first; one Evaluator runs one
call chain at a time.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Sequence, TextIO

from minigo import config
from minigo.errors import CallDepthExceeded, Cancelled, MinigoError, TypeMismatch, UnsupportedConstruct
from minigo.evaluation.expressions import EXPRESSIONS
from minigo.evaluation.statements import STATEMENTS, Return
from minigo.package_registry import File, PackageRegistry
from minigo.reader import ast
from minigo.types.function import ScriptFunction
from minigo.types.scope import Scope
from minigo.types.value import INVALID, Value


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


class Evaluator:
    def __init__(
        self,
        scope: Scope,
        registry: PackageRegistry,
        stdout: TextIO,
        stderr: TextIO,
        max_depth: int | None = None,
    ):
        self.scope = scope
        self.registry = registry
        self.stdout = stdout
        self.stderr = stderr
        self.history: list[File] = []
        self.cancel: Optional[CancelToken] = None
        self._functions: dict[tuple[str, str], ScriptFunction] = {}
        self.max_depth = max_depth if max_depth is not None else config.get_max_call_depth()
        self.depth = 0

    # ------------------------
    # Dispatch
    # ------------------------
    def eval_stmt(self, stmt: ast.Stmt) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise Cancelled("evaluation cancelled")
        handler = STATEMENTS.get(type(stmt))
        if handler is None:
            raise UnsupportedConstruct(f"unsupported stmt type: {stmt.kind_name}")
        handler(stmt, self)

    def eval_expr(self, expr: ast.Expr) -> Value:
        handler = EXPRESSIONS.get(type(expr))
        if handler is None:
            raise UnsupportedConstruct(f"unsupported expr type: {expr.kind_name}")
        return handler(expr, self)

    # ------------------------
    # Call history
    # ------------------------
    @contextmanager
    def executing(self, file: File) -> Iterator[File]:
        self.history.append(file)
        try:
            yield file
        finally:
            self.history.pop()

    @property
    def current_file(self) -> Optional[File]:
        return self.history[-1] if self.history else None

    # ------------------------
    # Script functions
    # ------------------------
    def script_function(self, name: str) -> Optional[ScriptFunction]:
        """Function `name` declared by the file currently executing, if any."""
        file = self.current_file
        if file is None or name not in file.functions:
            return None
        key = (file.filename, name)
        fn = self._functions.get(key)
        if fn is None:
            fn = self._functions[key] = ScriptFunction(file.functions[name], file, self)
        return fn

    def call_script(self, fn: ScriptFunction, args: Sequence[Value]) -> Value:
        names = fn.param_names
        if len(args) != len(names):
            raise TypeMismatch(f"{fn.name} expects {len(names)} argument(s), got {len(args)}")
        if fn.decl.body is None:
            raise UnsupportedConstruct(f"func {fn.name}() has no body")
        if self.depth >= self.max_depth:
            raise CallDepthExceeded(f"call to {fn.name}() exceeds the maximum call depth of {self.max_depth}")

        self.depth += 1
        try:
            with self.executing(fn.file), self.scope.isolated():
                for name, arg in zip(names, args):
                    self.scope.set(name, arg)
                try:
                    for stmt in fn.decl.body.stmts:
                        self.eval_stmt(stmt)
                except Return as ret:
                    return ret.value
                except MinigoError as err:
                    err.with_context(f"in {fn.name}()")
                    raise
        finally:
            self.depth -= 1
        return INVALID
