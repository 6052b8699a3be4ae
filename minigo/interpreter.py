from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from minigo.builtin.env_builtin import root_bindings
from minigo.errors import EntryPointNotFound, MinigoError
from minigo.evaluation.evaluator import CancelToken, Evaluator
from minigo.evaluation.statements import Return
from minigo.modules import std
from minigo.package_registry import PackageRegistry
from minigo.reader import ast
from minigo.reader.positions import FileSet
from minigo.types.scope import Scope

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Runs the entry point of a parsed source file.

    Holds the root scope, the package registry and the output sinks across
    runs; each run evaluates the entry point body in a frame of its own.
    """

    def __init__(
        self,
        fset: FileSet,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        registry: PackageRegistry | None = None,
    ):
        self.fset = fset
        self.evaluator: Evaluator = Evaluator(
            scope=Scope(),
            registry=registry if registry is not None else PackageRegistry(),
            stdout=stdout if stdout is not None else sys.stdout,
            stderr=stderr if stderr is not None else sys.stderr,
        )
        sink = lambda: self.evaluator.stdout
        self.evaluator.scope.root.update(root_bindings(sink))
        if registry is None:
            # a caller-supplied registry arrives already populated
            std.register(self.evaluator.registry, sink)

    @property
    def stdout(self) -> TextIO:
        return self.evaluator.stdout

    @property
    def stderr(self) -> TextIO:
        return self.evaluator.stderr

    @property
    def registry(self) -> PackageRegistry:
        return self.evaluator.registry

    def run_file(self, tree: ast.File, entry_point: str = "main", cancel: Optional[CancelToken] = None) -> None:
        for decl in tree.decls:
            if isinstance(decl, ast.FuncDecl) and decl.name.name == entry_point:
                logger.debug("running %s() from %s", entry_point, tree.filename or "<unnamed>")
                return self._run_func(tree, decl, cancel)
        raise EntryPointNotFound(f"entrypoint func {entry_point}() is not found")

    def _run_func(self, tree: ast.File, fn: ast.FuncDecl, cancel: Optional[CancelToken]) -> None:
        # TODO: bind entry point parameters once the driver accepts arguments
        ev = self.evaluator
        file = ev.registry.load_file(tree)
        ev.cancel = cancel
        try:
            with ev.executing(file), ev.scope.frame():
                for stmt in fn.body.stmts if fn.body else []:
                    try:
                        ev.eval_stmt(stmt)
                    except MinigoError as err:
                        line = self.fset.position(stmt.pos).line
                        err.line = line
                        err.with_context(f"line:{line} failed to eval stmt")
                        raise
        except Return:
            pass
        finally:
            ev.cancel = None
