"""Callables reachable from evaluated code.

Every callable shares one calling convention: an ordered list of Values in,
a single Value out (INVALID when nothing is produced), or a MinigoError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Sequence

from minigo.errors import TypeMismatch
from minigo.types.value import INVALID, Kind, Value, bool_val, float_val, int_val, string_val

if TYPE_CHECKING:
    from minigo.evaluation.evaluator import Evaluator
    from minigo.package_registry import File
    from minigo.reader.ast import FuncDecl


class Function(ABC):
    name: str

    @abstractmethod
    def call(self, args: Sequence[Value]) -> Value: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


_WRAPPERS: dict[Kind, Callable[[Any], Value]] = {
    Kind.BOOL: bool_val,
    Kind.INT: int_val,
    Kind.FLOAT: float_val,
    Kind.STRING: string_val,
}


class HostFunction(Function):
    """A Python function exposed to minigo code.

    ``params`` lists the kind of each positional argument; arguments are
    checked and unwrapped before ``fn`` is called, and the raw result is
    wrapped back using ``result`` (None for functions producing no value).
    A variadic host function receives the argument Values untouched.
    """

    __slots__ = ("name", "fn", "params", "result", "variadic")

    def __init__(
        self,
        name: str,
        fn: Callable[..., Any],
        params: Sequence[Kind] = (),
        result: Kind | None = None,
        variadic: bool = False,
    ):
        self.name = name
        self.fn = fn
        self.params = tuple(params)
        self.result = result
        self.variadic = variadic

    def call(self, args: Sequence[Value]) -> Value:
        if self.variadic:
            raw = self.fn(list(args))
        else:
            if len(args) != len(self.params):
                raise TypeMismatch(
                    f"{self.name} expects {len(self.params)} argument(s), got {len(args)}"
                )
            unwrapped = []
            for i, (arg, kind) in enumerate(zip(args, self.params)):
                if arg.kind is not kind:
                    raise TypeMismatch(
                        f"cannot use {arg.kind} as {kind} in argument[{i}] to {self.name}"
                    )
                unwrapped.append(arg.data)
            raw = self.fn(*unwrapped)

        if self.result is None:
            return INVALID
        if isinstance(raw, Value):
            return raw
        return _WRAPPERS[self.result](raw)


class ScriptFunction(Function):
    """A function declared in a minigo source file."""

    __slots__ = ("name", "decl", "file", "evaluator")

    def __init__(self, decl: FuncDecl, file: File, evaluator: Evaluator):
        self.name = decl.name.name
        self.decl = decl
        self.file = file
        self.evaluator = evaluator

    @property
    def param_names(self) -> list[str]:
        return [ident.name for param in self.decl.params for ident in param.names]

    def call(self, args: Sequence[Value]) -> Value:
        return self.evaluator.call_script(self, args)
