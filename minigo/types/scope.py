"""Lexical scope for the minigo evaluator.

The Scope owns a stack of frames (name -> Value). The root frame is created
with the scope and is never popped; every other frame lives for exactly one
block's execution and is released through ``frame()`` on every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Mapping, Optional

from minigo.errors import UndefinedReference
from minigo.types.value import Value


class Scope:
    """Stack of frames searched innermost to outermost."""

    __slots__ = ("frames",)

    def __init__(self, root: Mapping[str, Value] | None = None):
        self.frames: list[dict[str, Value]] = [dict(root or {})]

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def root(self) -> dict[str, Value]:
        return self.frames[0]

    def push(self) -> None:
        self.frames.append({})

    def pop(self) -> None:
        if len(self.frames) == 1:
            raise RuntimeError("cannot pop the root frame")
        self.frames.pop()

    @contextmanager
    def frame(self) -> Iterator[dict[str, Value]]:
        """Push a frame for the duration of a with-block."""
        self.push()
        try:
            yield self.frames[-1]
        finally:
            self.pop()

    @contextmanager
    def isolated(self) -> Iterator[dict[str, Value]]:
        """Hide every non-root frame, e.g. while a called function runs.

        A fresh frame is pushed over the root; the caller's frames are put
        back when the block exits, however it exits.
        """
        saved = self.frames[1:]
        del self.frames[1:]
        self.push()
        try:
            yield self.frames[-1]
        finally:
            self.frames[1:] = saved

    def set(self, name: str, value: Value) -> None:
        """Bind `name` in the current (topmost) frame, shadowing outer frames."""
        self.frames[-1][name] = value

    def find(self, name: str, root: bool = True) -> Optional[Value]:
        frames = self.frames if root else self.frames[1:]
        for frame in reversed(frames):
            if name in frame:
                return frame[name]
        return None

    def get(self, name: str) -> Value:
        """Look up `name` innermost first.

        Raises UndefinedReference if no frame binds it.
        """
        value = self.find(name)
        if value is None:
            raise UndefinedReference(f"undefined variable: {name}")
        return value

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Scope ")
            buffer.write(" -> ".join(
                "{" + ", ".join(f"{k}: {v!r}" for k, v in frame.items()) + "}"
                for frame in reversed(self.frames)
            ))
            buffer.write(">")
            return buffer.getvalue()
