"""Source positions.

A FileSet hands out a base offset to each file it reads so that a single
integer ``pos`` identifies a location across every file of a run. Positions
are resolved back to filename, line and column only when a diagnostic needs
them.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    filename: str
    line: int  # 1-based, 0 when unknown
    column: int

    def __str__(self) -> str:
        if self.line == 0:
            return self.filename or "-"
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass
class SourceFile:
    filename: str
    base: int
    size: int
    line_starts: list[int] = field(default_factory=list)

    def position(self, pos: int) -> Position:
        offset = pos - self.base
        index = bisect.bisect_right(self.line_starts, offset) - 1
        return Position(self.filename, index + 1, offset - self.line_starts[index] + 1)


class FileSet:
    def __init__(self):
        self.files: list[SourceFile] = []
        self._next_base = 1  # 0 is reserved for "no position"

    def add_file(self, filename: str, source: str) -> SourceFile:
        starts = [0]
        starts.extend(i + 1 for i, ch in enumerate(source) if ch == "\n")
        sf = SourceFile(filename, self._next_base, len(source), starts)
        self.files.append(sf)
        # one extra slot so EOF positions stay inside the file
        self._next_base += len(source) + 1
        return sf

    def file(self, pos: int) -> SourceFile | None:
        for sf in self.files:
            if sf.base <= pos <= sf.base + sf.size:
                return sf
        return None

    def position(self, pos: int) -> Position:
        sf = self.file(pos)
        if sf is None:
            return Position("", 0, 0)
        return sf.position(pos)
