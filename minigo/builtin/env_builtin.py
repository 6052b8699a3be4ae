"""Bindings seeded into the root frame of every interpreter."""
from __future__ import annotations

from minigo.modules.std import Sink, make_println
from minigo.types.value import FALSE, TRUE, Value, func_val


def root_bindings(stdout: Sink) -> dict[str, Value]:
    """true, false and the default println, which writes to stdout()."""
    return {
        "true": TRUE,
        "false": FALSE,
        "println": func_val(make_println("println", stdout)),
    }
