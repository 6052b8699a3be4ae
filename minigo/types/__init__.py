from minigo.types.value import Kind, Value, INVALID, TRUE, FALSE
from minigo.types.scope import Scope
from minigo.types.function import Function, HostFunction, ScriptFunction

__all__ = [
    "Kind", "Value", "INVALID", "TRUE", "FALSE",
    "Scope",
    "Function", "HostFunction", "ScriptFunction",
]
