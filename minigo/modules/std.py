"""Host packages exposed to minigo programs.

Each package is registered under its short import path (``fmt``) and under
the fully qualified path (``minigo/std/fmt`` by default); both names refer to
the same Package and therefore the same callables.
"""
from __future__ import annotations

from typing import Callable, Sequence, TextIO

from minigo import config
from minigo.errors import HostError
from minigo.package_registry import Package, PackageRegistry
from minigo.types.function import HostFunction
from minigo.types.value import Kind, Value, format_value, string_val

Sink = Callable[[], TextIO]


def sprint(args: Sequence[Value]) -> str:
    # Go's Sprint only adds spaces between operands when neither is a string
    out: list[str] = []
    for i, arg in enumerate(args):
        if i > 0 and arg.kind is not Kind.STRING and args[i - 1].kind is not Kind.STRING:
            out.append(" ")
        out.append(format_value(arg))
    return "".join(out)


def sprintln(args: Sequence[Value]) -> str:
    return " ".join(format_value(arg) for arg in args) + "\n"


def make_println(name: str, stdout: Sink) -> HostFunction:
    """Println writing space-joined arguments plus a newline to stdout()."""
    def println(args: list[Value]) -> None:
        stdout().write(sprintln(args))
    return HostFunction(name, println, variadic=True)


def fmt_package(stdout: Sink) -> Package:
    def print_(args: list[Value]) -> None:
        stdout().write(sprint(args))

    pkg = Package(path="fmt")
    pkg.export(
        make_println("Println", stdout),
        HostFunction("Print", print_, variadic=True),
        HostFunction("Sprint", lambda args: string_val(sprint(args)), result=Kind.STRING, variadic=True),
        HostFunction("Sprintln", lambda args: string_val(sprintln(args)), result=Kind.STRING, variadic=True),
    )
    return pkg


# unicode.IsSpace: Latin-1 spaces plus the White_Space code points above it
_GO_SPACE = (
    "\t\n\v\f\r \x85\xa0"
    "\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def _map_runes(s: str, convert: Callable[[str], str]) -> str:
    # one rune in, one rune out: characters whose mapping expands (ß -> SS) are kept as is
    out = []
    for ch in s:
        mapped = convert(ch)
        out.append(mapped if len(mapped) == 1 else ch)
    return "".join(out)


def _to_upper(s: str) -> str:
    return _map_runes(s, str.upper)


def _to_lower(s: str) -> str:
    return _map_runes(s, str.lower)


def _trim_space(s: str) -> str:
    return s.strip(_GO_SPACE)


def strings_package() -> Package:
    S, I, B = Kind.STRING, Kind.INT, Kind.BOOL
    pkg = Package(path="strings")
    pkg.export(
        HostFunction("ToUpper", _to_upper, (S,), S),
        HostFunction("ToLower", _to_lower, (S,), S),
        HostFunction("TrimSpace", _trim_space, (S,), S),
        HostFunction("Contains", lambda s, sub: sub in s, (S, S), B),
        HostFunction("HasPrefix", str.startswith, (S, S), B),
        HostFunction("HasSuffix", str.endswith, (S, S), B),
        HostFunction("Repeat", _repeat, (S, I), S),
    )
    return pkg


def _repeat(s: str, count: int) -> str:
    if count < 0:
        raise HostError("strings: negative Repeat count")
    return s * count


def register(registry: PackageRegistry, stdout: Sink) -> None:
    """Install every host package into `registry`."""
    prefix = config.get_std_prefix()
    for pkg in (fmt_package(stdout), strings_package()):
        registry.register(pkg, prefix + pkg.path)
