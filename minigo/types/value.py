"""Runtime values for the minigo evaluator.

A Value is a kind tag plus the Python object carrying its content. Kinds are
never coerced into one another; operations that combine two values check that
both are valid and of the same kind before touching the data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from minigo.errors import TypeMismatch

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class Kind(Enum):
    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float64"
    STRING = "string"
    FUNC = "func"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Value:
    kind: Kind
    data: Any = None

    @property
    def is_valid(self) -> bool:
        return self.kind is not Kind.INVALID

    def __repr__(self) -> str:
        if not self.is_valid:
            return "Value(<invalid>)"
        return f"Value({self.kind}, {self.data!r})"

    def __str__(self) -> str:
        return format_value(self)


# The "no value produced" marker, e.g. the result of a void call.
INVALID = Value(Kind.INVALID)


# -------------------------------
# Constructors
# -------------------------------
def wrap_int64(n: int) -> int:
    """Reduce n to the signed 64-bit range with two's-complement wraparound."""
    return ((n - INT64_MIN) & 0xFFFF_FFFF_FFFF_FFFF) + INT64_MIN


def int_val(n: int) -> Value:
    return Value(Kind.INT, wrap_int64(int(n)))


def float_val(x: float) -> Value:
    return Value(Kind.FLOAT, float(x))


def bool_val(b: bool) -> Value:
    return Value(Kind.BOOL, bool(b))


def string_val(s: str) -> Value:
    return Value(Kind.STRING, str(s))


def func_val(fn: Any) -> Value:
    return Value(Kind.FUNC, fn)


TRUE = bool_val(True)
FALSE = bool_val(False)


# -------------------------------
# Kind checks
# -------------------------------
def same_kind(x: Value, y: Value) -> Kind:
    """Return the shared kind of x and y, or raise TypeMismatch."""
    if not x.is_valid or not y.is_valid or x.kind is not y.kind:
        raise TypeMismatch(f"mismatched types: {x.kind} and {y.kind}")
    return x.kind


# -------------------------------
# Printing
# -------------------------------
def format_float(x: float) -> str:
    """Shortest round-trip digits laid out like strconv.FormatFloat(x, 'g', -1, 64)."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    if x == 0:
        return "-0" if math.copysign(1.0, x) < 0 else "0"

    sign, digit_tuple, exponent = Decimal(repr(x)).as_tuple()
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    # decimal exponent of the leading digit
    lead = exponent + len(digits) - 1
    prefix = "-" if sign else ""

    if lead < -4 or lead >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if lead < 0 else '+'}{abs(lead):02d}"
    if exponent >= 0:
        return prefix + digits + "0" * exponent
    point = len(digits) + exponent
    if point > 0:
        return prefix + digits[:point] + "." + digits[point:]
    return prefix + "0." + "0" * (-point) + digits


def format_value(value: Value) -> str:
    kind = value.kind
    if kind is Kind.INVALID:
        return "<invalid Value>"
    if kind is Kind.BOOL:
        return "true" if value.data else "false"
    if kind is Kind.FLOAT:
        return format_float(value.data)
    if kind is Kind.FUNC:
        return f"func {getattr(value.data, 'name', '?')}"
    return str(value.data)
