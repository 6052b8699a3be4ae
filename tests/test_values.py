import pytest
from hypothesis import given, strategies as st

from minigo.errors import TypeMismatch
from minigo.types.value import (
    INT64_MAX, INT64_MIN, INVALID, Kind,
    bool_val, float_val, format_float, func_val, format_value, int_val, same_kind, string_val, wrap_int64,
)
from minigo.types.function import HostFunction


@pytest.mark.parametrize(
    "x,expected",
    [
        (4.0, "4"),
        (1.5, "1.5"),
        (0.1, "0.1"),
        (100.0, "100"),
        (-2.25, "-2.25"),
        (0.0001, "0.0001"),
        (0.00001, "1e-05"),
        (123456.5, "123456.5"),
        (1e6, "1e+06"),
        (1234567.0, "1.234567e+06"),
        (1e21, "1e+21"),
        (1.2345e22, "1.2345e+22"),
        (-0.0, "-0"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
        (float("nan"), "NaN"),
    ],
)
def test_format_float_matches_go_v(x, expected):
    assert format_float(x) == expected


def test_format_value_by_kind():
    assert format_value(bool_val(True)) == "true"
    assert format_value(bool_val(False)) == "false"
    assert format_value(int_val(-7)) == "-7"
    assert format_value(string_val("a b")) == "a b"
    assert format_value(INVALID) == "<invalid Value>"
    assert format_value(func_val(HostFunction("Noop", lambda: None))) == "func Noop"


def test_int64_wraps_on_overflow():
    assert int_val(INT64_MAX + 1).data == INT64_MIN
    assert int_val(INT64_MIN - 1).data == INT64_MAX
    assert wrap_int64(1 << 64) == 0


@given(st.integers(min_value=INT64_MIN, max_value=INT64_MAX),
       st.integers(min_value=INT64_MIN, max_value=INT64_MAX))
def test_int64_sum_stays_in_range(a, b):
    total = int_val(a + b).data
    assert INT64_MIN <= total <= INT64_MAX
    assert (total - (a + b)) % (1 << 64) == 0


def test_same_kind():
    assert same_kind(int_val(1), int_val(2)) is Kind.INT
    with pytest.raises(TypeMismatch):
        same_kind(int_val(1), string_val("a"))
    with pytest.raises(TypeMismatch):
        same_kind(int_val(1), float_val(1.0))
    with pytest.raises(TypeMismatch):
        same_kind(INVALID, INVALID)


def test_invalid_marker():
    assert not INVALID.is_valid
    assert int_val(0).is_valid
    assert repr(INVALID) == "Value(<invalid>)"
