import math

import pytest

from calculator_engine import format_number, parse_display


def test_format_integers():
    assert format_number(42.0) == "42"
    assert format_number(-15.0) == "-15"
    assert format_number(1000000.0) == "1000000"
    assert format_number(2.0) == "2"

def test_format_negative_zero_is_zero():
    assert format_number(-0.0) == "0"

def test_format_decimals():
    assert format_number(3.14) == "3.14"
    assert format_number(0.5) == "0.5"

def test_format_strips_trailing_zeros():
    assert format_number(1.5000) == "1.5"

def test_format_rounds_to_ten_places():
    assert format_number(1 / 3) == "0.3333333333"
    assert format_number(2 / 3) == "0.6666666667"

def test_format_tiny_value_collapses():
    assert format_number(1e-12) == "0"

def test_format_large_integral_uses_fixed_notation():
    assert format_number(1e15) == "1000000000000000"
    assert format_number(1e20) == "100000000000000000000"

@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_format_non_finite_is_error(value):
    assert format_number(value) == "Error"

def test_parse_display():
    assert parse_display("0.") == 0.0
    assert parse_display("-12.5") == -12.5
    assert parse_display("Error") is None
    assert parse_display("inf") is None
    assert parse_display("nan") is None
