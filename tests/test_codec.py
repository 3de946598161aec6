"""
Tests for the global code codec.

Copyright (c) 2025 Graziano Labs Corp.
"""

import sys

import pytest
from entexc.codec import (
    DEFAULT_MULTIPLIER,
    class_code_ceiling,
    decode,
    encode,
    format_code,
    is_power_of_ten
)
from entexc.errors import InvalidBaseCode, InvalidClassCodeConfig, InvalidGlobalCode, InvalidMultiplier


def test_default_multiplier():
    assert DEFAULT_MULTIPLIER == 100000


def test_encode_scaled():
    """Scaled class: class_code * multiplier + base_code."""
    assert encode(29, 5, 100000) == 2900005


def test_encode_uses_default_multiplier():
    assert encode(3, 42) == 300042


def test_encode_opt_out_returns_base_code():
    """class_code 0 disables globalization."""
    assert encode(0, 0, 100000) == 0
    assert encode(0, 99999, 100000) == 99999
    assert encode(0, 7, 10) == 7


@pytest.mark.parametrize("class_code, base_code, multiplier", [
    (1, 0, 10),
    (29, 99999, 100000),
    (29, 12345, 100000000),
    (21473, 1, 100000),
])
def test_round_trip(class_code, base_code, multiplier):
    """decode(encode(...)) returns the original pair."""
    assert decode(encode(class_code, base_code, multiplier), multiplier) == (class_code, base_code)


def test_encode_rejects_negative_base_code():
    with pytest.raises(InvalidBaseCode):
        encode(1, -1, 100000)


def test_encode_rejects_base_code_at_multiplier():
    with pytest.raises(InvalidBaseCode, match="outside"):
        encode(1, 100000, 100000)


def test_encode_rejects_base_code_for_opt_out_too():
    """The base code range applies even when globalization is disabled."""
    with pytest.raises(InvalidBaseCode):
        encode(0, 100000, 100000)


def test_encode_rejects_negative_class_code():
    with pytest.raises(InvalidClassCodeConfig):
        encode(-1, 0, 100000)


def test_decode_small_code_is_ambiguous():
    """An opt-out base code decodes as class code 0."""
    assert decode(encode(0, 42, 100000), 100000) == (0, 42)


def test_decode_rejects_negative_code():
    with pytest.raises(InvalidGlobalCode):
        decode(-1, 100000)


def test_decode_rejects_bad_multiplier():
    with pytest.raises(InvalidMultiplier):
        decode(10, 0)


def test_class_code_ceiling_int32():
    """Example from 32-bit deployments."""
    assert class_code_ceiling(100000, 2147483647) == 21474


def test_class_code_ceiling_defaults_to_maxsize():
    assert class_code_ceiling() == sys.maxsize // 100000


def test_class_code_ceiling_rejects_bad_multiplier():
    with pytest.raises(InvalidMultiplier):
        class_code_ceiling(0, 100)


def test_format_code_decimal():
    assert format_code(2900005) == "2900005"
    assert format_code(0) == "0"


def test_is_power_of_ten():
    assert is_power_of_ten(1)
    assert is_power_of_ten(10)
    assert is_power_of_ten(100000000)
    assert not is_power_of_ten(0)
    assert not is_power_of_ten(-10)
    assert not is_power_of_ten(20)
    assert not is_power_of_ten(1001)
