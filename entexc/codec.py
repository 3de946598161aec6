"""
Global code codec.

Maps a (class_code, base_code) pair to a single global code:

- class_code == 0: globalization disabled, the global code is the base code
- class_code > 0:  global code = class_code * multiplier + base_code

All functions are pure and take their multiplier/ceiling explicitly.

Note:
    decode() cannot tell "globalization disabled" apart from a real
    class code: a base code encoded with class_code 0 decodes as
    (0, base_code) only while base_code < multiplier. Callers that need
    the distinction must track the globalization state themselves.

Copyright (c) 2025 Graziano Labs Corp.
"""

import sys

from .errors import InvalidBaseCode, InvalidClassCodeConfig, InvalidGlobalCode, InvalidMultiplier

DEFAULT_MULTIPLIER = 100000
DEFAULT_GLOBAL_CEILING = sys.maxsize


def is_power_of_ten(value: int) -> bool:
    """True for 1, 10, 100, ..."""
    if value < 1:
        return False
    while value % 10 == 0:
        value //= 10
    return value == 1


def encode(class_code: int, base_code: int, multiplier: int = DEFAULT_MULTIPLIER) -> int:
    """
    Combine a class code and a base code into a global code.

    Args:
        class_code: Class code (0 disables globalization)
        base_code: Per-class code, must be in [0, multiplier)
        multiplier: Scale separating class bands

    Returns:
        The global code

    Raises:
        InvalidBaseCode: If base_code is negative or >= multiplier
        InvalidClassCodeConfig: If class_code is negative
    """
    if base_code < 0 or base_code >= multiplier:
        raise InvalidBaseCode(base_code, multiplier)
    if class_code < 0:
        raise InvalidClassCodeConfig(
            class_code, multiplier, DEFAULT_GLOBAL_CEILING, reason="class code must be >= 0"
        )
    if class_code == 0:
        return base_code
    return class_code * multiplier + base_code


def decode(global_code: int, multiplier: int = DEFAULT_MULTIPLIER) -> tuple[int, int]:
    """
    Split a global code into (class_code, base_code).

    Inverse of encode() for class_code > 0.

    Raises:
        InvalidGlobalCode: If global_code is negative
        InvalidMultiplier: If multiplier is not positive
    """
    if multiplier <= 0:
        raise InvalidMultiplier(multiplier)
    if global_code < 0:
        raise InvalidGlobalCode(global_code)
    return divmod(global_code, multiplier)


def class_code_ceiling(
    multiplier: int = DEFAULT_MULTIPLIER,
    global_ceiling: int = DEFAULT_GLOBAL_CEILING
) -> int:
    """
    Exclusive upper bound for a class code.

    class_code_ceiling(100000, 2147483647) == 21474

    Raises:
        InvalidMultiplier: If multiplier is not positive
    """
    if multiplier <= 0:
        raise InvalidMultiplier(multiplier)
    return global_ceiling // multiplier


def format_code(global_code: int) -> str:
    """Default display format of a global code (decimal string)."""
    return str(global_code)
