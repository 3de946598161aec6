"""
Tests for entexc error taxonomy.

Copyright (c) 2025 Graziano Labs Corp.
"""

import pytest
from entexc.errors import (
    EntexcError,
    CodecError,
    ConfigurationProblem,
    InvalidBaseCode,
    InvalidGlobalCode,
    InvalidMultiplier,
    InvalidClassCodeConfig,
    DuplicateClassName,
    DuplicateGlobalCodeRange,
    AmbiguousGlobalCode,
    RegistryValidationError,
    RegistryLoadError,
    UnknownExceptionClass
)


def test_error_has_code():
    """Error has code attribute and includes it in string representation."""
    err = EntexcError("E001", "test message")
    assert err.code == "E001"
    assert "[E001]" in str(err)


def test_error_has_message():
    """Error has message attribute."""
    err = EntexcError("E001", "test message")
    assert err.message == "test message"
    assert "test message" in str(err)


def test_error_with_hint():
    """Error can store hint for fixing."""
    err = EntexcError("E001", "test", hint="Try this instead")
    assert err.hint == "Try this instead"


def test_error_as_dict():
    """as_dict exposes type, code, message and hint."""
    err = EntexcError("E001", "test", hint="fix it")
    assert err.as_dict() == {
        "type": "EntexcError",
        "code": "E001",
        "message": "test",
        "hint": "fix it",
    }


def test_invalid_base_code():
    """InvalidBaseCode carries the offending values."""
    err = InvalidBaseCode(100000, 100000)
    assert err.code == "E001"
    assert err.base_code == 100000
    assert err.multiplier == 100000
    assert "[0, 100000)" in str(err)
    assert isinstance(err, CodecError)
    assert isinstance(err, EntexcError)


def test_invalid_global_code():
    """InvalidGlobalCode is a codec error."""
    err = InvalidGlobalCode(-5)
    assert err.code == "E002"
    assert err.global_code == -5
    assert isinstance(err, CodecError)


def test_invalid_multiplier_names_class():
    """InvalidMultiplier names the owning class."""
    err = InvalidMultiplier(7, class_name="app.Err")
    assert err.code == "E101"
    assert err.class_name == "app.Err"
    assert "app.Err" in str(err)
    assert isinstance(err, ConfigurationProblem)


def test_invalid_class_code_config():
    """InvalidClassCodeConfig carries code, multiplier and ceiling."""
    err = InvalidClassCodeConfig(21474, 100000, 2147483647, class_name="app.Err",
                                 reason="class code ceiling is 21474")
    assert err.code == "E102"
    assert err.class_code == 21474
    assert err.multiplier == 100000
    assert err.global_ceiling == 2147483647
    assert "class code ceiling is 21474" in str(err)


def test_duplicate_class_name():
    """DuplicateClassName reports both entries."""
    err = DuplicateClassName("app.Err", 0, 3)
    assert err.code == "E110"
    assert err.as_dict()["indexes"] == [0, 3]


def test_duplicate_global_code_range():
    """DuplicateGlobalCodeRange names both classes and the overlap."""
    err = DuplicateGlobalCodeRange("a.A", "b.B", 10, 20)
    assert err.code == "E120"
    assert err.class_name == "a.A"
    assert err.other_name == "b.B"
    assert err.overlap == (10, 20)
    assert "[10, 20]" in str(err)
    data = err.as_dict()
    assert data["other_name"] == "b.B"
    assert data["overlap"] == [10, 20]


def test_ambiguous_global_code():
    """AmbiguousGlobalCode names the opt-out class."""
    err = AmbiguousGlobalCode("a.A", "b.Raw", 10, 19)
    assert err.code == "E121"
    assert err.opt_out_name == "b.Raw"


def test_registry_validation_error_aggregates():
    """RegistryValidationError keeps every problem."""
    problems = [DuplicateClassName("x", 0, 1), InvalidMultiplier(3, class_name="y")]
    err = RegistryValidationError(problems)
    assert err.code == "E199"
    assert err.problems == problems
    assert "2 problem(s)" in str(err)


def test_registry_load_error_path():
    """RegistryLoadError includes the file path."""
    err = RegistryLoadError("bad", path="errors.yaml")
    assert err.code == "E200"
    assert "errors.yaml: bad" in str(err)


def test_unknown_class_is_key_error():
    """UnknownExceptionClass can be caught as KeyError."""
    with pytest.raises(KeyError):
        raise UnknownExceptionClass("app.Missing")
    assert str(UnknownExceptionClass("app.Missing")) == "[E210] class app.Missing is not registered"
