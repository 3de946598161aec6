"""
Error taxonomy for entexc.

Error code ranges:
- E001-E099: Codec errors (raised immediately at encode/decode time)
- E100-E199: Registry configuration problems (collected by the detector)
- E200-E299: Registry loading and lookup errors

Copyright (c) 2025 Graziano Labs Corp.
"""

from typing import Any, Optional


class EntexcError(Exception):
    """Base class for all entexc errors."""

    def __init__(self, code: str, message: str, hint: Optional[str] = None):
        """
        Initialize entexc error.

        Args:
            code: Error code (e.g., "E001")
            message: Human-readable error message
            hint: Optional suggestion for fixing the error
        """
        self.code = code
        self.message = message
        self.hint = hint
        super().__init__(f"[{code}] {message}")

    def as_dict(self) -> dict[str, Any]:
        """Serializable view used by tooling output."""
        data: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.hint:
            data["hint"] = self.hint
        return data


class CodecError(EntexcError):
    """Encode/decode errors (E001-E099)."""
    pass


class InvalidBaseCode(CodecError):
    """Base code outside [0, multiplier) (E001)."""

    def __init__(self, base_code: int, multiplier: int):
        self.base_code = base_code
        self.multiplier = multiplier
        super().__init__(
            "E001",
            f"base code {base_code} is outside [0, {multiplier})",
            hint=f"use a base code between 0 and {multiplier - 1}",
        )


class InvalidGlobalCode(CodecError):
    """Global code that cannot be decoded (E002)."""

    def __init__(self, global_code: int):
        self.global_code = global_code
        super().__init__("E002", f"global code {global_code} is negative")


class ConfigurationProblem(EntexcError):
    """A registry configuration defect (E100-E199).

    Problems are collected by the detector and returned as a list; they
    can also be raised on their own.
    """

    def __init__(
        self,
        code: str,
        message: str,
        class_name: Optional[str] = None,
        hint: Optional[str] = None
    ):
        self.class_name = class_name
        super().__init__(code, message, hint=hint)

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        if self.class_name is not None:
            data["class_name"] = self.class_name
        return data


class InvalidMultiplier(ConfigurationProblem):
    """Multiplier is not a positive power of ten (E101)."""

    def __init__(self, multiplier: int, class_name: Optional[str] = None):
        self.multiplier = multiplier
        owner = f"{class_name}: " if class_name else ""
        super().__init__(
            "E101",
            f"{owner}multiplier {multiplier} must be a positive power of ten",
            class_name=class_name,
        )


class InvalidClassCodeConfig(ConfigurationProblem):
    """Class code (or its ceiling) cannot produce valid global codes (E102)."""

    def __init__(
        self,
        class_code: int,
        multiplier: int,
        global_ceiling: int,
        class_name: Optional[str] = None,
        reason: str = ""
    ):
        self.class_code = class_code
        self.multiplier = multiplier
        self.global_ceiling = global_ceiling
        owner = f"{class_name}: " if class_name else ""
        super().__init__(
            "E102",
            f"{owner}class code {class_code} is invalid "
            f"(multiplier {multiplier}, global ceiling {global_ceiling})"
            + (f": {reason}" if reason else ""),
            class_name=class_name,
            hint="use 0 to disable globalization or a code below the class code ceiling",
        )


class DuplicateClassName(ConfigurationProblem):
    """Two registry entries share a class name (E110)."""

    def __init__(self, class_name: str, first_index: int, index: int):
        self.first_index = first_index
        self.index = index
        super().__init__(
            "E110",
            f"class {class_name} is declared more than once "
            f"(entries {first_index} and {index})",
            class_name=class_name,
        )

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        data["indexes"] = [self.first_index, self.index]
        return data


class DuplicateGlobalCodeRange(ConfigurationProblem):
    """Two scaled classes can produce the same global code (E120)."""

    def __init__(self, class_name: str, other_name: str, low: int, high: int):
        self.other_name = other_name
        self.overlap = (low, high)
        super().__init__(
            "E120",
            f"global code ranges of {class_name} and {other_name} "
            f"overlap on [{low}, {high}]",
            class_name=class_name,
            hint="change a class code or a multiplier so the ranges are disjoint",
        )

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        data["other_name"] = self.other_name
        data["overlap"] = list(self.overlap)
        return data


class AmbiguousGlobalCode(ConfigurationProblem):
    """Scaled codes indistinguishable from unscaled base codes (E121)."""

    def __init__(self, class_name: str, opt_out_name: str, low: int, high: int):
        self.opt_out_name = opt_out_name
        self.overlap = (low, high)
        super().__init__(
            "E121",
            f"global codes [{low}, {high}] of {class_name} cannot be told apart "
            f"from base codes of {opt_out_name} (globalization disabled)",
            class_name=class_name,
        )

    def as_dict(self) -> dict[str, Any]:
        data = super().as_dict()
        data["opt_out_name"] = self.opt_out_name
        data["overlap"] = list(self.overlap)
        return data


class RegistryValidationError(EntexcError):
    """A registry failed validation (E199)."""

    def __init__(self, problems: list[ConfigurationProblem]):
        self.problems = list(problems)
        super().__init__(
            "E199",
            f"registry has {len(self.problems)} problem(s): "
            + "; ".join(str(p) for p in self.problems),
        )


class RegistryLoadError(EntexcError):
    """Registry file could not be read or does not match the schema (E200)."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__("E200", f"{where}{message}")


class UnknownExceptionClass(EntexcError, KeyError):
    """Lookup of a class name absent from the registry (E210)."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        super().__init__("E210", f"class {class_name} is not registered")

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


# Specific error codes documentation:
#
# E001: Base code outside [0, multiplier)
# E002: Negative global code passed to decode
# E101: Multiplier not a positive power of ten
# E102: Negative class code, class code >= ceiling, or non-positive ceiling
# E110: Duplicate class name in registry
# E120: Overlapping global code ranges between two scaled classes
# E121: Scaled range intersects an opt-out band (strict mode only)
# E199: Aggregate registry validation failure
# E200: Registry file unreadable or schema mismatch
# E210: Unknown exception class
