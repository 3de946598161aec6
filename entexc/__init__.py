"""
entexc - globally unique exception codes

Each exception class gets a class code and a multiplier; every base code
it raises maps to one global code (class_code * multiplier + base_code).
The detector proves statically that no two classes can produce the same
global code before any exception is raised.

Core components:
- codec: encode/decode/class_code_ceiling/format_code
- ExceptionRegistry: declared class specs and message properties
- validate/ensure_valid: collision detection over a registry
- MessageCatalog/CustomizableException: message composition and the throwable
"""

# Import classes for external use
from .codec import class_code_ceiling, decode, encode, format_code
from .detector import CodeRange, code_range, ensure_valid, filter_sections, validate
from .errors import (
    AmbiguousGlobalCode,
    DuplicateClassName,
    DuplicateGlobalCodeRange,
    EntexcError,
    InvalidBaseCode,
    InvalidClassCodeConfig,
    InvalidGlobalCode,
    InvalidMultiplier,
    RegistryLoadError,
    RegistryValidationError,
    UnknownExceptionClass,
)
from .messages import CustomizableException, MessageCatalog, compose_message, install_catalog
from .registry import ExceptionClassSpec, ExceptionProperties, ExceptionRegistry
from .startup import bootstrap, load_registry

__all__ = [
    "encode",
    "decode",
    "class_code_ceiling",
    "format_code",
    "CodeRange",
    "code_range",
    "validate",
    "ensure_valid",
    "filter_sections",
    "EntexcError",
    "InvalidBaseCode",
    "InvalidGlobalCode",
    "InvalidMultiplier",
    "InvalidClassCodeConfig",
    "DuplicateClassName",
    "DuplicateGlobalCodeRange",
    "AmbiguousGlobalCode",
    "RegistryValidationError",
    "RegistryLoadError",
    "UnknownExceptionClass",
    "CustomizableException",
    "MessageCatalog",
    "compose_message",
    "install_catalog",
    "ExceptionClassSpec",
    "ExceptionProperties",
    "ExceptionRegistry",
    "bootstrap",
    "load_registry",
]
