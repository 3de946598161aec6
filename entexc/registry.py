"""
Exception class registry.

Holds the declared exception class specs (in declaration order) together
with each class's base code -> properties table. A registry is built once
and never mutated; reloading builds a new registry and swaps it in whole.

Registry files are YAML (or JSON) documents validated against
REGISTRY_SCHEMA before any spec is built.

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Optional

import yaml
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate

from .codec import DEFAULT_GLOBAL_CEILING, DEFAULT_MULTIPLIER
from .errors import RegistryLoadError, UnknownExceptionClass

logger = logging.getLogger(__name__)


_PROPERTIES_SCHEMA = {
    "type": "object",
    "properties": {
        "message": {"type": "string"},
        "message_fe": {"type": "string"},
        "context": {"type": "string"},
        "show_fe": {"type": "boolean"},
    },
    "additionalProperties": False,
}

REGISTRY_SCHEMA = {
    "type": "object",
    "properties": {
        "global_ceiling": {"type": "integer"},
        "defaults": {
            "type": "object",
            "properties": {
                "multiplier": {"type": "integer"},
                "section": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "classes": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "class_code": {"type": "integer"},
                    "multiplier": {"type": "integer"},
                    "section": {"type": "string"},
                    "global_ceiling": {"type": "integer"},
                    "properties": {
                        "type": "object",
                        "patternProperties": {"^-?[0-9]+$": _PROPERTIES_SCHEMA},
                        "additionalProperties": False,
                    },
                },
                "required": ["name", "class_code"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["classes"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class ExceptionClassSpec:
    """Static declaration of one exception class."""
    name: str  # fully-qualified class name
    class_code: int  # 0 disables globalization
    multiplier: int = DEFAULT_MULTIPLIER
    global_ceiling: int = DEFAULT_GLOBAL_CEILING
    section: str = ""

    @property
    def globalized(self) -> bool:
        return self.class_code > 0


@dataclass(frozen=True)
class ExceptionProperties:
    """Message properties for one base code of a class."""
    message: str = ""
    message_fe: str = ""
    context: str = ""
    show_fe: bool = False


def qualified_name(cls: type) -> str:
    """Registry name of an exception class: ``module.QualName``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def spec_for_class(
    cls: type,
    class_code: int,
    multiplier: int = DEFAULT_MULTIPLIER,
    section: str = "",
    global_ceiling: int = DEFAULT_GLOBAL_CEILING
) -> ExceptionClassSpec:
    """Build a spec named after a Python exception class."""
    return ExceptionClassSpec(
        name=qualified_name(cls),
        class_code=class_code,
        multiplier=multiplier,
        global_ceiling=global_ceiling,
        section=section,
    )


def select_sections(
    specs: Iterable[ExceptionClassSpec],
    sections: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None
) -> list[ExceptionClassSpec]:
    """
    Keep specs whose section is allowed and not excluded.

    Args:
        specs: Specs in registry order
        sections: Allow-list of sections (None keeps every section)
        exclude: Sections to drop; exclusion wins over the allow-list

    Returns:
        Matching specs, order preserved
    """
    allowed = set(sections) if sections is not None else None
    excluded = set(exclude or ())
    return [
        spec for spec in specs
        if (allowed is None or spec.section in allowed) and spec.section not in excluded
    ]


class ExceptionRegistry:
    """
    Ordered, read-only collection of exception class specs.

    Duplicate names are kept so the detector can report them along
    with every other defect.
    """

    def __init__(
        self,
        specs: Iterable[ExceptionClassSpec] = (),
        properties: Optional[Dict[str, Dict[int, ExceptionProperties]]] = None
    ):
        self.specs: tuple[ExceptionClassSpec, ...] = tuple(specs)
        self.properties: Dict[str, Dict[int, ExceptionProperties]] = {
            name: dict(table) for name, table in (properties or {}).items()
        }

    def __iter__(self) -> Iterator[ExceptionClassSpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __contains__(self, name: object) -> bool:
        return any(spec.name == name for spec in self.specs)

    def names(self) -> list[str]:
        """Class names in registry order."""
        return [spec.name for spec in self.specs]

    def find_spec(self, name: str) -> Optional[ExceptionClassSpec]:
        """First spec declared under name, or None."""
        for spec in self.specs:
            if spec.name == name:
                return spec
        return None

    def get_spec(self, name: str) -> ExceptionClassSpec:
        """
        Get the spec for a class name.

        Raises:
            UnknownExceptionClass: If the name is not registered
        """
        spec = self.find_spec(name)
        if spec is None:
            raise UnknownExceptionClass(name)
        return spec

    def properties_for(self, name: str) -> Dict[int, ExceptionProperties]:
        """Base code -> properties table of a class (empty if none)."""
        return self.properties.get(name, {})

    def filter_sections(
        self,
        sections: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None
    ) -> "ExceptionRegistry":
        """New registry holding only specs of the selected sections."""
        kept = select_sections(self.specs, sections, exclude)
        names = {spec.name for spec in kept}
        return ExceptionRegistry(
            kept,
            {name: table for name, table in self.properties.items() if name in names},
        )

    def with_spec(
        self,
        spec: ExceptionClassSpec,
        properties: Optional[Dict[int, ExceptionProperties]] = None
    ) -> "ExceptionRegistry":
        """New registry with spec appended."""
        merged = dict(self.properties)
        if properties is not None:
            merged[spec.name] = dict(properties)
        return ExceptionRegistry(self.specs + (spec,), merged)

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        default_multiplier: int = DEFAULT_MULTIPLIER,
        default_section: str = "",
        global_ceiling: int = DEFAULT_GLOBAL_CEILING,
        source: Optional[str] = None
    ) -> "ExceptionRegistry":
        """
        Build a registry from a parsed registry document.

        Args:
            data: Parsed YAML/JSON document
            default_multiplier: Multiplier when neither class nor defaults set one
            default_section: Section when neither class nor defaults set one
            global_ceiling: Ceiling when the document does not set one
            source: Optional file name used in error messages

        Returns:
            ExceptionRegistry in document order

        Raises:
            RegistryLoadError: If the document does not match REGISTRY_SCHEMA
        """
        if not isinstance(data, dict):
            raise RegistryLoadError("registry document must be a mapping", path=source)
        data = _normalize_property_keys(data)
        try:
            validate(instance=data, schema=REGISTRY_SCHEMA)
        except SchemaValidationError as e:
            location = "/".join(str(p) for p in e.absolute_path)
            raise RegistryLoadError(
                f"schema violation at '{location}': {e.message}", path=source
            ) from e

        defaults = data.get("defaults", {})
        multiplier = int(defaults.get("multiplier", default_multiplier))
        section = defaults.get("section", default_section)
        ceiling = int(data.get("global_ceiling", global_ceiling))

        specs = []
        properties: Dict[str, Dict[int, ExceptionProperties]] = {}
        for entry in data["classes"]:
            spec = ExceptionClassSpec(
                name=entry["name"],
                # JSON Schema "integer" admits 1.0e+5; codes must stay ints
                class_code=int(entry["class_code"]),
                multiplier=int(entry.get("multiplier", multiplier)),
                global_ceiling=int(entry.get("global_ceiling", ceiling)),
                section=entry.get("section", section),
            )
            specs.append(spec)
            table = {
                int(base_code): ExceptionProperties(**props)
                for base_code, props in entry.get("properties", {}).items()
            }
            # A repeated name keeps the first table; the detector reports the duplicate.
            if table and spec.name not in properties:
                properties[spec.name] = table
            logger.debug(
                f"Declared {spec.name}: class_code={spec.class_code}, "
                f"multiplier={spec.multiplier}, section='{spec.section}', "
                f"{len(table)} base codes"
            )

        return cls(specs, properties)

    @classmethod
    def from_file(
        cls,
        path: str,
        default_multiplier: int = DEFAULT_MULTIPLIER,
        default_section: str = "",
        global_ceiling: int = DEFAULT_GLOBAL_CEILING
    ) -> "ExceptionRegistry":
        """
        Load a registry from a YAML or JSON file.

        Raises:
            RegistryLoadError: If the file is missing, unparsable or invalid
        """
        path_obj = Path(path)
        if not path_obj.exists():
            raise RegistryLoadError("registry file not found", path=str(path))
        try:
            with open(path_obj, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RegistryLoadError(f"cannot parse registry: {e}", path=str(path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryLoadError(f"cannot read registry: {e}", path=str(path)) from e

        registry = cls.from_mapping(
            data,
            default_multiplier=default_multiplier,
            default_section=default_section,
            global_ceiling=global_ceiling,
            source=str(path),
        )
        logger.info(f"Loaded {len(registry)} exception classes from {path_obj}")
        return registry


def _normalize_property_keys(data: dict) -> dict:
    """YAML gives int keys, JSON gives str keys; the schema checks strings."""
    classes = data.get("classes")
    if not isinstance(classes, list):
        return data
    normalized = []
    for entry in classes:
        if isinstance(entry, dict) and isinstance(entry.get("properties"), dict):
            entry = dict(entry)
            entry["properties"] = {str(k): v for k, v in entry["properties"].items()}
        normalized.append(entry)
    return {**data, "classes": normalized}
