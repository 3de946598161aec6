"""
Static collision detector for exception class registries.

Proves that every pair of scaled classes (class_code > 0) produces
disjoint global code ranges. The check works on computed integer
intervals only: the same class code at different multipliers may be
safe, and different multipliers may still collide.

validate() never stops at the first problem. It returns every problem
found, in a stable order:

1. per-spec problems (multiplier, class code, ceiling), registry order
2. duplicate class names, in order of the repeated entry
3. overlapping ranges, by (i, j) registry index
4. opt-out ambiguities (strict_opt_out only)

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from .codec import class_code_ceiling, is_power_of_ten
from .errors import (
    AmbiguousGlobalCode,
    ConfigurationProblem,
    DuplicateClassName,
    DuplicateGlobalCodeRange,
    InvalidClassCodeConfig,
    InvalidMultiplier,
    RegistryValidationError,
)
from .registry import ExceptionClassSpec, select_sections

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeRange:
    """Inclusive range of global codes a class can produce."""
    low: int
    high: int

    def intersection(self, other: "CodeRange") -> Optional["CodeRange"]:
        low = max(self.low, other.low)
        high = min(self.high, other.high)
        if low <= high:
            return CodeRange(low, high)
        return None

    def __contains__(self, code: object) -> bool:
        return isinstance(code, int) and self.low <= code <= self.high

    def __str__(self) -> str:
        return f"[{self.low}, {self.high}]"


def code_range(spec: ExceptionClassSpec) -> CodeRange:
    """
    Range of global codes a spec can produce.

    Opt-out specs (class_code == 0) report raw base codes: [0, multiplier - 1].
    """
    if spec.class_code == 0:
        return CodeRange(0, spec.multiplier - 1)
    low = spec.class_code * spec.multiplier
    return CodeRange(low, low + spec.multiplier - 1)


def filter_sections(
    specs: Iterable[ExceptionClassSpec],
    sections: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None
) -> list[ExceptionClassSpec]:
    """Keep specs whose section is in sections (all if None) and not excluded."""
    return select_sections(specs, sections, exclude)


def check_spec(
    spec: ExceptionClassSpec,
    global_ceiling: Optional[int] = None
) -> list[ConfigurationProblem]:
    """
    Validate a single spec.

    Args:
        spec: Spec to check
        global_ceiling: Optional ceiling applied on top of spec.global_ceiling

    Returns:
        Problems found (empty if the spec is valid)
    """
    ceiling = _effective_ceiling(spec, global_ceiling)
    problems: list[ConfigurationProblem] = []

    if not is_power_of_ten(spec.multiplier):
        problems.append(InvalidMultiplier(spec.multiplier, class_name=spec.name))

    if ceiling <= 0:
        problems.append(InvalidClassCodeConfig(
            spec.class_code, spec.multiplier, ceiling,
            class_name=spec.name, reason="global ceiling must be positive",
        ))
    elif spec.class_code < 0:
        problems.append(InvalidClassCodeConfig(
            spec.class_code, spec.multiplier, ceiling,
            class_name=spec.name, reason="class code must be >= 0",
        ))
    elif spec.class_code > 0 and spec.multiplier > 0:
        limit = class_code_ceiling(spec.multiplier, ceiling)
        if spec.class_code >= limit:
            problems.append(InvalidClassCodeConfig(
                spec.class_code, spec.multiplier, ceiling,
                class_name=spec.name, reason=f"class code ceiling is {limit}",
            ))

    return problems


def validate(
    registry: Iterable[ExceptionClassSpec],
    global_ceiling: Optional[int] = None,
    sections: Optional[Iterable[str]] = None,
    strict_opt_out: bool = False
) -> list[ConfigurationProblem]:
    """
    Validate a registry of exception class specs.

    Args:
        registry: Specs in declaration order (an ExceptionRegistry or any iterable)
        global_ceiling: Optional deployment ceiling; the effective ceiling of
            each spec is min(spec.global_ceiling, global_ceiling)
        sections: Optional section allow-list applied before analysis
        strict_opt_out: Also reject scaled ranges that intersect the raw base
            code band of a class with globalization disabled

    Returns:
        Every problem found; an empty list means the registry is collision-free
    """
    specs = filter_sections(registry, sections)
    problems: list[ConfigurationProblem] = []

    valid: list[tuple[int, ExceptionClassSpec]] = []
    for index, spec in enumerate(specs):
        spec_problems = check_spec(spec, global_ceiling)
        if spec_problems:
            problems.extend(spec_problems)
        else:
            valid.append((index, spec))

    problems.extend(_duplicate_names(specs))
    problems.extend(_overlaps(valid))
    if strict_opt_out:
        problems.extend(_ambiguities(valid))

    logger.info(
        f"Validated {len(specs)} exception classes: {len(problems)} problem(s)"
    )
    return problems


def ensure_valid(
    registry: Iterable[ExceptionClassSpec],
    global_ceiling: Optional[int] = None,
    sections: Optional[Iterable[str]] = None,
    strict_opt_out: bool = False
) -> None:
    """
    Startup self-check: validate and refuse an invalid registry.

    Raises:
        RegistryValidationError: With every problem found
    """
    problems = validate(registry, global_ceiling, sections, strict_opt_out)
    if problems:
        for problem in problems:
            logger.warning(str(problem))
        raise RegistryValidationError(problems)


def _effective_ceiling(spec: ExceptionClassSpec, global_ceiling: Optional[int]) -> int:
    if global_ceiling is None:
        return spec.global_ceiling
    return min(spec.global_ceiling, global_ceiling)


def _duplicate_names(specs: Sequence[ExceptionClassSpec]) -> list[DuplicateClassName]:
    first_seen: dict[str, int] = {}
    problems = []
    for index, spec in enumerate(specs):
        if spec.name in first_seen:
            problems.append(DuplicateClassName(spec.name, first_seen[spec.name], index))
        else:
            first_seen[spec.name] = index
    return problems


def _overlaps(valid: list[tuple[int, ExceptionClassSpec]]) -> list[DuplicateGlobalCodeRange]:
    scaled = [(spec, code_range(spec)) for _, spec in valid if spec.class_code > 0]
    problems = []
    for i, (spec, spec_range) in enumerate(scaled):
        for other, other_range in scaled[i + 1:]:
            if spec.name == other.name:
                continue
            overlap = spec_range.intersection(other_range)
            if overlap is not None:
                logger.debug(f"{spec.name} {spec_range} overlaps {other.name} {other_range}")
                problems.append(
                    DuplicateGlobalCodeRange(spec.name, other.name, overlap.low, overlap.high)
                )
    return problems


def _ambiguities(valid: list[tuple[int, ExceptionClassSpec]]) -> list[AmbiguousGlobalCode]:
    opt_outs = [spec for _, spec in valid if spec.class_code == 0]
    problems = []
    for _, spec in valid:
        if spec.class_code == 0:
            continue
        spec_range = code_range(spec)
        for opt_out in opt_outs:
            overlap = spec_range.intersection(code_range(opt_out))
            if overlap is not None:
                problems.append(
                    AmbiguousGlobalCode(spec.name, opt_out.name, overlap.low, overlap.high)
                )
    return problems
