"""
Registry listing.

Lists every configured exception code of a registry with its global code
and composed message, optionally filtered by section. Used by the
`entexc list` command and for documentation exports.

Copyright (c) 2025 Graziano Labs Corp.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .detector import CodeRange, check_spec, code_range
from .errors import EntexcError
from .messages import MessageCatalog, Translator
from .registry import ExceptionRegistry


@dataclass
class CodeListing:
    """One configured base code of a class."""
    base_code: int
    global_code: int
    formatted_code: str
    message: str  # composed system message, translated
    show_fe: bool


@dataclass
class ClassListing:
    """One registry entry with its codes."""
    name: str
    section: str
    class_code: int
    multiplier: int
    code_range: Optional[CodeRange]  # None when disabled or misconfigured
    codes: List[CodeListing] = field(default_factory=list)
    problems: List[str] = field(default_factory=list)


def describe(
    registry: ExceptionRegistry,
    sections: Optional[Iterable[str]] = None,
    exclude_sections: Optional[Iterable[str]] = None,
    translate: Optional[Translator] = None,
    system_locale: str = "en"
) -> List[ClassListing]:
    """
    Build listings for the selected sections of a registry.

    Codes are listed in ascending base code order. Base codes outside a
    class's range, and every code of a misconfigured class, are listed
    with the raw base code as global code.
    """
    selected = registry.filter_sections(sections, exclude_sections)
    catalog = MessageCatalog(selected, translate=translate, system_locale=system_locale)

    listings = []
    for spec in selected:
        problems = [str(p) for p in check_spec(spec)]
        listing = ClassListing(
            name=spec.name,
            section=spec.section,
            class_code=spec.class_code,
            multiplier=spec.multiplier,
            code_range=code_range(spec) if spec.globalized and not problems else None,
            problems=problems,
        )
        for base_code in sorted(selected.properties_for(spec.name)):
            if problems or not 0 <= base_code < spec.multiplier:
                if problems:
                    reason = "class configuration is invalid"
                else:
                    reason = f"base code {base_code} is outside [0, {spec.multiplier})"
                listing.codes.append(CodeListing(
                    base_code=base_code,
                    global_code=base_code,
                    formatted_code=str(base_code),
                    message=reason,
                    show_fe=False,
                ))
                continue
            try:
                composed = catalog.compose(spec.name, base_code)
            except EntexcError as e:
                # a repeated name resolves to its first, possibly invalid, declaration
                listing.codes.append(CodeListing(
                    base_code=base_code,
                    global_code=base_code,
                    formatted_code=str(base_code),
                    message=str(e),
                    show_fe=False,
                ))
                continue
            listing.codes.append(CodeListing(
                base_code=base_code,
                global_code=composed.code,
                formatted_code=composed.formatted_code,
                message=composed.system_message,
                show_fe=composed.show_fe,
            ))
        listings.append(listing)
    return listings


def format_listing(listings: List[ClassListing]) -> str:
    """
    Render listings as plain text.

    Returns:
        Formatted report, one block per class
    """
    lines = [
        "Exception Codes",
        "=" * 50,
    ]
    for listing in listings:
        section = listing.section or "(default)"
        if listing.problems:
            scale = "misconfigured"
        elif listing.code_range is None:
            scale = "globalization disabled"
        else:
            scale = f"class code {listing.class_code} x {listing.multiplier} -> {listing.code_range}"
        lines.extend([
            "",
            f"{listing.name} [{section}]",
            f"  {scale}",
        ])
        for problem in listing.problems:
            lines.append(f"  ! {problem}")
        if not listing.codes:
            lines.append("  (no codes configured)")
        for code in listing.codes:
            marker = " [fe]" if code.show_fe else ""
            lines.append(f"  {code.formatted_code:>12}  {code.message}{marker}")
    return "\n".join(lines)
