"""
Exception message composition.

A MessageCatalog combines a registry (class specs plus per-class
base code -> properties tables) with a translation hook and produces the
system and frontend variants of an exception message:

- system message: always the real message, composed with the system locale
- frontend message: the real message (or its `message_fe` variant) when
  `show_fe` is set, otherwise a stub carrying only the formatted code

CustomizableException is the throwable built on top of the catalog.

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .codec import encode, format_code
from .registry import ExceptionProperties, ExceptionRegistry, qualified_name

logger = logging.getLogger(__name__)

# translate(text, locale): None -> current user locale, False -> no translation
Translator = Callable[[str, Union[str, bool, None]], str]
Formatter = Callable[[int], str]


def passthrough(text: str, locale: Union[str, bool, None] = None) -> str:
    """Default translation hook: returns text unchanged."""
    return text


def compose_message(message: str, context: str = "", details: str = "") -> str:
    """
    Compose a full message from its parts.

    >>> compose_message("card declined", context="payment", details="code 51")
    'payment: card declined (code 51)'
    """
    composed = f"{context}: " if context else ""
    composed += message
    if details:
        composed += f" ({details})"
    return composed


@dataclass(frozen=True)
class ComposedMessage:
    """Everything an exception needs to present itself."""
    class_name: str
    code: int  # global code
    base_code: int
    formatted_code: str
    system_message: str
    frontend_message: str
    message_base: str  # frontend base message, translated
    context: str  # translated with the user locale
    details: str
    show_fe: bool


class MessageCatalog:
    """
    Message composition over a registry.

    Example:
        catalog = MessageCatalog(registry, translate=gettext_hook)
        msg = catalog.compose("app.billing.PaymentError", 1, details="card 4242")
        print(msg.system_message, msg.frontend_message)
    """

    def __init__(
        self,
        registry: ExceptionRegistry,
        translate: Optional[Translator] = None,
        system_locale: str = "en",
        stub_label: str = "error"
    ):
        self.registry = registry
        self.translate: Translator = translate or passthrough
        self.system_locale = system_locale
        self.stub_label = stub_label

    def global_code(self, class_name: str, base_code: int) -> int:
        """Global code of a base code; unregistered classes are not globalized."""
        spec = self.registry.find_spec(class_name)
        if spec is None:
            return base_code
        return encode(spec.class_code, base_code, spec.multiplier)

    def frontend_stub(self, formatted_code: str) -> str:
        """Frontend message shown when the real message must stay hidden."""
        return f"{self.translate(self.stub_label, None)} {formatted_code}"

    def compose(
        self,
        class_name: str,
        base_code: int,
        details: str = "",
        formatter: Formatter = format_code
    ) -> ComposedMessage:
        """
        Compose system and frontend messages for a base code.

        Args:
            class_name: Registry name of the exception class
            base_code: Per-class code
            details: Free text, already translated by the caller
            formatter: Display format for the global code

        Returns:
            ComposedMessage

        Raises:
            InvalidBaseCode: If base_code is outside the class's range
        """
        code = self.global_code(class_name, base_code)
        formatted = formatter(code)
        table = self.registry.properties_for(class_name)
        props: Optional[ExceptionProperties] = table.get(base_code)

        show_fe = False
        context = ""
        # Default and unknown messages are final; they skip translation.
        translatable = False
        if props is None:
            logger.debug(f"No properties for base code {base_code} of {class_name}")
            message_base = f"unknown base code {base_code} for {class_name}"
        elif not props.message:
            message_base = f"{class_name} {formatted} (base code {base_code})"
            context = props.context
        else:
            message_base = props.message
            context = props.context
            show_fe = props.show_fe
            translatable = True

        if translatable:
            system_base = self.translate(message_base, self.system_locale)
        else:
            system_base = message_base
        system_message = compose_message(
            system_base,
            context=self.translate(context, self.system_locale) if context else "",
            details=details,
        )

        if show_fe and props is not None and props.message_fe:
            message_base = props.message_fe
        if translatable:
            message_base = self.translate(message_base, None)
        context = self.translate(context, None) if context else ""

        if show_fe:
            frontend_message = compose_message(message_base, context=context, details=details)
        else:
            frontend_message = self.frontend_stub(formatted)

        return ComposedMessage(
            class_name=class_name,
            code=code,
            base_code=base_code,
            formatted_code=formatted,
            system_message=system_message,
            frontend_message=frontend_message,
            message_base=message_base,
            context=context,
            details=details,
            show_fe=show_fe,
        )


# Process-wide catalog, replaced in a single assignment on reload
_catalog: Optional[MessageCatalog] = None


def install_catalog(catalog: Optional[MessageCatalog]) -> None:
    """Install (or clear, with None) the process-wide catalog."""
    global _catalog
    _catalog = catalog
    if catalog is not None:
        logger.info(f"Installed message catalog with {len(catalog.registry)} classes")


def get_catalog() -> MessageCatalog:
    """Get the process-wide catalog (an empty one if none was installed)."""
    if _catalog is None:
        return MessageCatalog(ExceptionRegistry())
    return _catalog


class CustomizableException(Exception):
    """
    Exception whose message and code come from the installed catalog.

    Customizable mode (int first argument):
        raise PaymentError(1, "card 4242")

    Classic mode (str first argument), no catalog lookup:
        raise PaymentError("plain message", 7)
    """

    def __init__(
        self,
        base_code: Union[int, str] = "",
        details: Union[str, int] = "",
        catalog: Optional[MessageCatalog] = None
    ):
        self._catalog = catalog or get_catalog()

        if isinstance(base_code, str):
            self.base_code = int(details or 0)
            self.code = self.base_code
            self.details = ""
            self.context = ""
            self.message_base = base_code
            self.show_fe = False
            self.formatted_code = self.format_code(self.code)
            super().__init__(base_code)
            return

        composed = self._catalog.compose(
            qualified_name(type(self)), base_code, str(details), formatter=self.format_code
        )
        self.base_code = composed.base_code
        self.code = composed.code
        self.details = composed.details
        self.context = composed.context
        self.message_base = composed.message_base
        self.show_fe = composed.show_fe
        self.formatted_code = composed.formatted_code
        super().__init__(composed.system_message)

    @classmethod
    def format_code(cls, global_code: int) -> str:
        """Display format of this class's codes; override to customize."""
        return format_code(global_code)

    @property
    def message(self) -> str:
        """System message."""
        return str(self)

    @property
    def message_fe(self) -> str:
        """Frontend message (real message or stub)."""
        if not self.show_fe:
            return self._catalog.frontend_stub(self.formatted_code)
        return compose_message(self.message_base, context=self.context, details=self.details)

    def set_context(self, value: str) -> "CustomizableException":
        """Replace the (frontend) context; the system message is unchanged."""
        self.context = self._catalog.translate(value, None)
        return self
