"""
Application startup wiring.

Loads a registry, refuses it if validation finds any problem, and installs
the message catalog in one swap. Reloading calls the same function again:
a failed reload leaves the previously installed catalog in place.

Copyright (c) 2025 Graziano Labs Corp.
"""

import logging
from typing import Iterable, Optional

from .config import EntexcConfig, get_default_config
from .detector import ensure_valid
from .errors import RegistryLoadError
from .messages import MessageCatalog, Translator, install_catalog
from .registry import ExceptionRegistry

logger = logging.getLogger(__name__)


def load_registry(
    path: Optional[str] = None,
    config: Optional[EntexcConfig] = None
) -> ExceptionRegistry:
    """
    Load a registry file with configuration defaults.

    Args:
        path: Registry file (defaults to config.registry_path)
        config: Configuration (defaults to get_default_config())

    Raises:
        RegistryLoadError: If no path is available or loading fails
    """
    config = config or get_default_config()
    path = path or config.registry_path
    if not path:
        raise RegistryLoadError("no registry path given and ENTEXC_REGISTRY is not set")
    return ExceptionRegistry.from_file(
        path,
        default_multiplier=config.default_multiplier,
        default_section=config.default_section,
        global_ceiling=config.global_ceiling,
    )


def bootstrap(
    registry: Optional[ExceptionRegistry] = None,
    path: Optional[str] = None,
    config: Optional[EntexcConfig] = None,
    translate: Optional[Translator] = None,
    sections: Optional[Iterable[str]] = None
) -> MessageCatalog:
    """
    Validate a registry and install its catalog.

    Args:
        registry: Registry to install (loaded from path/config if None)
        path: Registry file used when registry is None
        config: Configuration (defaults to get_default_config())
        translate: Translation hook for messages
        sections: Optional section allow-list for validation

    Returns:
        The installed MessageCatalog

    Raises:
        RegistryLoadError: If the registry cannot be loaded
        RegistryValidationError: If the registry has any problem
    """
    config = config or get_default_config()
    if registry is None:
        registry = load_registry(path, config)

    ensure_valid(
        registry,
        global_ceiling=config.global_ceiling,
        sections=sections,
        strict_opt_out=config.strict_opt_out,
    )

    catalog = MessageCatalog(registry, translate=translate, system_locale=config.system_locale)
    install_catalog(catalog)
    return catalog
