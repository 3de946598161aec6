"""
entexc Configuration Module

Centralized configuration for registry loading and validation.
Loads settings from environment variables with sensible defaults.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional

from .codec import is_power_of_ten


@dataclass
class EntexcConfig:
    """Configuration for exception registries.

    Values here are defaults: a registry file may set its own
    multiplier, section and ceiling, and each class may override them.
    """

    default_multiplier: int = 100000
    """Multiplier for classes that do not declare one.

    Must be a power of ten. 100000 leaves room for 100000 base codes per class.
    """

    global_ceiling: int = sys.maxsize
    """Largest global code any class may produce.

    Lower it to match a downstream integer width, e.g. 2147483647 for int32.
    """

    default_section: str = ""
    """Section for classes that do not declare one"""

    system_locale: str = "en"
    """Locale passed to the translation hook for system messages"""

    registry_path: Optional[str] = None
    """Registry file used when a command gets no explicit path"""

    strict_opt_out: bool = False
    """Reject scaled codes that collide with unscaled (opt-out) base codes.

    Default: False (opt-out classes are not range-checked)
    """

    @classmethod
    def from_env(cls) -> "EntexcConfig":
        """Load configuration from environment variables.

        Environment variables:
          ENTEXC_DEFAULT_MULTIPLIER - Default multiplier (power of ten)
          ENTEXC_GLOBAL_CEILING - Largest permitted global code
          ENTEXC_DEFAULT_SECTION - Default section name
          ENTEXC_SYSTEM_LOCALE - System message locale
          ENTEXC_REGISTRY - Registry file path
          ENTEXC_STRICT_OPT_OUT - Strict opt-out checking (true/false)

        Returns:
            EntexcConfig instance with values from environment
        """
        return cls(
            default_multiplier=int(os.getenv("ENTEXC_DEFAULT_MULTIPLIER", "100000")),
            global_ceiling=int(os.getenv("ENTEXC_GLOBAL_CEILING", str(sys.maxsize))),
            default_section=os.getenv("ENTEXC_DEFAULT_SECTION", ""),
            system_locale=os.getenv("ENTEXC_SYSTEM_LOCALE", "en"),
            registry_path=os.getenv("ENTEXC_REGISTRY") or None,
            strict_opt_out=os.getenv("ENTEXC_STRICT_OPT_OUT", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate configuration settings.

        Raises:
            ValueError: If configuration is invalid
        """
        if not is_power_of_ten(self.default_multiplier):
            raise ValueError(
                f"default_multiplier must be a positive power of ten, got {self.default_multiplier}"
            )

        if self.global_ceiling <= 0:
            raise ValueError(
                f"global_ceiling must be positive, got {self.global_ceiling}"
            )

        if self.default_multiplier > self.global_ceiling:
            raise ValueError(
                f"default_multiplier {self.default_multiplier} exceeds "
                f"global_ceiling {self.global_ceiling}"
            )

    def get_summary(self) -> str:
        """Get human-readable configuration summary.

        Returns:
            Formatted string describing current configuration
        """
        lines = [
            "entexc Configuration Summary",
            "=" * 50,
            "",
            "Codes:",
            f"  Default Multiplier: {self.default_multiplier}",
            f"  Global Ceiling: {self.global_ceiling}",
            f"  Class Code Ceiling: {self.global_ceiling // self.default_multiplier}",
            f"  Strict Opt-Out: {self.strict_opt_out}",
            "",
            "Registry:",
            f"  Path: {self.registry_path or 'Not set'}",
            f"  Default Section: {self.default_section or '(none)'}",
            "",
            "Messages:",
            f"  System Locale: {self.system_locale}",
        ]
        return "\n".join(lines)


# Default configuration instance (lazy-loaded from environment)
_default_config: Optional[EntexcConfig] = None


def get_default_config() -> EntexcConfig:
    """Get default configuration instance (singleton pattern).

    Returns:
        Default EntexcConfig loaded from environment
    """
    global _default_config
    if _default_config is None:
        _default_config = EntexcConfig.from_env()
        _default_config.validate()
    return _default_config


def reset_default_config() -> None:
    """Drop the cached default configuration (used after env changes)."""
    global _default_config
    _default_config = None
