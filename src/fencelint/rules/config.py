"""Rule options.

Options arrive as a plain mapping from the host configuration. Both the
markdownlint spelling (displayMode) and the Python spelling
(display_mode) are accepted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fencelint.diagnostics.errors import ConfigError
from fencelint.enums import ValidationMode

__all__ = ["RuleConfig"]

logger = logging.getLogger(__name__)

# Accepted option key -> RuleConfig field
_OPTION_FIELDS: dict[str, str] = {
    "basic": "basic",
    "displayMode": "display_mode",
    "display_mode": "display_mode",
    "strict": "strict",
}


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Options shared by the fragment rules.

    Attributes:
        basic: Mermaid only; validate structure without the parser
        display_mode: KaTeX only; parse in display (block) mode
        strict: KaTeX only; reject LaTeX that KaTeX merely tolerates
    """

    basic: bool = False
    display_mode: bool = False
    strict: bool = False

    @property
    def mode(self) -> ValidationMode:
        """Validation mode selected by the basic option."""
        return ValidationMode.BASIC if self.basic else ValidationMode.FULL

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> RuleConfig:
        """Build a config from host options.

        Args:
            options: Option mapping (None means all defaults)

        Returns:
            RuleConfig

        Raises:
            ConfigError: If an option value is not a boolean

        Example:
            >>> RuleConfig.from_mapping({"displayMode": True})
            RuleConfig(basic=False, display_mode=True, strict=False)
        """
        if not options:
            return cls()

        values: dict[str, bool] = {}
        for key, value in options.items():
            field_name = _OPTION_FIELDS.get(key)
            if field_name is None:
                logger.debug("Ignoring unknown rule option %r", key)
                continue
            if not isinstance(value, bool):
                msg = f"Rule option {key!r} must be true or false, got {value!r}"
                raise ConfigError(msg)
            values[field_name] = value
        return cls(**values)
