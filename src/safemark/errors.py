"""Exception classes for Safemark.

The rendering engine itself never raises for string input; these errors
cover caller contract violations at the package boundary.
"""

from __future__ import annotations


class SafemarkError(Exception):
    """Base exception for all Safemark errors."""

    pass


class InvalidInputError(SafemarkError, TypeError):
    """Render input is neither a string nor None.

    Raised instead of coercing the value, since the caller would otherwise
    inject the markup of something it never meant to render.
    """

    def __init__(self, type_name: str) -> None:
        """Initialize with the name of the rejected type.

        Args:
            type_name: ``type(value).__name__`` of the offending argument
        """
        self.type_name = type_name
        super().__init__(f"Expected str or None, got {type_name}")


class ConfigError(SafemarkError, ValueError):
    """Invalid RenderConfig value."""

    def __init__(self, field_name: str, message: str) -> None:
        """Initialize config error.

        Args:
            field_name: Name of the RenderConfig field
            message: Description of the problem
        """
        self.field_name = field_name
        super().__init__(f"RenderConfig.{field_name}: {message}")
