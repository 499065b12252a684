"""Formatter contract and value stringification shared by formatters."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class Formatter(ABC):
    """Renders a template string against a variable bag.

    Implementations must never raise on malformed templates; unresolved
    placeholders are left verbatim in the output.
    """

    @abstractmethod
    def interpolate(
        self,
        template: str,
        variables: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """Render ``template``.

        Args:
            template: Template text.
            variables: Values for placeholders.
            locale: Locale the template belongs to, for locale-aware rules.

        Returns:
            Rendered text.
        """
        pass


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify(value: Any) -> str:
    """Convert a substituted value to text.

    Whole floats render without a fractional part (5.0 -> "5") and booleans
    render lowercase.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
