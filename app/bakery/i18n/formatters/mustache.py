"""Mustache-style ``{{path}}`` formatter."""

import html
import re
from typing import Any, Mapping, Optional

from bakery.i18n.formatters.base import Formatter, stringify

_TOKEN = re.compile(r"\{\{([^}]+)\}\}")


class MustacheFormatter(Formatter):
    """Replaces ``{{path}}`` tokens with values from the variable bag.

    Dotted paths walk nested mappings ({{user.name}}). Tokens whose value is
    missing or None stay in the output so missing variables are visible.

    Attributes:
        escape_html: When True every substituted value is HTML-escaped.
            The template text itself is never escaped.
    """

    def __init__(self, escape_html: bool = False):
        self.escape_html = escape_html

    def interpolate(
        self,
        template: str,
        variables: Optional[Mapping[str, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        if not template or not variables:
            return template

        def replace(match: "re.Match[str]") -> str:
            value = _resolve_path(variables, match.group(1).strip())
            if value is None:
                return match.group(0)
            text = stringify(value)
            return html.escape(text, quote=True) if self.escape_html else text

        return _TOKEN.sub(replace, template)


def _resolve_path(variables: Mapping[str, Any], path: str) -> Any:
    current: Any = variables
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        else:
            return None
        if current is None:
            return None
    return current
