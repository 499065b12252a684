"""Locale-aware number formatting inside rendered translations."""

import re
from typing import Any, Dict, Optional

from babel import UnknownLocaleError, numbers

from bakery.i18n.formatters.base import is_number
from bakery.i18n.models import PluginContext, PluginMetadata, PluginType
from bakery.i18n.plugins.base import Plugin
from bakery.logging import get_module_logger

logger = get_module_logger()

_FORMAT_TOKEN = re.compile(r"\{(\w+)\|(\w+)(?::([^}]+))?\}")


class NumberFormatPlugin(Plugin):
    """Formats ``{variable|format[:option]}`` tokens left in the result.

    Formats:
        currency[:CODE]   {price|currency:EUR} -> €1,234.56 (default USD)
        number[:digits]   {amount|number:2}    -> 1,234.50
        decimal           {amount|decimal}     -> 1,234.5
        percent           {ratio|percent}      -> 12.34%  (value given in percent)
        compact           {views|compact}      -> 1.2K

    Non-numeric values and unknown formats leave the token untouched.
    """

    metadata = PluginMetadata(
        name="number-format",
        version="1.0.0",
        type=PluginType.FORMATTER,
        description="Formats numbers, currencies, and percentages using Babel",
    )

    def __init__(self, locale: str = "en", **kwargs):
        super().__init__(**kwargs)
        self.locale = locale

    def init(self, options: Optional[Dict[str, Any]] = None) -> None:
        if options and options.get("locale"):
            self.locale = options["locale"]

    def on_locale_change(self, old_locale: str, new_locale: str) -> None:
        self.locale = new_locale

    def after_translate(self, context: PluginContext) -> Optional[str]:
        if not context.result or not context.vars:
            return None

        def replace(match: "re.Match[str]") -> str:
            variable, fmt, option = match.groups()
            value = context.vars.get(variable)
            if not is_number(value):
                return match.group(0)
            try:
                formatted = self.format_number(value, fmt, option, context.locale)
            except (ValueError, TypeError, LookupError, UnknownLocaleError) as e:
                logger.warning(
                    "number_format_failed", variable=variable, format=fmt, error=str(e)
                )
                return match.group(0)
            return match.group(0) if formatted is None else formatted

        return _FORMAT_TOKEN.sub(replace, context.result)

    def format_number(
        self, value: float, fmt: str, option: Optional[str], locale: Optional[str] = None
    ) -> Optional[str]:
        """Format one value; returns None for unknown formats."""
        babel_locale = (locale or self.locale).replace("-", "_")

        if fmt == "currency":
            return numbers.format_currency(value, (option or "USD").upper(), locale=babel_locale)
        if fmt in ("number", "decimal"):
            if option:
                digits = int(option)
                pattern = "#,##0." + "0" * digits if digits > 0 else "#,##0"
                return numbers.format_decimal(value, format=pattern, locale=babel_locale)
            return numbers.format_decimal(value, locale=babel_locale)
        if fmt == "percent":
            return numbers.format_percent(value / 100, format="#,##0.00%", locale=babel_locale)
        if fmt == "compact":
            return numbers.format_compact_decimal(
                value, format_type="short", fraction_digits=1, locale=babel_locale
            )
        return None
