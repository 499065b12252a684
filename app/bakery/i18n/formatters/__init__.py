"""Message formatters.

- MustacheFormatter: {{variable}} interpolation
- ICUMessageFormatter: ICU plural/select/selectordinal subset plus {variable}
"""

from bakery.configuration import I18nSettings
from bakery.i18n.formatters.base import Formatter
from bakery.i18n.formatters.icu import ICUMessageFormatter
from bakery.i18n.formatters.mustache import MustacheFormatter


def create_formatter(config: I18nSettings) -> Formatter:
    """Build the formatter named by ``config.message_format``."""
    if config.message_format == "icu":
        return ICUMessageFormatter(locale=config.locale)
    return MustacheFormatter(escape_html=config.escape_html)


__all__ = [
    "Formatter",
    "ICUMessageFormatter",
    "MustacheFormatter",
    "create_formatter",
]
