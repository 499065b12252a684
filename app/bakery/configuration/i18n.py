"""Translation engine settings."""

from typing import Literal, Optional

from pydantic import Field

from bakery.configuration.base import BakerySettings


class I18nSettings(BakerySettings):
    """Configuration for a TranslationService instance.

    Environment Variables:
        I18N_LOCALE: Initial locale (default: en)
        I18N_FALLBACK_LOCALE: Locale consulted when a key is absent in the current one
        I18N_DEFAULT_NAMESPACE: Namespace for keys without a separator
            (default: the current locale string)
        I18N_SAVE_MISSING: Persist missing keys through the configured saver (default: False)
        I18N_PLURALIZATION_STRATEGY: 'suffix' or 'cldr' (default: suffix)
        I18N_MESSAGE_FORMAT: 'mustache' or 'icu' (default: mustache)
        I18N_PLURAL_SUFFIX: Plural key suffix for the suffix strategy (default: _plural)
        I18N_ESCAPE_HTML: HTML-escape values substituted by the mustache formatter
            (default: False)
        I18N_DISCOVER_PLUGINS: Load plugins advertised through the i18n_bakery
            entry point group (default: False)

    Example:
        ```python
        from bakery.configuration import I18nSettings

        config = I18nSettings(locale="fr", fallback_locale="en", message_format="icu")
        ```
    """

    locale: str = Field(
        default="en",
        alias="I18N_LOCALE",
        description="Initial locale identifier",
    )
    fallback_locale: Optional[str] = Field(
        default=None,
        alias="I18N_FALLBACK_LOCALE",
        description="Secondary locale consulted on a miss",
    )
    default_namespace: Optional[str] = Field(
        default=None,
        alias="I18N_DEFAULT_NAMESPACE",
        description="Namespace used for keys without ':' or '.'",
    )
    save_missing: bool = Field(
        default=False,
        alias="I18N_SAVE_MISSING",
        description="Persist missing keys through the configured saver",
    )
    pluralization_strategy: Literal["suffix", "cldr"] = Field(
        default="suffix",
        alias="I18N_PLURALIZATION_STRATEGY",
        description="Plural key resolution strategy",
    )
    message_format: Literal["mustache", "icu"] = Field(
        default="mustache",
        alias="I18N_MESSAGE_FORMAT",
        description="Template syntax used to render translations",
    )
    plural_suffix: str = Field(
        default="_plural",
        alias="I18N_PLURAL_SUFFIX",
        description="Suffix appended to plural keys by the suffix strategy",
    )
    escape_html: bool = Field(
        default=False,
        alias="I18N_ESCAPE_HTML",
        description="HTML-escape values substituted by the mustache formatter",
    )
    discover_plugins: bool = Field(
        default=False,
        alias="I18N_DISCOVER_PLUGINS",
        description="Register plugins found through package entry points",
    )
