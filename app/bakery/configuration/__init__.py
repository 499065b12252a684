"""Configuration module - public API.

Exports:
    settings: Singleton Settings instance (process-level defaults such as logging)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Per-service translation settings
    BakerySettings: Base class for settings models
"""

from bakery.configuration.base import BakerySettings
from bakery.configuration.i18n import I18nSettings
from bakery.configuration.settings import Settings, settings

__all__ = ["BakerySettings", "I18nSettings", "Settings", "settings"]
