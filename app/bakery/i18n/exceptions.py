"""Exceptions raised by the translation engine.

Runtime lookups never raise; these cover configuration-time failures
(plugin registration) and the tooling-side key parser.
"""


class I18nError(Exception):
    """Base class for all translation engine errors."""


class KeyParseError(I18nError, ValueError):
    """A translation key could not be parsed into file components."""


class PluginError(I18nError):
    """Base class for plugin lifecycle errors."""

    def __init__(self, message: str, plugin_name: str):
        super().__init__(message)
        self.plugin_name = plugin_name


class PluginRegistrationError(PluginError):
    """Plugin could not be registered (duplicate, missing dependency, failed init)."""


class PluginDependencyError(PluginError):
    """Plugin cannot be removed because another registered plugin depends on it."""

    def __init__(self, message: str, plugin_name: str, dependent: str):
        super().__init__(message, plugin_name)
        self.dependent = dependent
