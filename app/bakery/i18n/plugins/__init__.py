"""Plugin system: contract, manager, discovery and built-in plugins."""

from bakery.i18n.plugins.base import Plugin, PluginHook, get_hook
from bakery.i18n.plugins.capitalize import CapitalizePlugin
from bakery.i18n.plugins.discovery import discover_plugins, get_plugin_manager
from bakery.i18n.plugins.hookspecs import hookimpl
from bakery.i18n.plugins.http_backend import HttpBackend
from bakery.i18n.plugins.manager import PluginManager
from bakery.i18n.plugins.number_format import NumberFormatPlugin

__all__ = [
    "CapitalizePlugin",
    "HttpBackend",
    "NumberFormatPlugin",
    "Plugin",
    "PluginHook",
    "PluginManager",
    "discover_plugins",
    "get_hook",
    "get_plugin_manager",
    "hookimpl",
]
