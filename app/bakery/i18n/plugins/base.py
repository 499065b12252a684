"""Plugin contract.

A plugin is any object exposing ``metadata`` and ``config`` plus any subset
of the hook methods below. Capabilities are detected by the presence of the
hook method; the plugin kind in metadata is informational only.

Hook methods (all optional, all synchronous):

    init(options)                           called on registration
    before_translate(context)               may return a partial context (dict) to merge
    after_translate(context)                may return a replacement result string
    on_missing(context)                     side effect only
    on_load(locale, namespace, data)        side effect only
    on_locale_change(old_locale, new_locale) side effect only
    destroy()                               called on unregistration
"""

from enum import Enum
from typing import Any, Callable, Optional

from bakery.i18n.models import PluginConfig, PluginMetadata


class PluginHook(str, Enum):
    """Hooks dispatched by the PluginManager."""

    BEFORE_TRANSLATE = "before_translate"
    AFTER_TRANSLATE = "after_translate"
    ON_MISSING = "on_missing"
    ON_LOAD = "on_load"
    ON_LOCALE_CHANGE = "on_locale_change"


class Plugin:
    """Base class for plugins.

    Subclasses set ``metadata`` and implement the hooks they need. Using the
    base class is optional; the manager only relies on attribute presence.
    """

    metadata: PluginMetadata
    config: PluginConfig

    def __init__(self, config: Optional[PluginConfig] = None):
        self.config = config or PluginConfig()

    @property
    def name(self) -> str:
        return self.metadata.name


def get_hook(plugin: Any, hook: str) -> Optional[Callable[..., Any]]:
    """Return the plugin's bound hook method, or None if it lacks the capability."""
    method = getattr(plugin, hook, None)
    return method if callable(method) else None
