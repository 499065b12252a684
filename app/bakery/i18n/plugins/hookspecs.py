"""Hook specifications for plugin discovery."""

from typing import TYPE_CHECKING, List

import pluggy

if TYPE_CHECKING:
    from bakery.i18n.plugins.base import Plugin

PROJECT_NAME = "i18n_bakery"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


@hookspec
def bakery_register_plugins() -> List["Plugin"]:
    """Return translation plugins to register with new services.

    Returns:
        List of plugin instances. Each implementation's list is registered
        in the order returned.
    """
