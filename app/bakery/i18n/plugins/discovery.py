"""Entry-point based plugin discovery.

Packages advertise plugins by exposing a module with a ``@hookimpl``
``bakery_register_plugins`` function under the ``i18n_bakery`` entry point
group:

    [project.entry-points.i18n_bakery]
    my_plugins = "my_package.bakery_plugins"
"""

from types import ModuleType
from typing import Any, Iterable, List

import pluggy

from bakery.i18n.plugins import hookspecs
from bakery.logging import get_module_logger

logger = get_module_logger()


def get_plugin_manager(load_entrypoints: bool = True) -> pluggy.PluginManager:
    """Create a pluggy manager for discovery hooks.

    Args:
        load_entrypoints: Load setuptools entry points in the project group.

    Returns:
        PluginManager with the bakery hookspecs registered.
    """
    pm = pluggy.PluginManager(hookspecs.PROJECT_NAME)
    pm.add_hookspecs(hookspecs)
    if load_entrypoints:
        loaded = pm.load_setuptools_entrypoints(hookspecs.PROJECT_NAME)
        logger.debug("plugin_entrypoints_loaded", count=loaded)
    return pm


def discover_plugins(
    extra_modules: Iterable[ModuleType] = (),
    load_entrypoints: bool = True,
) -> List[Any]:
    """Collect plugins from entry points and explicitly given modules.

    Args:
        extra_modules: Modules (or objects) with ``@hookimpl`` functions.
        load_entrypoints: Whether to scan installed entry points.

    Returns:
        Flat list of plugin instances, registration order preserved per
        implementation. Hook implementations are called in pluggy's order
        (last registered first).
    """
    pm = get_plugin_manager(load_entrypoints=load_entrypoints)
    for module in extra_modules:
        try:
            pm.register(module)
        except (ValueError, pluggy.PluginValidationError) as e:
            logger.warning("plugin_module_registration_failed", module=str(module), error=str(e))

    plugins: List[Any] = []
    for batch in pm.hook.bakery_register_plugins():
        plugins.extend(batch or [])

    logger.info("plugins_discovered", plugin_count=len(plugins))
    return plugins
