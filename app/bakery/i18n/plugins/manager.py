"""Plugin registry and hook dispatcher."""

import threading
from typing import Any, Dict, List, Mapping, Optional, Union

from bakery.i18n.exceptions import PluginDependencyError, PluginRegistrationError
from bakery.i18n.models import PluginConfig, PluginContext, PluginType
from bakery.i18n.plugins.base import PluginHook, get_hook
from bakery.logging import get_module_logger

logger = get_module_logger()


class PluginManager:
    """Registers plugins and dispatches hooks in registration order.

    A hook that raises is logged with the plugin name; the shared context is
    restored to its state before that hook and the remaining plugins still
    run.
    """

    def __init__(self) -> None:
        self._plugins: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def register(self, plugin: Any, config: Optional[PluginConfig] = None) -> None:
        """Register a plugin and run its ``init`` hook.

        Args:
            plugin: Plugin object exposing ``metadata``.
            config: Optional configuration merged over the plugin's own.

        Raises:
            PluginRegistrationError: Duplicate name, unregistered dependency,
                or a failing ``init``.
        """
        name = plugin.metadata.name
        with self._lock:
            if name in self._plugins:
                raise PluginRegistrationError(f"Plugin '{name}' is already registered", name)

            for dependency in plugin.metadata.dependencies or ():
                if dependency not in self._plugins:
                    raise PluginRegistrationError(
                        f"Plugin '{name}' depends on '{dependency}' which is not registered",
                        name,
                    )

            current = getattr(plugin, "config", None) or PluginConfig()
            plugin.config = current.merged(config)

            init = get_hook(plugin, "init")
            if init is not None:
                try:
                    init(plugin.config.options)
                except Exception as e:
                    logger.error("plugin_init_failed", plugin=name, error=str(e))
                    raise PluginRegistrationError(
                        f"Failed to initialize plugin '{name}': {e}", name
                    ) from e

            self._plugins[name] = plugin

        logger.info(
            "plugin_registered",
            plugin=name,
            plugin_type=_type_name(plugin.metadata.type),
            version=plugin.metadata.version,
        )

    def unregister(self, name: str) -> bool:
        """Remove a plugin and run its ``destroy`` hook.

        Returns:
            True if the plugin was registered, False otherwise.

        Raises:
            PluginDependencyError: If another registered plugin depends on it.
        """
        with self._lock:
            plugin = self._plugins.get(name)
            if plugin is None:
                return False

            for other_name, other in self._plugins.items():
                if name in (other.metadata.dependencies or ()):
                    raise PluginDependencyError(
                        f"Cannot unregister plugin '{name}' because '{other_name}' depends on it",
                        name,
                        other_name,
                    )

            del self._plugins[name]

        destroy = get_hook(plugin, "destroy")
        if destroy is not None:
            try:
                destroy()
            except Exception as e:
                logger.error("plugin_destroy_failed", plugin=name, error=str(e))

        logger.info("plugin_unregistered", plugin=name)
        return True

    def get(self, name: str) -> Optional[Any]:
        with self._lock:
            return self._plugins.get(name)

    def get_all(self) -> List[Any]:
        with self._lock:
            return list(self._plugins.values())

    def get_by_type(self, plugin_type: Union[PluginType, str]) -> List[Any]:
        wanted = _type_name(plugin_type)
        return [p for p in self.get_all() if _type_name(p.metadata.type) == wanted]

    def has(self, name: str) -> bool:
        with self._lock:
            return name in self._plugins

    def clear(self) -> None:
        """Unregister every plugin, newest first so dependents go first."""
        for plugin in reversed(self.get_all()):
            self.unregister(plugin.metadata.name)
        logger.info("plugins_cleared")

    def execute_hook(
        self, hook: Union[PluginHook, str], context: PluginContext
    ) -> PluginContext:
        """Run ``hook`` on every enabled plugin.

        Args:
            hook: Hook to dispatch.
            context: Shared per-call context, updated in place.

        Returns:
            The same context, for chaining.
        """
        hook = PluginHook(hook)
        for plugin in self.get_all():
            if getattr(plugin, "config", None) is not None and plugin.config.enabled is False:
                continue
            method = get_hook(plugin, hook.value)
            if method is None:
                continue

            snapshot = context.snapshot()
            try:
                self._dispatch(hook, method, context)
            except Exception as e:
                context.restore(snapshot)
                logger.error(
                    "plugin_hook_failed",
                    plugin=plugin.metadata.name,
                    hook=hook.value,
                    error=str(e),
                )
        return context

    @staticmethod
    def _dispatch(hook: PluginHook, method, context: PluginContext) -> None:
        if hook is PluginHook.BEFORE_TRANSLATE:
            changes = method(context)
            if isinstance(changes, PluginContext):
                if changes is not context:
                    context.restore(changes)
            elif isinstance(changes, Mapping):
                context.update(changes)

        elif hook is PluginHook.AFTER_TRANSLATE:
            result = method(context)
            if result is not None:
                context.result = result

        elif hook is PluginHook.ON_MISSING:
            method(context)

        elif hook is PluginHook.ON_LOAD:
            if context.namespace is not None:
                method(context.locale, context.namespace, context.data)

        elif hook is PluginHook.ON_LOCALE_CHANGE:
            old_locale = context.data.get("old_locale")
            new_locale = context.data.get("new_locale")
            if old_locale and new_locale:
                method(old_locale, new_locale)


def _type_name(plugin_type: Union[PluginType, str]) -> str:
    return plugin_type.value if isinstance(plugin_type, PluginType) else str(plugin_type)
