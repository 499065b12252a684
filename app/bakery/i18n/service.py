"""Translation service.

Resolves keys into rendered text: parses the key, runs plugin hooks, picks
plural forms, walks the locale fallback chain, and formats the template.
Missing keys are answered immediately with the default text (or the raw
key) while loading and saving happen in the background.
"""

import threading
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from bakery.configuration import I18nSettings
from bakery.i18n.backends import TranslationLoader, TranslationSaver
from bakery.i18n.formatters import Formatter, create_formatter
from bakery.i18n.formatters.base import is_number
from bakery.i18n.keys import RuntimeKeyParser
from bakery.i18n.models import Key, Locale, Namespace, PluginContext
from bakery.i18n.plugins import PluginHook, PluginManager, discover_plugins
from bakery.i18n.plurals import PluralResolver, count_suffix, create_plural_resolver
from bakery.i18n.store import MemoryStore
from bakery.i18n.tasks import TaskRunner
from bakery.logging import get_module_logger

logger = get_module_logger()

Listener = Callable[[], None]


class TranslationService:
    """Translation orchestrator.

    One instance owns its store, plugin registry, loaded/pending bookkeeping
    and subscribers; nothing is shared between instances.

    Usage:
        service = TranslationService(I18nSettings(locale="en", fallback_locale="es"))
        service.add_translations("en", "home", {"title": "Welcome {{name}}"})
        service.t("home.title", {"name": "Ada"})          # "Welcome Ada"
        service.t("home.missing", "Coming soon")           # "Coming soon"

    Attributes:
        config: Settings this instance was built from.
        store: Translation storage.
        formatter: Template formatter.
        plural_resolver: Plural key strategy.
        key_parser: Runtime key parser.
        plugins: Plugin registry and hook dispatcher.
    """

    def __init__(
        self,
        config: Optional[I18nSettings] = None,
        *,
        loader: Optional[TranslationLoader] = None,
        saver: Optional[TranslationSaver] = None,
        plugins: Optional[Iterable[Any]] = None,
        store: Optional[MemoryStore] = None,
        formatter: Optional[Formatter] = None,
        plural_resolver: Optional[PluralResolver] = None,
        task_runner: Optional[TaskRunner] = None,
        **overrides: Any,
    ):
        """Initialize the service.

        Args:
            config: Settings; built from the environment when omitted.
            loader: Background namespace loader.
            saver: Background missing-key saver (used when save_missing is on).
            plugins: Plugins registered in order.
            store: Storage, a fresh MemoryStore by default.
            formatter: Formatter, chosen from config.message_format by default.
            plural_resolver: Resolver, chosen from config.pluralization_strategy by default.
            task_runner: Scheduler for background work.
            **overrides: Settings fields overriding ``config``.

        Raises:
            PluginRegistrationError: If a plugin cannot be registered.
        """
        if config is None:
            config = I18nSettings(**overrides)
        elif overrides:
            config = config.model_copy(update=overrides)

        self.config = config
        self.loader = loader
        self.saver = saver
        self.store = store or MemoryStore()
        self.formatter = formatter or create_formatter(config)
        self.plural_resolver = plural_resolver or create_plural_resolver(config)
        self.key_parser = RuntimeKeyParser(
            default_namespace=config.default_namespace,
            locale_provider=self.get_locale,
        )
        self.plugins = PluginManager()

        self._locale: Locale = config.locale
        self._fallback_locale: Optional[Locale] = config.fallback_locale
        self._tasks = task_runner or TaskRunner()
        self._lock = threading.RLock()
        self._loaded: Set[Tuple[Locale, Namespace]] = set()
        self._pending_loads: Set[Tuple[Locale, Namespace]] = set()
        self._pending_saves: Set[Tuple[Locale, Namespace, Key]] = set()
        self._placeholders: Dict[Tuple[Locale, Namespace], Set[Key]] = {}
        self._listeners: List[Listener] = []

        for plugin in plugins or ():
            self.plugins.register(plugin)

        if config.discover_plugins:
            for plugin in discover_plugins():
                if not self.plugins.has(plugin.metadata.name):
                    self.plugins.register(plugin)

        logger.info(
            "initialized_translation_service",
            locale=self._locale,
            fallback_locale=self._fallback_locale,
            message_format=config.message_format,
            pluralization_strategy=config.pluralization_strategy,
            plugin_count=len(self.plugins.get_all()),
        )

    def get_locale(self) -> Locale:
        return self._locale

    @property
    def fallback_locale(self) -> Optional[Locale]:
        return self._fallback_locale

    def t(
        self,
        key: str,
        default_or_vars: Optional[Any] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Translate a key.

        Never blocks and never raises. When nothing is found the default
        text is rendered, or the raw key is returned so the gap is visible.

        Args:
            key: Translation key ("ns.key", "ns:key", "a:b:key" or "key").
            default_or_vars: Default text, or a variables mapping that may
                carry the default under ``default_value``.
            options: Variables when the second argument is default text.

        Returns:
            Rendered translation.
        """
        default_text, variables = _split_arguments(default_or_vars, options)
        parsed = self.key_parser.parse(key)

        context = PluginContext(
            locale=self._locale,
            namespace=parsed.namespace,
            key=parsed.key,
            vars=variables,
        )
        self.plugins.execute_hook(PluginHook.BEFORE_TRANSLATE, context)

        locale = context.locale or self._locale
        namespace = context.namespace or parsed.namespace
        actual_key = context.key or parsed.key
        variables = context.vars or {}

        found = self._lookup(locale, namespace, actual_key, variables)
        if found is None:
            template = default_text or key
            template_locale = locale
            self._handle_missing(locale, namespace, actual_key, template, context)
        else:
            template, template_locale = found

        rendered = self._render(template, variables, template_locale)

        context.result = rendered
        self.plugins.execute_hook(PluginHook.AFTER_TRANSLATE, context)
        if context.result is None:
            return rendered
        return context.result if isinstance(context.result, str) else str(context.result)

    def has(self, key: str, locale: Optional[Locale] = None) -> bool:
        """Check whether ``key`` has a translation in ``locale`` (default: current)."""
        parsed = self.key_parser.parse(key)
        with self._lock:
            return self.store.has(locale or self._locale, parsed.namespace, parsed.key)

    def set_locale(self, locale: Locale) -> None:
        """Switch the current locale, run on_locale_change and notify subscribers."""
        old_locale = self._locale
        self._locale = locale
        logger.info("locale_changed", old_locale=old_locale, new_locale=locale)

        self.plugins.execute_hook(
            PluginHook.ON_LOCALE_CHANGE,
            PluginContext(
                locale=locale,
                data={"old_locale": old_locale, "new_locale": locale},
            ),
        )
        self._notify()

    def add_translations(
        self, locale: Locale, namespace: Namespace, translations: Mapping[str, Any]
    ) -> None:
        """Replace a namespace's translations and notify subscribers."""
        with self._lock:
            self.store.set_namespace(locale, namespace, translations)
            self._loaded.add((locale, namespace))
        logger.debug(
            "translations_added",
            locale=locale,
            namespace=namespace,
            key_count=len(translations),
        )
        self._notify()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every add_translations and set_locale.

        Returns:
            Function removing the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    async def load_namespace(self, namespace: Namespace, locale: Optional[Locale] = None) -> bool:
        """Load a namespace now, sharing dedup with the missing-key path.

        Returns:
            True if the namespace is loaded once this returns.
        """
        locale = locale or self._locale
        pair = (locale, namespace)
        with self._lock:
            if pair in self._loaded:
                return True
            if self.loader is None:
                return False
            in_flight = pair in self._pending_loads
            if not in_flight:
                self._pending_loads.add(pair)

        if in_flight:
            await self._tasks.drain()
            with self._lock:
                return pair in self._loaded

        return await self._load(locale, namespace)

    async def drain(self) -> None:
        """Wait for all background loads and saves to settle."""
        await self._tasks.drain()

    def wait_for_pending(self, timeout: Optional[float] = None) -> bool:
        """Blocking wait for background work started outside an event loop."""
        return self._tasks.wait(timeout)

    def close(self) -> None:
        """Unregister all plugins and stop background work."""
        self.plugins.clear()
        self._tasks.close()
        logger.info("translation_service_closed")

    def _lookup(
        self,
        locale: Locale,
        namespace: Namespace,
        key: Key,
        variables: Mapping[str, Any],
    ) -> Optional[Tuple[str, Locale]]:
        locales = [locale]
        if self._fallback_locale and self._fallback_locale != locale:
            locales.append(self._fallback_locale)

        count = variables.get("count")
        if is_number(count):
            found = self._find(locales, namespace, f"{key}_{count_suffix(count)}")
            if found is not None:
                return found

            resolution = self.plural_resolver.resolve(
                key,
                count,
                locale,
                key_exists=lambda candidate: self._find(locales, namespace, candidate) is not None,
            )
            if resolution.key != key:
                found = self._find(locales, namespace, resolution.key)
                if found is not None:
                    return found

        return self._find(locales, namespace, key)

    def _find(
        self, locales: List[Locale], namespace: Namespace, key: Key
    ) -> Optional[Tuple[str, Locale]]:
        with self._lock:
            for locale in locales:
                value = self.store.get(locale, namespace, key)
                if value is not None:
                    return value, locale
        return None

    def _render(self, template: str, variables: Mapping[str, Any], locale: Locale) -> str:
        try:
            return self.formatter.interpolate(template, variables, locale)
        except Exception as e:
            logger.error("translation_format_failed", template=template, error=str(e))
            return template

    def _handle_missing(
        self,
        locale: Locale,
        namespace: Namespace,
        key: Key,
        fallback_value: str,
        context: PluginContext,
    ) -> None:
        logger.debug("translation_missing", locale=locale, namespace=namespace, key=key)

        with self._lock:
            if not self.store.has(locale, namespace, key):
                self.store.set(locale, namespace, key, fallback_value)
                self._placeholders.setdefault((locale, namespace), set()).add(key)

        self.plugins.execute_hook(PluginHook.ON_MISSING, context)

        if self.saver is not None and self.config.save_missing:
            self._schedule_save(locale, namespace, key, fallback_value)
        if self.loader is not None:
            self._schedule_load(locale, namespace)

    def _schedule_save(self, locale: Locale, namespace: Namespace, key: Key, value: str) -> None:
        triple = (locale, namespace, key)
        with self._lock:
            if triple in self._pending_saves:
                return
            self._pending_saves.add(triple)

        if not self._tasks.spawn(self._save(locale, namespace, key, value)):
            with self._lock:
                self._pending_saves.discard(triple)

    async def _save(self, locale: Locale, namespace: Namespace, key: Key, value: str) -> None:
        try:
            await self.saver.save(locale, namespace, key, value)
            logger.info("missing_key_saved", locale=locale, namespace=namespace, key=key)
        except Exception as e:
            logger.error(
                "missing_key_save_failed",
                locale=locale,
                namespace=namespace,
                key=key,
                error=str(e),
            )
        finally:
            with self._lock:
                self._pending_saves.discard((locale, namespace, key))

    def _schedule_load(self, locale: Locale, namespace: Namespace) -> None:
        pair = (locale, namespace)
        with self._lock:
            if pair in self._loaded or pair in self._pending_loads:
                return
            self._pending_loads.add(pair)

        logger.debug("namespace_load_triggered", locale=locale, namespace=namespace)
        if not self._tasks.spawn(self._load(locale, namespace)):
            with self._lock:
                self._pending_loads.discard(pair)

    async def _load(self, locale: Locale, namespace: Namespace) -> bool:
        """Run the loader; the caller has already marked the load as pending."""
        try:
            try:
                data = await self.loader.load(locale, namespace)
            except Exception as e:
                logger.error(
                    "namespace_load_failed", locale=locale, namespace=namespace, error=str(e)
                )
                return False

            if data is None:
                logger.warning("namespace_unavailable", locale=locale, namespace=namespace)
                return False

            with self._lock:
                merged = self._merge_loaded(locale, namespace, data)
            self.add_translations(locale, namespace, merged)
            logger.info(
                "namespace_loaded", locale=locale, namespace=namespace, key_count=len(data)
            )

            self.plugins.execute_hook(
                PluginHook.ON_LOAD,
                PluginContext(locale=locale, namespace=namespace, data=dict(data)),
            )
            return True
        finally:
            with self._lock:
                self._pending_loads.discard((locale, namespace))

    def _merge_loaded(
        self, locale: Locale, namespace: Namespace, data: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """Overlay loaded data on the namespace, dropping placeholders it resolves.

        Placeholders are stored under the flat dotted key, which a direct
        lookup would otherwise prefer over the loaded nested value.
        """
        current: Dict[str, Any] = self.store.get_namespace(locale, namespace)
        placeholders = self._placeholders.pop((locale, namespace), set())
        if placeholders:
            loaded = MemoryStore()
            loaded.set_namespace(locale, namespace, data)
            for key in placeholders:
                if loaded.has(locale, namespace, key):
                    current.pop(key, None)
        return {**current, **data}

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error("translation_listener_failed", error=str(e))


def _split_arguments(
    default_or_vars: Optional[Any], options: Optional[Mapping[str, Any]]
) -> Tuple[Optional[str], Dict[str, Any]]:
    """Normalize the (default text | variables, variables) call shapes."""
    default_text: Optional[str] = None
    variables: Dict[str, Any] = {}

    if isinstance(default_or_vars, str):
        default_text = default_or_vars
    elif isinstance(default_or_vars, Mapping):
        variables.update(default_or_vars)
    if options:
        variables.update(options)

    for name in ("default_value", "defaultValue"):
        value = variables.pop(name, None)
        if default_text is None and isinstance(value, str):
            default_text = value

    return default_text, variables
