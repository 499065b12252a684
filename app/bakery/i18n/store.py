"""In-memory translation store."""

from typing import Any, Dict, Mapping, Optional

from bakery.i18n.models import Key, Locale, Namespace, NamespaceMap, TranslationMap


class MemoryStore:
    """Locale -> namespace -> translation map storage.

    Lookups try a direct key match first, then walk dotted keys into nested
    maps. Owned by a single TranslationService; callers synchronize access.
    """

    def __init__(self) -> None:
        self._data: Dict[Locale, NamespaceMap] = {}

    def get(self, locale: Locale, namespace: Namespace, key: Key) -> Optional[str]:
        """Retrieve a translation string.

        Args:
            locale: Locale to look in.
            namespace: Namespace to look in.
            key: Key, possibly dotted for nested maps.

        Returns:
            The string value, or None if absent or not a string leaf.
        """
        translations = self._data.get(locale, {}).get(namespace)
        if translations is None:
            return None

        direct = translations.get(key)
        if isinstance(direct, str):
            return direct

        if "." not in key:
            return None

        current: Any = translations
        for part in key.split("."):
            if not isinstance(current, Mapping):
                return None
            current = current.get(part)
            if current is None:
                return None

        return current if isinstance(current, str) else None

    def set(self, locale: Locale, namespace: Namespace, key: Key, value: str) -> None:
        self._data.setdefault(locale, {}).setdefault(namespace, {})[key] = value

    def set_namespace(
        self, locale: Locale, namespace: Namespace, translations: Mapping[str, Any]
    ) -> None:
        """Replace a whole namespace with a shallow copy of ``translations``."""
        self._data.setdefault(locale, {})[namespace] = dict(translations)

    def get_namespace(self, locale: Locale, namespace: Namespace) -> TranslationMap:
        return dict(self._data.get(locale, {}).get(namespace, {}))

    def has(self, locale: Locale, namespace: Namespace, key: Key) -> bool:
        return self.get(locale, namespace, key) is not None

    def get_all(self, locale: Locale) -> NamespaceMap:
        """Return a shallow copy of every namespace for a locale."""
        return {
            namespace: dict(translations)
            for namespace, translations in self._data.get(locale, {}).items()
        }

    def locales(self) -> list:
        return list(self._data.keys())
