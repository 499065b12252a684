"""Loader and saver contracts used by the translation service.

Both are asynchronous; the service runs them as background tasks and
never awaits them from a translation call.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bakery.i18n.models import Key, Locale, Namespace, TranslationMap
from bakery.logging import get_module_logger

logger = get_module_logger()


class TranslationLoader(ABC):
    """Fetches a namespace's translations on demand."""

    @abstractmethod
    async def load(self, locale: Locale, namespace: Namespace) -> Optional[TranslationMap]:
        """Load translations for one namespace.

        Args:
            locale: Locale to load.
            namespace: Namespace to load.

        Returns:
            Translation map, or None when the namespace is not available now.
            Raising is treated the same as returning None.
        """
        pass


class TranslationSaver(ABC):
    """Persists keys that were missing at lookup time."""

    @abstractmethod
    async def save(self, locale: Locale, namespace: Namespace, key: Key, value: str) -> None:
        """Persist a missing key with its synthesized value.

        Rejections are logged by the service and not retried.
        """
        pass


class LoggingSaver(TranslationSaver):
    """Saver that only logs missing keys; useful during development."""

    async def save(self, locale: Locale, namespace: Namespace, key: Key, value: str) -> None:
        logger.info(
            "missing_key_reported",
            locale=locale,
            namespace=namespace,
            key=key,
            value=value,
        )
