"""Factory functions for creating translation services.

Provides a convenience entry point wiring configuration, loader, saver and
plugins into a TranslationService. Each call returns a new, independent
instance; there is no process-wide service.
"""

from typing import Any, Iterable, Optional

from bakery.configuration import I18nSettings
from bakery.i18n.backends import TranslationLoader, TranslationSaver
from bakery.i18n.service import TranslationService
from bakery.logging import get_module_logger

logger = get_module_logger()


def create_translation_service(
    config: Optional[I18nSettings] = None,
    *,
    loader: Optional[TranslationLoader] = None,
    saver: Optional[TranslationSaver] = None,
    plugins: Optional[Iterable[Any]] = None,
    **overrides: Any,
) -> TranslationService:
    """Create and configure a TranslationService instance.

    Args:
        config: Engine settings (default: read from the environment)
        loader: Loader used to fetch namespaces on a miss
        saver: Saver used to persist missing keys when save_missing is on
        plugins: Plugins to register, in order
        **overrides: Settings fields overriding ``config``

    Returns:
        TranslationService: Configured service instance

    Raises:
        PluginRegistrationError: If a plugin cannot be registered
        pydantic.ValidationError: If an override has an invalid value

    Usage:
        # Defaults from the environment
        service = create_translation_service()

        # Explicit settings with an HTTP backend
        backend = HttpBackend("https://cdn.example.com/locales/{{lng}}/{{ns}}.json")
        service = create_translation_service(
            locale="fr",
            fallback_locale="en",
            loader=backend,
            plugins=[backend],
        )
    """
    service = TranslationService(
        config,
        loader=loader,
        saver=saver,
        plugins=plugins,
        **overrides,
    )
    logger.info(
        "translation_service_created",
        locale=service.get_locale(),
        has_loader=loader is not None,
        has_saver=saver is not None,
    )
    return service
