"""Feature-level fixtures for translation service tests."""

import pytest

from bakery.i18n.service import TranslationService
from tests.factories.i18n import make_config, make_translations


@pytest.fixture
def service_factory():
    """Build TranslationService instances and close them after the test.

    Usage:
        service = service_factory(fallback_locale="es", loader=loader)
    """
    created = []

    def _create(translations=True, **kwargs):
        components = {
            name: kwargs.pop(name)
            for name in ("loader", "saver", "plugins", "store", "formatter", "plural_resolver")
            if name in kwargs
        }
        service = TranslationService(make_config(**kwargs), **components)
        if translations:
            for locale in ("en", "es"):
                for namespace, data in make_translations(locale).items():
                    service.add_translations(locale, namespace, data)
        created.append(service)
        return service

    yield _create

    for service in created:
        service.close()


@pytest.fixture
def service(service_factory):
    """Service with en/es sample translations, English current, no fallback."""
    return service_factory()
