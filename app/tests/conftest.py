"""Shared fixtures for the test suite."""

import logging

import pytest
import structlog

from bakery.i18n.store import MemoryStore
from tests.factories.i18n import (
    FakeLoader,
    FakeSaver,
    make_config,
    make_translations,
)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Route structlog through stdlib with the root level above CRITICAL."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    root_level = logging.root.level
    logging.root.setLevel(logging.CRITICAL + 1)
    yield
    logging.root.setLevel(root_level)
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Keep I18N_* variables and a local .env file out of the settings."""
    for name in (
        "I18N_LOCALE",
        "I18N_FALLBACK_LOCALE",
        "I18N_DEFAULT_NAMESPACE",
        "I18N_SAVE_MISSING",
        "I18N_PLURALIZATION_STRATEGY",
        "I18N_MESSAGE_FORMAT",
        "I18N_PLURAL_SUFFIX",
        "I18N_ESCAPE_HTML",
        "I18N_DISCOVER_PLUGINS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config():
    """Default engine settings (en, suffix plurals, mustache)."""
    return make_config()


@pytest.fixture
def populated_store():
    """MemoryStore holding the en and es sample translations."""
    store = MemoryStore()
    for locale in ("en", "es"):
        for namespace, translations in make_translations(locale).items():
            store.set_namespace(locale, namespace, translations)
    return store


@pytest.fixture
def fake_loader():
    return FakeLoader(
        data={
            ("en", "dashboard"): {"title": "Dashboard", "subtitle": "Your stats"},
            ("es", "dashboard"): {"title": "Panel"},
        }
    )


@pytest.fixture
def fake_saver():
    return FakeSaver()
