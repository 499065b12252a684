"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    FakeLoader,
    FakeSaver,
    RecordingPlugin,
    make_config,
    make_plugin_context,
    make_plugin_metadata,
    make_translations,
)

__all__ = [
    "FakeLoader",
    "FakeSaver",
    "RecordingPlugin",
    "make_config",
    "make_plugin_context",
    "make_plugin_metadata",
    "make_translations",
]
