"""Tests for bakery.i18n.plugins.manager module."""

# pylint: disable=protected-access

import threading
from unittest.mock import MagicMock

import pytest

from bakery.i18n.exceptions import PluginDependencyError, PluginRegistrationError
from bakery.i18n.models import PluginConfig, PluginContext, PluginType
from bakery.i18n.plugins import PluginHook, PluginManager
from tests.factories.i18n import RecordingPlugin, make_plugin_context, make_plugin_metadata


@pytest.fixture
def manager():
    return PluginManager()


class TestRegistration:
    """Tests for register() / unregister()."""

    def test_register_calls_init_with_options(self, manager):
        plugin = RecordingPlugin()
        manager.register(plugin, PluginConfig(options={"level": 2}))
        assert plugin.init_options == {"level": 2}
        assert manager.has("recorder")
        assert manager.get("recorder") is plugin

    def test_register_merges_config_over_plugin_config(self, manager):
        plugin = RecordingPlugin()
        plugin.config = PluginConfig(options={"a": 1, "b": 1})
        manager.register(plugin, PluginConfig(options={"b": 2}))
        assert plugin.config.options == {"a": 1, "b": 2}

    def test_duplicate_name_is_rejected(self, manager):
        manager.register(RecordingPlugin("dup"))
        with pytest.raises(PluginRegistrationError) as exc_info:
            manager.register(RecordingPlugin("dup"))
        assert exc_info.value.plugin_name == "dup"

    def test_missing_dependency_is_rejected(self, manager):
        with pytest.raises(PluginRegistrationError, match="depends on 'base'"):
            manager.register(RecordingPlugin("child", dependencies=("base",)))
        assert not manager.has("child")

    def test_dependency_registered_first(self, manager):
        manager.register(RecordingPlugin("base"))
        manager.register(RecordingPlugin("child", dependencies=("base",)))
        assert manager.has("child")

    def test_init_failure_is_wrapped(self, manager):
        plugin = RecordingPlugin("broken", fail_on=("init",))
        with pytest.raises(PluginRegistrationError) as exc_info:
            manager.register(plugin)
        assert exc_info.value.plugin_name == "broken"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert not manager.has("broken")

    def test_plugin_without_init_or_destroy(self, manager):
        plugin = MagicMock(spec=["metadata", "config"])
        plugin.metadata = make_plugin_metadata("bare")
        plugin.config = None
        manager.register(plugin)
        assert plugin.config == PluginConfig()
        assert manager.unregister("bare") is True

    def test_unregister_calls_destroy(self, manager):
        plugin = RecordingPlugin()
        manager.register(plugin)
        assert manager.unregister("recorder") is True
        assert plugin.destroyed is True
        assert not manager.has("recorder")

    def test_unregister_unknown(self, manager):
        assert manager.unregister("nope") is False

    def test_unregister_blocked_by_dependent(self, manager):
        manager.register(RecordingPlugin("base"))
        manager.register(RecordingPlugin("child", dependencies=("base",)))
        with pytest.raises(PluginDependencyError) as exc_info:
            manager.unregister("base")
        assert exc_info.value.plugin_name == "base"
        assert exc_info.value.dependent == "child"
        assert manager.has("base")

    def test_destroy_failure_is_not_propagated(self, manager):
        manager.register(RecordingPlugin(fail_on=("destroy",)))
        assert manager.unregister("recorder") is True
        assert not manager.has("recorder")

    def test_clear_unregisters_dependents_first(self, manager):
        log = []
        manager.register(RecordingPlugin("base", log=log))
        manager.register(RecordingPlugin("child", dependencies=("base",), log=log))
        manager.clear()
        assert manager.get_all() == []
        destroys = [name for name, hook in log if hook == "destroy"]
        assert destroys == ["child", "base"]

    def test_get_by_type(self, manager):
        recorder = RecordingPlugin()
        other = RecordingPlugin("fmt")
        other.metadata = make_plugin_metadata("fmt", PluginType.FORMATTER)
        manager.register(recorder)
        manager.register(other)
        assert manager.get_by_type(PluginType.FORMATTER) == [other]
        assert manager.get_by_type("middleware") == [recorder]

    def test_lookups_wait_for_registry_lock(self, manager):
        plugin = RecordingPlugin("first")
        manager.register(plugin)
        holding = threading.Event()
        release = threading.Event()
        results = []

        def hold_lock():
            with manager._lock:
                holding.set()
                release.wait(timeout=5)

        holder = threading.Thread(target=hold_lock)
        holder.start()
        assert holding.wait(timeout=5)

        reader = threading.Thread(
            target=lambda: results.append((manager.has("first"), manager.get("first")))
        )
        reader.start()
        reader.join(timeout=0.1)
        assert results == []

        release.set()
        reader.join(timeout=5)
        holder.join(timeout=5)
        assert results == [(True, plugin)]


class TestExecuteHook:
    """Tests for execute_hook()."""

    def test_runs_in_registration_order(self, manager):
        log = []
        for name in ("first", "second", "third"):
            manager.register(RecordingPlugin(name, log=log))
        log.clear()
        manager.execute_hook(PluginHook.ON_MISSING, make_plugin_context())
        assert log == [("first", "on_missing"), ("second", "on_missing"), ("third", "on_missing")]

    def test_disabled_plugins_are_skipped(self, manager):
        log = []
        manager.register(RecordingPlugin("on", log=log))
        manager.register(RecordingPlugin("off", log=log), PluginConfig(enabled=False))
        log.clear()
        manager.execute_hook(PluginHook.ON_MISSING, make_plugin_context())
        assert log == [("on", "on_missing")]

    def test_before_translate_merges_partial_context(self, manager):
        manager.register(RecordingPlugin(before={"key": "other", "vars": {"x": 1}, "bogus": 1}))
        context = make_plugin_context(key="greeting")
        manager.execute_hook(PluginHook.BEFORE_TRANSLATE, context)
        assert context.key == "other"
        assert context.vars == {"x": 1}
        assert context.namespace == "common"

    def test_before_translate_accepts_context_return(self, manager):
        replacement = PluginContext(locale="fr", namespace="ns", key="k")
        manager.register(RecordingPlugin(before=replacement))
        context = make_plugin_context()
        manager.execute_hook(PluginHook.BEFORE_TRANSLATE, context)
        assert (context.locale, context.namespace, context.key) == ("fr", "ns", "k")

    def test_after_translate_last_non_none_wins(self, manager):
        manager.register(RecordingPlugin("a", after="first"))
        manager.register(RecordingPlugin("b", after=None))
        manager.register(RecordingPlugin("c", after="last"))
        context = make_plugin_context(result="original")
        manager.execute_hook(PluginHook.AFTER_TRANSLATE, context)
        assert context.result == "last"

    def test_failing_hook_does_not_stop_others(self, manager):
        log = []
        manager.register(RecordingPlugin("bad", fail_on=("on_missing",), log=log))
        manager.register(RecordingPlugin("good", log=log))
        log.clear()
        manager.execute_hook(PluginHook.ON_MISSING, make_plugin_context())
        assert ("good", "on_missing") in log

    def test_failing_hook_restores_context(self, manager):
        class Corrupting(RecordingPlugin):
            def before_translate(self, context):
                context.key = "corrupted"
                context.vars["junk"] = True
                raise RuntimeError("boom")

        manager.register(Corrupting("corrupting"))
        context = make_plugin_context(key="greeting", variables={"name": "Ada"})
        manager.execute_hook(PluginHook.BEFORE_TRANSLATE, context)
        assert context.key == "greeting"
        assert context.vars == {"name": "Ada"}

    def test_on_load_receives_arguments(self, manager):
        plugin = MagicMock(spec=["metadata", "config", "on_load"])
        plugin.metadata = make_plugin_metadata("loader-watch")
        plugin.config = PluginConfig()
        manager.register(plugin)
        context = PluginContext(locale="en", namespace="home", data={"title": "Hi"})
        manager.execute_hook(PluginHook.ON_LOAD, context)
        plugin.on_load.assert_called_once_with("en", "home", {"title": "Hi"})

    def test_on_locale_change_receives_locales(self, manager):
        plugin = MagicMock(spec=["metadata", "config", "on_locale_change"])
        plugin.metadata = make_plugin_metadata("locale-watch")
        plugin.config = PluginConfig()
        manager.register(plugin)
        context = PluginContext(locale="fr", data={"old_locale": "en", "new_locale": "fr"})
        manager.execute_hook("on_locale_change", context)
        plugin.on_locale_change.assert_called_once_with("en", "fr")

    def test_plugins_without_hook_are_skipped(self, manager):
        plugin = MagicMock(spec=["metadata", "config"])
        plugin.metadata = make_plugin_metadata("inert")
        plugin.config = PluginConfig()
        manager.register(plugin)
        context = make_plugin_context(result="x")
        assert manager.execute_hook(PluginHook.AFTER_TRANSLATE, context) is context
        assert context.result == "x"
