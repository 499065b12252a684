"""Tests for bakery.i18n.store module."""

from bakery.i18n.store import MemoryStore


class TestMemoryStore:
    """Tests for MemoryStore."""

    def test_get_direct_key(self, populated_store):
        assert populated_store.get("en", "home", "title") == "Welcome"

    def test_get_nested_key(self, populated_store):
        assert populated_store.get("en", "home", "hero.headline") == "Bake something {{adjective}}"

    def test_direct_match_wins_over_nested(self):
        store = MemoryStore()
        store.set_namespace("en", "ns", {"a.b": "flat", "a": {"b": "nested"}})
        assert store.get("en", "ns", "a.b") == "flat"

    def test_nested_walk_stops_at_non_mapping(self):
        store = MemoryStore()
        store.set_namespace("en", "ns", {"a": "leaf"})
        assert store.get("en", "ns", "a.b") is None

    def test_nested_non_string_leaf_is_absent(self):
        store = MemoryStore()
        store.set_namespace("en", "ns", {"a": {"b": {"c": "deep"}}, "n": 5})
        assert store.get("en", "ns", "a.b") is None
        assert store.get("en", "ns", "n") is None
        assert store.get("en", "ns", "a.b.c") == "deep"

    def test_get_missing_returns_none(self, populated_store):
        assert populated_store.get("en", "home", "missing") is None
        assert populated_store.get("en", "nowhere", "title") is None
        assert populated_store.get("de", "home", "title") is None

    def test_set_creates_namespace(self):
        store = MemoryStore()
        store.set("en", "ns", "key", "value")
        assert store.get("en", "ns", "key") == "value"
        assert store.has("en", "ns", "key")

    def test_set_namespace_replaces_without_merging(self):
        store = MemoryStore()
        store.set_namespace("en", "ns", {"a": "1", "b": "2"})
        store.set_namespace("en", "ns", {"c": "3"})
        assert store.get_namespace("en", "ns") == {"c": "3"}

    def test_set_namespace_copies_input(self):
        store = MemoryStore()
        data = {"a": "1"}
        store.set_namespace("en", "ns", data)
        data["a"] = "changed"
        assert store.get("en", "ns", "a") == "1"

    def test_get_all_returns_copies(self, populated_store):
        everything = populated_store.get_all("en")
        assert set(everything) == {"common", "home"}
        everything["home"]["title"] = "changed"
        assert populated_store.get("en", "home", "title") == "Welcome"

    def test_get_all_unknown_locale(self):
        assert MemoryStore().get_all("xx") == {}

    def test_locales(self, populated_store):
        assert sorted(populated_store.locales()) == ["en", "es"]
