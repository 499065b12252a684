"""Translation key parsers.

Two independent rule sets live here:

- RuntimeKeyParser: splits a key into (namespace, key) for lookups.
- FileKeyParser: splits a key into directories, file and property path for
  the extraction tooling.

The two are not interchangeable: "home.title" is namespace "home" at runtime
but property path ["home", "title"] of the "global" file for the tooling.
"""

import re
from typing import Callable, Optional

from bakery.i18n.exceptions import KeyParseError
from bakery.i18n.models import Locale, ParsedKey, RuntimeKey

_COLON_RUNS = re.compile(r":+")
_DOT_RUNS = re.compile(r"\.+")
_EDGE_SEPARATORS = re.compile(r"^[\s:.]+|[\s:.]+$")


def normalize_key(key: str) -> str:
    """Collapse separator runs and trim separators and whitespace.

    Idempotent: normalize_key(normalize_key(x)) == normalize_key(x).

    Args:
        key: Raw key.

    Returns:
        Normalized key, or "" for non-string input.
    """
    if not isinstance(key, str):
        return ""
    key = _COLON_RUNS.sub(":", key.strip())
    key = _DOT_RUNS.sub(".", key)
    return _EDGE_SEPARATORS.sub("", key)


class RuntimeKeyParser:
    """Runtime key parser.

    Rules:
        - With a colon, split at the last colon. The left side is the
          namespace with remaining colons turned into '/', the right side is
          the key as-is ("home:hero:title" -> "home/hero", "title").
        - Without a colon, split at the first dot ("common.nav.home" ->
          "common", "nav.home").
        - Without either, the namespace is the default namespace, or the
          current locale when none is configured.

    Never raises; malformed input degrades to the default namespace.
    """

    def __init__(
        self,
        default_namespace: Optional[str] = None,
        locale_provider: Optional[Callable[[], Locale]] = None,
    ):
        self.default_namespace = default_namespace
        self._locale_provider = locale_provider

    def normalize(self, key: str) -> str:
        return normalize_key(key)

    def parse(self, key: str) -> RuntimeKey:
        """Split a key into namespace and key.

        Args:
            key: Raw translation key.

        Returns:
            RuntimeKey with namespace and key.
        """
        normalized = self.normalize(key)

        if ":" in normalized:
            namespace, _, actual_key = normalized.rpartition(":")
            return RuntimeKey(namespace=namespace.replace(":", "/"), key=actual_key)

        if "." in normalized:
            namespace, _, actual_key = normalized.partition(".")
            return RuntimeKey(namespace=namespace, key=actual_key)

        return RuntimeKey(namespace=self._fallback_namespace(), key=normalized)

    def _fallback_namespace(self) -> str:
        if self.default_namespace:
            return self.default_namespace
        if self._locale_provider is not None:
            return self._locale_provider()
        return "common"


class FileKeyParser:
    """Tooling key parser mapping keys onto translation files.

    Colons separate directories and dots separate the file from the property
    path. Examples:

        "login"                         -> file "common", ["login"]
        "auth:login"                    -> file "auth", ["login"]
        "user.profile.name"             -> file "global", ["user", "profile", "name"]
        "orders:meal.user.name"         -> dirs ["orders"], file "meal", ["user", "name"]
        "app:orders:meal.component.title"
            -> dirs ["app", "orders", "meal"], file "component", ["title"]
    """

    def normalize(self, key: str) -> str:
        return normalize_key(key)

    def parse(self, key: str) -> ParsedKey:
        """Parse a key into file components.

        Raises:
            KeyParseError: If key is not a string or is empty once normalized.
        """
        if not isinstance(key, str):
            raise KeyParseError(
                f"Translation key must be a string, got {type(key).__name__}"
            )
        normalized = self.normalize(key)
        if not normalized:
            raise KeyParseError(f"Translation key is empty after normalization: {key!r}")

        colon_parts = normalized.split(":")
        directories = colon_parts[:-1]
        dot_parts = colon_parts[-1].split(".")

        if len(dot_parts) == 1:
            if directories:
                file = directories.pop()
                return self._build(directories, file, dot_parts, key)
            return self._build([], "common", dot_parts, key)

        if not directories:
            return self._build([], "global", dot_parts, key)

        if len(dot_parts) == 2 or len(directories) == 1:
            return self._build(directories, dot_parts[0], dot_parts[1:], key)

        return self._build(
            directories + dot_parts[:-2], dot_parts[-2], dot_parts[-1:], key
        )

    @staticmethod
    def _build(directories, file, property_path, original_key) -> ParsedKey:
        return ParsedKey(
            directories=tuple(directories),
            file=file,
            property_path=tuple(property_path),
            original_key=original_key,
        )
