"""Translation models for the i18n engine.

Defines the data structures shared by the key parsers, the store, the
pluralization strategies and the plugin pipeline.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

Locale = str
Namespace = str
Key = str
TranslationMap = Dict[Key, Any]
NamespaceMap = Dict[Namespace, TranslationMap]


class PluralCategory(str, Enum):
    """CLDR plural categories."""

    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


@dataclass(frozen=True)
class RuntimeKey:
    """A key split by the runtime parser.

    Attributes:
        namespace: Namespace bucket (hierarchical namespaces use '/').
        key: Key inside the namespace; may contain dots for nested lookups.
    """

    namespace: Namespace
    key: Key

    def __str__(self) -> str:
        return f"{self.namespace}:{self.key}"


@dataclass(frozen=True)
class ParsedKey:
    """A key split by the file-oriented tooling parser.

    Example: "orders:meal.orderComponent.title" has directories
    ["orders", "meal"], file "orderComponent" and property path ["title"].
    """

    directories: Tuple[str, ...]
    file: str
    property_path: Tuple[str, ...]
    original_key: str


@dataclass(frozen=True)
class PluralResolutionResult:
    """Outcome of a plural key resolution.

    Attributes:
        key: Concrete key to look up.
        category: CLDR category, or 'plural'/'singular' for the suffix strategy.
        exact_match: True when an exact-count key (key_<count>) was chosen.
    """

    key: Key
    category: Optional[str] = None
    exact_match: bool = False


class PluginType(str, Enum):
    """Plugin kinds, distinguished by metadata only."""

    FORMATTER = "formatter"
    BACKEND = "backend"
    DETECTOR = "detector"
    PROCESSOR = "processor"
    MIDDLEWARE = "middleware"


@dataclass(frozen=True)
class PluginMetadata:
    """Static description of a plugin.

    Attributes:
        name: Unique plugin name.
        version: Plugin version string.
        type: Plugin kind.
        description: Optional human readable description.
        author: Optional author.
        dependencies: Names of plugins that must be registered first.
    """

    name: str
    version: str
    type: PluginType
    description: Optional[str] = None
    author: Optional[str] = None
    dependencies: Tuple[str, ...] = ()


@dataclass
class PluginConfig:
    """Runtime configuration of a registered plugin."""

    enabled: bool = True
    options: Dict[str, Any] = field(default_factory=dict)

    def merged(self, other: Optional["PluginConfig"]) -> "PluginConfig":
        """Return a copy with ``other`` applied on top."""
        if other is None:
            return PluginConfig(enabled=self.enabled, options=dict(self.options))
        return PluginConfig(
            enabled=other.enabled,
            options={**self.options, **other.options},
        )


@dataclass
class PluginContext:
    """Mutable record threaded through a single translation call.

    Plugins may replace ``key``, ``vars``, ``result`` and ``data``; they must
    not keep a reference once their hook returns.
    """

    locale: Locale
    namespace: Optional[Namespace] = None
    key: Optional[Key] = None
    vars: Dict[str, Any] = field(default_factory=dict)
    result: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def update(self, changes: Mapping[str, Any]) -> None:
        """Shallow-merge a partial context into this one.

        Unknown field names are ignored.
        """
        for name, value in changes.items():
            if name in _CONTEXT_FIELDS:
                setattr(self, name, value)

    def snapshot(self) -> "PluginContext":
        """Shallow copy used to restore the context after a failed hook."""
        return PluginContext(
            locale=self.locale,
            namespace=self.namespace,
            key=self.key,
            vars=dict(self.vars),
            result=self.result,
            data=dict(self.data),
        )

    def restore(self, snapshot: "PluginContext") -> None:
        for name in _CONTEXT_FIELDS:
            setattr(self, name, getattr(snapshot, name))


_CONTEXT_FIELDS: List[str] = ["locale", "namespace", "key", "vars", "result", "data"]
