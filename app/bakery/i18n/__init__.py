"""i18n engine - translation resolution and formatting.

Resolves translation keys into rendered text with namespace parsing, locale
fallback, pluralization, message formatting, plugin hooks and background
loading of missing namespaces.

Main components:
- keys: RuntimeKeyParser (lookups) and FileKeyParser (tooling)
- store: MemoryStore
- formatters: MustacheFormatter and ICUMessageFormatter
- plurals: SuffixPluralResolver and CLDRPluralResolver
- plugins: PluginManager, built-in plugins and entry point discovery
- backends: TranslationLoader / TranslationSaver contracts
- service: TranslationService orchestrator
"""

from bakery.i18n.backends import LoggingSaver, TranslationLoader, TranslationSaver
from bakery.i18n.exceptions import (
    I18nError,
    KeyParseError,
    PluginDependencyError,
    PluginError,
    PluginRegistrationError,
)
from bakery.i18n.factory import create_translation_service
from bakery.i18n.formatters import (
    Formatter,
    ICUMessageFormatter,
    MustacheFormatter,
    create_formatter,
)
from bakery.i18n.keys import FileKeyParser, RuntimeKeyParser, normalize_key
from bakery.i18n.models import (
    ParsedKey,
    PluginConfig,
    PluginContext,
    PluginMetadata,
    PluginType,
    PluralCategory,
    PluralResolutionResult,
    RuntimeKey,
)
from bakery.i18n.plugins import Plugin, PluginHook, PluginManager
from bakery.i18n.plurals import (
    CLDRPluralResolver,
    PluralResolver,
    SuffixPluralResolver,
    create_plural_resolver,
)
from bakery.i18n.service import TranslationService
from bakery.i18n.store import MemoryStore
from bakery.i18n.tasks import TaskRunner

__all__ = [
    "CLDRPluralResolver",
    "FileKeyParser",
    "Formatter",
    "I18nError",
    "ICUMessageFormatter",
    "KeyParseError",
    "LoggingSaver",
    "MemoryStore",
    "MustacheFormatter",
    "ParsedKey",
    "Plugin",
    "PluginConfig",
    "PluginContext",
    "PluginDependencyError",
    "PluginError",
    "PluginHook",
    "PluginManager",
    "PluginMetadata",
    "PluginRegistrationError",
    "PluginType",
    "PluralCategory",
    "PluralResolutionResult",
    "PluralResolver",
    "RuntimeKey",
    "RuntimeKeyParser",
    "SuffixPluralResolver",
    "TaskRunner",
    "TranslationLoader",
    "TranslationSaver",
    "TranslationService",
    "create_formatter",
    "create_plural_resolver",
    "create_translation_service",
    "normalize_key",
]
