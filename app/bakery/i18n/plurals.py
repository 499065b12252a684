"""Pluralization strategies.

Two strategies map (base key, count, locale) onto the concrete key to look
up:

- SuffixPluralResolver: key_<count>, key (singular), key_plural.
- CLDRPluralResolver: key_<category> using Babel's CLDR plural rules.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Union

from babel import Locale as BabelLocale
from babel import UnknownLocaleError

from bakery.configuration import I18nSettings
from bakery.i18n.models import PluralCategory, PluralResolutionResult
from bakery.logging import get_module_logger

logger = get_module_logger()

Number = Union[int, float]
KeyExists = Callable[[str], bool]


class PluralResolver(ABC):
    """Maps a base key and count onto the concrete key to look up."""

    @abstractmethod
    def resolve(
        self,
        key: str,
        count: Number,
        locale: Optional[str] = None,
        key_exists: Optional[KeyExists] = None,
    ) -> PluralResolutionResult:
        """Resolve the plural key.

        Args:
            key: Base translation key.
            count: Count driving the plural choice.
            locale: Locale for locale-aware strategies.
            key_exists: Optional predicate telling whether a key is present.

        Returns:
            PluralResolutionResult with the key to use.
        """
        pass

    @abstractmethod
    def get_category(self, count: Number, locale: Optional[str] = None) -> str:
        pass


class SuffixPluralResolver(PluralResolver):
    """Suffix plural strategy.

    Resolution order:
        1. key_<count>, if ``key_exists`` reports it (exact match)
        2. key, when count == 1 (singular)
        3. key + plural_suffix otherwise (plural)

    Example:
        >>> resolver = SuffixPluralResolver()
        >>> resolver.resolve("apple", 5).key
        'apple_plural'
    """

    def __init__(self, plural_suffix: str = "_plural"):
        self.plural_suffix = plural_suffix or "_plural"

    def resolve(
        self,
        key: str,
        count: Number,
        locale: Optional[str] = None,
        key_exists: Optional[KeyExists] = None,
    ) -> PluralResolutionResult:
        exact_key = f"{key}_{count_suffix(count)}"
        if key_exists is not None and key_exists(exact_key):
            return PluralResolutionResult(
                key=exact_key,
                category=self.get_category(count),
                exact_match=True,
            )

        if count == 1:
            return PluralResolutionResult(key=key, category="singular")

        return PluralResolutionResult(key=f"{key}{self.plural_suffix}", category="plural")

    def get_category(self, count: Number, locale: Optional[str] = None) -> str:
        if count == 0:
            return PluralCategory.ZERO.value
        if count == 1:
            return PluralCategory.ONE.value
        if count == 2:
            return PluralCategory.TWO.value
        return PluralCategory.OTHER.value


class CLDRPluralResolver(PluralResolver):
    """CLDR plural strategy backed by Babel.

    Produces ``key_<category>`` where category is one of zero, one, two,
    few, many, other. Never reports an exact match; exact-count overrides
    are applied by the caller. Locale rules are cached; unknown locales use
    English rules.

    Example:
        >>> CLDRPluralResolver().resolve("apple", 2, "ar").key
        'apple_two'
    """

    def __init__(self, default_locale: str = "en"):
        self.default_locale = default_locale
        self._rules_cache: Dict[str, BabelLocale] = {}
        self._lock = threading.Lock()

    def resolve(
        self,
        key: str,
        count: Number,
        locale: Optional[str] = None,
        key_exists: Optional[KeyExists] = None,
    ) -> PluralResolutionResult:
        category = self.get_category(count, locale)
        return PluralResolutionResult(key=f"{key}_{category}", category=category)

    def get_category(self, count: Number, locale: Optional[str] = None) -> str:
        """Cardinal CLDR category for ``count`` in ``locale``."""
        return self._rules_for(locale or self.default_locale).plural_form(count)

    def get_ordinal_category(self, count: Number, locale: Optional[str] = None) -> str:
        """Ordinal CLDR category (1st -> one, 2nd -> two, 3rd -> few in English)."""
        return self._rules_for(locale or self.default_locale).ordinal_form(count)

    def get_locale_info(self, locale: str) -> dict:
        """Describe the categories a locale uses over 0..100.

        Returns:
            Dict with ``locale``, ``categories`` (in first-seen order) and
            ``samples`` (up to five numbers per category).
        """
        categories: List[str] = []
        samples: Dict[str, List[int]] = {}
        for number in range(101):
            category = self.get_category(number, locale)
            if category not in samples:
                categories.append(category)
                samples[category] = []
            if len(samples[category]) < 5:
                samples[category].append(number)
        return {"locale": locale, "categories": categories, "samples": samples}

    def clear_cache(self) -> None:
        with self._lock:
            self._rules_cache.clear()

    def _rules_for(self, locale: str) -> BabelLocale:
        with self._lock:
            cached = self._rules_cache.get(locale)
            if cached is not None:
                return cached
            try:
                rules = BabelLocale.parse(locale.replace("-", "_"))
            except (UnknownLocaleError, ValueError, TypeError):
                logger.warning("plural_locale_unsupported", locale=locale, fallback="en")
                rules = BabelLocale.parse("en")
            self._rules_cache[locale] = rules
            return rules


def count_suffix(count: Number) -> str:
    if isinstance(count, float) and count.is_integer():
        return str(int(count))
    return str(count)


def create_plural_resolver(config: I18nSettings) -> PluralResolver:
    """Build the resolver named by ``config.pluralization_strategy``."""
    if config.pluralization_strategy == "cldr":
        return CLDRPluralResolver(default_locale=config.locale)
    return SuffixPluralResolver(plural_suffix=config.plural_suffix)
