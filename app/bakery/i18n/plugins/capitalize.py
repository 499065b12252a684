"""Text case transformations selected by key suffix."""

from typing import Optional

from bakery.i18n.models import PluginContext, PluginMetadata, PluginType
from bakery.i18n.plugins.base import Plugin

_SUFFIXES = (
    ("_upper", "upper"),
    ("_lower", "lower"),
    ("_capitalize", "capitalize"),
    ("_title", "title"),
)


class CapitalizePlugin(Plugin):
    """Applies a case transform requested through a key suffix.

    t("greeting_upper") looks up "greeting" and upper-cases the result.
    Supported suffixes: _upper, _lower, _capitalize, _title.
    """

    metadata = PluginMetadata(
        name="capitalize",
        version="1.0.0",
        type=PluginType.PROCESSOR,
        description="Provides text transformation (uppercase, lowercase, capitalize)",
    )

    def before_translate(self, context: PluginContext) -> Optional[dict]:
        if not context.key:
            return None
        for suffix, transform in _SUFFIXES:
            if context.key.endswith(suffix) and len(context.key) > len(suffix):
                return {
                    "key": context.key[: -len(suffix)],
                    "data": {**context.data, "transform": transform},
                }
        return None

    def after_translate(self, context: PluginContext) -> Optional[str]:
        transform = context.data.get("transform")
        if not context.result or not transform:
            return None
        if transform == "upper":
            return context.result.upper()
        if transform == "lower":
            return context.result.lower()
        if transform == "capitalize":
            return _capitalize(context.result)
        if transform == "title":
            return " ".join(_capitalize(word) for word in context.result.split(" "))
        return None


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]
