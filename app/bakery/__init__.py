"""i18n-bakery - translation resolution and formatting engine."""

__version__ = "0.4.0"
