"""HTTP translation backend."""

import asyncio
from typing import Any, Dict, Optional

import requests

from bakery.i18n.backends import TranslationLoader
from bakery.i18n.models import Locale, Namespace, PluginConfig, PluginMetadata, PluginType
from bakery.i18n.plugins.base import Plugin
from bakery.logging import get_module_logger

logger = get_module_logger()


class HttpBackend(Plugin, TranslationLoader):
    """Loads namespaces over HTTP.

    ``load_path`` is a URL pattern with ``{{lng}}`` and ``{{ns}}``
    placeholders. When ``manifest_path`` is set, the manifest (a JSON object
    mapping "locale/namespace" to a URL) is fetched during ``init`` and its
    entries take precedence over ``load_path``.

    Usage:
        backend = HttpBackend(load_path="https://cdn.example.com/locales/{{lng}}/{{ns}}.json")
        service = TranslationService(config, loader=backend, plugins=[backend])
    """

    metadata = PluginMetadata(
        name="http-backend",
        version="1.0.0",
        type=PluginType.BACKEND,
        description="Loads translations over HTTP",
    )

    def __init__(
        self,
        load_path: str,
        manifest_path: Optional[str] = None,
        timeout: float = 10.0,
        request_options: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            PluginConfig(options={"load_path": load_path, "manifest_path": manifest_path})
        )
        self.load_path = load_path
        self.manifest_path = manifest_path
        self.timeout = timeout
        self.request_options = request_options or {}
        self.manifest: Optional[Dict[str, str]] = None

    def init(self, options: Optional[Dict[str, Any]] = None) -> None:
        """Fetch the manifest if one is configured; failures are logged."""
        if not self.manifest_path:
            return
        manifest = self._fetch_json(self.manifest_path)
        if isinstance(manifest, dict):
            self.manifest = manifest
            logger.info("http_manifest_loaded", url=self.manifest_path, entries=len(manifest))

    async def load(self, locale: Locale, namespace: Namespace) -> Optional[Dict[str, Any]]:
        url = self.resolve_url(locale, namespace)
        data = await asyncio.to_thread(self._fetch_json, url)
        return data if isinstance(data, dict) else None

    def resolve_url(self, locale: Locale, namespace: Namespace) -> str:
        if self.manifest:
            entry = self.manifest.get(f"{locale}/{namespace}")
            if entry:
                return entry
        return self.load_path.replace("{{lng}}", locale).replace("{{ns}}", namespace)

    def _fetch_json(self, url: str) -> Optional[Any]:
        try:
            response = requests.get(url, timeout=self.timeout, **self.request_options)
        except requests.RequestException as e:
            logger.error("http_backend_request_failed", url=url, error=str(e))
            return None

        if not response.ok:
            logger.warning(
                "http_backend_bad_status", url=url, status_code=response.status_code
            )
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("http_backend_invalid_json", url=url, error=str(e))
            return None
