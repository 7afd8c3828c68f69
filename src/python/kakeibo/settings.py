"""Settings persistence and downstream reconfiguration."""

from __future__ import annotations

from dataclasses import replace
import json
import logging
from typing import Callable

from kakeibo.api import LedgerApiClient
from kakeibo.cache import LedgerCache
from kakeibo.models import Settings
from kakeibo.persistence import KeyValueStorage

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"


class SettingsStore:
    """Hold the active settings and keep the API client and cache in step."""

    def __init__(
        self,
        storage: KeyValueStorage,
        client: LedgerApiClient,
        cache: LedgerCache,
        on_title: Callable[[str], None] | None = None,
        defaults: Settings | None = None,
    ) -> None:
        self.storage = storage
        self.client = client
        self.cache = cache
        self.on_title = on_title
        self.settings = defaults or Settings()
        self.title = self.settings.app_name

    def save(self, settings: Settings) -> Settings:
        """Replace settings wholesale, reset the cache and persist.

        The client is reconfigured before the cache is cleared so that a fetch
        completing afterwards is never attributed to the old endpoint.
        """
        self.settings = replace(settings)
        self._configure()
        self.cache.clear()
        self.storage.write(SETTINGS_KEY, json.dumps(self.settings.to_dict(), ensure_ascii=False))
        logger.info(f"Settings saved for {self.settings.app_name!r}; ledger cache cleared")
        return self.settings

    def load(self) -> Settings:
        """Merge persisted settings over the current ones; the cache is kept."""
        raw = self.storage.read(SETTINGS_KEY)
        if raw:
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError as exc:
                logger.warning(f"Ignoring stored settings: {exc}")
                payload = None
            if isinstance(payload, dict):
                self.settings = self.settings.merged(payload)
            elif payload is not None:
                logger.warning("Ignoring stored settings: expected a JSON object")
        self._configure()
        return self.settings

    def _configure(self) -> None:
        self.client.set_url(self.settings.api_url)
        self.client.set_auth_token(self.settings.auth_token)
        self.title = self.settings.app_name
        if self.on_title is not None:
            self.on_title(self.title)
