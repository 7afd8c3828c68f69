"""Ledger store coordinating the month cache, remote service and settings."""

from __future__ import annotations

import logging
import os
from typing import Callable

import requests

from kakeibo.api import LedgerApiClient
from kakeibo.cache import LedgerCache
from kakeibo.categories import derive_items
from kakeibo.exceptions import RemoteError
from kakeibo.models import (
    LedgerEntry,
    LedgerError,
    LoadingState,
    MonthSummary,
    Settings,
)
from kakeibo.persistence import KeyValueStorage, MemoryStorage
from kakeibo.settings import SettingsStore

# Configure logging
logger = logging.getLogger(__name__)
log_level = os.environ.get('LOGGING_LEVEL', 'INFO').upper()
logger.setLevel(getattr(logging, log_level, logging.INFO))
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))
    logger.addHandler(handler)

Listener = Callable[["LedgerStore"], None]

REMOTE_FAILURES = (RemoteError, requests.RequestException)


class LedgerStore:
    """Coordinate fetch and edit intents against the month-partitioned cache.

    The store owns its cache, loading flags and error slot. Readers get
    snapshots and may subscribe to change notifications; only the store
    writes.
    """

    def __init__(
        self,
        client: LedgerApiClient | None = None,
        storage: KeyValueStorage | None = None,
        on_title: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            client: Remote ledger client, a fresh unconfigured one by default
            storage: Durable settings storage, in-memory by default
            on_title: Called with the application name whenever it is applied
        """
        self.client = client or LedgerApiClient()
        self.cache = LedgerCache()
        self.loading_state = LoadingState()
        self.error: LedgerError | None = None
        self.settings_store = SettingsStore(
            storage=storage or MemoryStorage(),
            client=self.client,
            cache=self.cache,
            on_title=on_title,
        )
        self._listeners: list[Listener] = []

    # Queries

    @property
    def ab_data(self) -> dict[str, tuple[LedgerEntry, ...]]:
        return self.cache.snapshot()

    def partition(self, month: str) -> tuple[LedgerEntry, ...] | None:
        """Entries of month, or None when it has not been fetched."""
        return self.cache.get(month)

    def summary(self, month: str) -> MonthSummary | None:
        entries = self.cache.get(month)
        if entries is None:
            return None
        return MonthSummary.from_entries(month, entries)

    @property
    def loading(self) -> dict[str, bool]:
        return self.loading_state.as_dict()

    @property
    def error_message(self) -> str:
        return self.error.message if self.error else ""

    @property
    def settings(self) -> Settings:
        return self.settings_store.settings

    @property
    def title(self) -> str:
        return self.settings_store.title

    @property
    def income_items(self) -> list[str]:
        return derive_items(self.settings.str_income_items)

    @property
    def outgo_items(self) -> list[str]:
        return derive_items(self.settings.str_outgo_items)

    @property
    def tag_items(self) -> list[str]:
        return derive_items(self.settings.str_tag_items)

    # Notifications

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener failed")

    def _set_loading(self, operation: str, value: bool) -> None:
        self.loading_state.set(operation, value)
        self._notify()

    def _set_error(self, kind: str, exc: BaseException) -> None:
        self.error = LedgerError.from_exception(kind, exc)
        logger.warning(f"{kind} failed: {self.error.message}")
        self._notify()

    # Settings

    def save_settings(self, settings: Settings) -> Settings:
        saved = self.settings_store.save(settings)
        self._notify()
        return saved

    def load_settings(self) -> Settings:
        loaded = self.settings_store.load()
        self._notify()
        return loaded

    # Ledger operations

    def fetch(self, month: str) -> tuple[LedgerEntry, ...]:
        """Load month from the remote service into the cache.

        A failure records the error and caches the month as empty; it is not
        retried until settings are saved again.
        """
        self._set_loading("fetch", True)
        try:
            try:
                entries = self.client.fetch(month)
            except REMOTE_FAILURES as exc:
                self._set_error("remote_fetch", exc)
                entries = []
            self.cache.replace_partition(month, entries)
            self._notify()
        finally:
            self._set_loading("fetch", False)
        return self.cache.get(month) or ()

    def add(self, entry: LedgerEntry) -> None:
        if self.cache.insert(entry):
            self._notify()

    def update(self, previous_month: str, entry: LedgerEntry) -> None:
        """Apply an edited entry, moving it when its month changed."""
        if entry.month_key == previous_month:
            changed = self.cache.update_in_place(previous_month, entry)
        else:
            removed = self.cache.remove_by_id(previous_month, entry.id)
            inserted = self.cache.insert(entry)
            changed = removed or inserted
            logger.debug(f"Moved {entry.id} from {previous_month} to {entry.month_key}")
        if changed:
            self._notify()

    def delete(self, entry: LedgerEntry) -> None:
        if self.cache.remove_by_id(entry.month_key, entry.id):
            self._notify()

    # Remote mutations

    def add_remote(self, entry: LedgerEntry) -> LedgerEntry | None:
        """Create entry on the service, then add the stored copy locally."""
        self._set_loading("add", True)
        try:
            created = self.client.add(entry)
        except REMOTE_FAILURES as exc:
            self._set_error("remote_add", exc)
            return None
        finally:
            self._set_loading("add", False)
        self.add(created)
        return created

    def update_remote(self, previous_month: str, entry: LedgerEntry) -> LedgerEntry | None:
        self._set_loading("update", True)
        try:
            updated = self.client.update(previous_month, entry)
        except REMOTE_FAILURES as exc:
            self._set_error("remote_update", exc)
            return None
        finally:
            self._set_loading("update", False)
        self.update(previous_month, updated)
        return updated

    def delete_remote(self, entry: LedgerEntry) -> LedgerEntry | None:
        self._set_loading("delete", True)
        try:
            self.client.delete(entry.month_key, entry.id)
        except REMOTE_FAILURES as exc:
            self._set_error("remote_delete", exc)
            return None
        finally:
            self._set_loading("delete", False)
        self.delete(entry)
        return entry
