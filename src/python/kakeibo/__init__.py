"""Public Kakeibo package exports."""

from __future__ import annotations

from kakeibo.__version__ import __version__
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
    month_key,
)
from kakeibo.persistence import JsonFileStorage, KeyValueStorage, MemoryStorage
from kakeibo.settings import SettingsStore
from kakeibo.store import LedgerStore

__all__ = [
    "__version__",
    "LedgerApiClient",
    "LedgerCache",
    "derive_items",
    "RemoteError",
    "LedgerEntry",
    "LedgerError",
    "LoadingState",
    "MonthSummary",
    "Settings",
    "month_key",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "SettingsStore",
    "LedgerStore",
]
