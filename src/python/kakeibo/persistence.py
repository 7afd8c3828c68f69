"""Durable key-value storage backends for client settings."""

from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_NAME = "settings.json"


class KeyValueStorage(ABC):
    """Abstract interface for text blob storage keyed by name."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored text for key, or None when absent."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""


class MemoryStorage(KeyValueStorage):
    """Process-local storage, lost on exit."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._items.get(key)

    def write(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage(KeyValueStorage):
    """Keep every key in a single JSON document on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is None:
            return None
        return str(value)

    def write(self, key: str, value: str) -> None:
        payload = self._load()
        payload[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {exc}")
            return {}
        if not isinstance(payload, dict):
            return {}
        return payload
