from __future__ import annotations

import json

from kakeibo.cache import LedgerCache
from kakeibo.models import LedgerEntry, Settings
from kakeibo.persistence import MemoryStorage
from kakeibo.settings import SETTINGS_KEY, SettingsStore
from tests.utils.fakes import FakeLedgerClient


def _build(storage: MemoryStorage | None = None):
    titles: list[str] = []
    client = FakeLedgerClient()
    cache = LedgerCache()
    settings_store = SettingsStore(
        storage=storage or MemoryStorage(),
        client=client,
        cache=cache,
        on_title=titles.append,
    )
    return settings_store, client, cache, titles


def test_save_persists_and_reconfigures() -> None:
    settings_store, client, cache, titles = _build()
    cache.replace_partition("2024-05", [LedgerEntry(id="a", date="2024-05-01")])
    new_settings = Settings(app_name="我が家", api_url="https://example.test/exec", auth_token="t0k3n")

    settings_store.save(new_settings)

    assert settings_store.settings == new_settings
    assert client.config.url == "https://example.test/exec"
    assert client.config.auth_token == "t0k3n"
    assert cache.snapshot() == {}
    assert titles == ["我が家"]
    assert settings_store.title == "我が家"
    stored = json.loads(settings_store.storage.read(SETTINGS_KEY))
    assert stored["appName"] == "我が家"
    assert stored["authToken"] == "t0k3n"


def test_save_reconfigures_client_before_clearing_cache() -> None:
    settings_store, client, cache, _ = _build()
    seen: list[tuple[str, int]] = []
    original_clear = cache.clear

    def clear() -> None:
        seen.append((client.config.url, len(cache)))
        original_clear()

    cache.clear = clear
    cache.replace_partition("2024-05", [])

    settings_store.save(Settings(api_url="https://new.test/exec"))

    assert seen == [("https://new.test/exec", 1)]


def test_load_merges_over_defaults() -> None:
    storage = MemoryStorage({SETTINGS_KEY: json.dumps({"apiUrl": "https://example.test/exec"})})
    settings_store, client, cache, titles = _build(storage)
    cache.replace_partition("2024-05", [])

    loaded = settings_store.load()

    assert loaded.api_url == "https://example.test/exec"
    assert loaded.app_name == "GAS 家計簿"
    assert loaded.str_income_items == "給料, ボーナス, 繰越"
    assert client.config.url == "https://example.test/exec"
    assert titles == ["GAS 家計簿"]
    assert "2024-05" in cache


def test_load_without_stored_settings_keeps_defaults() -> None:
    settings_store, client, _, titles = _build()

    assert settings_store.load() == Settings()
    assert client.config.url == ""
    assert titles == ["GAS 家計簿"]


def test_load_ignores_corrupt_settings() -> None:
    storage = MemoryStorage({SETTINGS_KEY: "{not json"})
    settings_store, _, _, _ = _build(storage)

    assert settings_store.load() == Settings()


def test_load_ignores_non_object_settings() -> None:
    storage = MemoryStorage({SETTINGS_KEY: json.dumps(["apiUrl"])})
    settings_store, _, _, _ = _build(storage)

    assert settings_store.load() == Settings()


def test_saved_settings_survive_reload() -> None:
    storage = MemoryStorage()
    first, _, _, _ = _build(storage)
    first.save(Settings(app_name="家計簿", str_tag_items="固定費"))

    second, _, _, _ = _build(storage)
    loaded = second.load()

    assert loaded.app_name == "家計簿"
    assert loaded.str_tag_items == "固定費"
