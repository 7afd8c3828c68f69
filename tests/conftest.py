"""Pytest configuration and fixtures shared by unit and integration tests."""
from __future__ import annotations

from pathlib import Path
import sys

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src" / "python"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from kakeibo.models import LedgerEntry  # noqa: E402
from kakeibo.persistence import MemoryStorage  # noqa: E402
from kakeibo.store import LedgerStore  # noqa: E402
from tests.utils.fakes import FakeLedgerClient  # noqa: E402


@pytest.fixture()
def fake_client() -> FakeLedgerClient:
    """Remote ledger double serving canned months."""
    return FakeLedgerClient()


@pytest.fixture()
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(fake_client: FakeLedgerClient, memory_storage: MemoryStorage) -> LedgerStore:
    return LedgerStore(client=fake_client, storage=memory_storage)


@pytest.fixture()
def sample_outgo() -> LedgerEntry:
    return LedgerEntry(
        id="a341093e",
        date="2024-05-01",
        title="支出サンプル",
        category="買い物",
        tags="タグ1",
        outgo=2000,
        memo="メモ",
    )


@pytest.fixture()
def sample_income() -> LedgerEntry:
    return LedgerEntry(
        id="7c8fa764",
        date="2024-05-02",
        title="収支サンプル",
        category="給料",
        tags="タグ1,タグ2",
        income=2000,
        memo="メモ",
    )
