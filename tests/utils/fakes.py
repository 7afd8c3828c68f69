from __future__ import annotations

from typing import Any
import uuid

import requests

from kakeibo.api import LedgerApiClient
from kakeibo.exceptions import RemoteError
from kakeibo.models import LedgerEntry


class FakeLedgerClient(LedgerApiClient):
    """In-memory stand-in for the ledger web app."""

    def __init__(self) -> None:
        super().__init__()
        self.months: dict[str, list[LedgerEntry]] = {}
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, Any]] = []
        self.on_fetch = None

    def fail(self, method: str, error: Exception | None = None) -> None:
        self.failures[method] = error or RemoteError(f"{method} failed")

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def fetch(self, year_month: str) -> list[LedgerEntry]:
        self.calls.append(("fetch", year_month))
        if self.on_fetch is not None:
            self.on_fetch(year_month)
        self._maybe_fail("fetch")
        return list(self.months.get(year_month, []))

    def add(self, entry: LedgerEntry) -> LedgerEntry:
        self.calls.append(("add", entry))
        self._maybe_fail("add")
        if not entry.id:
            entry = LedgerEntry.from_dict({**entry.to_dict(), "id": uuid.uuid4().hex[:8]})
        self.months.setdefault(entry.month_key, []).append(entry)
        return entry

    def update(self, before_year_month: str, entry: LedgerEntry) -> LedgerEntry:
        self.calls.append(("update", (before_year_month, entry)))
        self._maybe_fail("update")
        before = self.months.get(before_year_month, [])
        self.months[before_year_month] = [item for item in before if item.id != entry.id]
        self.months.setdefault(entry.month_key, []).append(entry)
        return entry

    def delete(self, year_month: str, entry_id: str) -> None:
        self.calls.append(("delete", (year_month, entry_id)))
        self._maybe_fail("delete")
        items = self.months.get(year_month, [])
        self.months[year_month] = [item for item in items if item.id != entry_id]


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False) -> None:
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """Records POSTs and replays queued responses or exceptions."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def post(self, url: str, json: Any = None, timeout: Any = None) -> FakeResponse:
        self.requests.append({"url": url, "json": json, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
