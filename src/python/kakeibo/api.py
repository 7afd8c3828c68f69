"""HTTP client for the Apps Script ledger web app."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import requests

from kakeibo.exceptions import RemoteError
from kakeibo.models import LedgerEntry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for the remote ledger."""

    url: str = ""
    auth_token: str = ""
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS


class LedgerApiClient:
    """Call the ledger web app with a JSON envelope.

    Every request is a POST of ``{"method", "authToken", "params"}``; the
    service answers ``{"data": ...}`` or ``{"error": message}``.
    """

    def __init__(
        self,
        url: str = "",
        auth_token: str = "",
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.config = ApiConfig(url=url, auth_token=auth_token, timeout_seconds=timeout_seconds)
        self.session = session or requests.Session()

    def set_url(self, url: str) -> None:
        self.config = ApiConfig(url, self.config.auth_token, self.config.timeout_seconds)

    def set_auth_token(self, token: str) -> None:
        self.config = ApiConfig(self.config.url, token, self.config.timeout_seconds)

    def fetch(self, year_month: str) -> list[LedgerEntry]:
        """Return every entry stored for the given YYYY-MM month."""
        data = self._request("GET", {"yearMonth": year_month})
        if not isinstance(data, list):
            raise RemoteError(f"Unexpected response for {year_month}: expected a list")
        return [self._to_entry(item) for item in data]

    def add(self, entry: LedgerEntry) -> LedgerEntry:
        """Create an entry; the returned entry carries the assigned id."""
        data = self._request("POST", {"item": entry.to_dict()})
        return self._entry_or(data, entry)

    def update(self, before_year_month: str, entry: LedgerEntry) -> LedgerEntry:
        data = self._request("PUT", {"beforeYM": before_year_month, "item": entry.to_dict()})
        return self._entry_or(data, entry)

    def delete(self, year_month: str, entry_id: str) -> None:
        self._request("DELETE", {"yearMonth": year_month, "id": entry_id})

    def _entry_or(self, data: Any, fallback: LedgerEntry) -> LedgerEntry:
        if isinstance(data, dict) and data.get("id"):
            return self._to_entry(data)
        return fallback

    def _to_entry(self, item: Any) -> LedgerEntry:
        try:
            return LedgerEntry.from_dict(item)
        except (ValueError, AttributeError, TypeError) as exc:
            raise RemoteError(f"Ledger service returned an invalid entry: {exc}") from exc

    def _request(self, method: str, params: dict[str, Any]) -> Any:
        if not self.config.url:
            raise RemoteError("API URL is not configured")
        body = {"method": method, "authToken": self.config.auth_token, "params": params}
        logger.debug(f"{method} {self.config.url} params={params}")
        try:
            response = self.session.post(
                self.config.url,
                json=body,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise RemoteError(f"Server returned an error: {exc}", status=status) from exc
        except ValueError as exc:
            raise RemoteError("Ledger service returned an invalid response") from exc
        except requests.RequestException as exc:
            raise RemoteError(f"Could not reach the ledger service: {exc}") from exc

        if not isinstance(payload, dict):
            raise RemoteError("Ledger service returned an invalid response")
        if payload.get("error"):
            raise RemoteError(str(payload["error"]))
        return payload.get("data")
