"""Custom exception types for Kakeibo."""

from __future__ import annotations


class RemoteError(Exception):
    """Raised when the remote ledger service cannot complete a request."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
