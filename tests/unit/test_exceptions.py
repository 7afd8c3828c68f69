from __future__ import annotations

from kakeibo.exceptions import RemoteError


def test_remote_error_carries_message_and_status() -> None:
    error = RemoteError("Server returned an error", status=503)

    assert error.message == "Server returned an error"
    assert error.status == 503
    assert "Server returned an error" in str(error)
