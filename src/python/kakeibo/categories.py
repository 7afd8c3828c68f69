"""Category list derivation from comma-delimited settings."""

from __future__ import annotations


def derive_items(raw: str | None) -> list[str]:
    """Split a comma-delimited string into trimmed, non-empty items in order."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
