"""Month-partitioned cache of ledger entries."""

from __future__ import annotations

import logging
from typing import Iterable

from kakeibo.models import LedgerEntry

logger = logging.getLogger(__name__)


class LedgerCache:
    """Map YYYY-MM keys to the ordered entries of that month.

    A missing key means the month has not been fetched; an empty list means it
    was fetched and holds nothing. Entries only ever live in the partition
    named by their own date.
    """

    def __init__(self) -> None:
        self._partitions: dict[str, list[LedgerEntry]] = {}

    def __contains__(self, month: object) -> bool:
        return month in self._partitions

    def __len__(self) -> int:
        return len(self._partitions)

    def get(self, month: str) -> tuple[LedgerEntry, ...] | None:
        """Return the partition for month, or None when not yet fetched."""
        partition = self._partitions.get(month)
        if partition is None:
            return None
        return tuple(partition)

    def months(self) -> list[str]:
        return sorted(self._partitions)

    def snapshot(self) -> dict[str, tuple[LedgerEntry, ...]]:
        """Read-only copy of every partition."""
        return {month: tuple(entries) for month, entries in self._partitions.items()}

    def replace_partition(self, month: str, entries: Iterable[LedgerEntry]) -> None:
        self._partitions[month] = list(entries)
        logger.debug(f"Partition {month} replaced with {len(self._partitions[month])} entries")

    def insert(self, entry: LedgerEntry) -> bool:
        """Append entry to its month; dropped when that month was never fetched."""
        partition = self._partitions.get(entry.month_key)
        if partition is None:
            logger.debug(f"Skipping insert of {entry.id}: {entry.month_key} not fetched")
            return False
        partition.append(entry)
        return True

    def update_in_place(self, month: str, entry: LedgerEntry) -> bool:
        """Replace the entry with the same id, keeping its position."""
        partition = self._partitions.get(month)
        index = self._index_of(partition, entry.id)
        if index is None:
            return False
        partition[index] = entry
        return True

    def remove_by_id(self, month: str, entry_id: str) -> bool:
        partition = self._partitions.get(month)
        index = self._index_of(partition, entry_id)
        if index is None:
            return False
        del partition[index]
        return True

    def clear(self) -> None:
        self._partitions.clear()

    @staticmethod
    def _index_of(partition: list[LedgerEntry] | None, entry_id: str) -> int | None:
        if partition is None:
            return None
        for index, item in enumerate(partition):
            if item.id == entry_id:
                return index
        return None
