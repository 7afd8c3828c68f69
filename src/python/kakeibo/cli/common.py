"""Shared CLI helpers."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
import os
from pathlib import Path

import click

from kakeibo.api import DEFAULT_TIMEOUT_SECONDS, LedgerApiClient
from kakeibo.models import LedgerEntry
from kakeibo.persistence import DEFAULT_STORAGE_NAME, JsonFileStorage
from kakeibo.store import LedgerStore

DEFAULT_CONFIG_DIR = Path.home() / ".kakeibo"


def parse_date(value: str | None, field_name: str) -> str | None:
    """Validate an ISO date string and return it unchanged."""
    if value is None:
        return None
    try:
        dt.date.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter("Use YYYY-MM-DD format.", param_hint=field_name) from exc
    return value


def parse_month(value: str, field_name: str) -> str:
    """Validate a YYYY-MM month key."""
    try:
        dt.datetime.strptime(value, "%Y-%m")
    except ValueError as exc:
        raise click.BadParameter("Use YYYY-MM format.", param_hint=field_name) from exc
    return value


def parse_decimal(value: str | None, field_name: str) -> Decimal | None:
    """Parse a decimal string into a Decimal."""
    if value is None:
        return None
    try:
        amount = Decimal(value)
    except InvalidOperation as exc:
        raise click.BadParameter("Use a valid decimal value.", param_hint=field_name) from exc
    if not amount.is_finite():
        raise click.BadParameter("Use a finite decimal value.", param_hint=field_name)
    return amount


def resolve_config_dir(config_dir: Path | None) -> Path:
    if config_dir is not None:
        return config_dir
    env_dir = os.environ.get("KAKEIBO_CONFIG_DIR")
    if env_dir:
        return Path(env_dir)
    return DEFAULT_CONFIG_DIR


def resolve_timeout() -> int:
    raw = os.environ.get("KAKEIBO_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return int(raw)
    except ValueError as exc:
        raise click.UsageError(f"KAKEIBO_TIMEOUT must be an integer, got {raw!r}") from exc


def get_store(ctx: click.Context) -> LedgerStore:
    """Build a ledger store from Click context with persisted settings applied."""
    payload = ctx.obj or {}
    config_dir = resolve_config_dir(payload.get("config_dir"))
    store = LedgerStore(
        client=payload.get("client") or LedgerApiClient(timeout_seconds=resolve_timeout()),
        storage=JsonFileStorage(config_dir / DEFAULT_STORAGE_NAME),
    )
    store.load_settings()
    return store


def fail_on_error(store: LedgerStore, action: str) -> None:
    """Raise a ClickException when the last store operation recorded an error."""
    if store.error is not None:
        raise click.ClickException(f"{action} failed: {store.error_message}")


def find_entry(store: LedgerStore, month: str, entry_id: str) -> LedgerEntry:
    """Fetch month and return the entry with entry_id."""
    entries = store.fetch(month)
    fail_on_error(store, "Fetch")
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise click.ClickException(f"Entry {entry_id!r} not found in {month}.")


def format_amount(value: Decimal | None) -> str:
    return "" if value is None else str(value)


def format_entry(entry: LedgerEntry) -> str:
    return (
        f"{entry.id}\t{entry.date}\t{entry.title}\t{entry.category}"
        f"\t{format_amount(entry.income)}\t{format_amount(entry.outgo)}"
        f"\t{entry.tags}\t{entry.memo}"
    )
