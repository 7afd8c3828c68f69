"""Ledger entry CLI commands."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal

import click

from kakeibo.cli.common import (
    fail_on_error,
    find_entry,
    format_entry,
    get_store,
    parse_date,
    parse_decimal,
    parse_month,
)
from kakeibo.models import LedgerEntry, MonthSummary, month_key


def _resolve_amounts(
    income: Decimal | None,
    outgo: Decimal | None,
    label: str,
) -> tuple[Decimal | None, Decimal | None]:
    """Require exactly one of income and outgo."""
    if income is not None and outgo is not None:
        raise click.UsageError(f"{label}: Provide --income or --outgo, not both.")
    if income is None and outgo is None:
        raise click.UsageError(f"{label}: Provide --income or --outgo.")
    return income, outgo


@click.group()
def entry() -> None:
    """Ledger entry commands."""


@entry.command("list")
@click.argument("month")
@click.option("--category", default=None, help="Filter by category.")
@click.pass_context
def list_entries(ctx: click.Context, month: str, category: str | None) -> None:
    """List the entries of MONTH (YYYY-MM) with totals."""
    month = parse_month(month, "MONTH")
    store = get_store(ctx)
    entries = store.fetch(month)
    fail_on_error(store, "Fetch")
    if category:
        entries = tuple(item for item in entries if item.category == category)
    if not entries:
        click.echo(f"No entries for {month}.")
        return
    for item in entries:
        click.echo(format_entry(item))
    summary = MonthSummary.from_entries(month, entries)
    click.echo(f"Income: {summary.income}\tOutgo: {summary.outgo}\tBalance: {summary.balance}")


@entry.command("add")
@click.option("--date", "date_value", required=True, help="Entry date in YYYY-MM-DD.")
@click.option("--title", required=True, help="Entry title.")
@click.option("--category", required=True, help="Income or outgo category.")
@click.option("--tags", default="", help="Comma-separated tags.")
@click.option("--income", "income_value", default=None, help="Income amount.")
@click.option("--outgo", "outgo_value", default=None, help="Outgo amount.")
@click.option("--memo", default="", help="Free text memo.")
@click.pass_context
def add_entry(
    ctx: click.Context,
    date_value: str,
    title: str,
    category: str,
    tags: str,
    income_value: str | None,
    outgo_value: str | None,
    memo: str,
) -> None:
    """Add an entry to the ledger."""
    date = parse_date(date_value, "--date")
    income, outgo = _resolve_amounts(
        parse_decimal(income_value, "--income"),
        parse_decimal(outgo_value, "--outgo"),
        "Entry add",
    )
    store = get_store(ctx)
    created = store.add_remote(
        LedgerEntry(
            id="",
            date=date,
            title=title,
            category=category,
            tags=tags,
            income=income,
            outgo=outgo,
            memo=memo,
        )
    )
    if created is None:
        fail_on_error(store, "Entry add")
    click.echo(f"Added entry {created.id}")


@entry.command("update")
@click.argument("entry_id")
@click.option("--month", "month_value", required=True, help="Current month of the entry in YYYY-MM.")
@click.option("--date", "date_value", default=None, help="New date in YYYY-MM-DD.")
@click.option("--title", default=None, help="New title.")
@click.option("--category", default=None, help="New category.")
@click.option("--tags", default=None, help="New comma-separated tags.")
@click.option("--income", "income_value", default=None, help="New income amount.")
@click.option("--outgo", "outgo_value", default=None, help="New outgo amount.")
@click.option("--memo", default=None, help="New memo.")
@click.pass_context
def update_entry(
    ctx: click.Context,
    entry_id: str,
    month_value: str,
    date_value: str | None,
    title: str | None,
    category: str | None,
    tags: str | None,
    income_value: str | None,
    outgo_value: str | None,
    memo: str | None,
) -> None:
    """Update an entry; changing the date may move it to another month."""
    month = parse_month(month_value, "--month")
    date = parse_date(date_value, "--date")
    income = parse_decimal(income_value, "--income")
    outgo = parse_decimal(outgo_value, "--outgo")
    if income is not None and outgo is not None:
        raise click.UsageError("Entry update: Provide --income or --outgo, not both.")

    store = get_store(ctx)
    current = find_entry(store, month, entry_id)
    changes = {
        key: value
        for key, value in {
            "date": date,
            "title": title,
            "category": category,
            "tags": tags,
            "memo": memo,
        }.items()
        if value is not None
    }
    if income is not None:
        changes.update(income=income, outgo=None)
    if outgo is not None:
        changes.update(income=None, outgo=outgo)
    if not changes:
        raise click.UsageError("Provide at least one field to change.")

    updated = store.update_remote(month, replace(current, **changes))
    if updated is None:
        fail_on_error(store, "Entry update")
    click.echo(f"Updated entry {updated.id} ({month} -> {month_key(updated.date)})")


@entry.command("delete")
@click.argument("entry_id")
@click.option("--month", "month_value", required=True, help="Month of the entry in YYYY-MM.")
@click.pass_context
def delete_entry(ctx: click.Context, entry_id: str, month_value: str) -> None:
    """Delete an entry."""
    month = parse_month(month_value, "--month")
    store = get_store(ctx)
    current = find_entry(store, month, entry_id)
    if store.delete_remote(current) is None:
        fail_on_error(store, "Entry delete")
    click.echo(f"Deleted entry {entry_id}")
