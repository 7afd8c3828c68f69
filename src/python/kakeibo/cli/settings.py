"""Settings CLI commands."""

from __future__ import annotations

import click

from kakeibo.cli.common import get_store


def _mask(token: str) -> str:
    if not token:
        return ""
    if len(token) <= 4:
        return "*" * len(token)
    return "*" * (len(token) - 4) + token[-4:]


@click.group()
def settings() -> None:
    """Settings commands."""


@settings.command("show")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Print the current settings with the auth token masked."""
    current = get_store(ctx).settings
    click.echo(f"App name:      {current.app_name}")
    click.echo(f"API URL:       {current.api_url}")
    click.echo(f"Auth token:    {_mask(current.auth_token)}")
    click.echo(f"Income items:  {current.str_income_items}")
    click.echo(f"Outgo items:   {current.str_outgo_items}")
    click.echo(f"Tag items:     {current.str_tag_items}")


@settings.command("set")
@click.option("--app-name", default=None, help="Application name shown as title.")
@click.option("--api-url", default=None, help="Ledger web app URL.")
@click.option("--auth-token", default=None, help="Token sent with every request.")
@click.option("--income-items", default=None, help="Comma-separated income categories.")
@click.option("--outgo-items", default=None, help="Comma-separated outgo categories.")
@click.option("--tag-items", default=None, help="Comma-separated tags.")
@click.pass_context
def set_settings(
    ctx: click.Context,
    app_name: str | None,
    api_url: str | None,
    auth_token: str | None,
    income_items: str | None,
    outgo_items: str | None,
    tag_items: str | None,
) -> None:
    """Update the given settings fields and save.

    Examples:
        kakeibo settings set --api-url https://script.google.com/macros/s/XXX/exec
        kakeibo settings set --outgo-items "食費, 趣味, 交通費"
    """
    overrides = {
        "app_name": app_name,
        "api_url": api_url,
        "auth_token": auth_token,
        "str_income_items": income_items,
        "str_outgo_items": outgo_items,
        "str_tag_items": tag_items,
    }
    if all(value is None for value in overrides.values()):
        raise click.UsageError("Provide at least one setting to change.")
    store = get_store(ctx)
    store.save_settings(store.settings.merged(overrides))
    click.echo("Settings saved.")
