"""Kakeibo CLI entry point."""

from __future__ import annotations

from pathlib import Path

import click

from kakeibo.__version__ import __version__
from kakeibo.cli.common import get_store
from kakeibo.cli.entry import entry
from kakeibo.cli.settings import settings


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="kakeibo")
@click.option(
    "--config-dir",
    "config_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding settings.json.",
)
@click.pass_context
def main(ctx: click.Context, config_dir: Path | None) -> None:
    """Household ledger client for the Apps Script ledger service."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


@main.command("categories")
@click.pass_context
def categories(ctx: click.Context) -> None:
    """Show income, outgo and tag lists derived from settings."""
    store = get_store(ctx)
    for label, items in (
        ("Income", store.income_items),
        ("Outgo", store.outgo_items),
        ("Tags", store.tag_items),
    ):
        click.echo(f"{label}: {', '.join(items)}")


main.add_command(entry)
main.add_command(settings)


if __name__ == "__main__":
    main()
