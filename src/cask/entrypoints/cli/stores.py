"""``cask stores``: register stores whose prices are scraped."""

from __future__ import annotations

import click
import click_extra as clickx

from cask.service_layer import commands

from .helpers import success
from .service import handle_command


@click.group(cls=clickx.ExtraGroup)
def stores() -> None:
    """Store management commands."""


@stores.command("add")
@click.argument("store_type", metavar="TYPE")
@click.argument("name")
@click.option("--country", help="Country the store ships from.")
def add(store_type: str, name: str, country: str | None) -> None:
    """Register a store of scraper TYPE, displayed as NAME.

    Price submissions address the store by TYPE.
    """
    store_id = handle_command(
        commands.CreateStore(type=store_type, name=name, country=country)
    )
    success(f"Store {store_type!r} created with id {store_id}.")
    click.echo(store_id)
