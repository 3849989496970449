"""``cask entities``: register brands, distillers and bottlers."""

from __future__ import annotations

import click
import click_extra as clickx

from cask.domain.model import EntityType
from cask.service_layer import commands

from .helpers import success
from .service import handle_command


@click.group(cls=clickx.ExtraGroup)
def entities() -> None:
    """Entity management commands."""


@entities.command("add")
@click.argument("name")
@click.option(
    "--type",
    "types",
    multiple=True,
    type=click.Choice([t.value for t in EntityType]),
    help=(
        "Role the entity plays. Repeat for several, "
        "e.g. --type brand --type distiller."
    ),
)
@click.option("--country", help="Country of origin.")
@click.option("--region", help="Region within the country, e.g. Speyside.")
def add(
    name: str, types: tuple[str, ...], country: str | None, region: str | None
) -> None:
    """Register an entity called NAME."""
    entity_id = handle_command(
        commands.CreateEntity(
            name=name,
            types=tuple(EntityType(t) for t in types),
            country=country,
            region=region,
        )
    )
    success(f"Entity {name!r} created with id {entity_id}.")
    click.echo(entity_id)
