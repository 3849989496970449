"""``cask bottles``: add bottles to the catalog."""

from __future__ import annotations

import click
import click_extra as clickx

from cask.service_layer import commands

from .helpers import success
from .service import handle_command


@click.group(cls=clickx.ExtraGroup)
def bottles() -> None:
    """Bottle management commands."""


@bottles.command("add")
@click.argument("name")
@click.option("--brand", "brand_id", type=int, required=True, help="Brand entity id.")
@click.option("--category", help="Category, e.g. single_malt or blend.")
@click.option(
    "--stated-age",
    type=click.IntRange(min=0),
    help="Age statement in years.",
)
@click.option(
    "--distiller",
    "distiller_ids",
    type=int,
    multiple=True,
    help="Distiller entity id. Repeat for several.",
)
@click.option("--bottler", "bottler_id", type=int, help="Bottler entity id.")
def add(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    name: str,
    brand_id: int,
    category: str | None,
    stated_age: int | None,
    distiller_ids: tuple[int, ...],
    bottler_id: int | None,
) -> None:
    """Add a bottle called NAME.

    The brand and every distiller have their bottle counts bumped.
    """
    bottle_id = handle_command(
        commands.CreateBottle(
            name=name,
            brand_id=brand_id,
            category=category,
            stated_age=stated_age,
            distiller_ids=distiller_ids,
            bottler_id=bottler_id,
        )
    )
    success(f"Bottle {name!r} created with id {bottle_id}.")
    click.echo(bottle_id)
