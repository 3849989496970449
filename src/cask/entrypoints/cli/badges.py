"""``cask badges``: manage badge definitions."""

from __future__ import annotations

import json

import click
import click_extra as clickx

from cask.domain.badges import DEFAULT_MAX_LEVEL, MAX_MAX_LEVEL
from cask.service_layer import commands

from .helpers import success
from .service import handle_command


def _parse_check(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: tuple[str, ...],
) -> tuple[dict, ...]:
    checks = []
    for raw in value:
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"Not valid JSON: {raw!r}") from e
        if not isinstance(payload, dict):
            raise click.BadParameter(f"Expected a JSON object, got {raw!r}")
        checks.append(payload)
    return tuple(checks)


@click.group(cls=clickx.ExtraGroup)
def badges() -> None:
    """Badge management commands."""


@badges.command("add")
@click.argument("name")
@click.option(
    "--check",
    "checks",
    multiple=True,
    required=True,
    callback=_parse_check,
    help=(
        'Check as JSON, e.g. \'{"type": "age", "config": {"minAge": 12}}\'. '
        "Repeat for several checks; a tasting must pass all of them."
    ),
)
@click.option(
    "--max-level",
    type=click.IntRange(1, MAX_MAX_LEVEL),
    default=DEFAULT_MAX_LEVEL,
    show_default=True,
    help="Highest level the badge can reach.",
)
def add(name: str, checks: tuple[dict, ...], max_level: int) -> None:
    """Define a badge called NAME."""
    badge_id = handle_command(
        commands.CreateBadge(name=name, checks=checks, max_level=max_level)
    )
    success(f"Badge {name!r} created with id {badge_id}.")
    click.echo(badge_id)
