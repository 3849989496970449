"""``cask users``: register users."""

from __future__ import annotations

import click
import click_extra as clickx

from cask.service_layer import commands

from .helpers import success
from .service import handle_command


@click.group(cls=clickx.ExtraGroup)
def users() -> None:
    """User management commands."""


@users.command("add")
@click.argument("username")
@click.argument("email")
@click.option("--display-name", help="Name shown instead of the username.")
@click.option(
    "--notify-comments/--no-notify-comments",
    default=True,
    show_default=True,
    help="Email the user when someone comments on their tastings.",
)
def add(
    username: str, email: str, display_name: str | None, notify_comments: bool
) -> None:
    """Register USERNAME with address EMAIL."""
    user_id = handle_command(
        commands.CreateUser(
            username=username,
            email=email,
            display_name=display_name,
            notify_comments=notify_comments,
        )
    )
    success(f"User {username!r} created with id {user_id}.")
    click.echo(user_id)
