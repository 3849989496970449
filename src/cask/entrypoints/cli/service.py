"""Dispatch service-layer commands from CLI subcommands."""

from __future__ import annotations

from typing import Any

import click

from cask.adapters.db.engine import make_engine
from cask.bootstrap import bootstrap
from cask.service_layer.commands import Command
from cask.service_layer.errors import CaskError

from .db import get_checked_url


def handle_command(cmd: Command) -> Any:
    """Handle ``cmd`` against the database at ``CASK_DB_URL``.

    The engine lives for this one command and is disposed afterwards,
    whether the handler succeeds or not. Email is disabled.

    Returns:
        Whatever the command's handler returns.

    Raises:
        click.ClickException: With the error's message if the service layer
            rejects the command, or if the database cannot be reached.
    """
    engine = make_engine(get_checked_url())
    try:
        bus = bootstrap(engine=engine, mailer=None).message_bus
        return bus.handle(cmd)
    except CaskError as e:
        raise click.ClickException(e.message) from e
    finally:
        engine.dispose()
