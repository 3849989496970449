"""CASK CLI entry point.

Defines the top-level ``cask`` command (via Click-Extra) and registers its
subcommands:

- ``cask db``: forward-only database management (upgrade/current/heads/history/status).
- ``cask serve``: run the HTTP API.
- ``cask entities``, ``cask bottles``: catalog entries.
- ``cask users``: user accounts.
- ``cask stores``: stores whose prices are scraped.
- ``cask badges``: badge definitions.

Examples
    $ cask --version
    $ cask db upgrade
    $ cask entities add "Glenfarclas" --type brand --type distiller
    $ cask -v serve --port 8080
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from cask import __version__
from cask.logging import config_console_handler, config_flight_recorder, log_startup

from .badges import badges as badges_group
from .bottles import bottles as bottles_group
from .db import db as db_group
from .entities import entities as entities_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level
from .serve import serve as serve_command
from .stores import stores as stores_group
from .users import users as users_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """CASK command-line interface.

    CASK is a social catalog for whisky: users log tastings of bottles, tag
    them, comment on each other's notes and earn badges as they go.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  API docs: " + hyperlink("http://127.0.0.1:8000/docs") + " (while serving)",
    ]
)


def _default_log_path() -> Path:
    return Path(user_log_dir("cask", appauthor=False, ensure_exists=True)) / "latest.log"


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Raise console verbosity by one level per repetition (default WARNING).",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity by one level per repetition (default WARNING).",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (DEBUG console output with logger names and sources).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path the flight recorder writes to.",
    default=_default_log_path,
    envvar="CASK_LOG_PATH",
    show_default="<user log dir>/latest.log",
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="CASK_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity in memory and write "
        "them to --log-path when a WARNING or ERROR occurs. Console verbosity "
        "is unaffected."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer to --log-path on clean exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum level of a named logger (NAME=LEVEL). Applies to the "
        "console and the flight recorder. Repeatable, e.g. -L sqlalchemy=INFO "
        "-L cask.service_layer=DEBUG."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def cask(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """CASK command-line interface."""

    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # The root logger passes everything; each handler applies its own level.
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path if flight_recorder else None,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


cask.add_command(db_group)
cask.add_command(serve_command)
cask.add_command(entities_group)
cask.add_command(bottles_group)
cask.add_command(users_group)
cask.add_command(stores_group)
cask.add_command(badges_group)
