"""``cask serve``: run the HTTP API under uvicorn."""

from __future__ import annotations

import logging

import click
import uvicorn

from cask.adapters.db.engine import make_engine
from cask.entrypoints.api.app import create_app

from .db import get_checked_url
from .helpers import sanitize_url

logger = logging.getLogger(__name__)


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, type=int, show_default=True, help="Bind port.")
def serve(host: str, port: int) -> None:
    """Serve the CASK HTTP API."""
    url = get_checked_url()
    logger.info("Serving on http://%s:%s (db: %s)", host, port, sanitize_url(url))
    app = create_app(engine=make_engine(url))
    # log_config=None keeps the handlers configured by the cask group.
    uvicorn.run(app, host=host, port=port, log_config=None)
