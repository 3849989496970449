"""
FastAPI application factory.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI

from cask import __version__, config
from cask.adapters.db.engine import make_engine
from cask.bootstrap import build_mailer
from cask.domain.model import utcnow

from .errors import install_error_handlers
from .routes import router

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from cask.interfaces.mailer import Mailer

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def create_app(
    engine: Engine | None = None,
    mailer: Mailer | None = _UNSET,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    """Build the CASK API.

    Args:
        engine: Engine shared by all requests. When omitted, one is built from
            ``CASK_DB_URL`` at startup and disposed at shutdown.
        mailer: Mailer for notifications; built from the environment when
            omitted. Pass ``None`` to disable email.
        clock: Source of the current time.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.engine is None
        if owned:
            app.state.engine = make_engine(config.get_db_url())
        logger.info("CASK API %s ready (%s)", __version__, app.state.engine.dialect.name)
        try:
            yield
        finally:
            if owned:
                app.state.engine.dispose()
                app.state.engine = None

    app = FastAPI(title="CASK", version=__version__, lifespan=lifespan)
    app.state.engine = engine
    app.state.mailer = build_mailer() if mailer is _UNSET else mailer
    app.state.clock = clock

    install_error_handlers(app)
    app.include_router(router, tags=["cask"])
    return app
