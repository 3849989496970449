"""Bootstrap the message bus with handlers and unit of work."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from cask import config
from cask.adapters.db.engine import make_engine
from cask.adapters.mailer import SmtpMailer
from cask.adapters.unit_of_work import SqlAlchemyUnitOfWork
from cask.domain.model import utcnow
from cask.interfaces.mailer import Mailer
from cask.interfaces.unit_of_work import AbstractUnitOfWork
from cask.service_layer.handlers import COMMAND_HANDLERS, EVENT_HANDLERS
from cask.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from cask.domain.events import DomainEvent
    from cask.service_layer.commands import Command

_UNSET: Any = object()


@dataclass(frozen=True)
class AppContainer:
    """Wired application objects handed to an entrypoint."""

    message_bus: MessageBus


def build_mailer() -> Mailer | None:
    """Build the SMTP mailer, or ``None`` if email is not configured."""
    settings = config.get_email_settings()
    return SmtpMailer(settings) if settings is not None else None


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: Mapping[type[Command], Callable[..., Any]],
    event_handlers: Mapping[type[DomainEvent], Sequence[Callable[..., None]]] | None = None,
    *,
    mailer: Mailer | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    Handlers declare what they need by parameter name: ``uow``, ``clock``
    and ``mailer`` are available.
    """
    dependencies = {"uow": uow, "clock": clock, "mailer": mailer}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }
    injected_event_handlers = {
        event_type: [inject_dependencies(h, dependencies) for h in handlers]
        for event_type, handlers in (event_handlers or {}).items()
    }

    return MessageBus(
        uow,
        command_handlers=injected_command_handlers,
        event_handlers=injected_event_handlers,
    )


def bootstrap(
    engine: Engine | None = None,
    mailer: Mailer | None = _UNSET,
    clock: Callable[[], datetime] = utcnow,
) -> AppContainer:
    """Wire a message bus over a fresh SQLAlchemy unit of work.

    Args:
        engine: Engine to use; built from ``CASK_DB_URL`` when omitted.
        mailer: Mailer to use; built from the environment when omitted.
            Pass ``None`` to disable email.
        clock: Source of the current time.
    """
    if engine is None:
        engine = make_engine(config.get_db_url())
    if mailer is _UNSET:
        mailer = build_mailer()

    message_bus = build_message_bus(
        SqlAlchemyUnitOfWork(engine),
        COMMAND_HANDLERS,
        EVENT_HANDLERS,
        mailer=mailer,
        clock=clock,
    )
    return AppContainer(message_bus=message_bus)


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler asks for by parameter name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
