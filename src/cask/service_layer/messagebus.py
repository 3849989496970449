"""Message bus implementation for handling commands and events."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from cask.domain.events import DomainEvent
from cask.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

CommandHandler = Callable[[Command], Any]
EventHandler = Callable[[DomainEvent], None]


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """Routes commands to their handler and committed events to subscribers.

    A command has exactly one handler, whose return value is handed back to
    the caller. Once it returns, the events released by the unit of work
    (those recorded in transactions that committed) are dispatched to every
    subscribed event handler. Events recorded by event handlers are
    dispatched too, until none are left.

    Event handlers are side effects such as notifications: their failures are
    logged and never reach the caller, whose command has already committed.

    Args:
        uow: The unit of work shared with the handlers. Handlers receive it
            through dependency injection; the bus only drains its events.
        command_handlers: Mapping of command type to a one-argument callable.
        event_handlers: Mapping of event type to one-argument callables.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        command_handlers: Mapping[type[Command], CommandHandler],
        event_handlers: Mapping[type[DomainEvent], Sequence[EventHandler]] | None = None,
    ) -> None:
        self.uow = uow
        self._command_handlers = command_handlers
        self._event_handlers = event_handlers or {}

    def handle(self, cmd: Command) -> Any:
        """Handle a command, then dispatch the events it released.

        Args:
            cmd: The command to handle.

        Returns:
            Whatever the command handler returned.

        Raises:
            NoHandlerForCommand: If no handler is found for the command type.
            Exception: If the handler raises an exception.
        """
        result = self._handle_command(cmd)
        self._dispatch_events()
        return result

    def _handle_command(self, cmd: Command) -> Any:
        if not (handler := self._command_handlers.get(type(cmd))):
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

        handler_name = self._get_handler_name(handler)
        logger.debug("Handling command %s with handler %s", cmd, handler_name)
        try:
            return handler(cmd)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Exception handling command %s with handler %s", cmd, handler_name
            )
            raise

    def _dispatch_events(self) -> None:
        queue = list(self.uow.collect_new_events())
        while queue:
            event = queue.pop(0)
            for handler in self._event_handlers.get(type(event), ()):
                handler_name = self._get_handler_name(handler)
                logger.debug("Handling event %s with handler %s", event, handler_name)
                try:
                    handler(event)
                except Exception:  # pylint: disable=broad-except
                    logger.exception(
                        "Exception handling event %s with handler %s",
                        event,
                        handler_name,
                    )
            queue.extend(self.uow.collect_new_events())

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
