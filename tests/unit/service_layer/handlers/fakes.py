"""Fake implementations for testing service layer handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from cask.adapters.memory import InMemoryUnitOfWork
from cask.bootstrap.bootstrap import build_message_bus
from cask.interfaces.mailer import Mailer, MailerError
from cask.service_layer.handlers import COMMAND_HANDLERS, EVENT_HANDLERS
from cask.service_layer.messagebus import MessageBus

from tests.fixtures.datagen import NOW


@dataclass(frozen=True)
class SentMail:
    """One message captured by `FakeMailer`."""

    to: str
    subject: str
    text: str
    html: str


@dataclass
class FakeMailer(Mailer):
    """Mailer that records messages instead of sending them.

    Addresses listed in ``fail_for`` raise `MailerError`.
    """

    url_prefix: str = "https://cask.example"
    fail_for: set[str] = field(default_factory=set)
    sent: list[SentMail] = field(default_factory=list)

    def send(self, to: str, subject: str, text: str, html: str) -> None:
        if to in self.fail_for:
            raise MailerError(f"refused: {to}")
        self.sent.append(SentMail(to, subject, text, html))

    @property
    def recipients(self) -> list[str]:
        """Addresses mailed so far, in order."""
        return [m.to for m in self.sent]


def bootstrap_test_bus(
    mailer: Mailer | None = None,
    clock: Callable[[], datetime] = lambda: NOW,
) -> MessageBus:
    """Bootstrap a message bus over a fresh in-memory unit of work."""
    return build_message_bus(
        uow=InMemoryUnitOfWork(),
        command_handlers=COMMAND_HANDLERS,
        event_handlers=EVENT_HANDLERS,
        mailer=mailer,
        clock=clock,
    )
