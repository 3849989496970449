"""Unit tests for dependency injection in the bootstrap module."""

from __future__ import annotations

from dataclasses import dataclass

from cask import config
from cask.adapters.mailer import SmtpMailer
from cask.adapters.memory import InMemoryUnitOfWork
from cask.bootstrap import build_mailer, build_message_bus, inject_dependencies
from cask.service_layer.commands import Command

# pylint: disable=unused-argument


@dataclass(frozen=True)
class Ping(Command):
    """A fake command."""


def test_inject_dependencies_binds_only_requested_names():
    """Handlers receive just the dependencies their signature names."""

    def handler(cmd, uow, clock):
        return cmd, uow, clock

    injected = inject_dependencies(handler, {"uow": "U", "clock": "C", "mailer": "M"})
    assert injected("cmd") == ("cmd", "U", "C")
    assert injected.keywords == {"uow": "U", "clock": "C"}


def test_build_message_bus_wires_handlers():
    """Command handlers get the bus's unit of work and clock."""
    seen = {}

    def handle_ping(cmd: Ping, uow, clock):
        seen.update(uow=uow, now=clock())
        return "pong"

    uow = InMemoryUnitOfWork()
    bus = build_message_bus(uow, {Ping: handle_ping}, clock=lambda: "now")
    assert bus.handle(Ping()) == "pong"
    assert seen == {"uow": uow, "now": "now"}


def test_build_mailer_disabled_without_settings(monkeypatch):
    """No email settings, no mailer."""
    monkeypatch.setattr(config, "get_email_settings", lambda: None)
    assert build_mailer() is None


def test_build_mailer_from_settings(monkeypatch):
    """Configured settings produce an SMTP mailer."""
    settings = config.EmailSettings(
        url_prefix="https://cask.example", from_address="noreply@cask.example"
    )
    monkeypatch.setattr(config, "get_email_settings", lambda: settings)
    mailer = build_mailer()
    assert isinstance(mailer, SmtpMailer)
    assert mailer.url_prefix == "https://cask.example"
