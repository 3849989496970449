"""Mailer interface for outbound email."""

from __future__ import annotations

import abc


class MailerError(Exception):
    """Raised when a message cannot be delivered."""


class Mailer(abc.ABC):
    """Sends single-recipient email messages."""

    #: Absolute URL prefix of the web frontend, used to build links.
    url_prefix: str

    @abc.abstractmethod
    def send(self, to: str, subject: str, text: str, html: str) -> None:
        """Send one message.

        Raises:
            MailerError: If delivery fails.
        """
