"""SMTP mailer adapter.

Sends multipart (plain text + HTML) messages over an implicit-TLS SMTP
connection. One connection is opened per message; notification volume is
one message per follower of a tasting.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr
from typing import TYPE_CHECKING

from cask.interfaces.mailer import Mailer, MailerError

if TYPE_CHECKING:
    from cask.config import EmailSettings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 30


class SmtpMailer(Mailer):
    """Mailer backed by `smtplib.SMTP_SSL`."""

    def __init__(self, settings: EmailSettings):
        self.settings = settings
        self.url_prefix = settings.url_prefix

    def build_message(self, to: str, subject: str, text: str, html: str) -> EmailMessage:
        """Assemble the MIME message sent by `send`."""
        message = EmailMessage()
        message["From"] = formataddr((self.settings.from_name, self.settings.from_address))
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        message.add_alternative(html, subtype="html")
        return message

    def send(self, to: str, subject: str, text: str, html: str) -> None:
        message = self.build_message(to, subject, text, html)
        try:
            with smtplib.SMTP_SSL(
                self.settings.host, self.settings.port, timeout=SMTP_TIMEOUT_SECONDS
            ) as smtp:
                if self.settings.username:
                    smtp.login(self.settings.username, self.settings.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailerError(f"Could not send email to {to}: {e}") from e
        logger.debug("Sent %r to %s", subject, to)
