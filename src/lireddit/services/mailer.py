"""Outgoing email."""

from __future__ import annotations

import logging
import smtplib
from email.mime.text import MIMEText
from functools import lru_cache
from typing import Protocol

from lireddit.core.settings import settings

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, to_email: str, subject: str, html: str) -> None: ...


class SmtpMailer:
    """Sends HTML mail through the configured SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        *,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        starttls: bool = True,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.starttls = starttls

    def send(self, to_email: str, subject: str, html: str) -> None:
        msg = MIMEText(html, "html", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to_email

        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            if self.starttls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info("Sent %r to %s", subject, to_email)


class LogMailer:
    """Development mailer that writes messages to the log instead of sending them."""

    def send(self, to_email: str, subject: str, html: str) -> None:
        logger.info("Email to %s | %s\n%s", to_email, subject, html)


@lru_cache(maxsize=1)
def get_mailer() -> Mailer:
    """Return the process-wide mailer chosen by ``SMTP_HOST``."""
    if not settings.smtp_host:
        return LogMailer()
    return SmtpMailer(
        settings.smtp_host,
        settings.smtp_port,
        sender=settings.smtp_from,
        username=settings.smtp_username,
        password=settings.smtp_password,
        starttls=settings.smtp_starttls,
    )
