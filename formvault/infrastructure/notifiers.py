"""Delivery channels used to dispatch passcodes."""

from __future__ import annotations

import logging
from typing import Protocol

from formvault.config import Settings

from . import email

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Fire-and-report delivery channel."""

    def send(self, recipient: str, message: str) -> bool:
        ...


class EmailNotifier:
    """Deliver messages by email through SendGrid."""

    def send(self, recipient: str, message: str) -> bool:
        return email.send_passcode_email(recipient, message)


class ConsoleNotifier:
    """Write messages to the log instead of delivering them.

    Only meant for development setups without an SMS provider.
    """

    def send(self, recipient: str, message: str) -> bool:
        logger.warning("Console delivery to %s: %s", recipient, message)
        return True


class RoutingNotifier:
    """Pick a channel depending on whether the recipient is an email address."""

    def __init__(self, *, email: Notifier | None, phone: Notifier | None) -> None:
        self.email = email
        self.phone = phone

    def send(self, recipient: str, message: str) -> bool:
        channel = self.email if "@" in recipient else self.phone
        if channel is None:
            logger.warning("No delivery channel configured for recipient %s", recipient)
            return False
        return channel.send(recipient, message)


def build_notifier(settings: Settings) -> Notifier:
    """Return the notifier matching the configured channels."""

    email_channel: Notifier | None = None
    if settings.sendgrid_api_key and settings.sendgrid_sender:
        email_channel = EmailNotifier()
    elif settings.otp_console_delivery:
        email_channel = ConsoleNotifier()
    phone_channel: Notifier | None = ConsoleNotifier() if settings.otp_console_delivery else None
    return RoutingNotifier(email=email_channel, phone=phone_channel)


__all__ = [
    "ConsoleNotifier",
    "EmailNotifier",
    "Notifier",
    "RoutingNotifier",
    "build_notifier",
]
