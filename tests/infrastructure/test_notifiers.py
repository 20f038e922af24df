"""Tests for passcode delivery channels."""

from __future__ import annotations

import logging

from formvault.config import Settings
from formvault.infrastructure import notifiers
from formvault.infrastructure.notifiers import (
    ConsoleNotifier,
    EmailNotifier,
    RoutingNotifier,
    build_notifier,
)


class _Recorder:
    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, recipient: str, message: str) -> bool:
        self.sent.append(recipient)
        return True


def test_routing_notifier_picks_channel_by_recipient():
    email, phone = _Recorder(), _Recorder()
    notifier = RoutingNotifier(email=email, phone=phone)

    assert notifier.send("user@example.com", "hi") is True
    assert notifier.send("+1555", "hi") is True

    assert email.sent == ["user@example.com"]
    assert phone.sent == ["+1555"]


def test_routing_notifier_without_channel_reports_failure(caplog):
    notifier = RoutingNotifier(email=None, phone=None)

    with caplog.at_level(logging.WARNING):
        assert notifier.send("+1555", "hi") is False

    assert "No delivery channel" in caplog.text


def test_console_notifier_logs_message(caplog):
    with caplog.at_level(logging.WARNING):
        assert ConsoleNotifier().send("+1555", "code 123456") is True

    assert "code 123456" in caplog.text


def test_email_notifier_uses_sendgrid_helper(monkeypatch):
    calls = []

    def fake_send(recipient: str, message: str) -> bool:
        calls.append((recipient, message))
        return True

    monkeypatch.setattr(notifiers.email, "send_passcode_email", fake_send)

    assert EmailNotifier().send("user@example.com", "code") is True
    assert calls == [("user@example.com", "code")]


def test_build_notifier_with_sendgrid():
    settings = Settings(sendgrid_api_key="SG.fake", sendgrid_sender="noreply@example.com")

    notifier = build_notifier(settings)

    assert isinstance(notifier.email, EmailNotifier)
    assert notifier.phone is None


def test_build_notifier_console_delivery():
    notifier = build_notifier(Settings(otp_console_delivery=True))

    assert isinstance(notifier.email, ConsoleNotifier)
    assert isinstance(notifier.phone, ConsoleNotifier)
