"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from formvault.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class _RecordingClient:
    messages: list = []

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def send(self, message):
        type(self).messages.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class MissingSettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: MissingSettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_passcode_email_success(monkeypatch: pytest.MonkeyPatch) -> None:
    _RecordingClient.messages = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)

    assert email_module.send_passcode_email("user@example.com", "Code <123456>") is True

    (message,) = _RecordingClient.messages
    body = json.dumps(message.get())
    assert "Code &lt;123456&gt;" in body
    assert "user@example.com" in body


def test_send_email_unsuccessful_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(_RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(
                status_code=400,
                body=json.dumps({"errors": [{"message": "Invalid", "field": "from"}]}),
            )

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "status 400" in caplog.text
    assert "from: Invalid" in caplog.text


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(_RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text
