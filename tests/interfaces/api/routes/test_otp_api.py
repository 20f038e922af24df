"""Integration tests for the passcode endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from formvault.application.use_cases import OtpManager
from formvault.interfaces.api.dependencies import get_otp_manager
from main import create_app


class CapturingNotifier:
    def __init__(self) -> None:
        self.succeed = True
        self.messages: dict[str, str] = {}

    def send(self, recipient: str, message: str) -> bool:
        self.messages[recipient] = message
        return self.succeed

    def code_for(self, recipient: str) -> str:
        words = (word.rstrip(".") for word in self.messages[recipient].split())
        return next(word for word in words if len(word) == 6 and word.isdigit())


@pytest.fixture()
def notifier() -> CapturingNotifier:
    return CapturingNotifier()


@pytest.fixture()
def client(notifier):
    app = create_app()
    manager = OtpManager(notifier, expires_in=timedelta(minutes=5))
    app.dependency_overrides[get_otp_manager] = lambda: manager
    with TestClient(app) as test_client:
        yield test_client


def test_issue_and_verify(client: TestClient, notifier) -> None:
    response = client.post("/otp/", json={"recipient": "User@Example.com"})
    assert response.status_code == 202
    body = response.json()
    assert body == {"recipient": "user@example.com", "expires_in_seconds": 300}
    assert "code" not in body

    code = notifier.code_for("user@example.com")
    verify = client.post("/otp/verify", json={"recipient": "user@example.com", "code": code})
    assert verify.status_code == 200
    assert verify.json() == {"verified": True}

    replay = client.post("/otp/verify", json={"recipient": "user@example.com", "code": code})
    assert replay.status_code == 404


def test_wrong_code(client: TestClient, notifier) -> None:
    client.post("/otp/", json={"recipient": "+1555"})
    code = notifier.code_for("+1555")
    wrong = "100000" if code != "100000" else "100001"

    response = client.post("/otp/verify", json={"recipient": "+1555", "code": wrong})
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "mismatch"

    ok = client.post("/otp/verify", json={"recipient": "+1555", "code": code})
    assert ok.status_code == 200


def test_delivery_failure_then_resend(client: TestClient, notifier) -> None:
    notifier.succeed = False
    response = client.post("/otp/", json={"recipient": "+1555"})
    assert response.status_code == 502
    assert response.json()["detail"]["code"] == "delivery_failed"
    first_code = notifier.code_for("+1555")

    notifier.succeed = True
    resend = client.post("/otp/resend", json={"recipient": "+1555"})
    assert resend.status_code == 202
    assert notifier.code_for("+1555") == first_code


def test_invalid_recipient(client: TestClient) -> None:
    response = client.post("/otp/", json={"recipient": "nobody"})

    assert response.status_code == 422


def test_resend_without_issue(client: TestClient) -> None:
    response = client.post("/otp/resend", json={"recipient": "+1555"})

    assert response.status_code == 404


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
