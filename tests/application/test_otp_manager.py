"""Tests for the passcode lifecycle."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from formvault.application.use_cases.otp import (
    OtpManager,
    generate_code,
    normalize_recipient,
)
from formvault.domain.errors import DeliveryFailed, Expired, InvalidPayload, Mismatch, NotFound


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeNotifier:
    def __init__(self, *, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: list[tuple[str, str]] = []

    def send(self, recipient: str, message: str) -> bool:
        self.sent.append((recipient, message))
        return self.succeed


class ExplodingNotifier:
    def send(self, recipient: str, message: str) -> bool:
        raise ConnectionError("gateway down")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def manager(notifier, clock) -> OtpManager:
    return OtpManager(notifier, expires_in=timedelta(minutes=5), clock=clock)


def test_generated_codes_are_six_digits_without_leading_zero():
    for _ in range(200):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_issue_sends_code_to_recipient(manager, notifier):
    code = manager.issue("+1555")

    assert notifier.sent[0][0] == "+1555"
    assert code in notifier.sent[0][1]


def test_verify_succeeds_exactly_once(manager):
    code = manager.issue("+1555")

    manager.verify("+1555", code)
    with pytest.raises(NotFound):
        manager.verify("+1555", code)


def test_wrong_code_does_not_consume_record(manager):
    code = manager.issue("+1555")
    wrong = "100000" if code != "100000" else "100001"

    with pytest.raises(Mismatch):
        manager.verify("+1555", wrong)
    manager.verify("+1555", code)


def test_expired_code_is_rejected_and_forgotten(manager, clock):
    code = manager.issue("+1555")
    clock.advance(minutes=5, seconds=1)

    with pytest.raises(Expired):
        manager.verify("+1555", code)
    with pytest.raises(NotFound):
        manager.verify("+1555", code)


def test_code_is_valid_until_the_end_of_the_window(manager, clock):
    code = manager.issue("+1555")
    clock.advance(minutes=5)

    manager.verify("+1555", code)


def test_reissue_supersedes_previous_code(notifier, clock):
    codes = iter(["111111", "222222"])
    manager = OtpManager(notifier, clock=clock, code_factory=lambda: next(codes))

    first = manager.issue("+1555")
    second = manager.issue("+1555")

    with pytest.raises(Mismatch):
        manager.verify("+1555", first)
    manager.verify("+1555", second)


def test_verify_without_issue(manager):
    with pytest.raises(NotFound):
        manager.verify("user@example.com", "123456")


def test_delivery_failure_keeps_code_issued(clock):
    manager = OtpManager(FakeNotifier(succeed=False), clock=clock)

    with pytest.raises(DeliveryFailed) as excinfo:
        manager.issue("user@example.com")

    assert excinfo.value.recipient == "user@example.com"
    record = manager.store.get("user@example.com")
    assert record is not None
    manager.verify("user@example.com", record.code)


def test_notifier_exception_is_reported_as_delivery_failure(clock):
    manager = OtpManager(ExplodingNotifier(), clock=clock)

    with pytest.raises(DeliveryFailed):
        manager.issue("+1555")
    assert manager.store.get("+1555") is not None


def test_failed_reissue_still_supersedes(clock):
    notifier = FakeNotifier()
    codes = iter(["111111", "222222"])
    manager = OtpManager(notifier, clock=clock, code_factory=lambda: next(codes))
    first = manager.issue("+1555")

    notifier.succeed = False
    with pytest.raises(DeliveryFailed):
        manager.issue("+1555")

    with pytest.raises(Mismatch):
        manager.verify("+1555", first)


def test_resend_dispatches_the_same_code(manager, notifier):
    code = manager.issue("+1555")

    manager.resend("+1555")

    assert len(notifier.sent) == 2
    assert code in notifier.sent[1][1]
    manager.verify("+1555", code)


def test_resend_after_expiry(manager, clock):
    manager.issue("+1555")
    clock.advance(minutes=6)

    with pytest.raises(Expired):
        manager.resend("+1555")


def test_recipients_are_independent(manager):
    first = manager.issue("+1555")
    second = manager.issue("user@example.com")

    manager.verify("user@example.com", second)
    manager.verify("+1555", first)


def test_recipient_keys_are_normalized(manager):
    code = manager.issue("  User@Example.COM ")

    manager.verify("user@example.com", code)


def test_clear_drops_all_records(manager):
    code = manager.issue("+1555")

    manager.clear()

    with pytest.raises(NotFound):
        manager.verify("+1555", code)


def test_managers_are_isolated(notifier, clock):
    first = OtpManager(notifier, clock=clock)
    second = OtpManager(notifier, clock=clock)
    code = first.issue("+1555")

    with pytest.raises(NotFound):
        second.verify("+1555", code)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("+1 (555) 010-2030", "+15550102030"),
        ("Someone@Mail.Example", "someone@mail.example"),
    ],
)
def test_normalize_recipient(raw, expected):
    assert normalize_recipient(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "not-a-phone", "@example.com", "user@localhost"])
def test_normalize_recipient_rejects_garbage(raw):
    with pytest.raises(InvalidPayload):
        normalize_recipient(raw)
