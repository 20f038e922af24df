"""One-time passcode issuance and verification.

Each recipient has at most one live passcode. States per recipient are
``ABSENT -> ISSUED -> CONSUMED | EXPIRED`` and both terminal states behave like
``ABSENT``: issuing again always starts a fresh challenge. Expiry is evaluated
lazily on access; nothing runs in the background.
"""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from formvault.application.locks import KeyedLocks
from formvault.domain.entities import OtpRecord
from formvault.domain.errors import DeliveryFailed, Expired, InvalidPayload, Mismatch, NotFound
from formvault.infrastructure.notifiers import Notifier
from formvault.infrastructure.otp_store import InMemoryOtpStore, OtpStore
from formvault.utils import utcnow

logger = logging.getLogger(__name__)

CODE_MIN = 100_000
CODE_MAX = 999_999

_PHONE_NOISE = re.compile(r"[\s().-]")
_PHONE_PATTERN = re.compile(r"^\+?\d{4,15}$")


def generate_code() -> str:
    """Return a uniformly random six digit code without a leading zero."""

    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def normalize_recipient(recipient: str) -> str:
    """Return the lookup key for an email address or phone number."""

    value = (recipient or "").strip()
    if not value:
        raise InvalidPayload("Recipient is required")
    if "@" in value:
        local, _, domain = value.rpartition("@")
        if not local or "." not in domain:
            raise InvalidPayload("Recipient email address is not valid")
        return value.lower()
    phone = _PHONE_NOISE.sub("", value)
    if not _PHONE_PATTERN.match(phone):
        raise InvalidPayload("Recipient phone number is not valid")
    return phone


def build_message(code: str, expires_in: timedelta) -> str:
    minutes = max(1, int(expires_in.total_seconds() // 60))
    return f"Your verification code is {code}. It expires in {minutes} minute(s)."


class OtpManager:
    """Issue, deliver and consume passcodes for recipients.

    Operations on the same recipient are serialized; different recipients
    never wait on each other.
    """

    def __init__(
        self,
        notifier: Notifier,
        *,
        store: OtpStore | None = None,
        expires_in: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = utcnow,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self.notifier = notifier
        self.store = store if store is not None else InMemoryOtpStore()
        self.expires_in = expires_in
        self.clock = clock
        self.code_factory = code_factory
        self._locks = KeyedLocks()

    def issue(self, recipient: str) -> str:
        """Issue a new code for ``recipient`` and dispatch it.

        Any earlier code for the same recipient stops being valid, even when the
        delivery of the new one fails. In that case :class:`DeliveryFailed` is
        raised and the new code stays issued so delivery can be retried with
        :meth:`resend`.
        """

        key = normalize_recipient(recipient)
        with self._locks.hold(key):
            record = OtpRecord(
                recipient=key,
                code=self.code_factory(),
                issued_at=self.clock(),
                expires_in=self.expires_in,
            )
            self.store.put(record)
            logger.info("Issued passcode for %s valid until %s", key, record.expires_at)
            self._dispatch(record)
            return record.code

    def resend(self, recipient: str) -> None:
        """Dispatch the live code for ``recipient`` again without regenerating it."""

        key = normalize_recipient(recipient)
        with self._locks.hold(key):
            record = self._live_record(key)
            self._dispatch(record)

    def verify(self, recipient: str, code: str) -> None:
        """Consume the code issued to ``recipient``.

        Raises :class:`NotFound` when nothing is outstanding, :class:`Expired`
        (and forgets the record) when the window elapsed, and :class:`Mismatch`
        when ``code`` is wrong, in which case the record is kept.
        """

        key = normalize_recipient(recipient)
        with self._locks.hold(key):
            record = self._live_record(key)
            submitted = (code or "").strip()
            if not secrets.compare_digest(submitted.encode(), record.code.encode()):
                logger.info("Passcode mismatch for %s", key)
                raise Mismatch()
            self.store.delete(key)
            logger.info("Passcode verified for %s", key)

    def clear(self) -> None:
        """Drop every outstanding record."""

        self.store.clear()

    def _live_record(self, key: str) -> OtpRecord:
        record = self.store.get(key)
        if record is None:
            raise NotFound("No passcode outstanding for this recipient")
        if record.is_expired(self.clock()):
            self.store.delete(key)
            logger.info("Passcode for %s expired", key)
            raise Expired()
        return record

    def _dispatch(self, record: OtpRecord) -> None:
        message = build_message(record.code, record.expires_in)
        try:
            delivered = self.notifier.send(record.recipient, message)
        except Exception as exc:  # notifier implementations are third-party clients
            logger.error("Passcode delivery to %s raised: %s", record.recipient, exc)
            raise DeliveryFailed(record.recipient) from exc
        if not delivered:
            logger.warning("Passcode delivery to %s failed", record.recipient)
            raise DeliveryFailed(record.recipient)


__all__ = [
    "OtpManager",
    "build_message",
    "generate_code",
    "normalize_recipient",
]
