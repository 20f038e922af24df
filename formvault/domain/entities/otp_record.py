"""Domain entity describing an outstanding passcode challenge."""

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(frozen=True)
class OtpRecord:
    """A passcode issued to ``recipient`` and valid until :attr:`expires_at`."""

    recipient: str
    code: str
    issued_at: datetime
    expires_in: timedelta

    @property
    def expires_at(self) -> datetime:
        return self.issued_at + self.expires_in

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


__all__ = ["OtpRecord"]
