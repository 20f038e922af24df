"""Keyed storage for outstanding passcodes."""

from __future__ import annotations

import threading
from typing import Protocol

from formvault.domain.entities import OtpRecord


class OtpStore(Protocol):
    """Single mutable slot per recipient."""

    def get(self, recipient: str) -> OtpRecord | None:
        ...

    def put(self, record: OtpRecord) -> None:
        ...

    def delete(self, recipient: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryOtpStore:
    """Process-local store; records vanish when the process exits."""

    def __init__(self) -> None:
        self._records: dict[str, OtpRecord] = {}
        self._lock = threading.Lock()

    def get(self, recipient: str) -> OtpRecord | None:
        with self._lock:
            return self._records.get(recipient)

    def put(self, record: OtpRecord) -> None:
        with self._lock:
            self._records[record.recipient] = record

    def delete(self, recipient: str) -> None:
        with self._lock:
            self._records.pop(recipient, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["InMemoryOtpStore", "OtpStore"]
