"""Typed failures raised by the attachment store and the OTP manager.

Every failure carries a stable ``code`` so callers can tell the kinds apart
without inspecting the message wording.
"""

from __future__ import annotations


class FormVaultError(Exception):
    """Base class for all domain failures."""

    code = "error"
    default_message = "Operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class NotFound(FormVaultError):
    """The referenced record, attachment or passcode does not exist."""

    code = "not_found"
    default_message = "Resource not found"


class InvalidPayload(FormVaultError):
    """The submitted data could not be decoded or is malformed."""

    code = "invalid_payload"
    default_message = "Invalid payload"


class PayloadTooLarge(FormVaultError):
    """A decoded attachment exceeds the configured size limit."""

    code = "payload_too_large"
    default_message = "Payload too large"

    def __init__(self, size: int, limit: int, message: str | None = None) -> None:
        self.size = size
        self.limit = limit
        super().__init__(
            message or f"Attachment of {size} bytes exceeds the {limit} byte limit"
        )


class Conflict(FormVaultError):
    """A uniqueness constraint would be violated."""

    code = "conflict"
    default_message = "Conflicting resource"


class DeliveryFailed(FormVaultError):
    """The notifier could not deliver a passcode."""

    code = "delivery_failed"
    default_message = "Passcode delivery failed"

    def __init__(self, recipient: str, message: str | None = None) -> None:
        self.recipient = recipient
        super().__init__(message or f"Could not deliver passcode to {recipient}")


class Expired(FormVaultError):
    """The passcode was issued but its validity window has elapsed."""

    code = "expired"
    default_message = "Passcode expired"


class Mismatch(FormVaultError):
    """The submitted passcode does not match the issued one."""

    code = "mismatch"
    default_message = "Passcode does not match"


class StorageFailure(FormVaultError):
    """The content sink or the database failed in an unclassified way."""

    code = "storage_failure"
    default_message = "Storage operation failed"


__all__ = [
    "Conflict",
    "DeliveryFailed",
    "Expired",
    "FormVaultError",
    "InvalidPayload",
    "Mismatch",
    "NotFound",
    "PayloadTooLarge",
    "StorageFailure",
]
