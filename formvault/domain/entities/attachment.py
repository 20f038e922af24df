"""Domain entities describing stored attachments."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class AttachmentPayload:
    """One encoded file submitted by a caller.

    ``content`` holds Base64 text, optionally prefixed by a ``data:`` URL header.
    """

    content: str
    display_name: str | None = None
    label: str | None = None
    content_type: str | None = None


@dataclass
class Attachment:
    """Metadata for one stored file owned by a form record."""

    id: str
    record_id: str
    display_name: str | None
    label: str | None
    locator: str
    content_type: str
    size_bytes: int
    created_by: int | None
    created_at: datetime | None


def build_locator(record_id: str, attachment_id: str) -> str:
    """Return the content-sink key for an attachment.

    The key only depends on server generated identifiers.
    """

    return f"{record_id}/{attachment_id}"


__all__ = ["Attachment", "AttachmentPayload", "DEFAULT_CONTENT_TYPE", "build_locator"]
