"""Use cases reading attachments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from formvault.domain.entities import Attachment
from formvault.domain.errors import NotFound
from formvault.infrastructure.repositories import RecordRepository, transaction
from formvault.infrastructure.storage import ContentSink

from .ingest_attachments import RECORD_NOT_FOUND

ATTACHMENT_NOT_FOUND = "Attachment not found"


def fetch_attachments(session: Session, record_id: str) -> list[Attachment]:
    """Return the attachments owned by ``record_id``.

    An empty list means the record has no attachments; a missing record raises
    :class:`NotFound`.
    """

    with transaction(session):
        record = RecordRepository(session).get(record_id)
    if record is None:
        raise NotFound(RECORD_NOT_FOUND)
    return record.attachments


def read_attachment_content(
    session: Session, record_id: str, attachment_id: str, *, sink: ContentSink
) -> tuple[Attachment, bytes]:
    """Return the metadata and bytes of one attachment of ``record_id``."""

    with transaction(session):
        attachment = RecordRepository(session).attachments.get(attachment_id)
    if attachment is None or attachment.record_id != record_id:
        raise NotFound(ATTACHMENT_NOT_FOUND)
    return attachment, sink.read(attachment.locator)


__all__ = ["ATTACHMENT_NOT_FOUND", "fetch_attachments", "read_attachment_content"]
