"""Use cases removing attachments and records."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from formvault.application.locks import record_locks
from formvault.domain.errors import NotFound
from formvault.infrastructure.repositories import RecordRepository, transaction
from formvault.infrastructure.storage import ContentSink

from .fetch_attachments import ATTACHMENT_NOT_FOUND
from .ingest_attachments import RECORD_NOT_FOUND, discard_contents

logger = logging.getLogger(__name__)


def delete_attachment(
    session: Session, record_id: str, attachment_id: str, *, sink: ContentSink
) -> None:
    """Remove one attachment of ``record_id`` together with its bytes."""

    with record_locks.hold(record_id):
        with transaction(session):
            records = RecordRepository(session)
            if not records.lock(record_id):
                raise NotFound(RECORD_NOT_FOUND)
            owned = records.attachments.list_owned(record_id, {attachment_id})
            if not owned:
                raise NotFound(ATTACHMENT_NOT_FOUND)
            records.attachments.delete_many([attachment_id])
        discard_contents(sink, [owned[0].locator])
    logger.info("Removed attachment %s from record %s", attachment_id, record_id)


def delete_record(session: Session, record_id: str, *, sink: ContentSink) -> None:
    """Delete a record, its attachment rows and their bytes.

    Rows go first, children before the parent, in one transaction, so readers
    see either the whole record or none of it. Bytes are removed after the
    commit on a best-effort basis, so one failing locator does not keep the
    others readable.
    """

    with record_locks.hold(record_id):
        with transaction(session):
            records = RecordRepository(session)
            if not records.lock(record_id):
                raise NotFound(RECORD_NOT_FOUND)
            doomed = records.attachments.list_by_record(record_id)
            records.attachments.delete_by_record(record_id)
            records.delete(record_id)
        discard_contents(sink, [attachment.locator for attachment in doomed])
    logger.info(
        "Deleted record %s with %d attachment(s)", record_id, len(doomed)
    )


__all__ = ["delete_attachment", "delete_record"]
