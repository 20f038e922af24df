"""Use case applying an update to a record and its attachment set."""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from sqlalchemy.orm import Session

from formvault.application.locks import record_locks
from formvault.domain.entities import Attachment, AttachmentPayload
from formvault.domain.errors import NotFound
from formvault.infrastructure.repositories import RecordRepository, transaction
from formvault.infrastructure.storage import ContentSink

from .ingest_attachments import RECORD_NOT_FOUND, discard_contents, store_decoded
from .payloads import decode_payloads

logger = logging.getLogger(__name__)


def reconcile_attachments(
    session: Session,
    record_id: str,
    *,
    payloads: Sequence[AttachmentPayload] = (),
    removed_ids: Collection[str] = (),
    title: str | None = None,
    fields: Mapping[str, Any] | None = None,
    sink: ContentSink,
    max_bytes: int,
    updated_by: int | None = None,
) -> list[Attachment]:
    """Remove ``removed_ids``, add ``payloads`` and return the resulting set.

    The update runs in two phases that are each all-or-nothing but not atomic
    together: the scalar changes and removals commit first, then the new
    payloads are ingested. If ingestion fails the removals stay in effect and
    the error is raised to the caller. Bytes of removed attachments are deleted
    on a best-effort basis and a failure there does not stop the ingestion.
    Identifiers in ``removed_ids`` that the record does not own are ignored.

    Payloads are decoded before anything changes, so malformed or oversized
    content rejects the whole update.
    """

    decoded = decode_payloads(payloads, max_bytes=max_bytes)
    wanted = {str(attachment_id) for attachment_id in removed_ids}

    with record_locks.hold(record_id):
        with transaction(session):
            records = RecordRepository(session)
            if not records.lock(record_id):
                raise NotFound(RECORD_NOT_FOUND)
            removed = records.attachments.list_owned(record_id, wanted)
            records.attachments.delete_many([attachment.id for attachment in removed])
            records.update(record_id, title=title, fields=fields, updated_by=updated_by)

        discard_contents(sink, [attachment.locator for attachment in removed])
        if removed:
            logger.info("Removed %d attachment(s) from record %s", len(removed), record_id)

        if decoded:
            store_decoded(session, record_id, decoded, sink=sink, created_by=updated_by)

        with transaction(session):
            return RecordRepository(session).attachments.list_by_record(record_id)


__all__ = ["reconcile_attachments"]
