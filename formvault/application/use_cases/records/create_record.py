"""Use case for creating form records."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import uuid4

from sqlalchemy.orm import Session

from formvault.application.use_cases.attachments.ingest_attachments import (
    discard_contents,
    write_contents,
)
from formvault.application.use_cases.attachments.payloads import decode_payloads
from formvault.domain.entities import AttachmentPayload, ParentRecord
from formvault.infrastructure.repositories import RecordRepository, transaction
from formvault.infrastructure.storage import ContentSink
from formvault.utils import utcnow

logger = logging.getLogger(__name__)


def create_record(
    session: Session,
    *,
    title: str | None = None,
    fields: Mapping[str, Any] | None = None,
    payloads: Sequence[AttachmentPayload] = (),
    sink: ContentSink,
    max_bytes: int,
    created_by: int | None = None,
) -> ParentRecord:
    """Create a record together with its initial attachments.

    The record row and every attachment commit together; when anything fails
    no record exists afterwards and stored bytes are discarded.
    """

    decoded = decode_payloads(payloads, max_bytes=max_bytes)
    record_id = str(uuid4())
    entity = ParentRecord(
        id=record_id,
        title=title,
        fields=dict(fields or {}),
        created_by=created_by,
        created_at=utcnow(),
        updated_by=None,
        updated_at=None,
    )

    written: list[str] = []
    try:
        with transaction(session):
            record = RecordRepository(session).create(entity)
            record.attachments = write_contents(
                session,
                record_id,
                decoded,
                sink=sink,
                created_by=created_by,
                written=written,
            )
    except BaseException:
        discard_contents(sink, written)
        raise

    logger.info(
        "Created record %s with %d attachment(s)", record_id, len(record.attachments)
    )
    return record
