"""Use case storing new attachments for a form record."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy.orm import Session

from formvault.application.locks import record_locks
from formvault.domain.entities import Attachment, AttachmentPayload, build_locator
from formvault.domain.errors import FormVaultError, NotFound
from formvault.infrastructure.repositories import (
    AttachmentRepository,
    RecordRepository,
    transaction,
)
from formvault.infrastructure.storage import ContentSink
from formvault.utils import utcnow

from .payloads import DecodedPayload, decode_payloads

logger = logging.getLogger(__name__)

RECORD_NOT_FOUND = "Record not found"


def write_contents(
    session: Session,
    record_id: str,
    decoded: Sequence[DecodedPayload],
    *,
    sink: ContentSink,
    created_by: int | None,
    written: list[str],
) -> list[Attachment]:
    """Write bytes to ``sink`` then add the metadata rows to the open transaction.

    Every locator is appended to ``written`` as soon as its bytes are stored so
    the caller can discard them if the transaction does not commit.
    """

    now = utcnow()
    attachments: list[Attachment] = []
    for item in decoded:
        attachment_id = str(uuid4())
        locator = build_locator(record_id, attachment_id)
        sink.write(locator, item.data, content_type=item.content_type)
        written.append(locator)
        attachments.append(
            Attachment(
                id=attachment_id,
                record_id=record_id,
                display_name=item.display_name,
                label=item.label,
                locator=locator,
                content_type=item.content_type,
                size_bytes=len(item.data),
                created_by=created_by,
                created_at=now,
            )
        )
    return AttachmentRepository(session).create_many(attachments)


def discard_contents(
    sink: ContentSink, locators: Sequence[str], *, attempts: int = 2
) -> list[str]:
    """Remove every locator in ``locators`` from ``sink`` on a best-effort basis.

    A failed delete never stops the remaining ones. Failed locators are retried
    up to ``attempts`` passes in total and those still present afterwards are
    logged and returned.
    """

    pending = list(locators)
    for _ in range(max(attempts, 1)):
        failed: list[str] = []
        for locator in pending:
            try:
                sink.delete(locator)
            except FormVaultError as exc:
                logger.warning("Could not remove content '%s': %s", locator, exc)
                failed.append(locator)
        pending = failed
        if not pending:
            break
    for locator in pending:
        logger.error("Content '%s' is left unreferenced in the sink", locator)
    return pending


def store_decoded(
    session: Session,
    record_id: str,
    decoded: Sequence[DecodedPayload],
    *,
    sink: ContentSink,
    created_by: int | None,
) -> list[Attachment]:
    """Persist ``decoded`` for an existing record as one all-or-nothing batch.

    The caller must hold the record lock.
    """

    written: list[str] = []
    try:
        with transaction(session):
            if not RecordRepository(session).lock(record_id):
                raise NotFound(RECORD_NOT_FOUND)
            created = write_contents(
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
    logger.info("Stored %d attachment(s) for record %s", len(created), record_id)
    return created


def ingest_attachments(
    session: Session,
    record_id: str,
    payloads: Sequence[AttachmentPayload],
    *,
    sink: ContentSink,
    max_bytes: int,
    created_by: int | None = None,
) -> list[Attachment]:
    """Attach ``payloads`` to the record identified by ``record_id``.

    Either every payload becomes an attachment or none does. The returned
    attachments follow the order of ``payloads``.
    """

    decoded = decode_payloads(payloads, max_bytes=max_bytes)
    with record_locks.hold(record_id):
        return store_decoded(
            session, record_id, decoded, sink=sink, created_by=created_by
        )


__all__ = [
    "discard_contents",
    "ingest_attachments",
    "store_decoded",
    "write_contents",
]
