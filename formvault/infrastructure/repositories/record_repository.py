"""Persistence helpers for form records."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from formvault.domain.entities import Attachment, ParentRecord
from formvault.domain.errors import NotFound
from formvault.infrastructure.models import AttachmentModel, FormRecordModel
from formvault.utils import ensure_utc, ensure_utc_naive, utcnow_naive

from .attachment_repository import AttachmentRepository


class RecordRepository:
    """Provide CRUD operations for form records.

    The repository only flushes; callers own the transaction boundary.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.attachments = AttachmentRepository(session)

    def list(self, *, skip: int = 0, limit: int | None = None) -> list[ParentRecord]:
        query = self.session.query(FormRecordModel).order_by(
            FormRecordModel.created_at.desc(), FormRecordModel.id
        )
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        models = query.all()
        if not models:
            return []

        attachment_models = (
            self.session.query(AttachmentModel)
            .filter(AttachmentModel.record_id.in_([model.id for model in models]))
            .order_by(AttachmentModel.created_at, AttachmentModel.id)
            .all()
        )
        grouped: dict[str, list[Attachment]] = defaultdict(list)
        for attachment_model in attachment_models:
            grouped[attachment_model.record_id].append(
                AttachmentRepository._to_entity(attachment_model)
            )
        return [self._to_entity(model, grouped.get(model.id, [])) for model in models]

    def get(self, record_id: str) -> ParentRecord | None:
        """Return the record with its attachments read in a single statement."""

        rows = (
            self.session.query(FormRecordModel, AttachmentModel)
            .outerjoin(AttachmentModel, AttachmentModel.record_id == FormRecordModel.id)
            .filter(FormRecordModel.id == record_id)
            .order_by(AttachmentModel.created_at, AttachmentModel.id)
            .all()
        )
        if not rows:
            return None
        model = rows[0][0]
        attachments = [
            AttachmentRepository._to_entity(attachment_model)
            for _, attachment_model in rows
            if attachment_model is not None
        ]
        return self._to_entity(model, attachments)

    def lock(self, record_id: str) -> bool:
        """Take a row lock on the record for the rest of the transaction.

        Returns ``False`` when the record does not exist.
        """

        model = (
            self.session.query(FormRecordModel)
            .filter(FormRecordModel.id == record_id)
            .with_for_update()
            .one_or_none()
        )
        return model is not None

    def create(self, record: ParentRecord) -> ParentRecord:
        model = FormRecordModel(
            id=record.id,
            title=record.title,
            fields=dict(record.fields),
            created_by=record.created_by,
            created_at=ensure_utc_naive(record.created_at),
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model, [])

    def update(
        self,
        record_id: str,
        *,
        title: str | None = None,
        fields: Mapping[str, Any] | None = None,
        updated_by: int | None = None,
    ) -> None:
        model = self.session.get(FormRecordModel, record_id)
        if model is None:
            raise NotFound(f"Form record with id {record_id} not found")
        if title is not None:
            model.title = title
        if fields is not None:
            model.fields = dict(fields)
        model.updated_by = updated_by
        model.updated_at = utcnow_naive()
        self.session.add(model)
        self.session.flush()

    def delete(self, record_id: str) -> None:
        self.session.query(FormRecordModel).filter(
            FormRecordModel.id == record_id
        ).delete(synchronize_session="fetch")
        self.session.flush()

    @staticmethod
    def _to_entity(model: FormRecordModel, attachments: list[Attachment]) -> ParentRecord:
        return ParentRecord(
            id=model.id,
            title=model.title,
            fields=dict(model.fields or {}),
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
            updated_by=model.updated_by,
            updated_at=ensure_utc(model.updated_at),
            attachments=attachments,
        )


__all__ = ["RecordRepository"]
