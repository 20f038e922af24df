"""Persistence helpers for attachment metadata."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from sqlalchemy.orm import Session

from formvault.domain.entities import Attachment
from formvault.infrastructure.models import AttachmentModel
from formvault.utils import ensure_utc, ensure_utc_naive, utcnow


class AttachmentRepository:
    """Provide CRUD operations for attachment metadata rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, attachment_id: str) -> Attachment | None:
        model = self.session.get(AttachmentModel, attachment_id)
        return self._to_entity(model) if model else None

    def list_by_record(self, record_id: str) -> list[Attachment]:
        models = (
            self.session.query(AttachmentModel)
            .filter(AttachmentModel.record_id == record_id)
            .order_by(AttachmentModel.created_at, AttachmentModel.id)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_owned(self, record_id: str, attachment_ids: Collection[str]) -> list[Attachment]:
        """Return the attachments of ``record_id`` whose ids are in ``attachment_ids``."""

        if not attachment_ids:
            return []
        models = (
            self.session.query(AttachmentModel)
            .filter(AttachmentModel.record_id == record_id)
            .filter(AttachmentModel.id.in_(list(attachment_ids)))
            .all()
        )
        return [self._to_entity(model) for model in models]

    def create_many(self, attachments: Sequence[Attachment]) -> list[Attachment]:
        models = []
        for attachment in attachments:
            model = AttachmentModel(
                id=attachment.id,
                record_id=attachment.record_id,
                display_name=attachment.display_name,
                label=attachment.label,
                locator=attachment.locator,
                content_type=attachment.content_type,
                size_bytes=attachment.size_bytes,
                created_by=attachment.created_by,
                created_at=ensure_utc_naive(attachment.created_at or utcnow()),
            )
            self.session.add(model)
            models.append(model)
        self.session.flush()
        return [self._to_entity(model) for model in models]

    def delete_many(self, attachment_ids: Collection[str]) -> None:
        if not attachment_ids:
            return
        self.session.query(AttachmentModel).filter(
            AttachmentModel.id.in_(list(attachment_ids))
        ).delete(synchronize_session="fetch")
        self.session.flush()

    def delete_by_record(self, record_id: str) -> None:
        self.session.query(AttachmentModel).filter(
            AttachmentModel.record_id == record_id
        ).delete(synchronize_session="fetch")
        self.session.flush()

    @staticmethod
    def _to_entity(model: AttachmentModel) -> Attachment:
        return Attachment(
            id=model.id,
            record_id=model.record_id,
            display_name=model.display_name,
            label=model.label,
            locator=model.locator,
            content_type=model.content_type,
            size_bytes=model.size_bytes,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["AttachmentRepository"]
