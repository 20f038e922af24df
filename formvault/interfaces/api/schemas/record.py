"""Schemas for form record endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from formvault.domain.entities import AttachmentPayload


class AttachmentUpload(BaseModel):
    """One Base64 encoded file inside a submission."""

    content: str = Field(description="Base64 content, optionally as a data URL")
    display_name: str | None = Field(default=None, max_length=255)
    label: str | None = Field(default=None, max_length=100)
    content_type: str | None = Field(default=None, max_length=100)

    def to_payload(self) -> AttachmentPayload:
        return AttachmentPayload(
            content=self.content,
            display_name=self.display_name,
            label=self.label,
            content_type=self.content_type,
        )


class AttachmentRead(BaseModel):
    id: str
    record_id: str
    display_name: str | None
    label: str | None
    content_type: str
    size_bytes: int
    created_by: int | None
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class RecordCreate(BaseModel):
    title: str | None = Field(default=None, max_length=255)
    fields: dict[str, Any] = Field(default_factory=dict)
    attachments: list[AttachmentUpload] = Field(default_factory=list)


class RecordUpdate(BaseModel):
    """Changes applied to a record.

    Removals are applied and committed before new attachments are stored; a
    failure while storing new attachments does not undo the removals.
    """

    title: str | None = Field(default=None, max_length=255)
    fields: dict[str, Any] | None = None
    attachments: list[AttachmentUpload] = Field(default_factory=list)
    removed_attachment_ids: list[str] = Field(default_factory=list)


class RecordRead(BaseModel):
    id: str
    title: str | None
    fields: dict[str, Any]
    created_by: int | None
    created_at: datetime | None
    updated_by: int | None
    updated_at: datetime | None
    attachments: list[AttachmentRead]

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "AttachmentRead",
    "AttachmentUpload",
    "RecordCreate",
    "RecordRead",
    "RecordUpdate",
]
