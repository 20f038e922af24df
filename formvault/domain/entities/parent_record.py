"""Domain entity describing a form record submission."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .attachment import Attachment


@dataclass
class ParentRecord:
    """A form submission that owns zero or more attachments."""

    id: str
    title: str | None
    fields: dict[str, Any]
    created_by: int | None
    created_at: datetime | None
    updated_by: int | None
    updated_at: datetime | None
    attachments: list[Attachment] = field(default_factory=list)


__all__ = ["ParentRecord"]
