"""SQLAlchemy model for form records."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from formvault.infrastructure.database import Base
from formvault.utils import utcnow_naive

JSONType = JSON().with_variant(JSONB(), "postgresql")


class FormRecordModel(Base):
    """Database representation of a submitted form."""

    __tablename__ = "form_record"

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=True)
    fields = Column(JSONType, nullable=False, default=dict)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=utcnow_naive)
    updated_by = Column(Integer, nullable=True)
    updated_at = Column(DateTime(), nullable=True, onupdate=utcnow_naive)


__all__ = ["FormRecordModel"]
