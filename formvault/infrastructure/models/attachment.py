"""SQLAlchemy model for attachment metadata."""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String

from formvault.infrastructure.database import Base
from formvault.utils import utcnow_naive


class AttachmentModel(Base):
    """Metadata row describing one stored file."""

    __tablename__ = "attachment"

    id = Column(String(36), primary_key=True)
    record_id = Column(
        String(36),
        ForeignKey("form_record.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    display_name = Column(String(255), nullable=True)
    label = Column(String(100), nullable=True)
    locator = Column(String(255), nullable=False, unique=True)
    content_type = Column(String(100), nullable=False)
    size_bytes = Column(BigInteger, nullable=False)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=utcnow_naive)


__all__ = ["AttachmentModel"]
