"""Use case for listing form records."""

from sqlalchemy.orm import Session

from formvault.domain.entities import ParentRecord
from formvault.infrastructure.repositories import RecordRepository, transaction


def list_records(
    session: Session, *, skip: int = 0, limit: int | None = 100
) -> list[ParentRecord]:
    """Return records, newest first."""

    with transaction(session):
        return RecordRepository(session).list(skip=skip, limit=limit)
