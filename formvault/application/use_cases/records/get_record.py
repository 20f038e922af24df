"""Use case for retrieving form records."""

from sqlalchemy.orm import Session

from formvault.domain.entities import ParentRecord
from formvault.domain.errors import NotFound
from formvault.infrastructure.repositories import RecordRepository, transaction


def get_record(session: Session, record_id: str) -> ParentRecord:
    """Return the record identified by ``record_id`` or raise :class:`NotFound`."""

    with transaction(session):
        record = RecordRepository(session).get(record_id)
    if record is None:
        raise NotFound("Record not found")
    return record
