"""Transaction boundary shared by the use cases."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from formvault.domain.errors import Conflict, StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Commit the work done inside the block or roll all of it back.

    Database errors are translated into the domain taxonomy: integrity
    violations become :class:`Conflict`, anything else :class:`StorageFailure`.
    """

    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise Conflict("The change conflicts with existing data") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Database transaction failed: %s", exc)
        raise StorageFailure("Database operation failed") from exc
    except BaseException:
        session.rollback()
        raise


__all__ = ["transaction"]
