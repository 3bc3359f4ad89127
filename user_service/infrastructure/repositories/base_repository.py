"""
Session handling shared by the SQLAlchemy repositories.
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Type

import structlog
from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session, sessionmaker

from user_service.core.exceptions import (
    ReadFailedError,
    StorageError,
    StorageUnavailableError,
    WriteFailedError,
)

logger = structlog.get_logger(__name__)

# Errors raised while checking a connection out of the pool
CONNECT_ERRORS = (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError)


class SQLAlchemyRepository:
    """Base for repositories that open one session per operation."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def session_scope(
        self,
        operation: str,
        user_id: Optional[int] = None,
        failure: Type[StorageError] = WriteFailedError,
    ) -> Iterator[Session]:
        """Check out a connection, run the body in a transaction, release it.

        Storage errors raised by the body are wrapped in ``failure``;
        application errors pass through unchanged after a rollback.
        """
        session = self.session_factory()
        try:
            try:
                session.connection()
            except CONNECT_ERRORS as e:
                logger.error("Database connection failed", operation=operation, user_id=user_id, error=str(e))
                raise StorageUnavailableError(operation, user_id) from e

            try:
                yield session
                session.commit()
            except sa_exc.SQLAlchemyError as e:
                session.rollback()
                logger.error("Statement failed", operation=operation, user_id=user_id, error=str(e))
                raise self._wrap(failure, operation, user_id, e) from e
            except Exception:
                session.rollback()
                raise
        finally:
            session.close()

    @staticmethod
    def _wrap(
        failure: Type[StorageError],
        operation: str,
        user_id: Optional[int],
        error: sa_exc.SQLAlchemyError,
    ) -> StorageError:
        if failure is WriteFailedError:
            return WriteFailedError(operation, user_id, conflict=isinstance(error, sa_exc.IntegrityError))
        if failure is ReadFailedError:
            return ReadFailedError(operation, user_id)
        return failure(f"failed to {operation} user", operation, user_id)
