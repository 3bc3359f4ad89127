"""User service — request handling for the four user operations.

Each function decodes the wire request, holds the request lock for the whole
storage round trip (shared for reads, exclusive for writes), calls the
repository once and maps the result back to the wire shape. Errors from the
repository are logged and re-raised unchanged; there are no retries.

The functions take no per-call deadline. Endpoints run synchronously on the
threadpool and cannot observe client cancellation, so each call is bounded
by the pool checkout timeout (``DB_POOL_TIMEOUT``) and, on PostgreSQL, by
the server-side ``statement_timeout`` (``DB_STATEMENT_TIMEOUT_MS``).
"""

from contextlib import contextmanager
from typing import Iterator

import structlog

from user_service.core.exceptions import AppError
from user_service.core.locking import RequestLock
from user_service.domain.patch import Patch
from user_service.domain.repositories.user_repository import UserRepository
from user_service.domain.role import decode_role
from user_service.domain.schemas.user import UserCreate, UserCreated, UserRead, UserUpdate

logger = structlog.get_logger(__name__)


@contextmanager
def _logged(operation: str, **context) -> Iterator[None]:
    try:
        yield
    except AppError as e:
        logger.warning(
            "User operation failed",
            operation=operation,
            error=e.__class__.__name__,
            status_code=e.status_code,
            **context,
        )
        raise


def create_user(repo: UserRepository, lock: RequestLock, payload: UserCreate) -> UserCreated:
    """Insert a user and return its generated id."""
    with _logged("create"):
        role = decode_role(payload.role)
        with lock.write():
            user_id = repo.insert(payload.name, payload.email, role, payload.password)
    return UserCreated(id=user_id)


def get_user(
    repo: UserRepository,
    lock: RequestLock,
    user_id: int,
    expose_password: bool = True,
) -> UserRead:
    """Fetch a user; the password is included only when ``expose_password``."""
    with _logged("get", user_id=user_id):
        with lock.read():
            user = repo.fetch_by_id(user_id)
    return UserRead.from_user(user, expose_password=expose_password)


def update_user(repo: UserRepository, lock: RequestLock, user_id: int, payload: UserUpdate) -> None:
    """Update role and whichever of name/email the request carries."""
    with _logged("update", user_id=user_id):
        role = decode_role(payload.role)
        with lock.write():
            repo.update(
                user_id,
                name=Patch.from_optional(payload.name),
                email=Patch.from_optional(payload.email),
                role=role,
            )


def delete_user(repo: UserRepository, lock: RequestLock, user_id: int) -> None:
    """Delete a user."""
    with _logged("delete", user_id=user_id):
        with lock.write():
            repo.delete(user_id)
