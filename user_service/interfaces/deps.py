"""
API Dependencies.
"""

from functools import lru_cache

from user_service.config import get_settings
from user_service.core.locking import RequestLock, build_request_lock
from user_service.domain.repositories.user_repository import UserRepository
from user_service.infrastructure.database import SessionLocal
from user_service.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository() -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(SessionLocal)


@lru_cache
def get_request_lock() -> RequestLock:
    """Get the process-wide request lock."""
    return build_request_lock(get_settings().SERIALIZE_REQUESTS)
