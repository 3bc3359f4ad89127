"""
User Repository Interface.
Defines the data access operations on the ``users`` table.
"""

from typing import Protocol

from user_service.domain.entities.user import User
from user_service.domain.patch import Patch
from user_service.domain.role import Role


class UserRepository(Protocol):
    """Interface for User CRUD operations.

    Every operation runs a single statement on its own pooled connection.
    Failures are reported with the errors from ``core.exceptions``:
    ``StorageUnavailableError`` when no connection can be obtained,
    ``UserNotFoundError`` when no row matches, and ``ReadFailedError`` or
    ``WriteFailedError`` for any other storage error.
    """

    def insert(self, name: str, email: str, role: Role, password: str) -> int:
        """Insert a user and return the identifier generated by storage."""
        ...

    def fetch_by_id(self, user_id: int) -> User:
        """Read every column of the matching row."""
        ...

    def update(self, user_id: int, name: Patch[str], email: Patch[str], role: Role) -> None:
        """Write role and any present name/email; absent fields keep their value."""
        ...

    def delete(self, user_id: int) -> None:
        """Remove the matching row."""
        ...
