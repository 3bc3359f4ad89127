"""In-memory user record as materialized from the ``users`` table."""

from dataclasses import dataclass, field
from datetime import datetime

from user_service.domain.role import Role


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: datetime
    _password: str = field(repr=False, compare=False)

    def unsafe_password(self) -> str:
        """Return the stored password verbatim.

        Passwords are kept in plaintext by the current schema. Callers that
        put this value on the wire should be gated by configuration.
        """
        return self._password
