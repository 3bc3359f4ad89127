"""User roles and their textual storage representation.

Decoding is strict: a stored value outside the known set means the row is
corrupt and the read must fail. Encoding is total: anything that is not
``Role.ADMIN`` is written as ``"USER"`` so a write is never blocked by the
in-memory value.
"""

from enum import Enum
from typing import Any

from fastapi import status

from user_service.core.exceptions import InvalidRoleError


class Role(Enum):
    ADMIN = "ADMIN"
    USER = "USER"


_ROLES_BY_TEXT = {"ADMIN": Role.ADMIN, "USER": Role.USER}


def decode_role(text: Any) -> Role:
    """Decode role text supplied by a caller; unknown text is a 422."""
    if isinstance(text, str) and text in _ROLES_BY_TEXT:
        return _ROLES_BY_TEXT[text]
    raise InvalidRoleError(text)


def decode_stored_role(text: Any, user_id: int) -> Role:
    """Decode role text read back from ``users``; unknown text is a 500."""
    if isinstance(text, str) and text in _ROLES_BY_TEXT:
        return _ROLES_BY_TEXT[text]
    raise InvalidRoleError(
        text,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"operation": "get", "user_id": user_id},
    )


def encode_role(role: Any) -> str:
    if role is Role.ADMIN:
        return "ADMIN"
    return "USER"
