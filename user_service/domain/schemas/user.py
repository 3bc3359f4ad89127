"""Pydantic schemas for the user endpoints."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from user_service.domain.entities.user import User
from user_service.domain.role import encode_role


class UserCreate(BaseModel):
    name: str
    email: str
    role: str
    password: str


class UserCreated(BaseModel):
    id: int


class UserUpdate(BaseModel):
    # null and omitted both leave the stored value untouched
    name: Optional[str] = None
    email: Optional[str] = None
    role: str


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str
    password: Optional[str] = None
    password_confirm: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User, expose_password: bool = True) -> "UserRead":
        password = user.unsafe_password() if expose_password else None
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=encode_role(user.role),
            password=password,
            password_confirm=password,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
