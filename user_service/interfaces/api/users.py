"""Users API routes — create, get, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from user_service.config import get_settings
from user_service.core.locking import RequestLock
from user_service.interfaces.deps import get_request_lock, get_user_repository
from user_service.domain.repositories.user_repository import UserRepository
from user_service.domain.schemas.user import UserCreate, UserCreated, UserRead, UserUpdate
from user_service.application.services.user_service import (
    create_user,
    delete_user,
    get_user,
    update_user,
)

settings = get_settings()

router = APIRouter(prefix="/api/users", tags=["Users"])

# users.id is BIGINT
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create(
    body: UserCreate,
    repo: UserRepository = Depends(get_user_repository),
    lock: RequestLock = Depends(get_request_lock),
):
    return create_user(repo, lock, body)


@router.get("/{user_id}", response_model=UserRead)
def get(
    user_id: UserId,
    repo: UserRepository = Depends(get_user_repository),
    lock: RequestLock = Depends(get_request_lock),
):
    return get_user(repo, lock, user_id, expose_password=settings.EXPOSE_PASSWORDS)


@router.patch("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update(
    user_id: UserId,
    body: UserUpdate,
    repo: UserRepository = Depends(get_user_repository),
    lock: RequestLock = Depends(get_request_lock),
):
    update_user(repo, lock, user_id, body)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(
    user_id: UserId,
    repo: UserRepository = Depends(get_user_repository),
    lock: RequestLock = Depends(get_request_lock),
):
    delete_user(repo, lock, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
