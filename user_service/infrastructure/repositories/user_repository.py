"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, Dict

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.sql import func

from user_service.core.exceptions import ReadFailedError, UserNotFoundError, WriteFailedError
from user_service.domain.entities.user import User
from user_service.domain.models.user import UserModel
from user_service.domain.patch import Patch
from user_service.domain.repositories.user_repository import UserRepository
from user_service.domain.role import Role, decode_stored_role, encode_role
from user_service.infrastructure.repositories.base_repository import SQLAlchemyRepository

logger = structlog.get_logger(__name__)


class SQLAlchemyUserRepository(SQLAlchemyRepository, UserRepository):
    """User repository implementation using SQLAlchemy."""

    def insert(self, name: str, email: str, role: Role, password: str) -> int:
        stmt = (
            insert(UserModel)
            .values(name=name, email=email, role=encode_role(role), password=password)
            .returning(UserModel.id)
        )
        with self.session_scope("insert", failure=WriteFailedError) as session:
            user_id = session.execute(stmt).scalar_one()

        logger.info("Inserted user", user_id=user_id)
        return user_id

    def fetch_by_id(self, user_id: int) -> User:
        stmt = select(
            UserModel.id,
            UserModel.name,
            UserModel.email,
            UserModel.role,
            UserModel.password,
            UserModel.created_at,
            UserModel.updated_at,
        ).where(UserModel.id == user_id)

        with self.session_scope("get", user_id, failure=ReadFailedError) as session:
            row = session.execute(stmt).one_or_none()

        if row is None:
            raise UserNotFoundError(user_id, "get")

        return User(
            id=row.id,
            name=row.name,
            email=row.email,
            role=decode_stored_role(row.role, row.id),
            created_at=row.created_at,
            updated_at=row.updated_at,
            _password=row.password,
        )

    def update(self, user_id: int, name: Patch[str], email: Patch[str], role: Role) -> None:
        values: Dict[str, Any] = {"role": encode_role(role), "updated_at": func.now()}
        if name.is_present:
            values["name"] = name.value
        if email.is_present:
            values["email"] = email.value

        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self.session_scope("update", user_id, failure=WriteFailedError) as session:
            rowcount = session.execute(stmt).rowcount

        if rowcount == 0:
            raise UserNotFoundError(user_id, "update")
        logger.info("Updated user", user_id=user_id, fields=sorted(values))

    def delete(self, user_id: int) -> None:
        stmt = (
            delete(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(synchronize_session=False)
        )
        with self.session_scope("delete", user_id, failure=WriteFailedError) as session:
            rowcount = session.execute(stmt).rowcount

        if rowcount == 0:
            raise UserNotFoundError(user_id, "delete")
        logger.info("Deleted user", user_id=user_id)
