"""User table model — maps to the 'users' table.

``id`` is BIGINT, declared as INTEGER on SQLite where only an INTEGER
PRIMARY KEY autoincrements.
"""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from user_service.infrastructure.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(16), nullable=False, server_default="USER")
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<UserModel {self.id} {self.email}>"
