"""
SQLAlchemy engine + session factory.

The engine owns a bounded connection pool; repositories check a connection
out per call through ``SessionLocal`` and return it when the call ends.
"""

from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from user_service.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def engine_options(url: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """``create_engine`` keyword arguments for ``url``'s dialect.

    PostgreSQL connections get a server-side ``statement_timeout`` when
    ``DB_STATEMENT_TIMEOUT_MS`` is positive; it bounds every repository call.
    """
    settings = settings or get_settings()
    parsed = make_url(url)
    backend = parsed.get_backend_name()
    kwargs: Dict[str, Any] = {"pool_pre_ping": True}

    if backend == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            # One shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return kwargs

    kwargs.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
    )
    if backend == "postgresql" and settings.DB_STATEMENT_TIMEOUT_MS > 0:
        kwargs["connect_args"] = {"options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"}
    return kwargs


def build_engine(url: str, settings: Optional[Settings] = None) -> Engine:
    """Create an engine with pool and timeout options suited to the dialect."""
    return create_engine(url, **engine_options(url, settings))


engine = build_engine(get_settings().DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
