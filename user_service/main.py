"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import exc as sa_exc

from user_service.config import get_settings
from user_service.infrastructure.database import engine, Base
from user_service.core.logging import configure_logging
from user_service.core.middleware import setup_middleware
from user_service.core.exceptions import AppError, global_exception_handler

# Import all models so SQLAlchemy knows about them
from user_service.domain.models.user import UserModel  # noqa: F401

from user_service.interfaces.api.users import router as users_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info(
        "Starting User Service...",
        env=settings.ENVIRONMENT,
        serialize_requests=settings.SERIALIZE_REQUESTS,
    )

    if settings.AUTO_CREATE_TABLES:
        # Dev convenience; production schemas are managed outside the service
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created/verified")
        except sa_exc.OperationalError as e:
            logger.warning("Database unavailable at startup, tables not verified", error=str(e))

    yield

    engine.dispose()
    logger.info("User Service stopped")


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="User Service",
        description="CRUD API for user records",
        version=VERSION,
        lifespan=lifespan,
    )

    # Correlation ID + request logging
    setup_middleware(app)

    # AppError is handled inside the exception middleware; the Exception
    # handler only renders the 500 body for anything else.
    app.add_exception_handler(AppError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(users_router)

    @app.get("/")
    def root():
        return {
            "name": "User Service",
            "version": VERSION,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()


def serve() -> None:
    """Serve the application until interrupted."""
    import uvicorn

    logger.info("Starting user API", host=settings.HOST, port=settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    serve()
