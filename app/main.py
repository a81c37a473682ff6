"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from app.api import auth, pages
from app.api.router import api_router
from app.config import settings
from app.db.base import Base
from app.db.session import check_connection, engine
from app.logging_setup import setup_logging
from app.schemas.task import field_errors
from app.services.exceptions import (
    AuthProviderError,
    PersistenceError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"detail": "Internal server error"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup: fail fast if the database is unreachable, then create tables
    try:
        check_connection()
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.critical("Could not connect to the database; refusing to start", exc_info=True)
        raise
    logger.info(f"{settings.APP_NAME} started")
    yield
    engine.dispose()


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": field_errors(exc.errors())},
    )


async def upstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Details stay in the server log
    if isinstance(exc, (AuthProviderError, PersistenceError)):
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=INTERNAL_ERROR)


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Personal task tracking with Google sign-in.",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie holding the OAuth state between redirect and callback
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie="taskmaster_oauth",
        same_site="lax",
        https_only=settings.SESSION_COOKIE_SECURE,
    )

    # Error mapping
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(AuthProviderError, upstream_error_handler)
    app.add_exception_handler(PersistenceError, upstream_error_handler)
    app.add_exception_handler(SQLAlchemyError, upstream_error_handler)

    # Routers
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages.router, tags=["Pages"])

    return app


app = create_application()


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.APP_NAME}
