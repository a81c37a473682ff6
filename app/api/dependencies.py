"""API dependencies for dependency injection."""

import logging
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.identity_provider import GoogleIdentityProvider, IdentityProvider
from app.config import settings
from app.db.session import get_db
from app.models.user import User
from app.services.exceptions import AuthenticationError, UserNotFoundError
from app.services.session_service import SessionService
from app.services.task_service import TaskService

logger = logging.getLogger(__name__)

# Security scheme for the session cookie
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


@lru_cache()
def get_identity_provider() -> IdentityProvider:
    """Get the process-wide Google identity provider."""
    return GoogleIdentityProvider()


def get_session_service(
    db: Session = Depends(get_db),
    identity_provider: IdentityProvider = Depends(get_identity_provider),
) -> SessionService:
    """Get session service instance."""
    return SessionService(db, identity_provider)


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Get task service instance."""
    return TaskService(db)


def get_current_user(
    token: Optional[str] = Depends(session_cookie),
    session_service: SessionService = Depends(get_session_service),
) -> User:
    """
    Get the current authenticated user from the session cookie.

    Every failure ends the request with 401: no cookie, unknown or expired
    session, a session whose user is gone, or a session store that cannot
    be read.

    Args:
        token: Session cookie value
        session_service: Session service instance

    Returns:
        Current User instance

    Raises:
        HTTPException: If authentication fails
    """
    try:
        return session_service.resolve_session(token)
    except (AuthenticationError, UserNotFoundError) as e:
        logger.debug(f"Rejected request: {e.message}")
    except SQLAlchemyError:
        logger.exception("Session store failure while resolving session")

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def get_current_user_id(current_user: User = Depends(get_current_user)) -> UUID:
    """Get the current user's ID."""
    return current_user.id
