"""Browser login endpoints for the Google OAuth flow."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from app.api.dependencies import get_session_service, session_cookie
from app.config import settings
from app.services.exceptions import AuthProviderError, PersistenceError
from app.services.session_service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter()


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.get(
    "/auth/google",
    summary="Start Google sign-in",
    description="Redirect to Google's consent screen requesting profile and email.",
)
async def login(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
) -> Response:
    """Redirect the browser to Google."""
    redirect_uri = str(request.url_for("auth_callback"))
    try:
        return await session_service.begin_auth(request, redirect_uri)
    except AuthProviderError as e:
        logger.error(f"Could not start Google sign-in: {e.message}")
        return _redirect(settings.AUTH_FAILURE_REDIRECT)


@router.get(
    "/auth/google/callback",
    name="auth_callback",
    summary="Google sign-in callback",
    description="""
    Exchange the authorization code, find or create the user and start a
    session. Redirects to the dashboard on success and to the failure page
    otherwise; the browser never lands here with a half-finished login.
    """,
)
async def auth_callback(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
) -> Response:
    """Complete Google sign-in and set the session cookie."""
    try:
        user, token = await session_service.complete_auth(request)
    except AuthProviderError as e:
        logger.error(f"Google sign-in failed: {e.message}")
        return _redirect(settings.AUTH_FAILURE_REDIRECT)
    except PersistenceError as e:
        logger.error(f"Google sign-in could not be stored: {e.message}")
        return _redirect(settings.AUTH_FAILURE_REDIRECT)

    response = _redirect(settings.AUTH_SUCCESS_REDIRECT)
    set_session_cookie(response, token)
    return response


@router.get(
    "/logout",
    summary="Log out",
    description="End the current session, if any, and redirect to the home page.",
)
def logout(
    request: Request,
    token: Optional[str] = Depends(session_cookie),
    session_service: SessionService = Depends(get_session_service),
) -> Response:
    """End the session and clear the cookie."""
    try:
        session_service.end_session(token)
    except SQLAlchemyError as e:
        logger.exception("Session store failure during logout")
        raise PersistenceError("Could not end session", cause=e)

    request.session.clear()
    response = _redirect("/")
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
