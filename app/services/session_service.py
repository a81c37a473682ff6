"""Session service: OAuth login, user identity and cookie sessions."""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.models.session import UserSession
from app.models.user import User
from app.services.exceptions import (
    NoSessionError,
    PersistenceError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from app.auth.identity_provider import IdentityProvider

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    """Digest under which a session token is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionService:
    """
    Service turning OAuth callbacks into users and cookies into users.

    Owns the whole authentication lifecycle: starting the provider redirect,
    completing the code exchange, find-or-create of the local user record,
    and the server-side session table behind the session cookie.
    """

    def __init__(self, db: Session, identity_provider: Optional["IdentityProvider"] = None):
        """
        Initialize the session service.

        Args:
            db: SQLAlchemy database session
            identity_provider: OAuth2 provider used by the login flow
        """
        self.db = db
        self.identity_provider = identity_provider

    async def begin_auth(self, request: Request, redirect_uri: str) -> Response:
        """Redirect the browser to the provider's consent screen."""
        return await self._provider().authorize_redirect(request, redirect_uri)

    async def complete_auth(self, request: Request) -> tuple[User, str]:
        """
        Finish the login on the provider callback.

        Args:
            request: Callback request carrying the authorization code

        Returns:
            The signed-in user and a fresh session token for the cookie

        Raises:
            AuthProviderError: If the provider exchange fails
            PersistenceError: If the user or session cannot be stored
        """
        profile = await self._provider().fetch_profile(request)

        try:
            user = self.find_or_create_user(
                profile.sub, email=profile.email, display_name=profile.name
            )
            token = self.begin_session(user.id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Database failure while completing login")
            raise PersistenceError("Could not persist login", cause=e)

        return user, token

    def find_or_create_user(
        self,
        external_id: str,
        email: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> User:
        """
        Return the user for ``external_id``, creating it on first login.

        Two first logins for the same identity can race; the loser's insert
        hits the unique index on ``google_id`` and falls back to the winner's
        row.

        Args:
            external_id: Provider-issued subject identifier
            email: Email from the profile, stored on creation only
            display_name: Name from the profile, stored on creation only

        Returns:
            The existing or newly created User
        """
        user = self._find_user_by_external_id(external_id)
        if user:
            return user

        user = User(google_id=external_id, email=email, display_name=display_name)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Lost user creation race for {external_id}, re-fetching")
            user = self._find_user_by_external_id(external_id)
            if user is None:
                raise
            return user

        self.db.refresh(user)
        logger.info(f"Created user {user.id} for external id {external_id}")
        return user

    def begin_session(self, user_id: UUID) -> str:
        """
        Create a session for ``user_id``.

        Returns:
            The opaque token to hand to the client
        """
        token = secrets.token_urlsafe(TOKEN_BYTES)
        now = datetime.now(timezone.utc)

        self.db.add(UserSession(
            token_hash=hash_token(token),
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES),
        ))
        self.db.commit()

        logger.info(f"Started session for user {user_id}")
        return token

    def resolve_session(self, token: Optional[str]) -> User:
        """
        Look up the user behind a session token.

        Args:
            token: Value of the session cookie, if any

        Returns:
            The session's User

        Raises:
            NoSessionError: If the token is missing, unknown or expired
            UserNotFoundError: If the session points at a user that no longer exists
        """
        if not token:
            raise NoSessionError("No session cookie")

        record = self.db.get(UserSession, hash_token(token))
        if record is None:
            raise NoSessionError("Unknown session")

        if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
            self.db.delete(record)
            self.db.commit()
            raise NoSessionError("Session expired")

        user = self.db.get(User, record.user_id)
        if user is None:
            raise UserNotFoundError(record.user_id)

        return user

    def end_session(self, token: Optional[str]) -> None:
        """Invalidate a session token. Unknown or missing tokens are ignored."""
        if not token:
            return

        deleted = self.db.query(UserSession).filter(
            UserSession.token_hash == hash_token(token)
        ).delete(synchronize_session=False)
        self.db.commit()

        if deleted:
            logger.info("Ended session")

    def _find_user_by_external_id(self, external_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.google_id == external_id).first()

    def _provider(self) -> "IdentityProvider":
        if self.identity_provider is None:
            raise RuntimeError("SessionService was created without an identity provider")
        return self.identity_provider
