"""Login session model."""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base
from app.models.user import utcnow


class UserSession(Base):
    """
    Server-side record behind a session cookie.

    The cookie carries an opaque random token; only its SHA-256 digest is
    stored here, so a leaked table does not yield usable cookies.
    """

    __tablename__ = "sessions"

    token_hash = Column(String(64), primary_key=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<UserSession(user_id={self.user_id}, expires_at={self.expires_at})>"
