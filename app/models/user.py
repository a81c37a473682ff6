"""User model for Google-authenticated accounts."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A person known to the identity provider.

    Rows are created on the first successful login for a ``google_id`` and are
    never updated or deleted afterwards.
    """

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Subject claim issued by Google; unique index guards the first-login race
    google_id = Column(String(255), unique=True, nullable=False, index=True)

    email = Column(String(255), nullable=True)
    display_name = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, google_id={self.google_id})>"
