"""Task model."""

import uuid
from enum import Enum as PyEnum

from sqlalchemy import Column, String, DateTime, Boolean, Text, Enum, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.user import utcnow


class TaskPriority(str, PyEnum):
    """Enumeration of task priority levels."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Task(Base):
    """
    Task model.

    Every task belongs to exactly one user. ``created_by`` is set once at
    creation and no code path reassigns it.
    """

    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    completed = Column(Boolean, nullable=False, default=False)
    due_date = Column(DateTime(timezone=True), nullable=True)
    priority = Column(
        Enum(TaskPriority, name="task_priority", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    tags = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("User", backref="tasks")

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title!r}, created_by={self.created_by})>"
