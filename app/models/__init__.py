"""Database models."""

from app.models.user import User
from app.models.task import Task, TaskPriority
from app.models.session import UserSession

__all__ = ["User", "Task", "TaskPriority", "UserSession"]
