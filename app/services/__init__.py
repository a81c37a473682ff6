"""Service layer for business logic."""

from app.services.session_service import SessionService
from app.services.task_service import TaskService

__all__ = ["SessionService", "TaskService"]
