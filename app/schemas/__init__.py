"""Pydantic schemas for request/response validation."""

from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
    MessageResponse,
)
from app.schemas.user import (
    UserResponse,
    IdentityProfile,
)

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "MessageResponse",
    "UserResponse",
    "IdentityProfile",
]
