"""Pydantic schemas for task endpoints."""

import re
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from app.models.task import TaskPriority

TITLE_MAX_LENGTH = 100

# Calendar date first; rules out bare Unix timestamps, numeric or quoted
ISO_8601_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title cannot be longer than {TITLE_MAX_LENGTH} characters")
    return value


def _check_due_date(value: Any) -> Any:
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not ISO_8601_DATE.match(value.strip()):
        raise ValueError("Due date must be an ISO 8601 date or date-time string")
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Offset-less input is read as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TaskCreate(BaseModel):
    """
    Schema for creating a task.

    Unknown keys (including any attempt to set the owner) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Short title, 1-100 characters after trimming")
    description: Optional[str] = Field(default=None, description="Free-form details")
    completed: bool = Field(default=False, description="Whether the task is done")
    due_date: Optional[datetime] = Field(default=None, alias="dueDate", description="ISO 8601 due date")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="High, Medium or Low")
    tags: list[str] = Field(default_factory=list, description="Ordered labels")

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return _clean_title(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_format(cls, v: Any) -> Any:
        return _check_due_date(v)

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)


class TaskUpdate(BaseModel):
    """
    Schema for a partial task update.

    Every field is optional; only keys present in the request are applied.
    ``description`` and ``dueDate`` may be cleared with ``null``, the other
    fields may not.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    priority: Optional[TaskPriority] = None
    tags: Optional[list[str]] = None

    @field_validator("title", "completed", "priority", "tags", mode="before")
    @classmethod
    def _not_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return _clean_title(v)

    @field_validator("description")
    @classmethod
    def _description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date_format(cls, v: Any) -> Any:
        return _check_due_date(v)

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, keyed by model attribute name."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """Schema for a stored task."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique task identifier")
    title: str
    description: Optional[str] = None
    completed: bool
    created_by: UUID = Field(..., serialization_alias="createdBy", description="Owner user ID")
    due_date: Optional[datetime] = Field(default=None, serialization_alias="dueDate")
    priority: TaskPriority
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


def field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Flatten Pydantic error dicts into ``{"field", "message"}`` pairs.

    The ``body`` prefix FastAPI adds to request locations is dropped. A body
    that is not valid JSON is reported against ``body`` as a whole.
    """
    flattened = []
    for err in errors:
        if err.get("type") == "json_invalid":
            loc = []
        else:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        message = err.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        flattened.append({"field": ".".join(loc) or "body", "message": message})
    return flattened
