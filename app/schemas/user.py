"""Pydantic schemas for users."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict


class UserResponse(BaseModel):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Unique user identifier")
    email: Optional[str] = Field(default=None, description="Email reported by Google")
    display_name: Optional[str] = Field(
        default=None, serialization_alias="displayName", description="Name reported by Google"
    )
    created_at: datetime = Field(..., serialization_alias="createdAt", description="First login timestamp")


class IdentityProfile(BaseModel):
    """Profile assertion returned by the identity provider after code exchange."""

    sub: str = Field(..., min_length=1, description="Provider-issued external identifier")
    email: Optional[str] = None
    name: Optional[str] = None
