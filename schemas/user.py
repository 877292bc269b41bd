"""User collection schema."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from config.settings import settings


class User(BaseModel):
    """User collection model."""
    id: str = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique username")
    created_at: Optional[datetime] = Field(None, description="Registration time")


class NewUserRequest(BaseModel):
    """Registration payload."""
    username: str = Field(..., description="Requested username")

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username is required")
        if len(value) > settings.username_max_length:
            raise ValueError("Username is too long")
        return value


class UserSummary(BaseModel):
    """Username and identifier pair returned by the user endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    id: str = Field(..., alias="_id", description="User identifier")

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(username=user.username, id=user.id)
