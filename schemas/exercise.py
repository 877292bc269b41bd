"""Exercise collection schema and exercise log payloads."""

import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from utils.dates import parse_date


class ExerciseEntry(BaseModel):
    """Exercise collection model."""
    model_config = ConfigDict(frozen=True)

    description: str = Field(..., description="What was done")
    duration: int = Field(..., description="Duration in minutes")
    date: datetime.date = Field(..., description="Day the exercise took place")


class AddExerciseRequest(BaseModel):
    """Payload for logging an exercise against a user."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", description="Owning user identifier")
    description: str = Field(..., description="What was done")
    duration: int = Field(..., description="Duration in minutes")
    date: Optional[datetime.date] = Field(None, description="YYYY-MM-DD, defaults to today")

    @field_validator("user_id", "description")
    @classmethod
    def not_blank(cls, value: str, info) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_strict_date(cls, value):
        if value is None or value == "":
            return None
        if isinstance(value, datetime.date):
            return value
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError("Invalid date, expected YYYY-MM-DD")
        return parsed


class ExerciseAdded(BaseModel):
    """Echo of a stored exercise together with its owner."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Owning user identifier")
    username: str
    description: str
    duration: int
    date: str = Field(..., description="Formatted like 'Mon Jan 01 2020'")


class LogEntry(BaseModel):
    """One exercise in a log response."""
    description: str
    duration: int
    date: str = Field(..., description="Formatted like 'Mon Jan 01 2020'")


class ExerciseLog(BaseModel):
    """Filtered exercise history of a user."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User identifier")
    username: str
    count: int = Field(..., description="Number of entries in log")
    log: List[LogEntry] = Field(default_factory=list)
