"""Collection schemas and request/response payloads."""

from schemas.user import User, NewUserRequest, UserSummary
from schemas.exercise import (
    ExerciseEntry,
    AddExerciseRequest,
    ExerciseAdded,
    LogEntry,
    ExerciseLog,
)

__all__ = [
    "User",
    "NewUserRequest",
    "UserSummary",
    "ExerciseEntry",
    "AddExerciseRequest",
    "ExerciseAdded",
    "LogEntry",
    "ExerciseLog",
]
