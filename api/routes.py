"""Exercise tracker REST routes."""

import json
from typing import List, Optional, Type, TypeVar
from fastapi import APIRouter, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from schemas.exercise import AddExerciseRequest, ExerciseAdded, ExerciseLog
from schemas.user import NewUserRequest, UserSummary
from services.errors import ValidationFailedError
from services.exercise_service import ExerciseService
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/exercise", tags=["exercise"])


def get_exercise_service(request: Request) -> ExerciseService:
    """Build the service around the store opened by the application lifespan."""
    return ExerciseService(request.app.state.store)


BodyModel = TypeVar("BodyModel", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def request_body(model: Type[BodyModel]):
    """Dependency validating ``model`` from either a JSON body or an HTML form post."""

    async def read_body(request: Request) -> BodyModel:
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(FORM_CONTENT_TYPES):
            form = await request.form()
            data = dict(form.items())
        else:
            raw = await request.body()
            try:
                data = json.loads(raw) if raw.strip() else {}
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise ValidationFailedError("Request body is not valid JSON") from exc

        try:
            return model.model_validate(data)
        except ValidationError as exc:
            errors = [
                {**error, "loc": ("body", *error["loc"])}
                for error in exc.errors(include_url=False)
            ]
            raise RequestValidationError(errors) from exc

    return read_body


@router.post("/new-user", response_model=UserSummary)
async def create_user(
    payload: NewUserRequest = Depends(request_body(NewUserRequest)),
    service: ExerciseService = Depends(get_exercise_service)
):
    """Register a new user."""
    user = await service.register_user(payload.username)
    return UserSummary.from_user(user)


@router.get("/users", response_model=List[UserSummary])
async def list_users(service: ExerciseService = Depends(get_exercise_service)):
    """List all users as username and id pairs."""
    users = await service.list_users()
    return [UserSummary.from_user(user) for user in users]


@router.post("/add", response_model=ExerciseAdded)
async def add_exercise(
    payload: AddExerciseRequest = Depends(request_body(AddExerciseRequest)),
    service: ExerciseService = Depends(get_exercise_service)
):
    """Log an exercise for a user; the date defaults to today."""
    return await service.add_exercise(
        payload.user_id,
        payload.description,
        payload.duration,
        payload.date,
    )


@router.get("/log", response_model=ExerciseLog)
async def get_exercise_log(
    user_id: str = Query(..., alias="userId", description="User identifier"),
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date, YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date, YYYY-MM-DD"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    service: ExerciseService = Depends(get_exercise_service)
):
    """
    Get a user's exercise log.
    Malformed from/to/limit values are ignored instead of failing the request.
    """
    return await service.get_exercise_log(user_id, date_from, date_to, limit)
