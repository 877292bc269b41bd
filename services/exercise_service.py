"""Account registration, exercise logging and exercise log queries."""

from datetime import date
from typing import List, Optional, Union

from models.repository import ExerciseStore
from schemas.exercise import ExerciseAdded, ExerciseEntry, ExerciseLog, LogEntry
from schemas.user import User
from services.errors import UserNotFoundError
from services.log_filter import filter_exercise_log, parse_limit
from utils.dates import format_display_date, normalize_from, normalize_to
from utils.logger import setup_logger

logger = setup_logger(__name__)


def to_log_entry(entry: ExerciseEntry) -> LogEntry:
    """Shape a stored entry for a response."""
    return LogEntry(
        description=entry.description,
        duration=entry.duration,
        date=format_display_date(entry.date),
    )


class ExerciseService:
    """Operations behind the exercise tracker endpoints.

    The store is handed in explicitly; the service keeps no other state, so a
    single instance can serve concurrent requests.
    """

    def __init__(self, store: ExerciseStore):
        self.store = store

    async def register_user(self, username: str) -> User:
        """Create a user. Raises UsernameTakenError on a duplicate name."""
        user = await self.store.create_user(username.strip())
        logger.info(f"Registered user '{user.username}' with id {user.id}")
        return user

    async def list_users(self) -> List[User]:
        """All registered users."""
        return await self.store.list_all_users()

    async def add_exercise(
        self,
        user_id: str,
        description: str,
        duration: int,
        exercise_date: Optional[date] = None
    ) -> ExerciseAdded:
        """Log an exercise for a user, dated today when no date is given.

        Raises:
            UserNotFoundError: No user has ``user_id``
        """
        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        entry = await self.store.create_exercise_entry(
            user.id,
            description,
            duration,
            exercise_date or date.today(),
        )
        logger.info(f"Added exercise '{entry.description}' on {entry.date} for user {user.id}")

        return ExerciseAdded(
            id=user.id,
            username=user.username,
            description=entry.description,
            duration=entry.duration,
            date=format_display_date(entry.date),
        )

    async def get_exercise_log(
        self,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Union[str, int, None] = None
    ) -> ExerciseLog:
        """Return a user's exercise history filtered by date and truncated to ``limit``.

        ``date_from``, ``date_to`` and ``limit`` are the raw query values;
        malformed ones are treated as absent rather than rejected.

        Raises:
            UserNotFoundError: No user has ``user_id``
        """
        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        lower = normalize_from(date_from)
        upper = normalize_to(date_to)
        max_items = parse_limit(limit)

        history = await self.store.list_exercise_entries(user)
        results = filter_exercise_log(history, lower, upper, max_items)
        logger.info(
            f"Exercise log for user {user.id}: {len(results)} of {len(history)} entries "
            f"(from={lower}, to={upper}, limit={max_items})"
        )

        return ExerciseLog(
            id=user.id,
            username=user.username,
            count=len(results),
            log=[to_log_entry(entry) for entry in results],
        )
