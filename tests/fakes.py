"""
In-memory ExerciseStore for tests.

Behaves like MongoExerciseStore (insertion order, duplicate usernames,
unknown users) without a database. Set ``fail_with`` to make every call
raise, e.g. a StorageError, to exercise error paths.
"""
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from bson import ObjectId

from schemas.exercise import ExerciseEntry
from schemas.user import User
from services.errors import UserNotFoundError, UsernameTakenError


class FakeExerciseStore:
    """In-memory fake of models.repository.ExerciseStore."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._entries: List[Tuple[str, ExerciseEntry]] = []
        self.fail_with: Optional[Exception] = None
        self.calls: List[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def seed_user(self, username: str, entries: Optional[List[ExerciseEntry]] = None) -> User:
        """Add a user and its history directly (test helper)."""
        user = User(id=str(ObjectId()), username=username, created_at=datetime.utcnow())
        self._users[user.id] = user
        for entry in entries or []:
            self._entries.append((user.id, entry))
        return user

    def entries_for(self, user_id: str) -> List[ExerciseEntry]:
        return [entry for owner, entry in self._entries if owner == user_id]

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        self._record("find_user_by_id")
        return self._users.get(user_id)

    async def list_exercise_entries(self, user: User) -> List[ExerciseEntry]:
        self._record("list_exercise_entries")
        return self.entries_for(user.id)

    async def create_user(self, username: str) -> User:
        self._record("create_user")
        if any(user.username == username for user in self._users.values()):
            raise UsernameTakenError()
        return self.seed_user(username)

    async def create_exercise_entry(
        self,
        user_id: str,
        description: str,
        duration: int,
        date: date
    ) -> ExerciseEntry:
        self._record("create_exercise_entry")
        if user_id not in self._users:
            raise UserNotFoundError(user_id)
        entry = ExerciseEntry(description=description, duration=duration, date=date)
        self._entries.append((user_id, entry))
        return entry

    async def list_all_users(self) -> List[User]:
        self._record("list_all_users")
        return list(self._users.values())
