"""Storage collaborator for users and their exercise entries."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Protocol
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError
from models.database import Database
from schemas.exercise import ExerciseEntry
from schemas.user import User
from services.errors import StorageError, UserNotFoundError, UsernameTakenError
from utils.dates import from_storage_datetime, to_storage_datetime
from utils.logger import setup_logger

logger = setup_logger(__name__)


class ExerciseStore(Protocol):
    """Persistence operations the exercise services depend on.

    Implementations raise ``StorageError`` when the backend fails, so callers
    only ever see the error types from ``services.errors``.
    """

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        """Return the user, or None when no user has this identifier."""
        ...

    async def list_exercise_entries(self, user: User) -> List[ExerciseEntry]:
        """Return every entry of ``user`` in insertion order."""
        ...

    async def create_user(self, username: str) -> User:
        """Insert a user; raises UsernameTakenError on a duplicate name."""
        ...

    async def create_exercise_entry(
        self,
        user_id: str,
        description: str,
        duration: int,
        date: date
    ) -> ExerciseEntry:
        """Insert an entry; raises UserNotFoundError for an unknown user."""
        ...

    async def list_all_users(self) -> List[User]:
        """Return all users in insertion order."""
        ...


def user_from_document(document: Dict[str, Any]) -> User:
    """Convert a users collection document to a User."""
    return User(
        id=str(document["_id"]),
        username=document["username"],
        created_at=document.get("created_at"),
    )


def entry_from_document(document: Dict[str, Any]) -> ExerciseEntry:
    """Convert an exercises collection document to an ExerciseEntry."""
    return ExerciseEntry(
        description=document.get("description", ""),
        duration=int(document.get("duration", 0)),
        date=from_storage_datetime(document["date"]),
    )


class MongoExerciseStore:
    """ExerciseStore backed by the ``users`` and ``exercises`` collections."""

    def __init__(self, database: Database):
        self.database = database

    async def find_user_by_id(self, user_id: str) -> Optional[User]:
        if not ObjectId.is_valid(user_id):
            return None
        try:
            document = await self.database.users.find_one({"_id": ObjectId(user_id)})
        except PyMongoError as e:
            logger.error(f"Error fetching user {user_id}: {e}", exc_info=True)
            raise StorageError("Error reading the database.") from e
        return user_from_document(document) if document else None

    async def list_exercise_entries(self, user: User) -> List[ExerciseEntry]:
        try:
            # _id order is insertion order
            cursor = self.database.exercises.find({"user_id": user.id}).sort("_id", 1)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error fetching exercises for user {user.id}: {e}", exc_info=True)
            raise StorageError("Error reading the database.") from e
        return [entry_from_document(document) for document in documents]

    async def create_user(self, username: str) -> User:
        now = datetime.utcnow()
        document = {"username": username, "created_at": now, "updated_at": now}
        try:
            result = await self.database.users.insert_one(document)
        except DuplicateKeyError as e:
            raise UsernameTakenError() from e
        except PyMongoError as e:
            logger.error(f"Error creating user {username}: {e}", exc_info=True)
            raise StorageError("Error writing to the database.") from e
        return User(id=str(result.inserted_id), username=username, created_at=now)

    async def create_exercise_entry(
        self,
        user_id: str,
        description: str,
        duration: int,
        date: date
    ) -> ExerciseEntry:
        if await self.find_user_by_id(user_id) is None:
            raise UserNotFoundError(user_id)

        document = {
            "user_id": user_id,
            "description": description,
            "duration": duration,
            "date": to_storage_datetime(date),
            "created_at": datetime.utcnow(),
        }
        try:
            await self.database.exercises.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Error adding exercise for user {user_id}: {e}", exc_info=True)
            raise StorageError("Error writing to the database.") from e
        return entry_from_document(document)

    async def list_all_users(self) -> List[User]:
        try:
            cursor = self.database.users.find({}).sort("_id", 1)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Error listing users: {e}", exc_info=True)
            raise StorageError("Error reading the database.") from e
        return [user_from_document(document) for document in documents]
