"""Error types raised by the exercise services and storage layer."""


class ExerciseTrackerError(Exception):
    """Base error; carries the message shown to callers and an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailedError(ExerciseTrackerError):
    """Bad or missing input."""

    status_code = 400


class UsernameTakenError(ValidationFailedError):
    """Registration with a username that already exists."""

    def __init__(self, message: str = "This username is already taken."):
        super().__init__(message)


class UserNotFoundError(ExerciseTrackerError):
    """No user with the given identifier."""

    status_code = 404

    def __init__(self, user_id: str):
        super().__init__(f"Unknown user with _id '{user_id}'")
        self.user_id = user_id


class StorageError(ExerciseTrackerError):
    """The database failed or was unreachable; safe to retry."""

    status_code = 500
