from datetime import date

import pytest

from schemas.exercise import ExerciseEntry
from services.errors import StorageError, UserNotFoundError, UsernameTakenError
from services.exercise_service import ExerciseService
from tests.fakes import FakeExerciseStore


def make_entry(day: str, description: str) -> ExerciseEntry:
    return ExerciseEntry(description=description, duration=20, date=date.fromisoformat(day))


@pytest.fixture
def store():
    return FakeExerciseStore()


@pytest.fixture
def service(store):
    return ExerciseService(store)


@pytest.fixture
def seeded_user(store):
    return store.seed_user(
        "alice",
        [
            make_entry("2020-01-01", "jog"),
            make_entry("2020-06-15", "swim"),
            make_entry("2021-01-01", "bike"),
        ],
    )


@pytest.mark.asyncio
async def test_log_filtered_by_date_range(service, seeded_user):
    log = await service.get_exercise_log(seeded_user.id, "2020-01-01", "2020-12-31")
    assert log.id == seeded_user.id
    assert log.username == "alice"
    assert log.count == 2
    assert [e.description for e in log.log] == ["jog", "swim"]
    assert log.log[0].date == "Wed Jan 01 2020"


@pytest.mark.asyncio
async def test_log_limit_only(service, seeded_user):
    log = await service.get_exercise_log(seeded_user.id, limit="1")
    assert log.count == 1
    assert log.log[0].description == "jog"


@pytest.mark.asyncio
async def test_log_garbage_from_returns_everything(service, seeded_user):
    log = await service.get_exercise_log(seeded_user.id, "garbage", None, "not-a-number")
    assert log.count == 3


@pytest.mark.asyncio
async def test_log_unknown_user(service, store):
    with pytest.raises(UserNotFoundError):
        await service.get_exercise_log("5f0000000000000000000000")
    assert "list_exercise_entries" not in store.calls


@pytest.mark.asyncio
async def test_log_is_read_only(service, store, seeded_user):
    await service.get_exercise_log(seeded_user.id, "2020-01-01")
    assert set(store.calls) == {"find_user_by_id", "list_exercise_entries"}
    assert len(store.entries_for(seeded_user.id)) == 3


@pytest.mark.asyncio
async def test_register_and_list_users(service):
    first = await service.register_user("  bob ")
    second = await service.register_user("carol")
    assert first.username == "bob"
    users = await service.list_users()
    assert [(u.username, u.id) for u in users] == [("bob", first.id), ("carol", second.id)]


@pytest.mark.asyncio
async def test_register_duplicate_username(service):
    await service.register_user("bob")
    with pytest.raises(UsernameTakenError) as excinfo:
        await service.register_user("bob")
    assert excinfo.value.status_code == 400


@pytest.mark.asyncio
async def test_add_exercise_with_date(service, store, seeded_user):
    added = await service.add_exercise(seeded_user.id, "row", 45, date(2022, 3, 4))
    assert added.id == seeded_user.id
    assert added.username == "alice"
    assert added.duration == 45
    assert added.date == "Fri Mar 04 2022"
    assert store.entries_for(seeded_user.id)[-1].date == date(2022, 3, 4)


@pytest.mark.asyncio
async def test_add_exercise_defaults_to_today(service, store, seeded_user):
    await service.add_exercise(seeded_user.id, "stretch", 10)
    assert store.entries_for(seeded_user.id)[-1].date == date.today()


@pytest.mark.asyncio
async def test_add_exercise_unknown_user(service, store):
    with pytest.raises(UserNotFoundError) as excinfo:
        await service.add_exercise("missing", "row", 45)
    assert excinfo.value.status_code == 404
    assert "create_exercise_entry" not in store.calls


@pytest.mark.asyncio
async def test_storage_errors_propagate(service, store, seeded_user):
    store.fail_with = StorageError("Error reading the database.")
    with pytest.raises(StorageError):
        await service.get_exercise_log(seeded_user.id)
