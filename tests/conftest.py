"""Pytest configuration and fixtures."""

import tempfile
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

from liftlog.clients.base import BaseRemoteGateway
from liftlog.db import DeviceStorageRepository, LocalSnapshotStore, init_db
from liftlog.errors import GatewayError, ValidationError
from liftlog.models.migration import LocalSnapshot
from liftlog.models.records import BodyWeightRecord, ExerciseLibraryEntry, WorkoutRecord


class InMemoryGateway(BaseRemoteGateway):
    """Remote store double that keeps records in memory.

    Library names are unique case-insensitively and body weights are
    keyed by date, as in the hosted tables. Calls whose name or date is
    listed in one of the `fail_*` sets raise `fail_with` (GatewayError
    unless a test swaps in another exception type).
    """

    def __init__(self, account_id: str | None = "user-1"):
        self.account_id = account_id
        self.library: dict[str, str] = {}
        self.workouts: list[WorkoutRecord] = []
        self.body_weights: dict[date, BodyWeightRecord] = {}
        self.calls: list[tuple] = []
        self.fail_exercises: set[str] = set()
        self.fail_workouts: set[str] = set()
        self.fail_body_weight_dates: set[date] = set()
        self.fail_with: type[Exception] = GatewayError
        self.signed_out = False

    @property
    def source_name(self) -> str:
        return "memory"

    async def get_current_account_id(self) -> str | None:
        return self.account_id

    async def ensure_exercise_in_library(self, name: str) -> None:
        self.calls.append(("ensure_exercise_in_library", name))
        if name in self.fail_exercises:
            raise self.fail_with(f"Failed to add exercise to library: {name}")
        self.library.setdefault(name.lower(), name)

    async def create_workout(self, exercise_name, reps, weight, workout_date):
        self.calls.append(("create_workout", exercise_name, reps, weight, workout_date))
        if exercise_name in self.fail_workouts:
            raise self.fail_with(f"Failed to save workout: {exercise_name}")
        record = WorkoutRecord(
            id=f"w{len(self.workouts) + 1}",
            exercise_name=exercise_name,
            reps=reps,
            weight=weight,
            date=workout_date,
        )
        self.workouts.append(record)
        return record

    async def upsert_body_weight(self, weight, entry_date):
        self.calls.append(("upsert_body_weight", weight, entry_date))
        if entry_date in self.fail_body_weight_dates:
            raise self.fail_with(f"Failed to save body weight: {entry_date}")
        existing = self.body_weights.get(entry_date)
        record = BodyWeightRecord(
            id=existing.id if existing else f"b{len(self.body_weights) + 1}",
            weight=weight,
            date=entry_date,
        )
        self.body_weights[entry_date] = record
        return record

    async def get_exercise_library(self) -> list[ExerciseLibraryEntry]:
        return [ExerciseLibraryEntry(name=name) for name in self.library.values()]

    async def remove_exercise_from_library(self, name: str) -> bool:
        if name.lower() not in self.library:
            return False
        if any(w.exercise_name.lower() == name.lower() for w in self.workouts):
            raise ValidationError("Cannot remove exercise that is used in workout entries")
        del self.library[name.lower()]
        return True

    async def list_workouts(self, limit: int | None = None) -> list[WorkoutRecord]:
        workouts = sorted(self.workouts, key=lambda w: w.date, reverse=True)
        return workouts[:limit] if limit else workouts

    async def list_body_weights(self, limit: int | None = None) -> list[BodyWeightRecord]:
        entries = sorted(self.body_weights.values(), key=lambda b: b.date, reverse=True)
        return entries[:limit] if limit else entries

    async def sign_out(self) -> None:
        self.signed_out = True


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest_asyncio.fixture
async def storage(temp_db_path):
    """Initialized device storage."""
    await init_db(temp_db_path)
    return DeviceStorageRepository(temp_db_path)


@pytest.fixture
def store(storage):
    """Snapshot store over a fresh device storage."""
    return LocalSnapshotStore(storage)


@pytest.fixture
def gateway():
    """Signed-in in-memory gateway."""
    return InMemoryGateway()


@pytest.fixture
def sample_snapshot():
    """A snapshot with one of everything."""
    return LocalSnapshot.from_dict(
        {
            "workouts": [
                {"exerciseName": "bench press", "reps": 8, "weight": 60, "date": "2024-01-01"}
            ],
            "bodyWeights": [{"weight": 80, "date": "2024-01-01"}],
            "exerciseLibrary": ["bench press"],
        }
    )
