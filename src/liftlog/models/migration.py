"""Local-to-remote migration models."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ..utils.exercise_utils import dedupe_exercise_names, normalize_exercise_name
from .records import BodyWeightRecord, WorkoutRecord, parse_timestamp

logger = logging.getLogger(__name__)


class MigrationState(str, Enum):
    """Migration lifecycle for a device and account.

    COMPLETED and SKIPPED are terminal; both mean a marker is present.
    """

    NOT_CHECKED = "not_checked"
    NEEDS_MIGRATION = "needs_migration"
    MIGRATING = "migrating"
    COMPLETED = "completed"
    SKIPPED = "skipped"


PARSE_ERRORS = (KeyError, ValueError, TypeError, AttributeError)


def describe_raw_entry(entry) -> str:
    """Label for a stored entry that could not be parsed."""
    if not isinstance(entry, dict):
        return repr(entry)
    label = entry.get("exerciseName")
    if label is None and "weight" in entry:
        label = f"{entry['weight']}kg"
    return f"{label or 'unknown'} on {entry.get('date') or 'unknown date'}"


def _parse_entries(entries, parse) -> tuple[list, list]:
    """Parse each entry on its own, setting aside the ones that fail."""
    if not isinstance(entries, list):
        raise TypeError(f"expected a list, got {type(entries).__name__}")

    parsed, unreadable = [], []
    for entry in entries:
        try:
            parsed.append(parse(entry))
        except PARSE_ERRORS as e:
            logger.warning("Unreadable local entry %r: %s", entry, e)
            unreadable.append(entry)
    return parsed, unreadable


@dataclass
class LocalSnapshot:
    """Data recorded on the device before the account existed.

    Exercise library names are kept exactly as stored (not normalized).
    Entries that cannot be parsed are kept verbatim in the `unreadable_*`
    lists so they are reported per record and written back unchanged.
    """

    workouts: list[WorkoutRecord] = field(default_factory=list)
    body_weights: list[BodyWeightRecord] = field(default_factory=list)
    exercise_library: list[str] = field(default_factory=list)
    unreadable_workouts: list = field(default_factory=list)
    unreadable_body_weights: list = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.workouts
            or self.body_weights
            or self.exercise_library
            or self.unreadable_workouts
            or self.unreadable_body_weights
        )

    def counts(self) -> dict[str, int]:
        """Number of stored entries of each kind, readable or not."""
        return {
            "workouts": len(self.workouts) + len(self.unreadable_workouts),
            "body_weights": len(self.body_weights) + len(self.unreadable_body_weights),
            "exercises": len(self.exercise_library),
        }

    def canonical_exercise_names(self) -> list[str]:
        """Library names after normalization, duplicates collapsed."""
        return dedupe_exercise_names(self.exercise_library)

    def normalize_names(self) -> bool:
        """Normalize workout exercise names in place.

        An empty library is filled from the workouts' names (sorted).

        Returns:
            True if anything changed
        """
        changed = False
        for workout in self.workouts:
            normalized = normalize_exercise_name(workout.exercise_name)
            if normalized != workout.exercise_name:
                workout.exercise_name = normalized
                changed = True

        if not self.exercise_library and self.workouts:
            self.exercise_library = sorted({w.exercise_name for w in self.workouts})
            changed = True

        return changed

    def to_dict(self) -> dict:
        """Convert to the device storage shape."""
        return {
            "workouts": [w.to_dict() for w in self.workouts] + list(self.unreadable_workouts),
            "bodyWeights": [b.to_dict() for b in self.body_weights]
            + list(self.unreadable_body_weights),
            "exerciseLibrary": list(self.exercise_library),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LocalSnapshot":
        """Create from the device storage shape.

        Missing sections are treated as empty. Single entries that fail
        to parse are set aside rather than failing the whole snapshot.

        Raises:
            TypeError: If the data or one of its sections has the wrong shape
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")

        workouts, unreadable_workouts = _parse_entries(
            data.get("workouts") or [], WorkoutRecord.from_dict
        )
        body_weights, unreadable_body_weights = _parse_entries(
            data.get("bodyWeights") or [], BodyWeightRecord.from_dict
        )
        library = data.get("exerciseLibrary") or []
        if not isinstance(library, list):
            raise TypeError(f"expected a list, got {type(library).__name__}")

        return cls(
            workouts=workouts,
            body_weights=body_weights,
            exercise_library=[str(name) for name in library],
            unreadable_workouts=unreadable_workouts,
            unreadable_body_weights=unreadable_body_weights,
        )


@dataclass
class MigrationMarker:
    """Persisted flag that suppresses further migration prompts on a device.

    `skipped` and `data_moved_to_remote` are informational only.
    """

    migrated_at: datetime | None
    skipped: bool = False
    data_moved_to_remote: bool = False
    account_id: str | None = None

    @classmethod
    def for_skip(cls) -> "MigrationMarker":
        return cls(migrated_at=datetime.now(timezone.utc), skipped=True)

    @classmethod
    def for_migration(cls, account_id: str | None) -> "MigrationMarker":
        return cls(
            migrated_at=datetime.now(timezone.utc),
            data_moved_to_remote=True,
            account_id=account_id,
        )

    @property
    def state(self) -> MigrationState:
        return MigrationState.SKIPPED if self.skipped else MigrationState.COMPLETED

    def to_dict(self) -> dict:
        """Convert to the device storage shape."""
        data = {
            "migratedAt": self.migrated_at.isoformat() if self.migrated_at else None,
            "skipped": self.skipped,
            "dataMovedToRemote": self.data_moved_to_remote,
        }
        if self.account_id is not None:
            data["userId"] = self.account_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "MigrationMarker":
        """Create from the device storage shape."""
        return cls(
            migrated_at=parse_timestamp(data.get("migratedAt")),
            skipped=bool(data.get("skipped", False)),
            data_moved_to_remote=bool(data.get("dataMovedToRemote", False)),
            account_id=data.get("userId"),
        )


@dataclass
class MigrationResult:
    """Outcome of one migration attempt.

    `success` means every phase was attempted, not that every record
    made it across. Check `is_clean` for the latter.
    """

    success: bool = False
    workouts_migrated: int = 0
    body_weights_migrated: int = 0
    exercises_migrated: int = 0
    errors: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, message: str) -> "MigrationResult":
        """A run that aborted before transferring anything."""
        return cls(success=False, errors=[message])

    @property
    def is_clean(self) -> bool:
        return self.success and not self.errors

    @property
    def total_migrated(self) -> int:
        return self.workouts_migrated + self.body_weights_migrated + self.exercises_migrated

    def error_preview(self, limit: int = 3) -> list[str]:
        """First `limit` errors, plus a summary line for the rest."""
        preview = self.errors[:limit]
        remaining = len(self.errors) - limit
        if remaining > 0:
            preview.append(f"...and {remaining} more")
        return preview

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "workoutsMigrated": self.workouts_migrated,
            "bodyWeightsMigrated": self.body_weights_migrated,
            "exercisesMigrated": self.exercises_migrated,
            "errors": list(self.errors),
        }
