"""Workout, body-weight and exercise library records."""

from dataclasses import dataclass
from datetime import date, datetime

from ..errors import ValidationError

REPS_RANGE = (1, 100)
WORKOUT_WEIGHT_RANGE = (0.5, 500.0)
BODY_WEIGHT_RANGE = (30.0, 300.0)


def parse_date(value: str | date) -> date:
    """Parse a calendar date, dropping any time component."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if len(value) > 10:
        return parse_timestamp(value).date()
    return date.fromisoformat(value)


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp (accepts a trailing 'Z')."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _parse_reps(value) -> int | float:
    """Parse a stored rep count. Fractional counts are kept for validate() to reject."""
    reps = float(value)
    return int(reps) if reps.is_integer() else reps


def _check_range(label: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ValidationError(f"{label} must be between {low:g} and {high:g}, got {value:g}")


@dataclass
class WorkoutRecord:
    """A single logged set: exercise, reps and weight on a date.

    Local (pre-migration) entries carry a client-side id; remote entries
    carry the id assigned by the hosted store.
    """

    exercise_name: str
    reps: int
    weight: float  # in kg
    date: date
    id: str | None = None
    created_at: datetime | None = None

    @property
    def volume(self) -> float:
        """Reps times weight."""
        return self.reps * self.weight

    def validate(self) -> None:
        """Check reps and weight are within the accepted ranges.

        Raises:
            ValidationError: If either value is out of range
        """
        if not float(self.reps).is_integer():
            raise ValidationError(f"Reps must be a whole number, got {self.reps:g}")
        _check_range("Reps", self.reps, REPS_RANGE)
        _check_range("Weight", self.weight, WORKOUT_WEIGHT_RANGE)

    def describe(self) -> str:
        """Short label identifying this entry in messages."""
        return f"{self.exercise_name} on {self.date.isoformat()}"

    def to_dict(self) -> dict:
        """Convert to the device storage shape."""
        return {
            "id": self.id,
            "exerciseName": self.exercise_name,
            "reps": self.reps,
            "weight": self.weight,
            "date": self.date.isoformat(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutRecord":
        """Create from the device storage shape."""
        return cls(
            id=data.get("id"),
            exercise_name=data["exerciseName"],
            reps=_parse_reps(data["reps"]),
            weight=float(data["weight"]),
            date=parse_date(data["date"]),
            created_at=parse_timestamp(data.get("createdAt")),
        )

    def to_row(self, user_id: str) -> dict:
        """Convert to a `workouts` table insert."""
        return {
            "user_id": user_id,
            "exercise_name": self.exercise_name,
            "reps": self.reps,
            "weight": self.weight,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_row(cls, row: dict) -> "WorkoutRecord":
        """Create from a `workouts` table row."""
        return cls(
            id=row["id"],
            exercise_name=row["exercise_name"],
            reps=int(row["reps"]),
            weight=float(row["weight"]),
            date=parse_date(row["date"]),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass
class BodyWeightRecord:
    """A body-weight measurement. At most one per account and date."""

    weight: float  # in kg
    date: date
    id: str | None = None
    created_at: datetime | None = None

    def validate(self) -> None:
        """Raises ValidationError if the weight is out of range."""
        _check_range("Body weight", self.weight, BODY_WEIGHT_RANGE)

    def describe(self) -> str:
        return f"{self.weight:g}kg on {self.date.isoformat()}"

    def to_dict(self) -> dict:
        """Convert to the device storage shape."""
        return {
            "id": self.id,
            "weight": self.weight,
            "date": self.date.isoformat(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BodyWeightRecord":
        """Create from the device storage shape."""
        return cls(
            id=data.get("id"),
            weight=float(data["weight"]),
            date=parse_date(data["date"]),
            created_at=parse_timestamp(data.get("createdAt")),
        )

    def to_row(self, user_id: str) -> dict:
        """Convert to a `body_weights` table upsert."""
        return {
            "user_id": user_id,
            "weight": self.weight,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_row(cls, row: dict) -> "BodyWeightRecord":
        """Create from a `body_weights` table row."""
        return cls(
            id=row["id"],
            weight=float(row["weight"]),
            date=parse_date(row["date"]),
            created_at=parse_timestamp(row.get("created_at")),
        )


@dataclass
class ExerciseLibraryEntry:
    """An exercise in an account's library.

    `name` is the canonical global exercise name; `custom_name`, when
    set, is what the account sees instead.
    """

    name: str
    exercise_id: str | None = None
    custom_name: str | None = None
    is_favorite: bool = False

    @property
    def display_name(self) -> str:
        return self.custom_name or self.name

    @classmethod
    def from_row(cls, row: dict) -> "ExerciseLibraryEntry":
        """Create from a `user_exercises` row joined with `exercises`."""
        exercise = row.get("exercise") or {}
        return cls(
            name=exercise.get("name", ""),
            exercise_id=row.get("exercise_id"),
            custom_name=row.get("custom_name"),
            is_favorite=bool(row.get("is_favorite", False)),
        )
