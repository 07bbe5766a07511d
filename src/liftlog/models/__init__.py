"""Data models for liftlog."""

from .migration import LocalSnapshot, MigrationMarker, MigrationResult, MigrationState
from .records import BodyWeightRecord, ExerciseLibraryEntry, WorkoutRecord

__all__ = [
    "BodyWeightRecord",
    "ExerciseLibraryEntry",
    "LocalSnapshot",
    "MigrationMarker",
    "MigrationResult",
    "MigrationState",
    "WorkoutRecord",
]
