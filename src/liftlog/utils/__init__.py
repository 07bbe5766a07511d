"""Utility helpers for liftlog."""

from .exercise_utils import (
    dedupe_exercise_names,
    exercise_suggestions,
    normalize_exercise_name,
    require_exercise_name,
)

__all__ = [
    "dedupe_exercise_names",
    "exercise_suggestions",
    "normalize_exercise_name",
    "require_exercise_name",
]
