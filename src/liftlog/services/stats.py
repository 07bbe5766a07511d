"""Aggregate and trend views over workouts and body weights."""

from dataclasses import dataclass
from datetime import date

from ..models.records import BodyWeightRecord, WorkoutRecord


@dataclass
class WorkoutStats:
    total_workouts: int = 0
    total_volume: float = 0.0
    unique_exercises: int = 0
    average_volume: float = 0.0


@dataclass
class BodyWeightStats:
    current_weight: float = 0.0
    initial_weight: float = 0.0
    weight_change: float = 0.0
    total_entries: int = 0
    average_weight: float = 0.0


@dataclass
class ProgressPoint:
    """Volume (reps x weight) of one set on a date."""

    date: date
    value: float
    exercise_name: str


def workout_stats(workouts: list[WorkoutRecord]) -> WorkoutStats:
    """Totals across all workouts."""
    if not workouts:
        return WorkoutStats()

    total_volume = sum(w.volume for w in workouts)
    return WorkoutStats(
        total_workouts=len(workouts),
        total_volume=total_volume,
        unique_exercises=len({w.exercise_name for w in workouts}),
        average_volume=total_volume / len(workouts),
    )


def body_weight_stats(entries: list[BodyWeightRecord]) -> BodyWeightStats:
    """First, latest and average body weight by date.

    Returns all zeros when there are no entries.
    """
    if not entries:
        return BodyWeightStats()

    weights = [e.weight for e in sorted(entries, key=lambda e: e.date)]
    return BodyWeightStats(
        current_weight=weights[-1],
        initial_weight=weights[0],
        weight_change=weights[-1] - weights[0],
        total_entries=len(weights),
        average_weight=sum(weights) / len(weights),
    )


def progress_data(
    workouts: list[WorkoutRecord], exercise_name: str | None = None
) -> list[ProgressPoint]:
    """Volume per set over time, oldest first.

    Args:
        workouts: Workouts to chart
        exercise_name: Only include exercises whose name contains this
            (case-insensitive)
    """
    if exercise_name:
        needle = exercise_name.lower()
        workouts = [w for w in workouts if needle in w.exercise_name.lower()]

    points = [
        ProgressPoint(date=w.date, value=w.volume, exercise_name=w.exercise_name)
        for w in workouts
    ]
    return sorted(points, key=lambda p: p.date)


def recent_workouts(workouts: list[WorkoutRecord], limit: int = 10) -> list[WorkoutRecord]:
    """Most recently created workouts first."""
    return sorted(
        workouts,
        key=lambda w: w.created_at.timestamp() if w.created_at else 0.0,
        reverse=True,
    )[:limit]
