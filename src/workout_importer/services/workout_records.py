"""Turn grouped workouts into the records stored for each user."""
from __future__ import annotations

import logging
import math
from datetime import datetime

from dateutil import parser as date_parser

from workout_importer.parsers.models import ParsedWorkout, WorkoutRecord

logger = logging.getLogger(__name__)

_DEFAULT_A = datetime(2000, 1, 1, 0, 0, 0)
_DEFAULT_B = datetime(2001, 2, 2, 0, 0, 0)


class WorkoutRecordError(RuntimeError):
    """Raised when a grouped workout cannot be turned into a record."""


def parse_timestamp(value: str) -> datetime:
    """
    Parse an exported timestamp.

    Accepts ISO strings ("2024-01-01T10:00:00") as well as the exporter's
    locale format ("13 Dec 2025, 15:11").
    """
    if not value or not value.strip():
        raise WorkoutRecordError("Missing timestamp")
    try:
        # dateutil fills missing parts from `default`; two defaults expose them
        first = date_parser.parse(value.strip(), default=_DEFAULT_A)
        second = date_parser.parse(value.strip(), default=_DEFAULT_B)
    except (ValueError, OverflowError) as e:
        raise WorkoutRecordError(f"Unparseable timestamp '{value}': {e}") from e
    if first != second:
        raise WorkoutRecordError(f"Timestamp '{value}' has no date")
    return first


def duration_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between start and end, halves rounded up. May be negative."""
    return math.floor((end - start).total_seconds() / 60 + 0.5)


def build_workout_record(workout: ParsedWorkout) -> WorkoutRecord:
    """Build the storage record for a grouped workout."""
    start = parse_timestamp(workout.start_time)
    end = parse_timestamp(workout.end_time)

    if (start.tzinfo is None) != (end.tzinfo is None):
        raise WorkoutRecordError(
            f"Cannot compare timestamps '{workout.start_time}' and '{workout.end_time}'"
        )

    minutes = duration_minutes(start, end)
    if minutes <= 0:
        logger.warning(f"Workout '{workout.title}' at {workout.start_time} has duration {minutes} min")

    exercises = list(workout.exercises.values())

    return WorkoutRecord(
        title=workout.title,
        workout_date=start.date().isoformat(),
        start_time=start.strftime("%H:%M:%S"),
        duration_minutes=minutes,
        exercises=exercises,
        total_exercises=len(exercises),
        total_sets=sum(len(e.sets) for e in exercises),
        description=workout.description,
    )
