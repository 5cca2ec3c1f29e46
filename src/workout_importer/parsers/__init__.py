"""
Workout export parsers.

Usage:
    from workout_importer.parsers import HevyCSVParser, FileInfo

    parser = HevyCSVParser()
    result = parser.parse(content, FileInfo(filename="workouts.csv", extension=".csv"))
"""

from .models import (
    ColumnIndex,
    FileInfo,
    ImportResult,
    ParsedExercise,
    ParsedWorkout,
    ParseResult,
    WorkoutRecord,
    WorkoutSet,
)
from .base import BaseParser
from .csv_parser import HevyCSVParser, group_rows, resolve_columns, tokenize_csv_line

__all__ = [
    'BaseParser',
    'ColumnIndex',
    'FileInfo',
    'HevyCSVParser',
    'ImportResult',
    'ParsedExercise',
    'ParsedWorkout',
    'ParseResult',
    'WorkoutRecord',
    'WorkoutSet',
    'group_rows',
    'resolve_columns',
    'tokenize_csv_line',
]
