"""
CSV Parser

Parses workout tracker CSV exports (Hevy format): one row per performed set,
grouped back into workouts, exercises and sets.

Expected header columns (exact, case-sensitive):
    title, start_time, end_time, description, exercise_title,
    exercise_notes, set_index, weight_kg, reps, duration_seconds

`description` and `exercise_notes` are optional. Malformed rows are dropped
and unparseable numbers degrade to None rather than failing the import.
"""

import logging
from typing import List, Dict, Optional, Union

from .base import BaseParser
from .models import (
    CSV_COLUMNS,
    ColumnIndex,
    FileInfo,
    ParseResult,
    ParsedWorkout,
    WorkoutSet,
)
from ..utils import strip_quotes, to_float, to_int

logger = logging.getLogger(__name__)

HEVY_FORMAT = "hevy"


def tokenize_csv_line(line: str) -> List[str]:
    """
    Split one CSV line on commas outside double-quoted spans.

    A quote character toggles the quoted state and is not kept. Escaped
    quotes ("") are not supported; an unterminated quote runs to the end of
    the line.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)

    fields.append(''.join(current))
    return fields


def resolve_columns(header_line: str) -> ColumnIndex:
    """Map each known column name to its position in the header line."""
    header = [strip_quotes(cell).strip() for cell in tokenize_csv_line(header_line.strip())]
    positions = {}
    for name in CSV_COLUMNS:
        if name in header:
            positions[name] = header.index(name)
    return ColumnIndex(positions=positions, width=len(header))


def parse_set(fields: List[str], columns: ColumnIndex) -> WorkoutSet:
    """Build a set from one tokenized row."""
    return WorkoutSet(
        set_index=to_int(columns.value(fields, 'set_index')) or 0,
        weight_kg=to_float(columns.value(fields, 'weight_kg')),
        reps=to_int(columns.value(fields, 'reps')),
        duration_seconds=to_int(columns.value(fields, 'duration_seconds')),
        notes=strip_quotes(columns.value(fields, 'exercise_notes')),
    )


def group_rows(lines: List[str], columns: ColumnIndex) -> tuple[List[ParsedWorkout], int]:
    """
    Group data rows into workouts keyed by (title, start_time).

    Workouts and their exercises keep first-seen order and sets keep file
    order. Returns the workouts and the number of rows dropped as malformed.
    """
    workouts: Dict[str, ParsedWorkout] = {}
    malformed = 0

    for line_no, raw in enumerate(lines, start=2):
        line = raw.strip()
        if not line:
            continue

        fields = tokenize_csv_line(line)
        if len(fields) < columns.width:
            malformed += 1
            logger.debug(f"Skipping line {line_no}: {len(fields)} fields, expected {columns.width}")
            continue

        title = strip_quotes(columns.value(fields, 'title'))
        start_time = strip_quotes(columns.value(fields, 'start_time'))
        workout_key = f"{title}_{start_time}"

        if workout_key not in workouts:
            workouts[workout_key] = ParsedWorkout(
                title=title,
                start_time=start_time,
                end_time=strip_quotes(columns.value(fields, 'end_time')),
                description=strip_quotes(columns.value(fields, 'description')),
            )

        workout = workouts[workout_key]
        exercise = workout.exercise(strip_quotes(columns.value(fields, 'exercise_title')))
        exercise.sets.append(parse_set(fields, columns))

    return list(workouts.values()), malformed


class HevyCSVParser(BaseParser):
    """Parser for Hevy-style workout CSV exports"""

    def can_parse(self, file_info: FileInfo) -> bool:
        """Check if this parser can handle the file"""
        return file_info.extension.lower() == '.csv'

    def parse(self, content: Union[bytes, str], file_info: Optional[FileInfo] = None) -> ParseResult:
        """Parse CSV content and return grouped workouts"""
        errors: List[str] = []
        warnings: List[str] = []

        try:
            text = self.decode_content(content)
            lines = text.split('\n')

            if len(lines) < 2:
                return ParseResult(
                    success=False,
                    no_data=True,
                    errors=["No workout data found in CSV file"],
                    detected_format=HEVY_FORMAT,
                )

            columns = resolve_columns(lines[0])
            missing = columns.missing_required()
            if missing:
                self.add_error(errors, f"Missing required columns: {', '.join(missing)}")
                return ParseResult(
                    success=False,
                    errors=errors,
                    detected_format=HEVY_FORMAT,
                    metadata={'columns': columns.positions},
                )

            for optional in ('description', 'exercise_notes'):
                if not columns.has(optional):
                    logger.debug(f"Optional column '{optional}' not present")

            data_lines = lines[1:]
            workouts, malformed = group_rows(data_lines, columns)

            if malformed:
                self.add_warning(warnings, f"Skipped {malformed} malformed row(s)")

            if file_info:
                logger.info(f"Parsed {file_info.filename}: {len(workouts)} workout(s)")
            else:
                logger.info(f"Parsed CSV: {len(workouts)} workout(s)")

            return ParseResult(
                success=True,
                workouts=workouts,
                errors=errors,
                warnings=warnings,
                detected_format=HEVY_FORMAT,
                total_rows=sum(1 for line in data_lines if line.strip()),
                malformed_rows=malformed,
                metadata={'columns': columns.positions},
            )

        except Exception as e:
            logger.exception(f"Failed to parse CSV file: {e}")
            return ParseResult(
                success=False,
                errors=[f"Failed to parse CSV file: {str(e)}"],
            )
