"""
Parser Models

Pydantic models for the workout CSV import: the grouped workout/exercise/set
entities, the storage-facing WorkoutRecord projection, and the results
reported back to the caller.
"""

import json
from typing import List, Optional, Dict, Any, Tuple
from pydantic import BaseModel, Field


# Logical CSV columns as written by the workout tracker's export
CSV_COLUMNS = (
    "title",
    "start_time",
    "end_time",
    "description",
    "exercise_title",
    "exercise_notes",
    "set_index",
    "weight_kg",
    "reps",
    "duration_seconds",
)

REQUIRED_COLUMNS = ("title", "start_time", "end_time", "exercise_title", "set_index")

ABSENT = -1


class WorkoutSet(BaseModel):
    """One performed set, created from a single CSV row"""
    set_index: int = 0
    weight_kg: Optional[float] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    notes: str = ""


class ParsedExercise(BaseModel):
    """Named movement within a workout; sets kept in file order"""
    title: str
    sets: List[WorkoutSet] = Field(default_factory=list)


class ParsedWorkout(BaseModel):
    """Workout grouped from all rows sharing (title, start_time)"""
    title: str
    start_time: str
    end_time: str = ""
    description: str = ""
    exercises: Dict[str, ParsedExercise] = Field(default_factory=dict)

    @property
    def natural_key(self) -> Tuple[str, str]:
        return self.title, self.start_time

    @property
    def total_exercises(self) -> int:
        return len(self.exercises)

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises.values())

    def exercise(self, title: str) -> ParsedExercise:
        """Get or create the exercise with this title."""
        if title not in self.exercises:
            self.exercises[title] = ParsedExercise(title=title)
        return self.exercises[title]


class WorkoutRecord(BaseModel):
    """Storage-facing projection of a grouped workout"""
    title: str
    workout_date: str = Field(..., description="ISO date string")
    start_time: str = Field(..., description="Time of day, HH:MM:SS")
    duration_minutes: int
    exercises: List[ParsedExercise] = Field(default_factory=list)
    total_exercises: int = 0
    total_sets: int = 0
    description: str = ""

    def exercises_json(self) -> str:
        """Serialize exercises as an ordered JSON list of {title, sets}."""
        return json.dumps([e.model_dump() for e in self.exercises])

    def to_row(self, user_id: str) -> Dict[str, Any]:
        """Flat row handed to the workouts table."""
        return {
            "user_id": user_id,
            "title": self.title,
            "workout_date": self.workout_date,
            "start_time": self.start_time,
            "duration_minutes": self.duration_minutes,
            "exercises": self.exercises_json(),
            "total_exercises": self.total_exercises,
            "total_sets": self.total_sets,
            "description": self.description,
        }


class ColumnIndex(BaseModel):
    """Position of each logical column in the header, ABSENT when missing"""
    positions: Dict[str, int] = Field(default_factory=dict)
    width: int = 0

    def index(self, name: str) -> int:
        return self.positions.get(name, ABSENT)

    def has(self, name: str) -> bool:
        return self.index(name) != ABSENT

    def missing_required(self) -> List[str]:
        return [name for name in REQUIRED_COLUMNS if not self.has(name)]

    def value(self, fields: List[str], name: str) -> Optional[str]:
        """Field value for a logical column, None when the column is absent."""
        idx = self.index(name)
        if idx == ABSENT or idx >= len(fields):
            return None
        return fields[idx]


class FileInfo(BaseModel):
    """Information about the file being parsed"""
    filename: str
    extension: str


class ParseResult(BaseModel):
    """Result from a parser"""
    success: bool = True
    workouts: List[ParsedWorkout] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)

    detected_format: Optional[str] = None
    total_rows: int = 0
    malformed_rows: int = 0

    # True when the input had no data rows at all
    no_data: bool = False


class ImportResult(BaseModel):
    """Outcome of importing one CSV file"""
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    no_data: bool = False
    errors: List[str] = Field(default_factory=list)

    @property
    def total_groups_found(self) -> int:
        return self.imported + self.skipped + self.failed

    def summary(self) -> str:
        """Message shown to the user once the import finishes."""
        if self.no_data:
            return "No workout data found in CSV file"
        if self.errors and self.total_groups_found == 0:
            return "Import failed: " + "; ".join(self.errors)
        message = f"Import completed!\nNew workouts imported: {self.imported}"
        if self.skipped > 0:
            message += f"\nSkipped (already exists): {self.skipped}"
        if self.failed > 0:
            message += f"\nFailed: {self.failed}"
        return message
