"""
CSV Import Service

Imports a workout tracker CSV export for one user:
1. Parse - tokenize rows and group them into workouts
2. Build - derive the stored record (date, start time, duration, totals)
3. Store - insert each workout in file order, one at a time

Duplicates reported by the store are skipped, other storage failures are
counted as failed; neither stops the rest of the batch.
"""

import logging
from typing import Optional, Union

from workout_importer.config import settings
from workout_importer.parsers import FileInfo, HevyCSVParser, ImportResult, ParseResult
from workout_importer.parsers.base import BaseParser
from workout_importer.services.workout_records import WorkoutRecordError, build_workout_record
from workout_importer.services.workout_store import (
    DuplicateWorkoutError,
    WorkoutStorageError,
    WorkoutStore,
)

logger = logging.getLogger(__name__)


class WorkoutCSVImporter:
    """Imports CSV workout exports into a WorkoutStore."""

    def __init__(self, store: WorkoutStore, parser: Optional[BaseParser] = None):
        self.store = store
        self.parser = parser or HevyCSVParser()

    def preview(self, content: Union[bytes, str], file_info: Optional[FileInfo] = None) -> ParseResult:
        """Parse without storing anything."""
        return self.parser.parse(content, file_info)

    def import_csv(
        self,
        user_id: str,
        content: Union[bytes, str],
        file_info: Optional[FileInfo] = None,
    ) -> ImportResult:
        """
        Import every workout found in the CSV content.

        Args:
            user_id: Owner of the imported workouts
            content: Raw CSV bytes or text
            file_info: Information about the uploaded file, if known

        Returns:
            ImportResult with imported/skipped/failed counts
        """
        if file_info and not self.parser.can_parse(file_info):
            return ImportResult(errors=[f"Unsupported file type: {file_info.filename}"])

        size = len(content.encode("utf-8")) if isinstance(content, str) else len(content)
        if size > settings.MAX_IMPORT_BYTES:
            return ImportResult(errors=[f"File too large: {size} bytes (max {settings.MAX_IMPORT_BYTES})"])

        parsed = self.parser.parse(content, file_info)
        if parsed.no_data:
            logger.info(f"CSV import for user {user_id}: no data")
            return ImportResult(no_data=True)
        if not parsed.success:
            return ImportResult(errors=parsed.errors)

        result = ImportResult()

        for workout in parsed.workouts:
            try:
                record = build_workout_record(workout)
            except WorkoutRecordError as e:
                result.failed += 1
                result.errors.append(f"{workout.title}: {e}")
                logger.warning(f"Could not build workout '{workout.title}': {e}")
                continue

            try:
                workout_id = self.store.insert(user_id, record)
            except DuplicateWorkoutError:
                result.skipped += 1
                logger.debug(f"Skipping existing workout '{record.title}' on {record.workout_date} {record.start_time}")
                continue
            except WorkoutStorageError as e:
                result.failed += 1
                result.errors.append(f"{record.title}: {e}")
                logger.error(f"Error importing workout '{record.title}': {e}")
                continue

            result.imported += 1
            logger.debug(f"Imported workout '{record.title}' as {workout_id}")

        logger.info(
            f"CSV import for user {user_id}: {result.imported} imported, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return result


def import_workouts_csv(
    user_id: str,
    content: Union[bytes, str],
    store: WorkoutStore,
    file_info: Optional[FileInfo] = None,
) -> ImportResult:
    """Convenience wrapper around WorkoutCSVImporter.import_csv."""
    return WorkoutCSVImporter(store).import_csv(user_id, content, file_info)
