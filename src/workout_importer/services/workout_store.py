"""
Workout storage.

The importer hands each record to a WorkoutStore. The store owns duplicate
detection: a workout is identified per user by (title, workout_date,
start_time), and implementations must insert at most one row per key even
when several imports for the same user run at once.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from workout_importer.config import settings
from workout_importer.parsers.models import WorkoutRecord

logger = logging.getLogger(__name__)


class WorkoutStoreError(RuntimeError):
    """Base class for storage errors."""


class DuplicateWorkoutError(WorkoutStoreError):
    """The workout already exists for this user."""


class WorkoutStorageError(WorkoutStoreError):
    """The workout could not be written."""


def get_supabase_client():
    """Get Supabase client instance, or None when credentials are missing."""
    from supabase import create_client

    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        logger.warning("Supabase credentials not configured. Workout storage is unavailable.")
        return None

    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None


class WorkoutStore(ABC):
    """Persistence collaborator used by the importer."""

    @abstractmethod
    def exists(self, user_id: str, title: str, workout_date: str, start_time: str) -> bool:
        """Check whether a workout with this natural key is already stored."""

    @abstractmethod
    def insert(self, user_id: str, record: WorkoutRecord) -> Any:
        """
        Store a workout record.

        Returns:
            The new row id

        Raises:
            DuplicateWorkoutError: the natural key is already stored
            WorkoutStorageError: any other write failure
        """


class InMemoryWorkoutStore(WorkoutStore):
    """Process-local store, used for previews and tests."""

    def __init__(self):
        self._rows: Dict[Tuple[str, str, str, str], Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._next_id = 1

    def exists(self, user_id: str, title: str, workout_date: str, start_time: str) -> bool:
        with self._lock:
            return (user_id, title, workout_date, start_time) in self._rows

    def insert(self, user_id: str, record: WorkoutRecord) -> int:
        key = (user_id, record.title, record.workout_date, record.start_time)
        with self._lock:
            if key in self._rows:
                raise DuplicateWorkoutError(f"Workout already exists: {record.title} {record.workout_date} {record.start_time}")
            row = record.to_row(user_id)
            row["id"] = self._next_id
            self._rows[key] = row
            self._next_id += 1
            return row["id"]

    def rows(self, user_id: str) -> list:
        """Stored rows for a user, ordered by date and start time, newest first."""
        with self._lock:
            user_rows = [row for key, row in self._rows.items() if key[0] == user_id]
        return sorted(user_rows, key=lambda r: (r["workout_date"], r["start_time"]), reverse=True)


class SupabaseWorkoutStore(WorkoutStore):
    """Store backed by the Supabase workouts table.

    The table is expected to carry a unique constraint on
    (user_id, title, workout_date, start_time); that constraint is what keeps
    concurrent imports from inserting the same workout twice.
    """

    def __init__(self, client=None, table: Optional[str] = None):
        self._client = client
        self.table = table or settings.WORKOUTS_TABLE

    @property
    def client(self):
        if self._client is None:
            self._client = get_supabase_client()
        if self._client is None:
            raise WorkoutStorageError("Supabase client is not configured")
        return self._client

    def exists(self, user_id: str, title: str, workout_date: str, start_time: str) -> bool:
        try:
            result = (
                self.client.table(self.table)
                .select("id")
                .eq("user_id", user_id)
                .eq("title", title)
                .eq("workout_date", workout_date)
                .eq("start_time", start_time)
                .limit(1)
                .execute()
            )
        except WorkoutStorageError:
            raise
        except Exception as e:
            raise WorkoutStorageError(f"Failed to look up workout '{title}': {e}") from e
        return bool(result.data)

    def insert(self, user_id: str, record: WorkoutRecord) -> Any:
        if self.exists(user_id, record.title, record.workout_date, record.start_time):
            raise DuplicateWorkoutError(f"Workout already exists: {record.title} {record.workout_date} {record.start_time}")

        try:
            result = self.client.table(self.table).insert(record.to_row(user_id)).execute()
        except Exception as e:
            if "duplicate" in str(e).lower() or "unique" in str(e).lower():
                raise DuplicateWorkoutError(f"Workout already exists: {record.title}") from e
            logger.error(f"Workout insert failed for '{record.title}': {e}")
            raise WorkoutStorageError(f"Failed to store workout '{record.title}': {e}") from e

        rows = result.data or []
        return rows[0].get("id") if rows else None
