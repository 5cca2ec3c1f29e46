"""
Test fixtures for workout-importer.

Provides sample CSV exports and an in-memory store so the import pipeline
can be tested offline.
"""

import sys
from pathlib import Path

import pytest

# Repo root: .../workout-importer
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_importer...`
p_str = str(SRC)
if p_str not in sys.path:
    sys.path.insert(0, p_str)

from workout_importer.services.workout_store import InMemoryWorkoutStore


TEST_USER_ID = "test-user-123"

HEADER = "title,start_time,end_time,description,exercise_title,exercise_notes,set_index,weight_kg,reps,duration_seconds"


# ---------------------------------------------------------------------------
# Sample CSV Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_csv() -> str:
    """Two workouts, three exercises, seven sets."""
    return "\n".join([
        HEADER,
        '"Push Day","2024-01-01T10:00:00","2024-01-01T10:45:00","Chest focus","Bench Press","",0,60,10,',
        '"Push Day","2024-01-01T10:00:00","2024-01-01T10:45:00","Chest focus","Bench Press","",1,70,8,',
        '"Push Day","2024-01-01T10:00:00","2024-01-01T10:45:00","Chest focus","Bench Press","",2,75,6,',
        '"Push Day","2024-01-01T10:00:00","2024-01-01T10:45:00","Chest focus","Plank","Hold tight",0,,,60',
        '"Leg Day, Heavy","2024-01-03T18:30:00","2024-01-03T19:35:30","","Squat","",0,100,5,',
        '"Leg Day, Heavy","2024-01-03T18:30:00","2024-01-03T19:35:30","","Squat","",1,110,5,',
        '"Leg Day, Heavy","2024-01-03T18:30:00","2024-01-03T19:35:30","","Squat","",2,120,3,',
        "",
    ])


@pytest.fixture
def hevy_locale_csv() -> str:
    """Export using the tracker's locale timestamp format."""
    return "\n".join([
        "title,start_time,end_time,description,exercise_title,superset_id,exercise_notes,set_index,set_type,weight_kg,reps,distance_km,duration_seconds,rpe",
        '"Morning Run","13 Dec 2025, 07:05","13 Dec 2025, 07:40","","Running","","",0,"normal",,,5.2,2100,',
        '"Upper","13 Dec 2025, 15:11","13 Dec 2025, 16:02","","Pull Up","","",0,"normal",,12,,,8',
        '"Upper","13 Dec 2025, 15:11","13 Dec 2025, 16:02","","Pull Up","","",1,"normal",,10,,,9',
    ])


@pytest.fixture
def store() -> InMemoryWorkoutStore:
    """Fresh in-memory workout store."""
    return InMemoryWorkoutStore()


# ---------------------------------------------------------------------------
# Environment Variables
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Set mock environment variables for tests."""
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "test-supabase-key")
