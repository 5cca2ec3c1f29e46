"""Configuration settings for the workout importer."""
import logging
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Persistence
    SUPABASE_URL: str | None = None
    SUPABASE_KEY: str | None = None
    WORKOUTS_TABLE: str = "workouts"

    # Import limits
    MAX_IMPORT_BYTES: int = 10 * 1024 * 1024

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # Persistence
        self.SUPABASE_URL = os.getenv("SUPABASE_URL")
        self.SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_ANON_KEY")
        self.WORKOUTS_TABLE = os.getenv("WORKOUTS_TABLE", "workouts")

        try:
            self.MAX_IMPORT_BYTES = int(os.getenv("MAX_IMPORT_BYTES", str(10 * 1024 * 1024)))
        except ValueError:
            self.MAX_IMPORT_BYTES = 10 * 1024 * 1024


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and workers that run the importer."""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
