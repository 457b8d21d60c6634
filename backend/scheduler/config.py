"""
Application configuration
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path
from typing import Literal


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./scheduler.db"

    # Scheduling grid
    SLOT_DURATION_MINUTES: int = 30
    MAX_APPOINTMENT_SLOTS: int = 2

    # Room defaults (HH:MM)
    DEFAULT_OPEN_TIME: str = "09:00"
    DEFAULT_CLOSE_TIME: str = "17:00"

    # What happens to bookings when their room is deleted
    ROOM_DELETE_POLICY: Literal["cascade", "orphan"] = "cascade"

    # Application
    SITE_URL: str = "http://localhost:8000"
    LOG_LEVEL: str = "INFO"

    # Development
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # .env at the repository root
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parent.parent.parent / ".env",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings"""
    return Settings()
