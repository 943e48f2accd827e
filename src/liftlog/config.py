"""Centralized settings and logging setup.

Settings are read from ``LIFTLOG_*`` environment variables (or a ``.env``
file) using Pydantic BaseSettings.

Usage:
    from liftlog.config import get_settings

    settings = get_settings()
    print(settings.db_path)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIFTLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path = Field(
        default=DATA_DIR,
        description="Directory holding the SQLite database",
    )
    db_name: str = Field(
        default="liftlog.db",
        description="Database file name inside data_dir",
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone used to map timestamps to calendar days (default: device local)",
    )
    split_window_days: int = Field(
        default=30,
        ge=0,
        description="Training split window in days; 0 means the whole history",
    )
    history_page_size: int = Field(
        default=50,
        ge=1,
        description="Default number of sets returned by history queries",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Reject zone names the tz database does not know."""
        if not v:
            return None
        from .utils.calendar import resolve_timezone

        resolve_timezone(v)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for CLI and web entry points."""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
    # aiosqlite logs every statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
