"""
Configuration Management for the Progress Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see where data is kept on disk and
ensures configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("~/.leetcode-tracker"),
        description="Directory holding the tracker's data files"
    )
    problems_file: str = Field(
        default="problems.json",
        description="File name of the problems document inside data_dir"
    )
    storage_key: str = Field(
        default="problems",
        min_length=1,
        description="Key under which the problem list is stored in the document"
    )
    activity_file: str = Field(
        default="activity.jsonl",
        description="File name of the append-only activity log inside data_dir"
    )
    persist_activity: bool = Field(
        default=True,
        description="Write activity events to the activity log file"
    )

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @property
    def problems_path(self) -> Path:
        return self.data_dir / self.problems_file

    @property
    def activity_path(self) -> Path:
        return self.data_dir / self.activity_file


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name"
    )

    # Behaviour
    seed_sample_data: bool = Field(
        default=True,
        description="Seed the sample problem when the collection is empty"
    )
    future_date_tolerance_days: int = Field(
        default=1,
        ge=0,
        description="How many days in the future a solved date can be before we warn"
    )

    # Chart appearance
    chart_line_color: str = Field(
        default="#3498db",
        description="Line color of the progress chart"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus "<name>_error"
    entries describing failures. Used by the settings page.
    """
    results = {}

    settings = get_settings()

    try:
        storage = settings.storage
        results["storage"] = True
        if storage.data_dir.exists() and not storage.data_dir.is_dir():
            results["storage"] = False
            results["storage_error"] = f"{storage.data_dir} is not a directory"
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
