# backend/educacenso/config.py
"""
Configuration management for the Educacenso export service.
Uses Pydantic for settings validation and environment variable management.

The age/grade thresholds and capacity limits below encode school-census
rules. They are configuration, not code: check them against the current INEP
regulation before each census campaign.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "Educacenso Export Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field(default="development", alias="ENV")

    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:5173",  # Vite frontend
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ],
        alias="CORS_ORIGINS",
    )

    # Where the command line writes generated files
    EXPORT_DIR: str = Field(default="./exports", alias="EXPORT_DIR")

    # Census rules
    AGE_CUTOFF_MONTH: int = Field(default=3, alias="AGE_CUTOFF_MONTH")
    AGE_CUTOFF_DAY: int = Field(default=31, alias="AGE_CUTOFF_DAY")
    AGE_GRADE_HIGH_DISTORTION_THRESHOLD: int = Field(
        default=2, alias="AGE_GRADE_HIGH_DISTORTION_THRESHOLD"
    )
    DEFAULT_CLASSROOM_CAPACITY: int = Field(
        default=30, alias="DEFAULT_CLASSROOM_CAPACITY"
    )
    CLASSROOM_NEARLY_FULL_THRESHOLD: int = Field(
        default=3, alias="CLASSROOM_NEARLY_FULL_THRESHOLD"
    )
    MAX_ACADEMIC_PERIOD_DAYS: int = Field(default=730, alias="MAX_ACADEMIC_PERIOD_DAYS")
    ACTIVE_ENROLLMENT_STATUS: str = Field(
        default="Cursando", alias="ACTIVE_ENROLLMENT_STATUS"
    )
    DEFAULT_NATIONALITY: str = Field(default="Brasileira", alias="DEFAULT_NATIONALITY")
    DEFAULT_BIRTH_COUNTRY: str = Field(default="Brasil", alias="DEFAULT_BIRTH_COUNTRY")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", alias="LOG_LEVEL")
    LOG_FILE: Optional[str] = Field(default=None, alias="LOG_FILE")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("CORS_ORIGINS", mode="before")
    def parse_comma_separated(cls, v: Any) -> Any:
        """Parse comma-separated strings from env vars into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("AGE_CUTOFF_MONTH")
    def check_month(cls, v: int) -> int:
        if not 1 <= v <= 12:
            raise ValueError("AGE_CUTOFF_MONTH must be between 1 and 12")
        return v

    @property
    def is_production(self) -> bool:
        return (self.ENVIRONMENT or "").lower() == "production"


class DevelopmentSettings(Settings):
    """Development environment specific settings."""

    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


class ProductionSettings(Settings):
    """Production environment specific settings."""

    ENVIRONMENT: str = Field(default="production", alias="ENV")
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


class TestingSettings(Settings):
    """Testing environment specific settings."""

    ENVIRONMENT: str = Field(default="testing", alias="ENV")
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"


@lru_cache()
def get_settings() -> Settings:
    """
    Load and return the appropriate settings based on the ENVIRONMENT variable.
    Caches the result to prevent reading the .env file on every call.
    """
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "production":
        return ProductionSettings()
    if environment in ("test", "testing"):
        return TestingSettings()
    return DevelopmentSettings()


def validate_settings(settings: Settings) -> List[str]:
    """Validate settings and return list of issues."""
    issues: List[str] = []

    if settings.AGE_GRADE_HIGH_DISTORTION_THRESHOLD < 0:
        issues.append("AGE_GRADE_HIGH_DISTORTION_THRESHOLD must not be negative")

    if settings.DEFAULT_CLASSROOM_CAPACITY <= 0:
        issues.append("DEFAULT_CLASSROOM_CAPACITY must be positive")

    if settings.CLASSROOM_NEARLY_FULL_THRESHOLD >= settings.DEFAULT_CLASSROOM_CAPACITY:
        issues.append(
            "CLASSROOM_NEARLY_FULL_THRESHOLD should be smaller than DEFAULT_CLASSROOM_CAPACITY"
        )

    if settings.MAX_ACADEMIC_PERIOD_DAYS < 180:
        issues.append("MAX_ACADEMIC_PERIOD_DAYS should cover at least one semester")

    if not settings.ACTIVE_ENROLLMENT_STATUS.strip():
        issues.append("ACTIVE_ENROLLMENT_STATUS is required")

    if settings.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        issues.append(f"LOG_LEVEL {settings.LOG_LEVEL!r} is not a logging level")

    if settings.is_production and settings.DEBUG:
        issues.append("DEBUG must be disabled in production")

    return issues


def setup_logging(settings: Settings) -> None:
    """Apply the dictConfig from ``logging_config`` for the given settings."""
    import logging
    import logging.config

    from .logging_config import build_logging_config

    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(settings))

    for noisy in ("reportlab", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


__all__ = [
    "Settings",
    "get_settings",
    "validate_settings",
    "setup_logging",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
