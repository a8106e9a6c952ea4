"""
Configuration management for PortfolioHub matching.

Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from pathlib import Path
from typing import Literal
from urllib.parse import quote_plus

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Base paths
ROOT_DIR = Path(__file__).parent.parent.parent
LOGS_DIR = ROOT_DIR / "logs"


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    host: str = "localhost"
    port: int = 27017
    name: str = "portfoliohub"
    username: str | None = None
    password: str | None = None

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        host = v.strip()
        if not host or any(c in host for c in "/@?#;& "):
            raise ValueError(f"Invalid database host: {v!r}")
        return host

    @property
    def connection_string(self) -> str:
        """MongoDB URI with URL-encoded credentials."""
        auth = ""
        if self.username and self.password:
            auth = f"{quote_plus(self.username)}:{quote_plus(self.password)}@"
        return f"mongodb://{auth}{self.host}:{self.port}"


class MatchingSettings(BaseSettings):
    """Project matching weights and evaluation targets."""

    model_config = SettingsConfigDict(env_prefix="MATCHING_")

    # Scoring weights (must sum to 1)
    skills_weight: float = Field(0.6, ge=0, le=1)
    categories_weight: float = Field(0.4, ge=0, le=1)

    # Ranking
    default_top_n: int = Field(10, gt=0)
    candidate_limit: int = Field(1000, gt=0)

    # Evaluation targets
    time_goal_minutes: float = Field(5.0, gt=0)
    relevance_goal: float = Field(0.70, ge=0, le=1)

    @model_validator(mode="after")
    def validate_weights(self) -> "MatchingSettings":
        """Weights must add up to one so overall scores stay within [0, 1]."""
        if abs(self.skills_weight + self.categories_weight - 1.0) > 1e-9:
            raise ValueError(
                "skills_weight and categories_weight must sum to 1.0, "
                f"got {self.skills_weight} + {self.categories_weight}"
            )
        return self


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    file_path: Path = LOGS_DIR / "portfoliohub.log"
    rotation: str = "20 MB"
    retention: str = "30 days"
    console_output: bool = True

    # Matching metrics (JSON lines, one file per day)
    metrics_dir: Path = LOGS_DIR
    metrics_rotation: str = "00:00"
    metrics_retention: str = "90 days"


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "PortfolioHub"
    version: str = "0.1.0"
    description: str = "Volunteer and mentor project matching"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    matching: MatchingSettings = Field(default_factory=MatchingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings


# Convenience exports
settings = get_settings()
