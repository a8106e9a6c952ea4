"""
Utility modules for PortfolioHub.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from portfoliohub.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    settings,
    ROOT_DIR,
    LOGS_DIR,
)
from portfoliohub.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    DEFAULT_MATCHING_WEIGHTS,
    MATCHING_TARGETS,
    OPEN_PROJECT_STATUSES,
    MatchScoreLevel,
    MetricType,
    ProjectStatus,
    UserRole,
)
from portfoliohub.utils.logger import (
    setup_logging,
    get_logger,
    metrics_log,
    redact,
    LoggerMixin,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "settings",
    "ROOT_DIR",
    "LOGS_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "DEFAULT_MATCHING_WEIGHTS",
    "MATCHING_TARGETS",
    "OPEN_PROJECT_STATUSES",
    "MatchScoreLevel",
    "MetricType",
    "ProjectStatus",
    "UserRole",
    # Logger
    "setup_logging",
    "get_logger",
    "metrics_log",
    "redact",
    "LoggerMixin",
]
