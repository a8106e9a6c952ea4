"""
Application-wide constants for PortfolioHub matching.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "portfoliohub"
APP_DISPLAY_NAME: Final[str] = "PortfolioHub Project Matching"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Scoring Constants
# =============================================================================

# Default weights for the overall match score
DEFAULT_MATCHING_WEIGHTS: Final[dict[str, float]] = {
    "skills_similarity": 0.6,
    "categories_similarity": 0.4,
}

# Score thresholds
SCORE_THRESHOLDS: Final[dict[str, float]] = {
    "excellent": 0.85,
    "good": 0.70,
    "fair": 0.50,
    "poor": 0.30,
}

# Targets a matching search is evaluated against
MATCHING_TARGETS: Final[dict[str, float]] = {
    "time_goal_minutes": 5.0,
    "relevance_goal": 0.70,
    # Share of searches that must meet the time goal for the target to count as reached
    "time_goal_pass_rate": 90.0,
}


# =============================================================================
# Enums
# =============================================================================


class UserRole(str, Enum):
    """Role of a platform user."""

    ADMIN = "admin"
    MENTOR = "mentor"
    VOLUNTEER = "volunteer"
    PROJECT_OWNER = "project_owner"


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    DRAFT = "draft"
    ACTIVE = "active"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"


# Projects currently accepting volunteers
OPEN_PROJECT_STATUSES: Final[tuple[ProjectStatus, ...]] = (ProjectStatus.ACTIVE,)


class MatchScoreLevel(Enum):
    """Categorical levels for match scores."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: float) -> "MatchScoreLevel":
        """Convert a numeric score to a level."""
        if score >= SCORE_THRESHOLDS["excellent"]:
            return cls.EXCELLENT
        elif score >= SCORE_THRESHOLDS["good"]:
            return cls.GOOD
        elif score >= SCORE_THRESHOLDS["fair"]:
            return cls.FAIR
        return cls.POOR


class MetricType(str, Enum):
    """Types of records written to the metrics log."""

    PROJECT_MATCHING = "project_matching"
    JACCARD_SIMILARITY = "jaccard_similarity"
