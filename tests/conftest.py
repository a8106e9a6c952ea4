"""
Shared test fixtures for the PortfolioHub test suite.

Sets environment variables before any portfoliohub imports so logging
writes to a scratch directory, then provides profile factories, in-memory
repositories and a loguru sink that captures metrics records.
"""

import os
import tempfile

# === Set environment BEFORE any portfoliohub imports ===
_LOG_DIR = tempfile.mkdtemp(prefix="portfoliohub-test-logs-")
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "portfoliohub_test")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")
os.environ.setdefault("LOG_FILE_PATH", os.path.join(_LOG_DIR, "portfoliohub.log"))
os.environ.setdefault("LOG_METRICS_DIR", _LOG_DIR)

from typing import Any, Iterable, Optional

import pytest
from bson import ObjectId
from loguru import logger

from portfoliohub.core.matching.matching_engine import MatchingEngine
from portfoliohub.data.models import Project, ProjectProfile, ProjectSkill, User, UserProfile
from portfoliohub.services.metrics_logger import MatchingMetricsLogger
from portfoliohub.utils.constants import ProjectStatus, UserRole


# ---------------------------------------------------------------------------
# Profile factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user_profile():
    """Factory that returns a callable to build UserProfile snapshots."""

    def _factory(
        skills: Iterable[str] = ("python", "react", "sql"),
        interests: Iterable[str] = ("education",),
        user_id: str = "user-1",
    ) -> UserProfile:
        return UserProfile(
            user_id=user_id,
            skill_ids=list(skills),
            interest_category_ids=list(interests),
        )

    return _factory


@pytest.fixture
def make_project_profile():
    """Factory that returns a callable to build ProjectProfile snapshots."""
    counter = {"n": 0}

    def _factory(
        skills: Iterable[str] = (),
        categories: Iterable[str] = (),
        mandatory: Iterable[str] = (),
        project_id: Optional[str] = None,
        name: Optional[str] = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
    ) -> ProjectProfile:
        counter["n"] += 1
        project_id = project_id or f"project-{counter['n']}"
        return ProjectProfile(
            project_id=project_id,
            name=name or project_id.replace("-", " ").title(),
            required_skill_ids=list(skills),
            mandatory_skill_ids=list(mandatory),
            category_ids=list(categories),
            status=status,
        )

    return _factory


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_user():
    return User(
        id=ObjectId(),
        name="Rina Putri",
        email="rina@example.com",
        role=UserRole.VOLUNTEER,
        skill_ids=["react", "typescript", "react", " nodejs "],
        interest_category_ids=["education", "health"],
    )


@pytest.fixture
def sample_project():
    return Project(
        id=ObjectId(),
        name="Learning Platform for Rural Schools",
        description="Offline-first lesson delivery",
        status=ProjectStatus.ACTIVE,
        skills=[
            ProjectSkill(skill_id="react", is_mandatory=True),
            ProjectSkill(skill_id="nodejs", is_mandatory=True),
            ProjectSkill(skill_id="postgresql"),
        ],
        category_ids=["education"],
    )


# ---------------------------------------------------------------------------
# Matching collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def matching_engine():
    """MatchingEngine with default 0.6 / 0.4 weights."""
    return MatchingEngine()


class InMemoryUserRepository:
    """User profile source backed by a dict."""

    def __init__(self, profiles: Optional[dict[str, UserProfile]] = None):
        self.profiles = profiles or {}
        self.calls = 0

    def get_profile(self, user_id: Any) -> Optional[UserProfile]:
        self.calls += 1
        return self.profiles.get(user_id)

    async def get_profile_async(self, user_id: Any) -> Optional[UserProfile]:
        return self.get_profile(user_id)


class InMemoryProjectRepository:
    """Project profile source backed by a list (already in creation order)."""

    def __init__(self, profiles: Optional[list[ProjectProfile]] = None):
        self.profiles = profiles or []
        self.calls = 0

    def get_candidate_profiles(self, limit: int = 1000) -> list[ProjectProfile]:
        self.calls += 1
        return list(self.profiles[:limit])

    async def get_candidate_profiles_async(self, limit: int = 1000) -> list[ProjectProfile]:
        return self.get_candidate_profiles(limit=limit)


class RecordingMetricsLogger(MatchingMetricsLogger):
    """Metrics logger that keeps what it was asked to log."""

    def __init__(self):
        super().__init__(time_goal_minutes=5.0, relevance_goal=0.7)
        self.runs = []
        self.calculations = []

    def log_project_matching(self, run):
        self.runs.append(run)
        return {}

    def log_jaccard_calculation(
        self, user, result, project_skills=None, project_categories=None, calculation_time_ms=None
    ):
        self.calculations.append(
            (user, result, project_skills, project_categories, calculation_time_ms)
        )
        return {}


@pytest.fixture
def user_repository():
    return InMemoryUserRepository()


@pytest.fixture
def project_repository():
    return InMemoryProjectRepository()


@pytest.fixture
def recording_metrics():
    return RecordingMetricsLogger()


# ---------------------------------------------------------------------------
# Loguru capture
# ---------------------------------------------------------------------------


@pytest.fixture
def captured_metrics():
    """Collect the extra data of every metrics record logged during a test."""
    records: list[dict[str, Any]] = []

    def _sink(message):
        extra = message.record["extra"]
        if "metric_type" in extra:
            records.append(
                {
                    "event": message.record["message"],
                    "metric_type": extra["metric_type"],
                    "payload": extra["payload"],
                    "payload_json": extra["payload_json"],
                }
            )

    handler_id = logger.add(_sink, level="INFO")
    yield records
    logger.remove(handler_id)
