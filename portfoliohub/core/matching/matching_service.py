"""
Project recommendation service.

Loads a user's profile and the open candidate projects, runs the
matching engine, and records search metrics around the call. Storage
access and metrics emission live here so the engine stays pure.
"""

import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol

from portfoliohub.data.models.profile import ProjectProfile, UserProfile
from portfoliohub.services.metrics_logger import MatchingMetricsLogger, get_metrics_logger
from portfoliohub.utils.config import get_settings
from portfoliohub.utils.logger import LoggerMixin

from .matching_engine import MatchingEngine, MatchResult, get_matching_engine, validate_top_n


class UserNotFoundError(LookupError):
    """Raised when matching is requested for a user that does not exist."""


class UserProfileSource(Protocol):
    """Read access to user skills and interests."""

    def get_profile(self, user_id: Any) -> Optional[UserProfile]: ...

    async def get_profile_async(self, user_id: Any) -> Optional[UserProfile]: ...


class ProjectProfileSource(Protocol):
    """Read access to projects accepting volunteers."""

    def get_candidate_profiles(self, limit: int = ...) -> list[ProjectProfile]: ...

    async def get_candidate_profiles_async(self, limit: int = ...) -> list[ProjectProfile]: ...


@dataclass
class MatchingRun:
    """One completed recommendation search."""

    user: UserProfile
    results: list[MatchResult] = field(default_factory=list)
    total_candidates: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: float = 0.0
    search_query: Optional[str] = None

    @property
    def finished_at(self) -> datetime:
        return self.started_at + timedelta(milliseconds=self.duration_ms)

    @property
    def duration_minutes(self) -> float:
        return self.duration_ms / (1000 * 60)

    @property
    def top_score(self) -> Optional[float]:
        """Overall score of the best match, None when nothing was returned."""
        return self.results[0].overall_score if self.results else None

    @property
    def avg_score(self) -> Optional[float]:
        """Mean overall score of the returned matches."""
        if not self.results:
            return None
        return sum(r.overall_score for r in self.results) / len(self.results)


class ProjectMatchingService(LoggerMixin):
    """Recommends open projects to a user."""

    def __init__(
        self,
        user_repository: Optional[UserProfileSource] = None,
        project_repository: Optional[ProjectProfileSource] = None,
        engine: Optional[MatchingEngine] = None,
        metrics_logger: Optional[MatchingMetricsLogger] = None,
        default_top_n: Optional[int] = None,
        candidate_limit: Optional[int] = None,
    ):
        matching = get_settings().matching

        if user_repository is None:
            from portfoliohub.data.repositories import get_user_repository

            user_repository = get_user_repository()
        if project_repository is None:
            from portfoliohub.data.repositories import get_project_repository

            project_repository = get_project_repository()

        self.user_repository = user_repository
        self.project_repository = project_repository
        self.engine = engine or get_matching_engine()
        self.metrics_logger = metrics_logger or get_metrics_logger()
        self.default_top_n = default_top_n if default_top_n is not None else matching.default_top_n
        self.candidate_limit = (
            candidate_limit if candidate_limit is not None else matching.candidate_limit
        )

    def recommend_projects(
        self,
        user_id: Any,
        top_n: Optional[int] = None,
        search_query: Optional[str] = None,
    ) -> MatchingRun:
        """
        Rank open projects for a user.

        Args:
            user_id: The user to recommend projects to
            top_n: Maximum number of results (defaults to settings)
            search_query: Free-text query recorded with the metrics

        Returns:
            MatchingRun with ranked results and timing

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidMatchRequestError: If top_n is not a positive integer
        """
        top_n = validate_top_n(top_n if top_n is not None else self.default_top_n)

        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()

        user = self.user_repository.get_profile(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        candidates = self.project_repository.get_candidate_profiles(limit=self.candidate_limit)

        return self._run(user, candidates, top_n, started_at, start, search_query)

    async def recommend_projects_async(
        self,
        user_id: Any,
        top_n: Optional[int] = None,
        search_query: Optional[str] = None,
    ) -> MatchingRun:
        """
        Rank open projects for a user, loading user and projects concurrently.

        Args:
            user_id: The user to recommend projects to
            top_n: Maximum number of results (defaults to settings)
            search_query: Free-text query recorded with the metrics

        Returns:
            MatchingRun with ranked results and timing

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidMatchRequestError: If top_n is not a positive integer
        """
        top_n = validate_top_n(top_n if top_n is not None else self.default_top_n)

        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()

        user, candidates = await asyncio.gather(
            self.user_repository.get_profile_async(user_id),
            self.project_repository.get_candidate_profiles_async(limit=self.candidate_limit),
        )
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")

        return self._run(user, candidates, top_n, started_at, start, search_query)

    def _run(
        self,
        user: UserProfile,
        candidates: list[ProjectProfile],
        top_n: int,
        started_at: datetime,
        start: float,
        search_query: Optional[str],
    ) -> MatchingRun:
        open_candidates = [c for c in candidates if c.is_open]
        if len(open_candidates) != len(candidates):
            self.logger.debug(
                f"Dropped {len(candidates) - len(open_candidates)} projects not open for volunteers"
            )

        # Score every candidate on its own clock so each calculation is logged with its cost
        scored: list[tuple[ProjectProfile, MatchResult, float]] = []
        for project in open_candidates:
            calc_start = time.perf_counter()
            result = self.engine.score(user, project)
            scored.append((project, result, (time.perf_counter() - calc_start) * 1000))

        results = self.engine.rank([result for _, result, _ in scored])[:top_n]

        run = MatchingRun(
            user=user,
            results=results,
            total_candidates=len(open_candidates),
            started_at=started_at,
            duration_ms=(time.perf_counter() - start) * 1000,
            search_query=search_query,
        )

        self._record_metrics(run, scored)
        top = f"{run.top_score:.3f}" if run.top_score is not None else "n/a"
        self.logger.info(
            f"Matched user {user.user_id}: {len(results)}/{run.total_candidates} projects, "
            f"top score {top}, {run.duration_ms:.1f} ms"
        )
        return run

    def _record_metrics(
        self, run: MatchingRun, scored: list[tuple[ProjectProfile, MatchResult, float]]
    ) -> None:
        self.metrics_logger.log_project_matching(run)
        for project, result, calculation_ms in scored:
            self.metrics_logger.log_jaccard_calculation(
                run.user,
                result,
                project_skills=sorted(project.required_skill_ids),
                project_categories=sorted(project.category_ids),
                calculation_time_ms=calculation_ms,
            )


# Singleton instance
_matching_service: Optional[ProjectMatchingService] = None


def get_matching_service() -> ProjectMatchingService:
    """Get the project matching service singleton instance."""
    global _matching_service
    if _matching_service is None:
        _matching_service = ProjectMatchingService()
    return _matching_service
