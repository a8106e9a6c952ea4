"""
Matching metrics logging.

Writes one PROJECT_MATCHING record per search and one JACCARD_SIMILARITY
record per scored candidate project to the metrics log, where MetricsAnalyzer
later evaluates them against the search-time and relevance targets.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from portfoliohub.data.models.profile import UserProfile
from portfoliohub.utils.config import get_settings
from portfoliohub.utils.constants import MetricType
from portfoliohub.utils.logger import metrics_log

if TYPE_CHECKING:
    from portfoliohub.core.matching.matching_engine import MatchResult
    from portfoliohub.core.matching.matching_service import MatchingRun


class MatchingMetricsLogger:
    """Emits structured matching metrics and derives target flags."""

    def __init__(
        self,
        time_goal_minutes: Optional[float] = None,
        relevance_goal: Optional[float] = None,
    ):
        matching = get_settings().matching
        self.time_goal_minutes = (
            time_goal_minutes if time_goal_minutes is not None else matching.time_goal_minutes
        )
        self.relevance_goal = (
            relevance_goal if relevance_goal is not None else matching.relevance_goal
        )

    def meets_time_goal(self, duration_minutes: float) -> bool:
        """Whether a search finished under the time goal."""
        return duration_minutes < self.time_goal_minutes

    def meets_relevance_goal(self, top_score: Optional[float]) -> bool:
        """Whether the best match reached the relevance goal."""
        return top_score is not None and top_score >= self.relevance_goal

    def log_project_matching(self, run: "MatchingRun") -> dict[str, Any]:
        """
        Record the outcome of one matching search.

        Args:
            run: Completed matching run

        Returns:
            The payload written to the metrics log
        """
        duration_minutes = run.duration_minutes

        payload = {
            "metric_type": MetricType.PROJECT_MATCHING.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "user_id": run.user.user_id,
            "user_skills": sorted(run.user.skill_ids),
            "user_interests": sorted(run.user.interest_category_ids),
            "search_query": run.search_query,
            "search_started_at": run.started_at.isoformat(),
            "search_ended_at": run.finished_at.isoformat(),
            "search_duration_ms": round(run.duration_ms, 3),
            "search_duration_minutes": round(duration_minutes, 2),
            "total_projects_scanned": run.total_candidates,
            "matched_projects_count": len(run.results),
            "matched_projects": [
                {
                    "project_id": r.project_id,
                    "project_name": r.project_name,
                    "jaccard_score": r.overall_score,
                    "matched_skills": sorted(r.matched_skill_ids),
                    "matched_categories": sorted(r.matched_category_ids),
                }
                for r in run.results
            ],
            "top_match_score": run.top_score,
            "avg_match_score": run.avg_score,
            "meets_time_goal": self.meets_time_goal(duration_minutes),
            "meets_relevance_goal": self.meets_relevance_goal(run.top_score),
        }
        return metrics_log("PROJECT_MATCHING", MetricType.PROJECT_MATCHING.value, payload)

    def log_jaccard_calculation(
        self,
        user: UserProfile,
        result: "MatchResult",
        project_skills: Optional[list[str]] = None,
        project_categories: Optional[list[str]] = None,
        calculation_time_ms: Optional[float] = None,
    ) -> dict[str, Any]:
        """
        Record the similarity detail of one scored project.

        Args:
            user: The user the project was scored for
            result: The project's match result
            project_skills: Project required skill ids, if known
            project_categories: Project category ids, if known
            calculation_time_ms: Time spent scoring this project, if measured

        Returns:
            The payload written to the metrics log
        """
        payload = {
            "metric_type": MetricType.JACCARD_SIMILARITY.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "project_id": result.project_id,
            "project_name": result.project_name,
            "project_skills": sorted(project_skills or []),
            "project_categories": sorted(project_categories or []),
            "user_id": user.user_id,
            "user_skills": sorted(user.skill_ids),
            "user_interests": sorted(user.interest_category_ids),
            "skills_similarity": result.skills_similarity,
            "categories_similarity": result.categories_similarity,
            "overall_score": result.overall_score,
            "satisfies_mandatory_skills": result.satisfies_mandatory_skills,
            "calculation_time_ms": (
                round(calculation_time_ms, 3) if calculation_time_ms is not None else None
            ),
        }
        return metrics_log("JACCARD_SIMILARITY", MetricType.JACCARD_SIMILARITY.value, payload)


# Singleton instance
_metrics_logger: Optional[MatchingMetricsLogger] = None


def get_metrics_logger() -> MatchingMetricsLogger:
    """Get the matching metrics logger singleton instance."""
    global _metrics_logger
    if _metrics_logger is None:
        _metrics_logger = MatchingMetricsLogger()
    return _metrics_logger
