"""
Matching metrics analysis.

Reads the JSON-lines metrics logs written by MatchingMetricsLogger and
summarizes project matching against its targets: searches finishing
under the time goal and top matches reaching the relevance goal.
"""

import json
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from portfoliohub.utils.config import get_settings
from portfoliohub.utils.constants import MATCHING_TARGETS, MetricType
from portfoliohub.utils.logger import get_logger

logger = get_logger(__name__)

METRICS_FILE_PATTERN = "metrics_*.log"


class ProjectMatchingSummary(BaseModel):
    """Aggregate project matching metrics over a period."""

    total_searches: int = 0
    avg_search_time_minutes: float = 0.0
    searches_meeting_time_goal: int = 0
    searches_meeting_time_goal_percentage: float = 0.0
    avg_top_match_score: float = 0.0
    searches_meeting_relevance_goal: int = 0
    searches_meeting_relevance_goal_percentage: float = 0.0
    avg_matched_projects_count: float = 0.0


def _as_utc_datetime(value: date | datetime, end_of_day: bool = False) -> datetime:
    """Normalize a date or datetime bound to an aware UTC datetime."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.max if end_of_day else time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc_datetime(parsed)


class MetricsAnalyzer:
    """Reads matching metrics logs and evaluates the matching targets."""

    def __init__(
        self,
        logs_dir: Optional[Path] = None,
        relevance_goal: Optional[float] = None,
        time_goal_pass_rate: float = MATCHING_TARGETS["time_goal_pass_rate"],
    ):
        settings = get_settings()
        self.logs_dir = Path(logs_dir) if logs_dir is not None else settings.logging.metrics_dir
        self.relevance_goal = (
            relevance_goal if relevance_goal is not None else settings.matching.relevance_goal
        )
        self.time_goal_pass_rate = time_goal_pass_rate

    def read_metrics_logs(
        self, start: date | datetime, end: date | datetime
    ) -> list[dict[str, Any]]:
        """
        Read metrics entries whose timestamp falls within [start, end].

        Date bounds cover whole days; naive datetimes are taken as UTC.

        Args:
            start: Start of the period
            end: End of the period (inclusive)

        Returns:
            Metrics entries in file and line order
        """
        if not self.logs_dir.exists():
            logger.warning(f"Metrics log directory not found: {self.logs_dir}")
            return []

        start_at = _as_utc_datetime(start)
        end_at = _as_utc_datetime(end, end_of_day=True)

        entries: list[dict[str, Any]] = []
        for path in sorted(self.logs_dir.glob(METRICS_FILE_PATTERN)):
            with path.open(encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entry = json.loads(line)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping invalid metrics line {path.name}:{line_number}")
                        continue
                    if not isinstance(entry, dict):
                        continue

                    timestamp = _parse_timestamp(entry.get("timestamp"))
                    if timestamp is not None and start_at <= timestamp <= end_at:
                        entries.append(entry)

        return entries

    def analyze_project_matching(
        self, start: date | datetime, end: date | datetime
    ) -> ProjectMatchingSummary:
        """
        Summarize project matching searches in a period.

        Args:
            start: Start of the period
            end: End of the period (inclusive)

        Returns:
            ProjectMatchingSummary (all zero when there were no searches)
        """
        searches = [
            entry for entry in self.read_metrics_logs(start, end)
            if entry.get("metric_type") == MetricType.PROJECT_MATCHING.value
        ]
        if not searches:
            return ProjectMatchingSummary()

        total = len(searches)
        total_minutes = sum(entry.get("search_duration_minutes") or 0 for entry in searches)
        meeting_time = sum(1 for entry in searches if entry.get("meets_time_goal") is True)

        top_scores = [
            entry["top_match_score"] for entry in searches
            if entry.get("top_match_score") is not None
        ]
        avg_top_score = sum(top_scores) / len(top_scores) if top_scores else 0.0

        meeting_relevance = sum(
            1 for entry in searches if entry.get("meets_relevance_goal") is True
        )
        total_matched = sum(entry.get("matched_projects_count") or 0 for entry in searches)

        return ProjectMatchingSummary(
            total_searches=total,
            avg_search_time_minutes=total_minutes / total,
            searches_meeting_time_goal=meeting_time,
            searches_meeting_time_goal_percentage=meeting_time / total * 100,
            avg_top_match_score=avg_top_score,
            searches_meeting_relevance_goal=meeting_relevance,
            searches_meeting_relevance_goal_percentage=meeting_relevance / total * 100,
            avg_matched_projects_count=total_matched / total,
        )

    def time_target_reached(self, summary: ProjectMatchingSummary) -> bool:
        """Whether enough searches finished under the time goal."""
        return (
            summary.total_searches > 0
            and summary.searches_meeting_time_goal_percentage >= self.time_goal_pass_rate
        )

    def relevance_target_reached(self, summary: ProjectMatchingSummary) -> bool:
        """Whether the average top match reached the relevance goal."""
        return summary.total_searches > 0 and summary.avg_top_match_score >= self.relevance_goal

    def generate_report(self, start: date | datetime, end: date | datetime) -> str:
        """
        Build a plain-text report of project matching over a period.

        Args:
            start: Start of the period
            end: End of the period (inclusive)

        Returns:
            Report text
        """
        summary = self.analyze_project_matching(start, end)
        time_ok = self.time_target_reached(summary)
        relevance_ok = self.relevance_target_reached(summary)

        def status(reached: bool) -> str:
            return "REACHED" if reached else "NOT REACHED"

        lines = [
            "=" * 50,
            "PORTFOLIOHUB PROJECT MATCHING REPORT",
            f"Period: {_as_utc_datetime(start).date()} - {_as_utc_datetime(end, end_of_day=True).date()}",
            "=" * 50,
            "",
            f"Total searches: {summary.total_searches}",
            f"Average search time: {summary.avg_search_time_minutes:.2f} min",
            f"Searches under time goal: {summary.searches_meeting_time_goal} "
            f"({summary.searches_meeting_time_goal_percentage:.1f}%)",
            f"Target: {self.time_goal_pass_rate:.0f}% of searches under time goal",
            f"Status: {status(time_ok)}",
            "",
            f"Average top match score: {summary.avg_top_match_score * 100:.1f}%",
            f"Searches meeting relevance goal: {summary.searches_meeting_relevance_goal} "
            f"({summary.searches_meeting_relevance_goal_percentage:.1f}%)",
            f"Target: average top match >= {self.relevance_goal * 100:.0f}%",
            f"Status: {status(relevance_ok)}",
            "",
            f"Average matched projects per search: {summary.avg_matched_projects_count:.1f}",
            "",
            f"Overall: {status(time_ok and relevance_ok)}",
            "=" * 50,
        ]
        return "\n".join(lines) + "\n"
