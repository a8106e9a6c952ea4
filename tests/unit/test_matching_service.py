"""
Tests for portfoliohub.core.matching.matching_service: the recommendation
flow around the engine, using in-memory repositories.
"""

import asyncio

import pytest

from portfoliohub.core.matching.matching_engine import InvalidMatchRequestError, MatchResult
from portfoliohub.core.matching.matching_service import (
    MatchingRun,
    ProjectMatchingService,
    UserNotFoundError,
)
from portfoliohub.utils.constants import ProjectStatus


@pytest.fixture
def service(user_repository, project_repository, matching_engine, recording_metrics):
    return ProjectMatchingService(
        user_repository=user_repository,
        project_repository=project_repository,
        engine=matching_engine,
        metrics_logger=recording_metrics,
        default_top_n=3,
    )


@pytest.fixture
def seeded(user_repository, project_repository, make_user_profile, make_project_profile):
    user_repository.profiles["u1"] = make_user_profile(
        skills=["react", "nodejs", "python"], interests=["education"], user_id="u1"
    )
    project_repository.profiles.extend(
        [
            make_project_profile(skills=["react", "nodejs"], categories=["education"], project_id="p-web"),
            make_project_profile(skills=["figma"], categories=["health"], project_id="p-design"),
            make_project_profile(skills=["python"], categories=["education", "environment"], project_id="p-data"),
            make_project_profile(
                skills=["react"], categories=["education"], project_id="p-done",
                status=ProjectStatus.COMPLETED,
            ),
            make_project_profile(skills=["go"], categories=[], project_id="p-infra"),
        ]
    )


class TestRecommendProjects:
    def test_returns_ranked_run(self, service, seeded):
        run = service.recommend_projects("u1")

        assert isinstance(run, MatchingRun)
        assert [r.project_id for r in run.results] == ["p-web", "p-data", "p-design"]
        assert run.results[0].overall_score == pytest.approx(0.6 * 2 / 3 + 0.4 * 1.0)

    def test_non_open_projects_skipped(self, service, seeded):
        run = service.recommend_projects("u1", top_n=10)
        assert "p-done" not in [r.project_id for r in run.results]
        assert run.total_candidates == 4

    def test_default_top_n(self, service, seeded):
        assert len(service.recommend_projects("u1").results) == 3

    def test_explicit_top_n(self, service, seeded):
        assert len(service.recommend_projects("u1", top_n=1).results) == 1

    def test_unknown_user(self, service, seeded):
        with pytest.raises(UserNotFoundError):
            service.recommend_projects("nobody")

    def test_invalid_top_n_fails_before_loading(self, service, seeded, user_repository, project_repository):
        with pytest.raises(InvalidMatchRequestError):
            service.recommend_projects("u1", top_n=0)
        assert user_repository.calls == 0
        assert project_repository.calls == 0

    def test_zero_default_top_n_rejected(
        self, seeded, user_repository, project_repository, matching_engine, recording_metrics
    ):
        service = ProjectMatchingService(
            user_repository=user_repository,
            project_repository=project_repository,
            engine=matching_engine,
            metrics_logger=recording_metrics,
            default_top_n=0,
        )
        assert service.default_top_n == 0
        with pytest.raises(InvalidMatchRequestError):
            service.recommend_projects("u1")

    def test_explicit_candidate_limit_kept(
        self, user_repository, project_repository, matching_engine, recording_metrics
    ):
        service = ProjectMatchingService(
            user_repository=user_repository,
            project_repository=project_repository,
            engine=matching_engine,
            metrics_logger=recording_metrics,
            candidate_limit=0,
        )
        assert service.candidate_limit == 0

    def test_timing_recorded(self, service, seeded):
        run = service.recommend_projects("u1")
        assert run.duration_ms >= 0
        assert run.started_at.tzinfo is not None

    def test_no_projects(self, service, user_repository, make_user_profile):
        user_repository.profiles["u2"] = make_user_profile(user_id="u2")
        run = service.recommend_projects("u2")
        assert run.results == []
        assert run.top_score is None
        assert run.avg_score is None


class TestRecommendProjectsAsync:
    def test_matches_sync_result(self, service, seeded):
        sync_run = service.recommend_projects("u1", top_n=4)
        async_run = asyncio.run(service.recommend_projects_async("u1", top_n=4))
        assert async_run.results == sync_run.results
        assert async_run.total_candidates == sync_run.total_candidates

    def test_unknown_user(self, service, seeded):
        with pytest.raises(UserNotFoundError):
            asyncio.run(service.recommend_projects_async("nobody"))

    def test_search_query_kept(self, service, seeded):
        run = asyncio.run(service.recommend_projects_async("u1", search_query="react"))
        assert run.search_query == "react"


class TestMetricsEmission:
    def test_one_matching_record_per_search(self, service, seeded, recording_metrics):
        run = service.recommend_projects("u1")
        assert recording_metrics.runs == [run]

    def test_one_calculation_per_open_candidate(self, service, seeded, recording_metrics):
        run = service.recommend_projects("u1", top_n=1)
        scored = [c[1].project_id for c in recording_metrics.calculations]
        assert scored == ["p-web", "p-design", "p-data", "p-infra"]
        assert len(scored) == run.total_candidates
        assert run.results[0] in [c[1] for c in recording_metrics.calculations]

    def test_calculation_time_recorded(self, service, seeded, recording_metrics):
        service.recommend_projects("u1")
        assert all(c[4] >= 0 for c in recording_metrics.calculations)

    def test_calculation_carries_project_sets(self, service, seeded, recording_metrics):
        service.recommend_projects("u1", top_n=1)
        _, result, project_skills, project_categories, _ = recording_metrics.calculations[0]
        assert result.project_id == "p-web"
        assert project_skills == ["nodejs", "react"]
        assert project_categories == ["education"]


class TestMatchingRun:
    def test_scores(self, make_user_profile):
        run = MatchingRun(
            user=make_user_profile(),
            results=[
                MatchResult(project_id="a", overall_score=0.8),
                MatchResult(project_id="b", overall_score=0.4),
            ],
            duration_ms=90_000,
        )
        assert run.top_score == 0.8
        assert run.avg_score == pytest.approx(0.6)
        assert run.duration_minutes == pytest.approx(1.5)
