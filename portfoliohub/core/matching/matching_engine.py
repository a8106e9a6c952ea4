"""
Project matching engine.

Scores candidate projects against a user's skills and interests with
Jaccard similarity and ranks them. The engine is a pure function of its
inputs: it performs no I/O and keeps no state between calls, so one
instance can serve concurrent requests.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

from portfoliohub.data.models.profile import ProjectProfile, UserProfile
from portfoliohub.utils.config import MatchingSettings, get_settings
from portfoliohub.utils.constants import DEFAULT_MATCHING_WEIGHTS, MatchScoreLevel

from .similarity import covers, jaccard_similarity, matched_identifiers

# Decimal places compared when ranking; scores equal up to float error tie
SCORE_PRECISION = 9


class InvalidMatchRequestError(ValueError):
    """Raised when a caller passes arguments outside the engine's contract."""


def validate_top_n(top_n: Any) -> int:
    """
    Check that top_n is a positive integer.

    Raises:
        InvalidMatchRequestError: If top_n is not a positive int
    """
    if isinstance(top_n, bool) or not isinstance(top_n, int):
        raise InvalidMatchRequestError(
            f"top_n must be a positive integer, got {type(top_n).__name__}: {top_n!r}"
        )
    if top_n <= 0:
        raise InvalidMatchRequestError(f"top_n must be a positive integer, got {top_n}")
    return top_n


@dataclass(frozen=True)
class MatchingWeights:
    """Weights combining skill and category similarity into one score."""

    skills: float = DEFAULT_MATCHING_WEIGHTS["skills_similarity"]
    categories: float = DEFAULT_MATCHING_WEIGHTS["categories_similarity"]

    def __post_init__(self) -> None:
        for name, value in (("skills", self.skills), ("categories", self.categories)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} weight must be within [0, 1], got {value}")
        if abs(self.skills + self.categories - 1.0) > 1e-9:
            raise ValueError(
                f"Weights must sum to 1.0, got {self.skills} + {self.categories}"
            )

    @classmethod
    def from_settings(cls, matching: MatchingSettings) -> "MatchingWeights":
        return cls(skills=matching.skills_weight, categories=matching.categories_weight)


@dataclass(frozen=True)
class MatchResult:
    """Score breakdown of one candidate project for one user."""

    project_id: str
    project_name: str = ""

    # Scores
    skills_similarity: float = 0.0
    categories_similarity: float = 0.0
    overall_score: float = 0.0

    # Detailed matches
    matched_skill_ids: frozenset[str] = field(default_factory=frozenset)
    matched_category_ids: frozenset[str] = field(default_factory=frozenset)
    satisfies_mandatory_skills: bool = False

    @property
    def score_level(self) -> MatchScoreLevel:
        """Categorical level of the overall score."""
        return MatchScoreLevel.from_score(self.overall_score)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation with sorted identifier lists."""
        return {
            "project_id": self.project_id,
            "project_name": self.project_name,
            "skills_similarity": self.skills_similarity,
            "categories_similarity": self.categories_similarity,
            "overall_score": self.overall_score,
            "matched_skill_ids": sorted(self.matched_skill_ids),
            "matched_category_ids": sorted(self.matched_category_ids),
            "satisfies_mandatory_skills": self.satisfies_mandatory_skills,
        }


class MatchingEngine:
    """
    Engine for ranking projects for a user.

    Per candidate:
    - skills similarity: Jaccard of user skills vs project required skills
    - categories similarity: Jaccard of user interests vs project categories
    - overall score: weighted sum of the two (0.6 / 0.4 by default)

    Ranking is by overall score, then skills similarity, then whether the
    user holds every mandatory skill, then input order.
    """

    def __init__(self, weights: Optional[MatchingWeights] = None):
        """
        Initialize the matching engine.

        Args:
            weights: Optional custom scoring weights
        """
        self.weights = weights or MatchingWeights()

    def score(self, user: UserProfile, project: ProjectProfile) -> MatchResult:
        """
        Score a single project for a user.

        Args:
            user: User skills and interests
            project: Candidate project

        Returns:
            MatchResult with the similarity breakdown
        """
        skills_similarity = jaccard_similarity(user.skill_ids, project.required_skill_ids)
        categories_similarity = jaccard_similarity(
            user.interest_category_ids, project.category_ids
        )
        overall_score = (
            self.weights.skills * skills_similarity
            + self.weights.categories * categories_similarity
        )

        return MatchResult(
            project_id=project.project_id,
            project_name=project.name,
            skills_similarity=skills_similarity,
            categories_similarity=categories_similarity,
            overall_score=overall_score,
            matched_skill_ids=matched_identifiers(user.skill_ids, project.required_skill_ids),
            matched_category_ids=matched_identifiers(
                user.interest_category_ids, project.category_ids
            ),
            satisfies_mandatory_skills=covers(user.skill_ids, project.mandatory_skill_ids),
        )

    def compute_matches(
        self,
        user: UserProfile,
        candidates: Iterable[ProjectProfile],
        top_n: int,
    ) -> list[MatchResult]:
        """
        Score and rank candidate projects for a user.

        Args:
            user: User skills and interests
            candidates: Candidate projects in a deterministic order
            top_n: Maximum number of results (positive)

        Returns:
            At most top_n results, best first

        Raises:
            InvalidMatchRequestError: On a non-positive top_n or inputs
                that are not profile snapshots
        """
        validate_top_n(top_n)
        if not isinstance(user, UserProfile):
            raise InvalidMatchRequestError(
                f"user must be a UserProfile, got {type(user).__name__}"
            )

        candidate_list = list(candidates)
        for candidate in candidate_list:
            if not isinstance(candidate, ProjectProfile):
                raise InvalidMatchRequestError(
                    f"candidates must be ProjectProfile instances, got {type(candidate).__name__}"
                )

        results = [self.score(user, candidate) for candidate in candidate_list]
        return self.rank(results)[:top_n]

    @staticmethod
    def rank(results: list[MatchResult]) -> list[MatchResult]:
        """
        Order results best first.

        Args:
            results: Match results in input order

        Returns:
            New list sorted by overall score, skills similarity and
            mandatory-skill coverage; remaining ties keep input order.
            Scores are compared at SCORE_PRECISION decimals so that
            mathematically equal sums tie
        """
        ordered = sorted(
            enumerate(results),
            key=lambda item: (
                -round(item[1].overall_score, SCORE_PRECISION),
                -round(item[1].skills_similarity, SCORE_PRECISION),
                not item[1].satisfies_mandatory_skills,
                item[0],
            ),
        )
        return [result for _, result in ordered]


# Singleton instance
_matching_engine: Optional[MatchingEngine] = None


def get_matching_engine() -> MatchingEngine:
    """Get the matching engine singleton instance."""
    global _matching_engine
    if _matching_engine is None:
        _matching_engine = MatchingEngine(
            MatchingWeights.from_settings(get_settings().matching)
        )
    return _matching_engine
