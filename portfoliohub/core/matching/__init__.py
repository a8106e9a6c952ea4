"""Project matching engine module."""

from .matching_engine import (
    InvalidMatchRequestError,
    MatchingEngine,
    MatchingWeights,
    MatchResult,
    get_matching_engine,
    validate_top_n,
)
from .matching_service import (
    MatchingRun,
    ProjectMatchingService,
    UserNotFoundError,
    get_matching_service,
)
from .similarity import jaccard_similarity

__all__ = [
    "InvalidMatchRequestError",
    "MatchingEngine",
    "MatchingWeights",
    "MatchResult",
    "get_matching_engine",
    "validate_top_n",
    "MatchingRun",
    "ProjectMatchingService",
    "UserNotFoundError",
    "get_matching_service",
    "jaccard_similarity",
]
