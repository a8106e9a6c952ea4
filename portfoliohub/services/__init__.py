"""
Services supporting project matching.

- metrics_logger: structured matching metrics
- metrics_analyzer: evaluation of matching metrics against targets
"""

from .metrics_analyzer import MetricsAnalyzer, ProjectMatchingSummary
from .metrics_logger import MatchingMetricsLogger, get_metrics_logger

__all__ = [
    "MatchingMetricsLogger",
    "MetricsAnalyzer",
    "ProjectMatchingSummary",
    "get_metrics_logger",
]
