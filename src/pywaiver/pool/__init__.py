"""Player pool utilities (availability, value aggregation, ranking, export)."""

from .availability import (
    AvailabilitySummary,
    build_roster_index,
    filter_available,
    filter_available_with_summary,
)
from .export import ArtifactPaths, write_artifacts
from .reconcile import NameKey, get_matcher, match_observations, reconcile
from .values import AggregationResult, SourceFailure, aggregate_observations

__all__ = [
    "AggregationResult",
    "ArtifactPaths",
    "AvailabilitySummary",
    "NameKey",
    "SourceFailure",
    "aggregate_observations",
    "build_roster_index",
    "filter_available",
    "filter_available_with_summary",
    "get_matcher",
    "match_observations",
    "reconcile",
    "write_artifacts",
]
