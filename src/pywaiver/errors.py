"""Exceptions raised across the waiver pipeline."""

from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for pipeline failures."""


class CatalogUnavailable(PipelineError):
    """Raised when no player catalog could be produced."""


class RosterUnavailable(PipelineError):
    """Raised when league rosters could not be fetched."""


class ScrapeFailed(PipelineError):
    """Raised when a single value source yields nothing usable."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class MalformedObservation(PipelineError):
    """Raised when a scraped row lacks a usable name or numeric value."""

    def __init__(self, row: object, reason: str):
        super().__init__(reason)
        self.row = row
        self.reason = reason


class PipelineStageError(PipelineError):
    """A fatal failure tagged with the stage that produced it."""

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"{stage} stage failed: {cause}")
        self.stage = stage
        self.cause = cause


__all__ = [
    "CatalogUnavailable",
    "MalformedObservation",
    "PipelineError",
    "PipelineStageError",
    "RosterUnavailable",
    "ScrapeFailed",
]
