"""Run the waiver pipeline end to end."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from pywaiver.config import PipelineSettings
from pywaiver.errors import CatalogUnavailable, PipelineStageError, RosterUnavailable
from pywaiver.ingest.catalog import CatalogSource, load_catalog
from pywaiver.ingest.rosters import RosterSource
from pywaiver.ingest.scrape import ScrapeSource
from pywaiver.models import PlayerRecord, RankedEntry, ValueObservation
from pywaiver.pool.availability import (
    AvailabilitySummary,
    build_roster_index,
    filter_available_with_summary,
)
from pywaiver.pool.export import ArtifactPaths, write_artifacts
from pywaiver.pool.reconcile import get_matcher, reconcile
from pywaiver.pool.values import SourceFailure, aggregate_observations


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSummary:
    """Counts per stage plus the recoverable problems met during a run."""

    catalog_players: int
    rosters: int
    rostered_players: int
    availability: AvailabilitySummary
    sources_configured: int
    failed_sources: List[SourceFailure]
    malformed_rows: int
    observations: int
    ranked: int
    elapsed_seconds: float

    @property
    def sources_skipped(self) -> int:
        return len(self.failed_sources)


@dataclass
class PipelineResult:
    available: Dict[str, PlayerRecord]
    observations: List[ValueObservation]
    ranked: List[RankedEntry]
    summary: RunSummary
    artifacts: Optional[ArtifactPaths] = None


def run_pipeline(
    *,
    catalog_source: CatalogSource,
    roster_source: RosterSource,
    scraper: ScrapeSource,
    settings: PipelineSettings,
) -> PipelineResult:
    """Load, filter, aggregate and rank.

    Catalog and roster failures are fatal and raised as
    :class:`PipelineStageError`. Source failures are recorded in the summary.
    """

    run_start = time.perf_counter()

    try:
        catalog = load_catalog(catalog_source)
    except CatalogUnavailable as exc:
        logger.error("Catalog load failed: %s", exc)
        raise PipelineStageError("catalog", exc) from exc

    try:
        rosters = list(roster_source.get())
    except RosterUnavailable as exc:
        logger.error("Roster fetch failed: %s", exc)
        raise PipelineStageError("rosters", exc) from exc

    roster_index = build_roster_index(rosters)
    logger.info("Roster index holds %s players across %s rosters", len(roster_index), len(rosters))

    available, availability_summary = filter_available_with_summary(
        catalog,
        roster_index,
        settings.excluded_positions,
    )

    aggregation = aggregate_observations(
        scraper,
        settings.sources,
        workers=settings.scrape_workers,
    )

    ranked = reconcile(
        available,
        aggregation.observations,
        settings.top_n,
        matcher=get_matcher(settings.name_matcher),
    )

    artifacts = None
    if settings.output_dir is not None:
        artifacts = write_artifacts(
            settings.output_dir,
            available=available,
            observations=aggregation.observations,
            ranked=ranked,
        )

    summary = RunSummary(
        catalog_players=len(catalog),
        rosters=len(rosters),
        rostered_players=len(roster_index),
        availability=availability_summary,
        sources_configured=len(settings.sources),
        failed_sources=list(aggregation.failed_sources),
        malformed_rows=aggregation.malformed_rows,
        observations=len(aggregation.observations),
        ranked=len(ranked),
        elapsed_seconds=time.perf_counter() - run_start,
    )
    if summary.sources_skipped or summary.malformed_rows:
        logger.warning(
            "Run completed with %s sources skipped and %s malformed rows dropped",
            summary.sources_skipped,
            summary.malformed_rows,
        )
    logger.info("Ranked %s targets in %.2fs", summary.ranked, summary.elapsed_seconds)

    return PipelineResult(
        available=available,
        observations=aggregation.observations,
        ranked=ranked,
        summary=summary,
        artifacts=artifacts,
    )
