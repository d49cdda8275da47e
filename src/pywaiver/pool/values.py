"""Aggregate scraped value observations across configured sources."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Sequence

import httpx

from pywaiver.errors import MalformedObservation, ScrapeFailed
from pywaiver.ingest.scrape import ScrapedRow, ScrapeSource, parse_observation
from pywaiver.models import ValueObservation


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFailure:
    source: str
    reason: str


@dataclass(frozen=True)
class AggregationResult:
    """Concatenated observations plus the recoverable problems met on the way."""

    observations: List[ValueObservation]
    failed_sources: List[SourceFailure]
    malformed_rows: int

    @property
    def sources_skipped(self) -> int:
        return len(self.failed_sources)


@dataclass
class _SourceOutcome:
    source: str
    observations: List[ValueObservation]
    malformed: int
    failure: SourceFailure | None = None


def _collect_source(scraper: ScrapeSource, source: str) -> _SourceOutcome:
    try:
        rows: Sequence[ScrapedRow] = scraper.get(source)
    except ScrapeFailed as exc:
        logger.warning("Skipping source %s: %s", source, exc.reason)
        return _SourceOutcome(source, [], 0, SourceFailure(source, exc.reason))
    except httpx.HTTPError as exc:
        reason = str(exc) or type(exc).__name__
        logger.warning("Skipping source %s: %s", source, reason)
        return _SourceOutcome(source, [], 0, SourceFailure(source, reason))

    observations: List[ValueObservation] = []
    malformed = 0
    for row in rows:
        try:
            observations.append(parse_observation(row, source=source))
        except MalformedObservation as exc:
            malformed += 1
            logger.debug("Dropping row from %s: %s", source, exc.reason)

    logger.info(
        "Source %s produced %s observations (%s malformed rows dropped)",
        source,
        len(observations),
        malformed,
    )
    return _SourceOutcome(source, observations, malformed)


def aggregate_observations(
    scraper: ScrapeSource,
    sources: Sequence[str],
    *,
    workers: int = 1,
) -> AggregationResult:
    """Scrape each source and concatenate results in configured order.

    A failing source is logged and skipped. With ``workers > 1`` the sources
    are fetched on a thread pool; ordering of the output is unaffected.
    """

    source_list = list(sources)
    outcomes: List[_SourceOutcome]
    if workers <= 1 or len(source_list) <= 1:
        outcomes = [_collect_source(scraper, source) for source in source_list]
    else:
        pool_size = min(workers, len(source_list))
        with ThreadPoolExecutor(max_workers=pool_size) as executor:
            futures = [executor.submit(_collect_source, scraper, source) for source in source_list]
            outcomes = [future.result() for future in futures]

    observations: List[ValueObservation] = []
    failures: List[SourceFailure] = []
    malformed = 0
    for outcome in outcomes:
        observations.extend(outcome.observations)
        malformed += outcome.malformed
        if outcome.failure is not None:
            failures.append(outcome.failure)

    logger.info(
        "Aggregated %s observations from %s/%s sources",
        len(observations),
        len(source_list) - len(failures),
        len(source_list),
    )
    return AggregationResult(observations=observations, failed_sources=failures, malformed_rows=malformed)
