"""Command-line interface for ranking available waiver targets."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import httpx

from pywaiver.config import MATCHER_NAMES, PipelineSettings, normalize_positions
from pywaiver.config_loader import PipelineProfile
from pywaiver.errors import PipelineStageError
from pywaiver.ingest import HtmlTableScrapeSource, SleeperRosterSource, select_catalog_source
from pywaiver.pipeline import PipelineResult, run_pipeline


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Rank unrostered players by values scraped from ranking tables"
    )
    parser.add_argument("sources", nargs="*", help="Ranking page URLs to scrape, in priority order")
    parser.add_argument("--league", dest="league_id", default=None, help="Sleeper league id")
    parser.add_argument("--top", dest="top_n", type=int, default=None, help="Number of targets to keep")
    parser.add_argument(
        "--exclude-position",
        action="append",
        default=None,
        help="Position to leave out of the available pool (repeatable, e.g. K)",
    )
    parser.add_argument(
        "--matcher",
        choices=MATCHER_NAMES,
        default=None,
        help="How scraped names are matched to catalog names",
    )
    parser.add_argument("--workers", type=int, default=None, help="Concurrent scrape fetches")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    parser.add_argument("--name-column", type=int, default=None, help="Table cell index holding the player name")
    parser.add_argument("--value-column", type=int, default=None, help="Table cell index holding the value")
    parser.add_argument("--catalog-cache", type=Path, default=None, help="Path of the cached catalog JSON")
    parser.add_argument(
        "--refresh-catalog",
        action="store_true",
        help="Fetch the catalog remotely even if a cached copy exists",
    )
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for JSON artifacts")
    parser.add_argument("--no-artifacts", action="store_true", help="Skip writing JSON artifacts")
    parser.add_argument("--load-profile", type=Path, default=None, help="Load run settings JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save run settings JSON")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser.parse_args(argv)


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_settings(args: argparse.Namespace) -> PipelineSettings:
    profile = PipelineProfile.load(args.load_profile) if args.load_profile else PipelineProfile()

    excluded = args.exclude_position if args.exclude_position is not None else profile.excluded_positions
    settings = PipelineSettings.from_env(
        league_id=args.league_id or profile.league_id,
        sources=tuple(args.sources or profile.sources),
        excluded_positions=normalize_positions(excluded) if excluded is not None else None,
        top_n=args.top_n if args.top_n is not None else profile.top_n,
        name_matcher=args.matcher or profile.name_matcher,
        scrape_workers=args.workers,
        http_timeout=args.timeout,
        name_column=args.name_column,
        value_column=args.value_column,
        catalog_cache=args.catalog_cache,
        refresh_catalog=args.refresh_catalog or None,
        output_dir=args.output_dir,
    )
    if args.no_artifacts:
        settings = replace(settings, output_dir=None)
    return settings


def _print_result(result: PipelineResult, top_n: int) -> None:
    summary = result.summary
    print(
        f"Available players: {summary.availability.available_players}/{summary.catalog_players} "
        f"({summary.rostered_players} rostered across {summary.rosters} rosters)"
    )
    print(
        f"Scraped {summary.observations} values from "
        f"{summary.sources_configured - summary.sources_skipped}/{summary.sources_configured} sources"
    )
    if summary.failed_sources:
        preview = ", ".join(failure.source for failure in summary.failed_sources[:5])
        more = len(summary.failed_sources) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Skipped sources: {preview}{suffix}")
    if summary.malformed_rows:
        print(f"Dropped {summary.malformed_rows} malformed rows")

    if not result.ranked:
        print("No available players matched the scraped values.")
    else:
        print(f"Top {min(top_n, len(result.ranked))} available targets:")
        width = max(len(entry.player) for entry in result.ranked)
        for rank, entry in enumerate(result.ranked, start=1):
            print(f"{rank:>3}. {entry.player:<{width}}  {entry.value:>8.2f}")

    if result.artifacts is not None:
        print(f"Wrote artifacts to {result.artifacts.ranked.parent}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args)

    try:
        settings = build_settings(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if not settings.league_id:
        print("error: a league id is required (--league or profile)", file=sys.stderr)
        return 2
    if not settings.sources:
        print("error: at least one source URL is required", file=sys.stderr)
        return 2

    if args.save_profile:
        PipelineProfile(
            league_id=settings.league_id,
            sources=list(settings.sources),
            excluded_positions=sorted(settings.excluded_positions),
            top_n=settings.top_n,
            name_matcher=settings.name_matcher,
        ).save(args.save_profile)
        print(f"Saved run profile to {args.save_profile}")

    with httpx.Client(timeout=settings.http_timeout, follow_redirects=True) as client:
        try:
            result = run_pipeline(
                catalog_source=select_catalog_source(settings, client=client),
                roster_source=SleeperRosterSource(settings.league_id, client=client),
                scraper=HtmlTableScrapeSource(
                    client=client,
                    name_column=settings.name_column,
                    value_column=settings.value_column,
                ),
                settings=settings,
            )
        except PipelineStageError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    _print_result(result, settings.top_n)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
