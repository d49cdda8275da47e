"""Input adapters for the catalog, league rosters and scraped values."""

from .catalog import (
    CatalogSource,
    FetchRemote,
    ReadCached,
    load_catalog,
    parse_catalog_payload,
    select_catalog_source,
)
from .rosters import RosterSource, SleeperRosterSource, parse_rosters_payload
from .scrape import (
    HtmlTableScrapeSource,
    ScrapeSource,
    extract_table_rows,
    parse_observation,
)

__all__ = [
    "CatalogSource",
    "FetchRemote",
    "ReadCached",
    "load_catalog",
    "parse_catalog_payload",
    "select_catalog_source",
    "RosterSource",
    "SleeperRosterSource",
    "parse_rosters_payload",
    "HtmlTableScrapeSource",
    "ScrapeSource",
    "extract_table_rows",
    "parse_observation",
]
