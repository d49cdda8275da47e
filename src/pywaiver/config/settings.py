"""Run settings for the waiver pipeline."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import FrozenSet, Iterable, Literal, Optional, Tuple


logger = logging.getLogger(__name__)

SLEEPER_API_BASE = "https://api.sleeper.app/v1"
DEFAULT_CATALOG_URL = f"{SLEEPER_API_BASE}/players/nfl"

_TOP_N_ENV = "PYWAIVER_TOP_N"
_SCRAPE_WORKERS_ENV = "PYWAIVER_SCRAPE_WORKERS"
_HTTP_TIMEOUT_ENV = "PYWAIVER_HTTP_TIMEOUT"
_CATALOG_CACHE_ENV = "PYWAIVER_CATALOG_CACHE"

DEFAULT_TOP_N = 10
DEFAULT_SCRAPE_WORKERS = 1
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_CATALOG_CACHE = Path("catalog.json")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_EXCLUDED_POSITIONS: FrozenSet[str] = frozenset({"K", "DEF"})

MatcherName = Literal["exact", "normalized"]
MATCHER_NAMES: Tuple[str, ...] = ("exact", "normalized")


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def normalize_positions(positions: Iterable[str]) -> FrozenSet[str]:
    """Upper-case and de-duplicate a position list."""

    return frozenset(pos.strip().upper() for pos in positions if pos and pos.strip())


@dataclass(frozen=True)
class PipelineSettings:
    league_id: Optional[str] = None
    sources: Tuple[str, ...] = ()
    excluded_positions: FrozenSet[str] = DEFAULT_EXCLUDED_POSITIONS
    top_n: int = DEFAULT_TOP_N
    name_matcher: MatcherName = "exact"
    scrape_workers: int = DEFAULT_SCRAPE_WORKERS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_cache: Optional[Path] = DEFAULT_CATALOG_CACHE
    refresh_catalog: bool = False
    output_dir: Optional[Path] = DEFAULT_OUTPUT_DIR
    name_column: int = 1
    value_column: int = 4

    def __post_init__(self) -> None:
        if self.name_matcher not in MATCHER_NAMES:
            raise ValueError(
                f"name_matcher must be one of {MATCHER_NAMES}, got {self.name_matcher!r}"
            )
        if self.scrape_workers < 1:
            raise ValueError("scrape_workers must be at least 1")
        object.__setattr__(self, "excluded_positions", normalize_positions(self.excluded_positions))
        object.__setattr__(self, "sources", tuple(self.sources))

    @classmethod
    def from_env(cls, **overrides) -> "PipelineSettings":
        """Build settings from defaults, environment variables and explicit overrides."""

        cache_raw = os.getenv(_CATALOG_CACHE_ENV)
        base = cls(
            top_n=_env_int(_TOP_N_ENV, DEFAULT_TOP_N),
            scrape_workers=_env_int(_SCRAPE_WORKERS_ENV, DEFAULT_SCRAPE_WORKERS, min_value=1),
            http_timeout=_env_float(_HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT, clamp_min=0.1),
            catalog_cache=Path(cache_raw) if cache_raw else DEFAULT_CATALOG_CACHE,
        )
        cleaned = {key: value for key, value in overrides.items() if value is not None}
        return replace(base, **cleaned) if cleaned else base
