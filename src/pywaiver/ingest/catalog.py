"""Player catalog sources: remote Sleeper fetch or a locally cached snapshot."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx
from pydantic import ValidationError

from pywaiver.config import PipelineSettings
from pywaiver.errors import CatalogUnavailable
from pywaiver.models import PlayerRecord


logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    def get(self) -> Dict[str, PlayerRecord]:
        ...


def _display_name(entry: Mapping[str, Any]) -> str:
    full_name = entry.get("full_name")
    if isinstance(full_name, str) and full_name.strip():
        return full_name.strip()
    # Team defenses carry only first/last name (e.g. "Miami" "Dolphins")
    parts = [str(entry.get(key) or "").strip() for key in ("first_name", "last_name")]
    return " ".join(part for part in parts if part)


def parse_catalog_payload(payload: Mapping[str, Any]) -> Dict[str, PlayerRecord]:
    """Convert a Sleeper ``players/<sport>`` payload into catalog records.

    Entries without a usable name or that fail validation are skipped.
    """

    if not isinstance(payload, Mapping):
        raise CatalogUnavailable("catalog payload is not a JSON object")

    records: Dict[str, PlayerRecord] = {}
    skipped = 0
    for key, entry in payload.items():
        if not isinstance(entry, Mapping):
            skipped += 1
            continue
        name = _display_name(entry)
        if not name:
            skipped += 1
            continue
        player_id = str(entry.get("player_id") or key)
        positions = entry.get("fantasy_positions")
        try:
            record = PlayerRecord(
                player_id=player_id,
                full_name=name,
                fantasy_positions=[str(pos).upper() for pos in positions or []],
                team=entry.get("team"),
            )
        except ValidationError as exc:
            logger.debug("Skipping catalog entry %s: %s", key, exc)
            skipped += 1
            continue
        records[player_id] = record

    if skipped:
        logger.info("Skipped %s catalog entries without a usable name", skipped)
    return records


class ReadCached:
    """Read a catalog snapshot previously written to disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self) -> Dict[str, PlayerRecord]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise CatalogUnavailable(f"catalog cache {self.path} does not exist") from exc
        except (OSError, ValueError) as exc:
            raise CatalogUnavailable(f"catalog cache {self.path} is unreadable: {exc}") from exc
        logger.info("Loaded catalog from cache %s", self.path)
        return parse_catalog_payload(payload)


class FetchRemote:
    """Fetch the catalog over HTTP, optionally saving the raw payload for later runs."""

    def __init__(
        self,
        url: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        cache_path: Optional[Path] = None,
    ):
        self.url = url
        self.client = client
        self.timeout = timeout
        self.cache_path = Path(cache_path) if cache_path else None

    def _fetch(self) -> Any:
        if self.client is not None:
            resp = self.client.get(self.url)
            resp.raise_for_status()
            return resp.json()
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.get(self.url)
            resp.raise_for_status()
            return resp.json()

    def get(self) -> Dict[str, PlayerRecord]:
        logger.info("Fetching catalog from %s", self.url)
        try:
            payload = self._fetch()
        except httpx.HTTPError as exc:
            raise CatalogUnavailable(f"catalog fetch from {self.url} failed: {exc}") from exc
        except ValueError as exc:
            raise CatalogUnavailable(f"catalog response from {self.url} is not JSON") from exc

        if self.cache_path is not None:
            try:
                self.cache_path.parent.mkdir(parents=True, exist_ok=True)
                self.cache_path.write_text(json.dumps(payload), encoding="utf-8")
            except OSError as exc:
                logger.warning("Could not cache catalog to %s: %s", self.cache_path, exc)
            else:
                logger.info("Cached catalog to %s", self.cache_path)
        return parse_catalog_payload(payload)


def select_catalog_source(
    settings: PipelineSettings,
    *,
    client: httpx.Client | None = None,
) -> CatalogSource:
    """Pick the cached snapshot when present, otherwise fetch remotely."""

    cache = settings.catalog_cache
    if cache is not None and cache.exists() and not settings.refresh_catalog:
        return ReadCached(cache)
    return FetchRemote(
        settings.catalog_url,
        client=client,
        timeout=settings.http_timeout,
        cache_path=cache,
    )


def load_catalog(source: CatalogSource) -> Dict[str, PlayerRecord]:
    """Load the catalog, failing if the source produced no players."""

    catalog = source.get()
    if not catalog:
        raise CatalogUnavailable("catalog source returned no players")
    logger.info("Catalog contains %s players", len(catalog))
    return catalog
