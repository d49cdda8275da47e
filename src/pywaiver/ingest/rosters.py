"""League roster retrieval from the Sleeper API."""

from __future__ import annotations

import logging
from typing import Any, List, Protocol, Sequence

import httpx
from pydantic import ValidationError

from pywaiver.config import SLEEPER_API_BASE
from pywaiver.errors import RosterUnavailable
from pywaiver.models import Roster


logger = logging.getLogger(__name__)


class RosterSource(Protocol):
    def get(self) -> Sequence[Roster]:
        ...


def parse_rosters_payload(payload: Any) -> List[Roster]:
    if not isinstance(payload, list):
        raise RosterUnavailable("rosters payload is not a JSON array")
    rosters: List[Roster] = []
    for entry in payload:
        if not isinstance(entry, dict):
            raise RosterUnavailable(f"unexpected roster entry {entry!r}")
        owner = entry.get("owner_id")
        try:
            rosters.append(
                Roster(
                    owner_ref=str(owner) if owner is not None else None,
                    player_ids=entry.get("players"),
                )
            )
        except ValidationError as exc:
            raise RosterUnavailable(f"invalid roster for owner {owner!r}: {exc}") from exc
    return rosters


class SleeperRosterSource:
    """Fetch every roster of one Sleeper league."""

    def __init__(
        self,
        league_id: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        base_url: str = SLEEPER_API_BASE,
    ):
        if not league_id:
            raise ValueError("league_id is required")
        self.league_id = league_id
        self.client = client
        self.timeout = timeout
        self.url = f"{base_url}/league/{league_id}/rosters"

    def _fetch(self) -> Any:
        if self.client is not None:
            resp = self.client.get(self.url)
            resp.raise_for_status()
            return resp.json()
        with httpx.Client(timeout=self.timeout) as client:
            resp = client.get(self.url)
            resp.raise_for_status()
            return resp.json()

    def get(self) -> List[Roster]:
        logger.info("Fetching rosters for league %s", self.league_id)
        try:
            payload = self._fetch()
        except httpx.HTTPError as exc:
            raise RosterUnavailable(f"roster fetch for league {self.league_id} failed: {exc}") from exc
        except ValueError as exc:
            raise RosterUnavailable(f"roster response for league {self.league_id} is not JSON") from exc
        rosters = parse_rosters_payload(payload)
        logger.info("Fetched %s rosters", len(rosters))
        return rosters
