"""Scrape per-player values from HTML ranking tables."""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Protocol, Sequence, Union

import httpx
from bs4 import BeautifulSoup

from pywaiver.errors import MalformedObservation, ScrapeFailed
from pywaiver.models import ValueObservation


logger = logging.getLogger(__name__)

RawValueRow = Mapping[str, Any]
ScrapedRow = Union[ValueObservation, RawValueRow]


class ScrapeSource(Protocol):
    def get(self, ref: str) -> Sequence[ScrapedRow]:
        ...


def parse_value(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"value {raw!r} is not numeric")
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = str(raw or "").strip().replace(",", "")
        if not text:
            raise ValueError("value is empty")
        value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"value {raw!r} is not finite")
    return value


def parse_observation(row: ScrapedRow, *, source: str | None = None) -> ValueObservation:
    """Validate one scraped row, raising MalformedObservation when unusable."""

    if isinstance(row, ValueObservation):
        name = row.player.strip()
        if not name:
            raise MalformedObservation(row, "row has no player name")
        return row if name == row.player else row.model_copy(update={"player": name})
    if not isinstance(row, Mapping):
        raise MalformedObservation(row, "row is not a mapping")
    name = str(row.get("player") or "").strip()
    if not name:
        raise MalformedObservation(row, "row has no player name")
    try:
        value = parse_value(row.get("value"))
    except ValueError as exc:
        raise MalformedObservation(row, f"row for {name!r} has no numeric value: {exc}") from None
    return ValueObservation(player=name, value=value, source=source)


def extract_table_rows(html: str, *, name_column: int = 1, value_column: int = 4) -> List[RawValueRow]:
    """Pull (player, value) text pairs out of every ``table tbody tr``.

    Rows that lack either cell are kept with an empty string so the caller can
    count them as malformed.
    """

    soup = BeautifulSoup(html, "html.parser")
    rows: List[RawValueRow] = []
    for tr in soup.select("table tbody tr"):
        cells = tr.find_all("td")
        name = cells[name_column].get_text().strip() if len(cells) > name_column else ""
        value = cells[value_column].get_text().strip() if len(cells) > value_column else ""
        rows.append({"player": name, "value": value})
    return rows


class HtmlTableScrapeSource:
    """Fetch a ranking page and read player names and values from its table."""

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
        name_column: int = 1,
        value_column: int = 4,
    ):
        self.client = client
        self.timeout = timeout
        self.name_column = name_column
        self.value_column = value_column

    def _fetch(self, ref: str) -> str:
        if self.client is not None:
            resp = self.client.get(ref)
            resp.raise_for_status()
            return resp.text
        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            resp = client.get(ref)
            resp.raise_for_status()
            return resp.text

    def get(self, ref: str) -> List[RawValueRow]:
        try:
            html = self._fetch(ref)
        except httpx.HTTPError as exc:
            raise ScrapeFailed(ref, str(exc) or type(exc).__name__) from exc
        rows = extract_table_rows(
            html,
            name_column=self.name_column,
            value_column=self.value_column,
        )
        if not rows:
            raise ScrapeFailed(ref, "page contains no table rows")
        logger.debug("Scraped %s rows from %s", len(rows), ref)
        return rows
