"""Roster membership and availability filtering for catalog players."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import AbstractSet, Dict, FrozenSet, Iterable, Mapping

from pywaiver.models import PlayerRecord, Roster


logger = logging.getLogger(__name__)


def build_roster_index(rosters: Iterable[Roster]) -> FrozenSet[str]:
    """Union of every rostered player id across the league."""

    index: set[str] = set()
    for roster in rosters:
        index.update(roster.player_ids)
    return frozenset(index)


@dataclass(frozen=True)
class AvailabilitySummary:
    """Why catalog players were left out of the available pool."""

    catalog_players: int
    available_players: int
    rostered: int
    no_positions: int
    excluded_position: int


def _exclusion_reason(
    record: PlayerRecord,
    roster_index: AbstractSet[str],
    excluded_positions: AbstractSet[str],
) -> str | None:
    if record.player_id in roster_index:
        return "rostered"
    if not record.fantasy_positions:
        return "no_positions"
    if record.fantasy_positions & excluded_positions:
        return "excluded_position"
    return None


def is_available(
    record: PlayerRecord,
    roster_index: AbstractSet[str],
    excluded_positions: AbstractSet[str],
) -> bool:
    return _exclusion_reason(record, roster_index, excluded_positions) is None


def filter_available(
    catalog: Mapping[str, PlayerRecord],
    roster_index: AbstractSet[str],
    excluded_positions: AbstractSet[str] = frozenset(),
) -> Dict[str, PlayerRecord]:
    """Return catalog players that are unrostered and hold only allowed positions."""

    available, _ = filter_available_with_summary(catalog, roster_index, excluded_positions)
    return available


def filter_available_with_summary(
    catalog: Mapping[str, PlayerRecord],
    roster_index: AbstractSet[str],
    excluded_positions: AbstractSet[str] = frozenset(),
) -> tuple[Dict[str, PlayerRecord], AvailabilitySummary]:
    excluded = frozenset(excluded_positions)
    reasons: Counter[str] = Counter()
    available: Dict[str, PlayerRecord] = {}
    for player_id, record in catalog.items():
        reason = _exclusion_reason(record, roster_index, excluded)
        if reason is None:
            available[player_id] = record
        else:
            reasons[reason] += 1

    summary = AvailabilitySummary(
        catalog_players=len(catalog),
        available_players=len(available),
        rostered=reasons["rostered"],
        no_positions=reasons["no_positions"],
        excluded_position=reasons["excluded_position"],
    )
    logger.info(
        "Available players: %s of %s (rostered=%s, no positions=%s, excluded positions=%s)",
        summary.available_players,
        summary.catalog_players,
        summary.rostered,
        summary.no_positions,
        summary.excluded_position,
    )
    return available, summary


__all__ = [
    "AvailabilitySummary",
    "build_roster_index",
    "filter_available",
    "filter_available_with_summary",
    "is_available",
]
