"""Data models for catalog players, rosters and scraped values."""

from .player import PlayerRecord, RankedEntry, Roster, ValueObservation

__all__ = [
    "PlayerRecord",
    "RankedEntry",
    "Roster",
    "ValueObservation",
]
