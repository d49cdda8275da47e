"""Canonical player models shared across ingestion and reconciliation layers."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class PlayerRecord(BaseModel):
    """Catalog entry for a single player, keyed by its stable id."""

    player_id: str = Field(..., min_length=1)
    full_name: str
    fantasy_positions: FrozenSet[str] = Field(default_factory=frozenset)
    team: str | None = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("fantasy_positions", mode="before")
    @classmethod
    def coerce_positions(cls, value: Any) -> Any:
        # Sleeper sends null for players without a fantasy position
        if value is None:
            return frozenset()
        return value


class Roster(BaseModel):
    """Players assigned to one team in the league."""

    owner_ref: str | None = None
    player_ids: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @field_validator("player_ids", mode="before")
    @classmethod
    def coerce_player_ids(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        return frozenset(str(pid) for pid in value if pid)


class ValueObservation(BaseModel):
    """One scraped (player name, value) pair."""

    player: str = Field(..., min_length=1)
    value: float
    source: str | None = None

    model_config = ConfigDict(frozen=True)

    def as_payload(self) -> dict[str, Any]:
        return {"player": self.player, "value": self.value}


class RankedEntry(BaseModel):
    player: str
    value: float

    model_config = ConfigDict(frozen=True)
