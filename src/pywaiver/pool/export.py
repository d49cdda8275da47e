"""JSON artifact helpers for pipeline outputs."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from pywaiver.models import PlayerRecord, RankedEntry, ValueObservation


logger = logging.getLogger(__name__)

AVAILABLE_FILENAME = "available_players.json"
OBSERVATIONS_FILENAME = "scraped_values.json"
RANKED_FILENAME = "ranked_targets.json"


@dataclass(frozen=True)
class ArtifactPaths:
    available: Path
    observations: Path
    ranked: Path


def availability_payload(available: Mapping[str, PlayerRecord]) -> Dict[str, Dict[str, Any]]:
    return {
        player_id: {
            "player_id": record.player_id,
            "full_name": record.full_name,
            "fantasy_positions": sorted(record.fantasy_positions),
        }
        for player_id, record in available.items()
    }


def observations_payload(observations: Sequence[ValueObservation]) -> List[Dict[str, Any]]:
    return [obs.as_payload() for obs in observations]


def ranked_payload(ranked: Sequence[RankedEntry]) -> List[Dict[str, Any]]:
    return [entry.model_dump() for entry in ranked]


def dumps_artifact(payload: Any) -> str:
    """Serialize deterministically: sorted keys, two-space indent."""

    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def write_artifacts(
    output_dir: Path,
    *,
    available: Mapping[str, PlayerRecord],
    observations: Sequence[ValueObservation],
    ranked: Sequence[RankedEntry],
) -> ArtifactPaths:
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = ArtifactPaths(
        available=output_dir / AVAILABLE_FILENAME,
        observations=output_dir / OBSERVATIONS_FILENAME,
        ranked=output_dir / RANKED_FILENAME,
    )
    paths.available.write_text(dumps_artifact(availability_payload(available)), encoding="utf-8")
    paths.observations.write_text(dumps_artifact(observations_payload(observations)), encoding="utf-8")
    paths.ranked.write_text(dumps_artifact(ranked_payload(ranked)), encoding="utf-8")
    logger.info("Wrote artifacts to %s", output_dir)
    return paths


__all__ = [
    "ArtifactPaths",
    "availability_payload",
    "dumps_artifact",
    "observations_payload",
    "ranked_payload",
    "write_artifacts",
]
