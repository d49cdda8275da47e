"""Persist and load CLI run profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class PipelineProfile:
    league_id: Optional[str] = None
    sources: List[str] = field(default_factory=list)
    excluded_positions: Optional[List[str]] = None
    top_n: Optional[int] = None
    name_matcher: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "PipelineProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            league_id=data.get("league_id"),
            sources=list(data.get("sources", [])),
            excluded_positions=data.get("excluded_positions"),
            top_n=data.get("top_n"),
            name_matcher=data.get("name_matcher"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "league_id": self.league_id,
            "sources": self.sources,
            "excluded_positions": (
                None if self.excluded_positions is None else sorted(set(self.excluded_positions))
            ),
            "top_n": self.top_n,
            "name_matcher": self.name_matcher,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
