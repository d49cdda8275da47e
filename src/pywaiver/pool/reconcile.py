"""Join available players with scraped values and rank the matches."""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Mapping, NewType, Sequence

from pywaiver.models import PlayerRecord, RankedEntry, ValueObservation


logger = logging.getLogger(__name__)

NameKey = NewType("NameKey", str)
NameMatcher = Callable[[str], NameKey]

_NAME_SUFFIX_TOKENS = {"jr", "sr", "ii", "iii", "iv", "v"}


def exact_name_key(name: str) -> NameKey:
    """Case-sensitive key; only surrounding whitespace is ignored."""

    return NameKey(name.strip())


def normalized_name_key(name: str) -> NameKey:
    """Case-folded key with punctuation and generational suffixes removed.

    ``"Odell Beckham Jr."`` and ``"odell beckham"`` share a key.
    """

    cleaned = re.sub(r"[^a-z0-9]+", " ", name.casefold().replace("'", ""))
    tokens = [tok for tok in cleaned.split() if tok and tok not in _NAME_SUFFIX_TOKENS]
    return NameKey(" ".join(tokens))


NAME_MATCHERS: Dict[str, NameMatcher] = {
    "exact": exact_name_key,
    "normalized": normalized_name_key,
}


def get_matcher(name: str) -> NameMatcher:
    try:
        return NAME_MATCHERS[name]
    except KeyError:
        raise KeyError(f"No name matcher named {name!r}") from None


def _available_names(
    available: Mapping[str, PlayerRecord],
    matcher: NameMatcher,
) -> Dict[NameKey, str]:
    """Map each join key to the catalog name it came from (first one wins)."""

    names: Dict[NameKey, str] = {}
    for record in available.values():
        key = matcher(record.full_name)
        if key:
            names.setdefault(key, record.full_name)
    return names


def match_observations(
    available: Mapping[str, PlayerRecord],
    observations: Sequence[ValueObservation],
    *,
    matcher: NameMatcher = exact_name_key,
) -> List[ValueObservation]:
    """Keep observations naming an available player, in their original order.

    Every matching row is kept, so a player scraped by two sources (or listed
    twice on one page) appears once per row.
    """

    available_keys = _available_names(available, matcher)
    return [obs for obs in observations if matcher(obs.player) in available_keys]


def reconcile(
    available: Mapping[str, PlayerRecord],
    observations: Sequence[ValueObservation],
    top_n: int,
    *,
    matcher: NameMatcher = exact_name_key,
) -> List[RankedEntry]:
    """Rank matching observations by value (descending) and keep the first ``top_n``."""

    if top_n <= 0 or not available or not observations:
        return []

    names = _available_names(available, matcher)
    matched = [obs for obs in observations if matcher(obs.player) in names]
    # list.sort is stable, so equal values keep scrape order
    ranked = sorted(matched, key=lambda obs: obs.value, reverse=True)[:top_n]
    logger.info(
        "Matched %s of %s observations to available players; keeping %s",
        len(matched),
        len(observations),
        len(ranked),
    )
    # entries carry the catalog name so every ranked player is an available one
    return [RankedEntry(player=names[matcher(obs.player)], value=obs.value) for obs in ranked]


__all__ = [
    "NAME_MATCHERS",
    "NameKey",
    "NameMatcher",
    "exact_name_key",
    "get_matcher",
    "match_observations",
    "normalized_name_key",
    "reconcile",
]
