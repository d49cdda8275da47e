"""Download the Sleeper player catalog into the local cache file."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

import httpx

from pywaiver.config import DEFAULT_CATALOG_URL
from pywaiver.errors import CatalogUnavailable
from pywaiver.ingest import FetchRemote, load_catalog


def main() -> None:
    parser = argparse.ArgumentParser(description="Refresh the cached player catalog")
    parser.add_argument("--url", default=DEFAULT_CATALOG_URL, help="Catalog endpoint")
    parser.add_argument("--cache", type=Path, default=Path("catalog.json"), help="Destination JSON path")
    parser.add_argument("--timeout", type=float, default=60.0, help="HTTP timeout in seconds")
    args = parser.parse_args()

    with httpx.Client(timeout=args.timeout) as client:
        try:
            catalog = load_catalog(FetchRemote(args.url, client=client, cache_path=args.cache))
        except CatalogUnavailable as exc:
            raise SystemExit(f"catalog refresh failed: {exc}") from exc

    positions = Counter(pos for record in catalog.values() for pos in record.fantasy_positions)
    print(f"Cached {len(catalog)} players to {args.cache}")
    for pos, count in positions.most_common():
        print(f"  {pos}: {count}")


if __name__ == "__main__":
    main()
