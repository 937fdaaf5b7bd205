import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pokecollection import CatalogClient, Settings
from pokecollection.store import dumps_collection


def build_collection(names: List[str], catalog: CatalogClient):
    found, missing = [], []
    for name in names:
        print(f"→ Fetching {name}")
        rec = catalog.fetch_by_name(name)
        if rec is None:
            print(f"✗ {name} was not found, skipping")
            missing.append(name)
            continue
        found.append(rec)
    return found, missing


def main(argv: Optional[List[str]] = None, catalog: Optional[CatalogClient] = None) -> int:
    ap = argparse.ArgumentParser(description="Build a pokemons.json importable from the Save / Load page.")
    ap.add_argument("names", nargs="+", help="pokemon names, e.g. bulbasaur pikachu")
    ap.add_argument("-o", "--output", default="pokemons.json", help="where to write the collection")
    args = ap.parse_args(argv)

    if catalog is None:
        settings = Settings.from_env()
        catalog = CatalogClient(settings.api_base, timeout=settings.timeout)

    found, missing = build_collection(args.names, catalog)
    if not found:
        print("FAILED: none of the names resolved")
        return 1

    out = Path(args.output)
    out.write_text(dumps_collection(found, indent=2), encoding="utf-8")
    print(f"✓ Wrote {out.name} ({len(found)} pokemon, {len(missing)} skipped)")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    sys.exit(main())
