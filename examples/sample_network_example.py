"""Example script that records a small road network and prints it."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from road_registry import (  # noqa: E402
    DuplicateRoadError,
    NetworkStore,
    StoreOptions,
    render_dump,
)

CITIES = ["Kigali", "Huye", "Musanze", "Rubavu", "Nyagatare"]
ROADS = [
    ("Kigali", "Huye", 320.0),
    ("Kigali", "Musanze", 180.5),
    ("Musanze", "Rubavu", 95.0),
    ("Kigali", "Nyagatare", None),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Record a sample road network")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path(__file__).resolve().parent / "data",
        help="Directory for cities.txt and roads.txt",
    )
    args = parser.parse_args()

    store = NetworkStore(StoreOptions(storage_dir=args.data_dir, strict_io=True))
    missing = [name for name in CITIES if name not in store]
    if missing:
        store.add_cities(len(missing), missing)

    for city_a, city_b, budget in ROADS:
        try:
            store.add_road(city_a, city_b)
        except DuplicateRoadError:
            pass
        if budget is not None:
            store.set_budget(city_a, city_b, budget)

    print(render_dump(store.dump()))
    print(f"\nRecorded {len(store)} cities and {len(store.list_roads())} roads in {args.data_dir}")


if __name__ == "__main__":
    main()
