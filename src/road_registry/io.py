"""File I/O helpers for the cities and roads tables.

Both tables are tab-separated text with a header line. Reading is best-effort:
a line that cannot be parsed is skipped (and logged at DEBUG), never reported
as an error. Writing always rewrites the whole file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from pathlib import Path

from .data import (
    CITIES_HEADER,
    FIELD_SEPARATOR,
    MAX_CITIES,
    PAIR_SEPARATOR,
    ROADS_HEADER,
    RoadRecord,
)
from .exceptions import StorageError
from .validation import is_valid_city_name

logger = logging.getLogger(__name__)


def _read_data_lines(path: Path) -> list[str]:
    # Missing tables are an empty state, not an error. The first line is the header.
    try:
        with path.open("r", encoding="utf-8", errors="replace") as fh:
            lines = fh.read().splitlines()
    except FileNotFoundError:
        return []
    return lines[1:]


def parse_city_line(line: str) -> str | None:
    """Return the city name from an ``index<TAB>name`` row, or None if malformed."""
    _, sep, name = line.partition(FIELD_SEPARATOR)
    if not sep:
        return None
    return name


def load_cities(path: str | Path, max_cities: int = MAX_CITIES) -> list[str]:
    """Load city names from the cities table.

    The index column is ignored (cities are positional). Rows without a tab,
    rows whose name fails validation, duplicate names and rows beyond
    ``max_cities`` are skipped.
    """
    path = Path(path)
    try:
        lines = _read_data_lines(path)
    except OSError as exc:
        logger.warning(f"Cannot read {path}: {exc}")
        return []
    names: list[str] = []
    seen: set[str] = set()
    for lineno, line in enumerate(lines, start=2):
        name = parse_city_line(line)
        if name is None or not is_valid_city_name(name) or name in seen:
            logger.debug(f"Skipping cities line {lineno}: {line!r}")
            continue
        if len(names) >= max_cities:
            logger.debug(f"Skipping cities line {lineno}: limit of {max_cities} cities reached")
            continue
        names.append(name)
        seen.add(name)
    return names


def save_cities(path: str | Path, cities: Sequence[str]) -> None:
    """Rewrite the cities table with one ``index<TAB>name`` row per city."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(CITIES_HEADER + "\n")
            for index, name in enumerate(cities, start=1):
                fh.write(f"{index}{FIELD_SEPARATOR}{name}\n")
    except OSError as exc:
        raise StorageError(
            f"Cannot save to {path.name}. Check permissions. ({exc})", path=str(path)
        ) from exc
    logger.info(f"Saved {len(cities)} cities to {path}", extra={"path": str(path)})


def parse_road_line(line: str) -> RoadRecord | None:
    """Parse an ``id<TAB>cityA - cityB<TAB>budget`` row.

    Returns None when a separator is missing, the id is not an integer or the
    budget is not a number.
    """
    fields = line.split(FIELD_SEPARATOR, 2)
    if len(fields) < 3:
        return None
    nbr_text, road, budget_text = fields
    try:
        nbr = int(nbr_text)
        budget = float(budget_text)
    except ValueError:
        return None
    city_a, sep, city_b = road.partition(PAIR_SEPARATOR)
    if not sep:
        return None
    return RoadRecord(nbr=nbr, city_a=city_a, city_b=city_b, budget=budget)


def format_road_line(record: RoadRecord) -> str:
    return (
        f"{record.nbr}{FIELD_SEPARATOR}{record.city_a}{PAIR_SEPARATOR}{record.city_b}"
        f"{FIELD_SEPARATOR}{record.budget:.1f}"
    )


def read_road_records(path: str | Path) -> list[RoadRecord]:
    """Read every well-formed row of the roads table, in file order."""
    records: list[RoadRecord] = []
    for lineno, line in enumerate(_read_data_lines(Path(path)), start=2):
        record = parse_road_line(line)
        if record is None:
            logger.debug(f"Skipping roads line {lineno}: {line!r}")
            continue
        records.append(record)
    return records


def load_roads(path: str | Path) -> list[RoadRecord]:
    """Read the roads table for startup; an unreadable file counts as empty."""
    path = Path(path)
    try:
        return read_road_records(path)
    except OSError as exc:
        logger.warning(f"Cannot read {path}: {exc}")
        return []


def merge_road_records(
    existing: Iterable[RoadRecord],
    current: Iterable[tuple[str, str, float]],
    renames: Mapping[str, str] | None = None,
) -> list[RoadRecord]:
    """Combine the persisted records with the roads currently held in memory.

    Args:
        existing: Records read from the roads table.
        current: ``(city_a, city_b, budget)`` for every road in memory.
        renames: Old-name to new-name mapping applied to ``existing`` first, so a
                 renamed city keeps the ids of its roads.

    Returns:
        One record per current road, sorted by id. A road already present in
        ``existing`` (either name order) keeps its id and takes the in-memory
        budget; a new road gets one more than the highest id seen so far.
        Existing records with no matching road are dropped.
    """
    existing = list(existing)
    renamed: list[RoadRecord] = []
    untouched: list[RoadRecord] = []
    for record in existing:
        if renames and (record.city_a in renames or record.city_b in renames):
            renamed.append(
                replace(
                    record,
                    city_a=renames.get(record.city_a, record.city_a),
                    city_b=renames.get(record.city_b, record.city_b),
                )
            )
        else:
            untouched.append(record)

    by_pair: dict[frozenset[str], RoadRecord] = {}
    # Renamed rows claim their pair before stale rows that already carry the new
    # name. Within each group the first row for a pair wins.
    for record in (*renamed, *untouched):
        by_pair.setdefault(frozenset((record.city_a, record.city_b)), record)

    next_nbr = max([0, *(record.nbr for record in existing)]) + 1
    merged: list[RoadRecord] = []
    for city_a, city_b, budget in current:
        found = by_pair.pop(frozenset((city_a, city_b)), None)
        if found is not None:
            nbr = found.nbr
        else:
            nbr = next_nbr
            next_nbr += 1
        merged.append(RoadRecord(nbr=nbr, city_a=city_a, city_b=city_b, budget=float(budget)))

    merged.sort(key=lambda record: record.nbr)
    return merged


def save_roads(
    path: str | Path,
    current: Iterable[tuple[str, str, float]],
    renames: Mapping[str, str] | None = None,
) -> list[RoadRecord]:
    """Merge ``current`` roads into the roads table and rewrite it.

    Returns the records written, in file order.
    """
    path = Path(path)
    try:
        records = merge_road_records(read_road_records(path), current, renames)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(ROADS_HEADER + "\n")
            for record in records:
                fh.write(format_road_line(record) + "\n")
    except OSError as exc:
        raise StorageError(f"Cannot save to {path.name}. ({exc})", path=str(path)) from exc
    logger.info(f"Saved {len(records)} roads to {path}", extra={"path": str(path)})
    return records
