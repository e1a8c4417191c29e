"""Core data structures for the road registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from .exceptions import ConfigurationError

MAX_CITIES = 500
MIN_BUDGET = 0.0  # exclusive
MAX_BUDGET = 1000.0  # inclusive

CITIES_HEADER = "Index\tCity Name"
ROADS_HEADER = "Nbr\tRoad\t\t\tBudget"
PAIR_SEPARATOR = " - "
FIELD_SEPARATOR = "\t"


@dataclass(frozen=True)
class RoadRecord:
    """One row of the persisted roads table.

    Attributes:
        nbr: Stable road identifier, assigned the first time the road is saved.
        city_a: Name of the first city as written in the table.
        city_b: Name of the second city as written in the table.
        budget: Budget value; 0.0 means no budget has been set.
    """

    nbr: int
    city_a: str
    city_b: str
    budget: float = 0.0


@dataclass(frozen=True)
class Road:
    """A road between two cities as seen in memory.

    Attributes:
        index_a: 1-based index of the lower-numbered city.
        index_b: 1-based index of the higher-numbered city.
        city_a: Name of the city at index_a.
        city_b: Name of the city at index_b.
        budget: Budget for the road (0.0 when unset).
    """

    index_a: int
    index_b: int
    city_a: str
    city_b: str
    budget: float = 0.0

    @property
    def has_budget(self) -> bool:
        return self.budget > MIN_BUDGET


@dataclass(frozen=True, eq=False)
class NetworkSnapshot:
    """Read-only copy of the store state used for display and export.

    Attributes:
        cities: City names in index order (position 0 is displayed as 1).
        roads: N×N symmetric boolean road matrix.
        budgets: N×N symmetric float budget matrix.
    """

    cities: tuple[str, ...]
    roads: np.ndarray = field(repr=False)
    budgets: np.ndarray = field(repr=False)

    @property
    def is_empty(self) -> bool:
        return not self.cities

    @property
    def road_count(self) -> int:
        return int(np.count_nonzero(np.triu(self.roads, k=1)))


@dataclass
class StoreOptions:
    """Configuration options for a NetworkStore.

    Attributes:
        storage_dir: Directory holding the two tables; created on first save.
        cities_filename: File name of the cities table inside storage_dir.
        roads_filename: File name of the roads table inside storage_dir.
        max_cities: Ceiling on the number of recorded cities (default: 500).
        strict_io: When True, a failed save raises StorageError instead of being
                   logged and remembered on the store.

    Examples:
        >>> # Defaults: ./data/cities.txt and ./data/roads.txt
        >>> options = StoreOptions()

        >>> # Separate data directory for a test run
        >>> options = StoreOptions(storage_dir=tmp_path / "data", strict_io=True)
    """

    storage_dir: Path = field(default_factory=lambda: Path("data"))
    cities_filename: str = "cities.txt"
    roads_filename: str = "roads.txt"
    max_cities: int = MAX_CITIES
    strict_io: bool = False

    def __post_init__(self) -> None:
        self.storage_dir = Path(self.storage_dir)
        if isinstance(self.max_cities, bool) or self.max_cities <= 0:
            raise ConfigurationError(
                f"max_cities must be a positive integer, got {self.max_cities}."
            )
        for label, name in (
            ("cities_filename", self.cities_filename),
            ("roads_filename", self.roads_filename),
        ):
            if not name or Path(name).name != name:
                raise ConfigurationError(
                    f"{label} must be a plain file name inside storage_dir, got '{name}'."
                )
        if self.cities_filename == self.roads_filename:
            raise ConfigurationError(
                "cities_filename and roads_filename must differ, "
                f"both are '{self.cities_filename}'."
            )

    @property
    def cities_path(self) -> Path:
        return self.storage_dir / self.cities_filename

    @property
    def roads_path(self) -> Path:
        return self.storage_dir / self.roads_filename
