"""The city/road/budget store and its synchronisation with the persisted tables."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Sequence

from .data import MIN_BUDGET, NetworkSnapshot, Road, RoadRecord, StoreOptions
from .exceptions import (
    CityNotFoundError,
    DuplicateCityError,
    DuplicateRoadError,
    OutOfRangeError,
    RoadNotFoundError,
    SelfReferenceError,
    StorageError,
)
from .io import load_cities, load_roads, save_cities, save_roads
from .matrix import AdjacencyMatrices
from .validation import (
    is_valid_budget,
    validate_budget,
    validate_city_count,
    validate_city_name,
    validate_index,
)


class NetworkStore:
    """Cities, the roads between them and road budgets, mirrored to two text tables.

    Cities are kept in insertion order and addressed by 1-based index in the
    public API. Roads and budgets live in symmetric N×N matrices (see
    AdjacencyMatrices). Every mutating call rewrites the affected table(s)
    before returning; a failed write is logged and kept on
    ``last_storage_error`` while the in-memory change stands (unless
    ``options.strict_io`` is set, in which case StorageError is raised).

    Examples:
        >>> store = NetworkStore(StoreOptions(storage_dir=tmp_path))
        >>> store.add_cities(2, ["Kigali", "Huye"])
        ['Kigali', 'Huye']
        >>> store.add_road("Kigali", "Huye")
        >>> store.set_budget("Huye", "Kigali", 250.0)
        >>> store.list_roads()[0].budget
        250.0

    See Also:
        - road_registry.io: Table formats and the road id merge.
        - road_registry.cli: Interactive menu built on this class.
    """

    def __init__(self, options: StoreOptions | None = None, *, autoload: bool = True):
        self.options = options if options is not None else StoreOptions()
        self.logger = logging.getLogger(__name__)
        self.last_storage_error: StorageError | None = None
        self._reset()
        if autoload:
            self.load()

    def _reset(self) -> None:
        self._cities: list[str] = []
        self._slots: dict[str, int] = {}
        self._matrices = AdjacencyMatrices(self.options.max_cities)
        # Renames the roads table has not seen yet, keyed by the names it holds.
        self._pending_renames: dict[str, str] = {}

    # ============================================================================
    # Queries
    # ============================================================================

    def __len__(self) -> int:
        return len(self._cities)

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    @property
    def city_count(self) -> int:
        return len(self._cities)

    @property
    def remaining_capacity(self) -> int:
        return self.options.max_cities - len(self._cities)

    def city_index(self, name: str) -> int | None:
        """Return the 0-based slot of ``name``, or None if it is not recorded."""
        return self._slots.get(name)

    def _require_city(self, name: str) -> int:
        slot = self._slots.get(name)
        if slot is None:
            raise CityNotFoundError(f"City '{name}' does not exist.", name=name)
        return slot

    def find_city_by_index(self, index: int) -> str:
        """Return the name of the city at 1-based ``index``."""
        return self._cities[validate_index(index, len(self._cities))]

    def list_cities(self) -> list[tuple[int, str]]:
        """Return ``(index, name)`` pairs with 1-based indices; empty when no cities."""
        return list(enumerate(self._cities, start=1))

    def has_road(self, city_a: str, city_b: str) -> bool:
        return self._matrices.has_road(self._require_city(city_a), self._require_city(city_b))

    def get_budget(self, city_a: str, city_b: str) -> float:
        """Return the budget between two cities; 0.0 when no budget (or no road) is set."""
        return self._matrices.budget(self._require_city(city_a), self._require_city(city_b))

    def list_roads(self) -> list[Road]:
        """Return every road once, ordered by the lower then the higher city index."""
        return [
            Road(
                index_a=i + 1,
                index_b=j + 1,
                city_a=self._cities[i],
                city_b=self._cities[j],
                budget=self._matrices.budget(i, j),
            )
            for i, j in self._matrices.edges()
        ]

    def dump(self) -> NetworkSnapshot:
        """Return a copy of the city list and both matrices."""
        return NetworkSnapshot(
            cities=tuple(self._cities),
            roads=self._matrices.roads,
            budgets=self._matrices.budgets,
        )

    def check_new_city_name(self, name: str, pending: Collection[str] = ()) -> None:
        """Raise unless ``name`` could be added as a new city.

        Args:
            name: Candidate city name.
            pending: Names already accepted for the same batch but not yet added.

        Raises:
            InvalidCityNameError: If the name fails the format rules.
            DuplicateCityError: If the name is already recorded or pending.
        """
        validate_city_name(name)
        if name in self._slots or name in pending:
            raise DuplicateCityError(f"City '{name}' already exists.", name=name)

    # ============================================================================
    # Mutations
    # ============================================================================

    def _append_city(self, name: str) -> None:
        # Grow the matrices before the new slot becomes reachable by name.
        self._matrices.grow(1)
        self._slots[name] = len(self._cities)
        self._cities.append(name)

    def add_cities(self, count: int, names: Sequence[str]) -> list[str]:
        """Append ``count`` new cities named ``names``, in order.

        Names are checked one at a time against the recorded cities and the names
        added before them in the same call. If a name is rejected, the cities
        already appended by this call are kept (and saved) and the error is raised.

        Returns:
            The names added.

        Raises:
            OutOfRangeError: If ``count`` is not between 1 and the remaining
                capacity, or does not match the number of names.
            InvalidCityNameError: If a name fails the format rules.
            DuplicateCityError: If a name is already in use.
        """
        count = validate_city_count(count, len(self._cities), self.options.max_cities)
        names = list(names)
        if len(names) != count:
            raise OutOfRangeError(
                f"Expected {count} city names, got {len(names)}.",
                value=len(names),
                bounds=(count, count),
            )
        added: list[str] = []
        try:
            for name in names:
                self.check_new_city_name(name)
                self._append_city(name)
                added.append(name)
        finally:
            if added:
                self.logger.info(
                    f"{len(added)} cities added",
                    extra={"cities": list(added), "city_count": len(self._cities)},
                )
                self._persist(cities=True)
        return added

    def add_city(self, name: str) -> int:
        """Append a single city and return its 1-based index."""
        self.add_cities(1, [name])
        return len(self._cities)

    def add_road(self, city_a: str, city_b: str) -> None:
        """Connect two recorded, distinct cities that have no road yet."""
        i = self._require_city(city_a)
        if city_a == city_b:
            raise SelfReferenceError("Cannot add a road from a city to itself.", name=city_a)
        j = self._require_city(city_b)
        if self._matrices.has_road(i, j):
            raise DuplicateRoadError(
                f"Road already exists between {city_a} and {city_b}.", cities=(city_a, city_b)
            )
        self._matrices.connect(i, j)
        self.logger.info(f"Road added between {city_a} and {city_b}")
        self._persist(roads=True)

    def set_budget(self, city_a: str, city_b: str, amount: float) -> None:
        """Set (or overwrite) the budget of the road between two cities.

        Raises:
            CityNotFoundError: If either city is not recorded.
            SelfReferenceError: If both names are the same city.
            RoadNotFoundError: If no road connects the cities.
            OutOfRangeError: If ``amount`` is not in (0, 1000].
        """
        i = self._require_city(city_a)
        j = self._require_city(city_b)
        if i == j:
            raise SelfReferenceError("A road cannot connect a city to itself.", name=city_a)
        if not self._matrices.has_road(i, j):
            raise RoadNotFoundError(
                f"No road exists between {city_a} and {city_b}.", cities=(city_a, city_b)
            )
        value = validate_budget(amount)
        self._matrices.set_budget(i, j, value)
        self.logger.info(
            f"Budget set for the road between {city_a} and {city_b}", extra={"budget": value}
        )
        self._persist(roads=True)

    def rename_city(self, index: int, new_name: str) -> str:
        """Rename the city at 1-based ``index`` and return its previous name.

        Roads are untouched in memory; the roads table is rewritten with the new
        name and the same road ids.
        """
        slot = validate_index(index, len(self._cities))
        validate_city_name(new_name)
        owner = self._slots.get(new_name)
        if owner is not None and owner != slot:
            raise DuplicateCityError(f"City '{new_name}' already exists.", name=new_name)
        old_name = self._cities[slot]
        self._cities[slot] = new_name
        del self._slots[old_name]
        self._slots[new_name] = slot
        self.logger.info(f"City {index} renamed from '{old_name}' to '{new_name}'")
        if old_name != new_name:
            self._record_rename(old_name, new_name)
        self._persist(cities=True, roads=True)
        return old_name

    # ============================================================================
    # Persistence
    # ============================================================================

    def _current_roads(self) -> list[tuple[str, str, float]]:
        return [
            (self._cities[i], self._cities[j], self._matrices.budget(i, j))
            for i, j in self._matrices.edges()
        ]

    def _record_rename(self, old_name: str, new_name: str) -> None:
        """Fold ``old_name -> new_name`` into the renames not yet written to the roads table.

        The mapping is keyed by names as they appear in the roads table. A city
        that got ``old_name`` through an earlier pending rename has its entry
        redirected; otherwise ``old_name`` itself is mapped unless the table's
        rows under that name already belong to another city.
        """
        carried = [key for key, value in self._pending_renames.items() if value == old_name]
        for key in carried:
            self._pending_renames[key] = new_name
        if not carried and old_name not in self._pending_renames:
            self._pending_renames[old_name] = new_name
        self._pending_renames = {
            key: value for key, value in self._pending_renames.items() if key != value
        }

    def _persist(self, cities: bool = False, roads: bool = False) -> None:
        # Each table is written on its own; a failed cities write still lets the
        # roads table be rewritten. The first failure is the one reported.
        errors: list[StorageError] = []
        if cities:
            self._write_table(errors, save_cities, self.options.cities_path, self._cities)
        if roads and self._write_table(
            errors,
            save_roads,
            self.options.roads_path,
            self._current_roads(),
            dict(self._pending_renames),
        ):
            self._pending_renames.clear()
        self.last_storage_error = errors[0] if errors else None
        if errors and self.options.strict_io:
            raise errors[0]

    def _write_table(
        self, errors: list[StorageError], writer: Callable[..., object], *args: object
    ) -> bool:
        try:
            writer(*args)
        except StorageError as exc:
            self.logger.error(str(exc), extra={"path": exc.path})
            errors.append(exc)
            return False
        return True

    def save(self) -> None:
        """Rewrite both tables from the current state."""
        self._persist(cities=True, roads=True)

    def load(self) -> None:
        """Replace the in-memory state with the contents of the two tables.

        Cities are loaded first so that road rows, which refer to cities by name,
        can be resolved. Road rows naming an unknown city, joining a city to
        itself, or carrying a budget outside (0, 1000] are skipped. A budget of
        exactly 0.0 is how a road without a budget is written, so such rows
        restore the road with no budget.
        """
        self._reset()
        for name in load_cities(self.options.cities_path, self.options.max_cities):
            self._append_city(name)
        applied = sum(
            self._apply_record(record) for record in load_roads(self.options.roads_path)
        )
        self.logger.info(
            f"Loaded {len(self._cities)} cities and {applied} road rows",
            extra={"storage_dir": str(self.options.storage_dir)},
        )

    def _apply_record(self, record: RoadRecord) -> bool:
        i = self._slots.get(record.city_a)
        j = self._slots.get(record.city_b)
        if i is None or j is None or i == j:
            self.logger.debug(f"Skipping road {record.nbr}: unknown or identical cities")
            return False
        if record.budget != MIN_BUDGET and not is_valid_budget(record.budget):
            self.logger.debug(f"Skipping road {record.nbr}: budget {record.budget} out of range")
            return False
        self._matrices.connect(i, j)
        if record.budget != MIN_BUDGET:
            self._matrices.set_budget(i, j, record.budget)
        return True
