"""Custom exceptions for the road registry library."""

from __future__ import annotations


class RoadRegistryError(Exception):
    """Base exception for all road registry errors.

    All custom exceptions in the road_registry package inherit from this class,
    allowing callers to catch every store-related failure with a single except clause.

    Example:
        try:
            store.add_road("Kigali", "Huye")
        except RoadRegistryError as e:
            print(f"Error: {e}")
    """


class NotFoundError(RoadRegistryError):
    """Raised when a referenced city or road does not exist."""


class CityNotFoundError(NotFoundError):
    """Raised when a city name is not present in the store.

    Example:
        CityNotFoundError("City 'Gisenyi' does not exist.", name="Gisenyi")
    """

    def __init__(self, message: str, name: str | None = None):
        """Initialize with message and the name that was looked up."""
        super().__init__(message)
        self.name = name


class RoadNotFoundError(NotFoundError):
    """Raised when an operation needs a road between two cities and none exists.

    Example:
        RoadNotFoundError("No road exists between Kigali and Huye.", cities=("Kigali", "Huye"))
    """

    def __init__(self, message: str, cities: tuple[str, str] | None = None):
        super().__init__(message)
        self.cities = cities


class AlreadyExistsError(RoadRegistryError):
    """Raised when adding something that is already recorded."""


class DuplicateCityError(AlreadyExistsError):
    """Raised when a city name is already used by another city."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class DuplicateRoadError(AlreadyExistsError):
    """Raised when a road already connects the two cities."""

    def __init__(self, message: str, cities: tuple[str, str] | None = None):
        super().__init__(message)
        self.cities = cities


class InvalidCityNameError(RoadRegistryError):
    """Raised when a city name fails the format rules.

    A valid name has at least 2 characters, contains at least one letter,
    consists only of letters, digits, spaces and hyphens, and does not contain
    the road pair separator " - ".
    """

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class OutOfRangeError(RoadRegistryError):
    """Raised when a number falls outside its allowed bounds.

    This covers budget amounts, the number of cities to add and 1-based
    city indices.

    Example:
        OutOfRangeError("Budget must be between 0 and 1000.", value=1000.1, bounds=(0.0, 1000.0))
    """

    def __init__(
        self,
        message: str,
        value: float | None = None,
        bounds: tuple[float, float] | None = None,
    ):
        """Initialize with message and the offending value and bounds."""
        super().__init__(message)
        self.value = value
        self.bounds = bounds


class SelfReferenceError(RoadRegistryError):
    """Raised when a road (or its budget) would connect a city to itself."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class StorageError(RoadRegistryError):
    """Raised when a persisted table cannot be written.

    Storage failures are not fatal for the store: the in-memory change stands
    and the error is logged and kept on ``NetworkStore.last_storage_error``
    unless ``StoreOptions.strict_io`` is set.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ConfigurationError(RoadRegistryError):
    """Raised when store options are invalid.

    Example:
        ConfigurationError("max_cities must be positive, got 0")
    """
