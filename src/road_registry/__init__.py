"""High-level entrypoints for the road registry library."""

from .data import (
    MAX_BUDGET,
    MAX_CITIES,
    MIN_BUDGET,
    NetworkSnapshot,
    Road,
    RoadRecord,
    StoreOptions,
)
from .exceptions import (
    AlreadyExistsError,
    CityNotFoundError,
    ConfigurationError,
    DuplicateCityError,
    DuplicateRoadError,
    InvalidCityNameError,
    NotFoundError,
    OutOfRangeError,
    RoadNotFoundError,
    RoadRegistryError,
    SelfReferenceError,
    StorageError,
)
from .io import load_cities, load_roads, read_road_records, save_cities, save_roads
from .store import NetworkStore
from .utils import render_cities, render_dump, render_roads
from .validation import is_valid_budget, is_valid_city_name
from .visualization import to_networkx, visualize_network

__version__ = "0.1.0"

__all__ = [
    # Main API
    "NetworkStore",
    "StoreOptions",
    # Data
    "NetworkSnapshot",
    "Road",
    "RoadRecord",
    "MAX_CITIES",
    "MIN_BUDGET",
    "MAX_BUDGET",
    # Tables
    "load_cities",
    "save_cities",
    "load_roads",
    "read_road_records",
    "save_roads",
    # Validation
    "is_valid_city_name",
    "is_valid_budget",
    # Rendering
    "render_cities",
    "render_roads",
    "render_dump",
    # Visualization
    "to_networkx",
    "visualize_network",
    # Exceptions
    "RoadRegistryError",
    "NotFoundError",
    "CityNotFoundError",
    "RoadNotFoundError",
    "AlreadyExistsError",
    "DuplicateCityError",
    "DuplicateRoadError",
    "InvalidCityNameError",
    "OutOfRangeError",
    "SelfReferenceError",
    "StorageError",
    "ConfigurationError",
    # Version
    "__version__",
]
