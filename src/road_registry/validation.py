"""Semantic validation for city names, budgets, counts and indices.

Each rule comes as a predicate (``is_valid_*``) returning a bool and a checker
(``validate_*``) raising the matching RoadRegistryError subclass. The predicates
are also used when loading persisted tables, where failing lines are skipped
instead of reported.
"""

from __future__ import annotations

import math
import re
from numbers import Integral

from .data import MAX_BUDGET, MIN_BUDGET, PAIR_SEPARATOR
from .exceptions import InvalidCityNameError, OutOfRangeError

_ALLOWED_NAME = re.compile(r"[A-Za-z0-9 \-]+")
_HAS_LETTER = re.compile(r"[A-Za-z]")

CITY_NAME_RULES = (
    "City name must be 2+ characters, contain at least one letter, "
    "and only include alphanumeric, space, or hyphen."
)


def is_valid_city_name(name: str) -> bool:
    """Return True if ``name`` satisfies the city-name format rules."""
    if not isinstance(name, str) or len(name) < 2:
        return False
    if _ALLOWED_NAME.fullmatch(name) is None or _HAS_LETTER.search(name) is None:
        return False
    return _fits_roads_table(name)


def _fits_roads_table(name: str) -> bool:
    # The roads table splits "A - B" on the first separator. A name holding the
    # separator, or ending in " -" (which forms one with the separator written
    # after it), could never be read back.
    return PAIR_SEPARATOR not in name and not name.endswith(PAIR_SEPARATOR.rstrip())


def validate_city_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise InvalidCityNameError("City name cannot be empty.", name=name)
    if not _fits_roads_table(name):
        raise InvalidCityNameError(
            f"City name '{name}' cannot contain '{PAIR_SEPARATOR}' or end with "
            f"'{PAIR_SEPARATOR.rstrip()}'; it separates city names in the roads table.",
            name=name,
        )
    if not is_valid_city_name(name):
        raise InvalidCityNameError(CITY_NAME_RULES, name=name)


def is_valid_budget(amount: float) -> bool:
    """Return True if ``amount`` lies in (0, 1000]."""
    if isinstance(amount, bool):
        return False
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return False
    if math.isnan(value):
        return False
    return MIN_BUDGET < value <= MAX_BUDGET


def validate_budget(amount: float) -> float:
    """Return ``amount`` as a float, raising OutOfRangeError outside (0, 1000]."""
    if not is_valid_budget(amount):
        raise OutOfRangeError(
            f"Budget must be between {MIN_BUDGET:g} and {MAX_BUDGET:g} billion RWF, got {amount}.",
            value=amount if isinstance(amount, (int, float)) else None,
            bounds=(MIN_BUDGET, MAX_BUDGET),
        )
    return float(amount)


def validate_city_count(count: int, current: int, max_cities: int) -> int:
    """Check that ``count`` new cities fit: 1 <= count <= max_cities - current."""
    remaining = max_cities - current
    if isinstance(count, bool) or not isinstance(count, Integral) or not 1 <= count <= remaining:
        if remaining <= 0:
            message = f"Cannot add cities: the limit of {max_cities} cities is reached."
        else:
            message = f"Enter a number between 1 and {remaining}, got {count}."
        raise OutOfRangeError(message, value=count, bounds=(1, max(remaining, 0)))
    return int(count)


def validate_index(index: int, count: int) -> int:
    """Convert a 1-based city ``index`` to a 0-based slot, checking its range."""
    if isinstance(index, bool) or not isinstance(index, Integral) or not 1 <= index <= count:
        if count == 0:
            message = f"Invalid index {index}: no cities recorded."
        else:
            message = f"Invalid index {index}. Enter a number between 1 and {count}."
        raise OutOfRangeError(message, value=index, bounds=(1, count))
    return int(index) - 1
