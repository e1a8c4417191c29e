"""Tests for city name, budget, count and index validation."""

import math
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from road_registry.exceptions import InvalidCityNameError, OutOfRangeError  # noqa: E402
from road_registry.validation import (  # noqa: E402
    is_valid_budget,
    is_valid_city_name,
    validate_budget,
    validate_city_count,
    validate_city_name,
    validate_index,
)


@pytest.mark.parametrize(
    "name",
    ["New-City 2", "Kigali", "ab", "A1", "Rubavu District", "x-9"],
)
def test_valid_city_names(name):
    assert is_valid_city_name(name)
    validate_city_name(name)


@pytest.mark.parametrize(
    "name",
    [
        "a",  # too short
        "123",  # no letter
        "City!",  # disallowed character
        "",
        "12-34",
        "Kigali_City",
        "Café",  # letters outside A-Z
        "Kigali\t",
    ],
)
def test_invalid_city_names(name):
    assert not is_valid_city_name(name)
    with pytest.raises(InvalidCityNameError):
        validate_city_name(name)


def test_city_name_cannot_contain_pair_separator():
    # "A - B" would be split into two cities when the roads table is read back.
    assert not is_valid_city_name("East - West")
    with pytest.raises(InvalidCityNameError, match="cannot contain"):
        validate_city_name("East - West")


def test_city_name_cannot_end_with_spaced_hyphen():
    # "Ab -" followed by the separator reads back as "Ab" and "- Cd".
    assert not is_valid_city_name("Ab -")
    with pytest.raises(InvalidCityNameError, match="end with"):
        validate_city_name("Ab -")


def test_leading_hyphen_and_trailing_hyphen_without_space_are_allowed():
    assert is_valid_city_name("- Ab")
    assert is_valid_city_name("Ab-")


def test_hyphen_without_spaces_is_allowed():
    assert is_valid_city_name("East-West")
    assert is_valid_city_name("East -West")


def test_empty_name_message():
    with pytest.raises(InvalidCityNameError, match="cannot be empty"):
        validate_city_name("")


def test_non_string_name_is_invalid():
    assert not is_valid_city_name(None)  # type: ignore[arg-type]
    assert not is_valid_city_name(42)  # type: ignore[arg-type]


def test_budget_boundaries():
    assert is_valid_budget(1000.0)
    assert is_valid_budget(0.1)
    assert not is_valid_budget(0)
    assert not is_valid_budget(0.0)
    assert not is_valid_budget(1000.1)
    assert not is_valid_budget(-5)


def test_budget_rejects_non_numbers():
    assert not is_valid_budget(math.nan)
    assert not is_valid_budget(math.inf)
    assert not is_valid_budget("abc")  # type: ignore[arg-type]
    assert not is_valid_budget(None)  # type: ignore[arg-type]
    assert not is_valid_budget(True)


def test_validate_budget_returns_float():
    value = validate_budget(250)
    assert isinstance(value, float)
    assert value == 250.0


def test_validate_budget_error_carries_bounds():
    with pytest.raises(OutOfRangeError) as exc_info:
        validate_budget(1000.1)
    assert exc_info.value.bounds == (0.0, 1000.0)
    assert exc_info.value.value == 1000.1


def test_city_count_range():
    assert validate_city_count(1, current=0, max_cities=500) == 1
    assert validate_city_count(500, current=0, max_cities=500) == 500
    assert validate_city_count(2, current=498, max_cities=500) == 2


@pytest.mark.parametrize("count", [0, -1, 3, None, 1.5, True])
def test_city_count_rejected(count):
    with pytest.raises(OutOfRangeError):
        validate_city_count(count, current=498, max_cities=500)


def test_city_count_when_full():
    with pytest.raises(OutOfRangeError, match="limit of 500 cities"):
        validate_city_count(1, current=500, max_cities=500)


def test_index_converts_to_zero_based():
    assert validate_index(1, 3) == 0
    assert validate_index(3, 3) == 2


@pytest.mark.parametrize("index", [0, 4, -1, None, True])
def test_index_out_of_range(index):
    with pytest.raises(OutOfRangeError):
        validate_index(index, 3)


def test_index_with_no_cities():
    with pytest.raises(OutOfRangeError, match="no cities recorded"):
        validate_index(1, 0)
