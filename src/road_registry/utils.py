"""Console renderings of a NetworkSnapshot."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .data import NetworkSnapshot


def format_cities(cities: Iterable[str]) -> str:
    """Render ``Cities:`` followed by one ``<index>: <name>`` line per city."""
    lines = ["Cities:"]
    lines.extend(f"{index}: {name}" for index, name in enumerate(cities, start=1))
    return "\n".join(lines)


def format_road_matrix(roads: np.ndarray) -> str:
    """Render the road matrix as rows of space-separated 0/1 values."""
    return "\n".join(" ".join(str(int(cell)) for cell in row) for row in roads)


def format_budget_matrix(budgets: np.ndarray) -> str:
    """Render the budget matrix with one decimal place per cell."""
    return "\n".join(" ".join(f"{cell:.1f}" for cell in row) for row in budgets)


def render_cities(snapshot: NetworkSnapshot) -> str:
    if snapshot.is_empty:
        return "No cities recorded."
    return format_cities(snapshot.cities)


def render_roads(snapshot: NetworkSnapshot) -> str:
    """Render the city list and the road matrix (menu action 7)."""
    if snapshot.is_empty:
        return "No roads recorded."
    return (
        f"{format_cities(snapshot.cities)}\n\n"
        f"Roads Adjacency Matrix:\n{format_road_matrix(snapshot.roads)}"
    )


def render_dump(snapshot: NetworkSnapshot) -> str:
    """Render cities, road matrix and budget matrix (menu action 8)."""
    if snapshot.is_empty:
        return "No data recorded."
    return (
        f"{render_roads(snapshot)}\n\n"
        f"Budgets Adjacency Matrix:\n{format_budget_matrix(snapshot.budgets)}"
    )
