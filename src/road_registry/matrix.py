"""Symmetric road and budget matrices over city slots.

Both matrices live in a square numpy arena whose capacity doubles as cities are
added (never beyond the city ceiling). Only the leading ``size × size`` block is
live; cells outside it are always zero, so growing the live block exposes a new
row and column of zeros without copying anything.
"""

from __future__ import annotations

import numpy as np

_INITIAL_CAPACITY = 8


class AdjacencyMatrices:
    """Road-existence and budget matrices kept in step with the city list.

    Attributes:
        size: Number of live city slots (N).
        max_size: Upper bound on ``size``; the arena never grows past it.

    Examples:
        >>> matrices = AdjacencyMatrices(max_size=500)
        >>> matrices.grow(3)
        >>> matrices.connect(0, 2)
        >>> matrices.has_road(2, 0)
        True
        >>> matrices.roads.shape
        (3, 3)
    """

    def __init__(self, max_size: int):
        self.max_size = max_size
        self.size = 0
        capacity = min(_INITIAL_CAPACITY, max_size)
        self._roads = np.zeros((capacity, capacity), dtype=np.bool_)
        self._budgets = np.zeros((capacity, capacity), dtype=np.float64)

    @property
    def capacity(self) -> int:
        return self._roads.shape[0]

    def _reserve(self, needed: int) -> None:
        if needed <= self.capacity:
            return
        capacity = self.capacity
        while capacity < needed:
            capacity *= 2
        capacity = min(capacity, self.max_size)
        roads = np.zeros((capacity, capacity), dtype=np.bool_)
        budgets = np.zeros((capacity, capacity), dtype=np.float64)
        n = self.size
        roads[:n, :n] = self._roads[:n, :n]
        budgets[:n, :n] = self._budgets[:n, :n]
        self._roads = roads
        self._budgets = budgets

    def grow(self, count: int = 1) -> None:
        """Add ``count`` city slots with no roads and no budgets."""
        new_size = self.size + count
        if count < 0 or new_size > self.max_size:
            raise ValueError(
                f"Cannot grow matrices from {self.size} to {new_size} slots "
                f"(limit {self.max_size})."
            )
        self._reserve(new_size)
        self.size = new_size

    def _check_slot(self, i: int) -> None:
        if not 0 <= i < self.size:
            raise IndexError(f"City slot {i} out of range for {self.size} cities.")

    def has_road(self, i: int, j: int) -> bool:
        self._check_slot(i)
        self._check_slot(j)
        return bool(self._roads[i, j])

    def connect(self, i: int, j: int) -> None:
        """Mark a road between slots ``i`` and ``j`` in both directions."""
        self._check_slot(i)
        self._check_slot(j)
        if i == j:
            raise ValueError(f"Self-loop on slot {i} is not allowed.")
        self._roads[i, j] = self._roads[j, i] = True

    def budget(self, i: int, j: int) -> float:
        self._check_slot(i)
        self._check_slot(j)
        return float(self._budgets[i, j])

    def set_budget(self, i: int, j: int, amount: float) -> None:
        """Store ``amount`` for the road between ``i`` and ``j`` in both directions."""
        if not self.has_road(i, j):
            raise ValueError(f"No road between slots {i} and {j}.")
        self._budgets[i, j] = self._budgets[j, i] = amount

    @property
    def roads(self) -> np.ndarray:
        """Copy of the live N×N road matrix."""
        return self._roads[: self.size, : self.size].copy()

    @property
    def budgets(self) -> np.ndarray:
        """Copy of the live N×N budget matrix."""
        return self._budgets[: self.size, : self.size].copy()

    def edges(self) -> list[tuple[int, int]]:
        """Return (i, j) slot pairs with i < j for every road, in row-major order."""
        upper = np.triu(self._roads[: self.size, : self.size], k=1)
        return [(int(i), int(j)) for i, j in np.argwhere(upper)]
