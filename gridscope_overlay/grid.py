"""
Cost Grid Module
================

Numpy-backed 50x50 grid of small non-negative integers (0..255).

Design:
- uint8 storage, indexed [y, x]
- O(1) single-cell lookup
- Bounds checked on every access (fail fast)
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from gridscope_overlay.geometry.coords import GRID_SIZE


class CostGrid:
    """
    Mutable cost grid implementing the CostLookup protocol.

    Usage:
        grid = CostGrid()
        grid.set(10, 12, 5)
        grid.get(10, 12)   # 5
        grid.max_value()   # 5
    """

    def __init__(self, values: Optional[np.ndarray] = None):
        """
        Args:
            values: Optional (50, 50) array indexed [y, x]; copied
        """
        if values is None:
            self._bits = np.zeros((GRID_SIZE, GRID_SIZE), dtype=np.uint8)
            return

        values = np.asarray(values)
        if values.shape != (GRID_SIZE, GRID_SIZE):
            raise ValueError(
                f"values must have shape ({GRID_SIZE}, {GRID_SIZE}), got {values.shape}"
            )
        if not np.issubdtype(values.dtype, np.integer):
            raise ValueError(f"values must have an integer dtype, got {values.dtype}")
        if values.min() < 0 or values.max() > 255:
            raise ValueError("values must be in [0, 255]")
        self._bits = values.astype(np.uint8)

    @staticmethod
    def _check(x: int, y: int) -> None:
        if not (0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE):
            raise IndexError(f"cell ({x}, {y}) outside [0, {GRID_SIZE})")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self._bits[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        if int(value) != value or not 0 <= value <= 255:
            raise ValueError(f"value must be an integer in [0, 255], got {value}")
        self._bits[y, x] = value

    def max_value(self) -> int:
        return int(self._bits.max())

    @classmethod
    def from_cells(cls, cells: Iterable[Tuple[int, int, int]]) -> "CostGrid":
        """Build a grid from (x, y, value) triples."""
        grid = cls()
        for x, y, value in cells:
            grid.set(x, y, value)
        return grid
