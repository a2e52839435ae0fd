"""Log-odds occupancy grid centred on the arena origin."""

from __future__ import annotations

import math


def to_log_odds(prob: float) -> float:
    """Log-odds of a probability strictly between 0 and 1."""
    if not 0.0 < prob < 1.0:
        raise ValueError("probability must lie strictly between 0 and 1")
    return math.log(prob / (1.0 - prob))


def from_log_odds(log_odds: float) -> float:
    """Probability for a log-odds value."""
    e = math.exp(-abs(log_odds))
    if log_odds >= 0:
        return 1.0 - e / (1.0 + e)
    return 1.0 - 1.0 / (1.0 + e)


class OccupancyMap:
    """Rectangular grid of log-odds occupancy values, centred on the world origin.

    Every cell starts at log-odds zero, an even chance of being occupied.
    """

    def __init__(
        self, width: float = 1.2192, height: float = 0.762, resolution: float = 0.01
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("map width and height must be positive")
        if resolution <= 0:
            raise ValueError("map resolution must be positive")
        self.resolution = float(resolution)
        self.origin_x = -width / 2.0
        self.origin_y = -height / 2.0
        self.width_cells = int(width / resolution)
        self.height_cells = int(height / resolution)
        if self.width_cells == 0 or self.height_cells == 0:
            raise ValueError("map must hold at least one cell in each direction")
        self.data: list[float] = [0.0] * (self.width_cells * self.height_cells)

    def is_location_in_bounds(self, x: float, y: float) -> bool:
        """Whether a world location lies on the grid."""
        return (
            self.origin_x <= x < self.origin_x + self.width_cells * self.resolution
            and self.origin_y <= y < self.origin_y + self.height_cells * self.resolution
        )

    def index_from_cell(self, cell_x: int, cell_y: int) -> int:
        """Row-major index of a cell in :attr:`data`."""
        if not 0 <= cell_x < self.width_cells:
            raise IndexError(f"cell x {cell_x} is outside the map")
        if not 0 <= cell_y < self.height_cells:
            raise IndexError(f"cell y {cell_y} is outside the map")
        return cell_x + cell_y * self.width_cells

    def occupancy_values(self) -> list[int]:
        """Occupancy percentages (0..100) of every cell, in row-major order."""
        return [int(from_log_odds(value) * 100) for value in self.data]