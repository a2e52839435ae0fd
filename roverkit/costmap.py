"""Grid costmap and helpers for collision checking on it."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence

Point = tuple[float, float]
MapLocation = tuple[int, int]

FREE_SPACE = 0
LETHAL_OBSTACLE = 254
NO_INFORMATION = 255


class Costmap:
    """A rectangular grid of 8-bit costs anchored at a world origin."""

    def __init__(
        self,
        size_x: int,
        size_y: int,
        resolution: float,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> None:
        if size_x <= 0 or size_y <= 0:
            raise ValueError("costmap dimensions must be positive")
        if resolution <= 0:
            raise ValueError("costmap resolution must be positive")
        self.size_x = int(size_x)
        self.size_y = int(size_y)
        self.resolution = float(resolution)
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)
        self._costs = bytearray(self.size_x * self.size_y)

    def world_to_map_no_bounds(self, wx: float, wy: float) -> MapLocation:
        """Cell containing a world point, without checking the map bounds."""
        mx = int((wx - self.origin_x) / self.resolution)
        my = int((wy - self.origin_y) / self.resolution)
        return mx, my

    def in_bounds(self, mx: int, my: int) -> bool:
        return 0 <= mx < self.size_x and 0 <= my < self.size_y

    def _index(self, mx: int, my: int) -> int:
        if not self.in_bounds(mx, my):
            raise IndexError(f"cell ({mx}, {my}) is outside the costmap")
        return my * self.size_x + mx

    def cost(self, mx: int, my: int) -> int:
        return self._costs[self._index(mx, my)]

    def set_cost(self, mx: int, my: int, cost: int) -> None:
        if not 0 <= cost <= 255:
            raise ValueError("cost must lie in 0..255")
        self._costs[self._index(mx, my)] = cost

    def convex_fill_cells(self, polygon: Sequence[MapLocation]) -> list[MapLocation]:
        """All cells covered by a convex polygon given by its corner cells.

        Polygons with fewer than three corners cover nothing.
        """
        if len(polygon) < 3:
            return []
        columns: dict[int, tuple[int, int]] = {}
        closing = list(polygon[1:]) + [polygon[0]]
        for start, end in zip(polygon, closing):
            for x, y in _line_cells(start, end):
                low, high = columns.get(x, (y, y))
                columns[x] = (min(low, y), max(high, y))
        return [
            (x, y)
            for x in sorted(columns)
            for y in range(columns[x][0], columns[x][1] + 1)
        ]


def _line_cells(start: MapLocation, end: MapLocation) -> Iterator[MapLocation]:
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    while True:
        yield x0, y0
        if x0 == x1 and y0 == y1:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def polygon_for_circle(
    costmap: Costmap, center: Point, radius: float, resolution: int = 20
) -> list[MapLocation]:
    """Cells of a regular polygon with ``resolution`` corners approximating a circle."""
    if resolution < 1:
        raise ValueError("polygon resolution must be at least 1")
    step = (2 * math.pi) / resolution
    cx, cy = center
    polygon = []
    angle = 0.0
    for _ in range(resolution):
        wx = radius * math.cos(angle) + cx
        wy = radius * math.sin(angle) + cy
        angle += step
        polygon.append(costmap.world_to_map_no_bounds(wx, wy))
    return polygon


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def point_key(point: Point) -> tuple[int, int]:
    """Hashable key for a point, quantized to thousandths of a unit."""
    x, y = point
    return _round_half_away(x * 1000), _round_half_away(y * 1000)