"""A* path planning on a costmap with a circular robot footprint."""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from roverkit.costmap import (
    LETHAL_OBSTACLE,
    Costmap,
    Point,
    point_key,
    polygon_for_circle,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannerParameters:
    """Tuning values for the planner."""

    goal_threshold: float = 0.015
    grid_size: float = 0.01
    collision_radius: float = 0.08

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError("grid_size must be positive")
        if self.collision_radius < 0:
            raise ValueError("collision_radius must not be negative")


@dataclass(frozen=True, order=True)
class FrontierEntry:
    """A candidate path and its estimated total cost; ordered by cost."""

    cost: float
    path: tuple[Point, ...] = field(compare=False)


class AStarPathPlanner:
    """Plans collision-free paths over a regular grid of positions."""

    def __init__(self, costmap: Costmap, parameters: PlannerParameters | None = None) -> None:
        self._costmap = costmap
        self._params = parameters if parameters is not None else PlannerParameters()
        self._goal: Point = (0.0, 0.0)
        self._expanded: dict[tuple[int, int], Point] = {}

    def plan(self, start: Point, goal: Point) -> list[Point]:
        """Path from ``start`` to within the goal threshold of ``goal``.

        Returns an empty list when no path exists or either end is in collision.
        """
        start = (float(start[0]), float(start[1]))
        goal = (float(goal[0]), float(goal[1]))

        if self.is_point_in_collision(goal):
            logger.error("Provided goal position would cause a collision")
            return []
        if self.is_point_in_collision(start):
            logger.error(
                "Starting position (%f, %f) is currently in a collision", start[0], start[1]
            )
            return []

        self._expanded = {}
        self._goal = goal
        frontier: list[tuple[FrontierEntry, int]] = []
        counter = itertools.count()
        heapq.heappush(frontier, (FrontierEntry(self._heuristic(start), (start,)), next(counter)))

        while frontier:
            entry, _ = heapq.heappop(frontier)
            last = entry.path[-1]
            key = point_key(last)
            if key in self._expanded:
                continue
            self._expanded[key] = last
            if self._is_goal(last):
                return list(entry.path)
            for neighbor in self._adjacent_points(last):
                new_cost = (
                    entry.cost
                    - self._heuristic(last)
                    + self._step_cost(last, neighbor)
                    + self._heuristic(neighbor)
                )
                heapq.heappush(
                    frontier, (FrontierEntry(new_cost, entry.path + (neighbor,)), next(counter))
                )

        logger.error("No path found after exhausting search space.")
        return []

    def expanded(self) -> tuple[Point, ...]:
        """Points expanded by the most recent search, in expansion order."""
        return tuple(self._expanded.values())

    def is_point_in_collision(self, point: Point) -> bool:
        """Whether the robot footprint at ``point`` touches a lethal cell."""
        costmap = self._costmap
        polygon = polygon_for_circle(costmap, point, self._params.collision_radius)
        return any(
            costmap.in_bounds(mx, my) and costmap.cost(mx, my) == LETHAL_OBSTACLE
            for mx, my in costmap.convex_fill_cells(polygon)
        )

    def _offsets(self) -> Iterator[float]:
        grid = self._params.grid_size
        delta = -grid
        while delta <= grid:
            yield delta
            delta += grid

    def _adjacent_points(self, point: Point) -> list[Point]:
        neighbors = []
        for dx in self._offsets():
            for dy in self._offsets():
                if abs(dx) < 1e-4 and abs(dy) < 1e-4:
                    continue
                neighbor = (point[0] + dx, point[1] + dy)
                if not self.is_point_in_collision(neighbor):
                    neighbors.append(neighbor)
        return neighbors

    def _heuristic(self, point: Point) -> float:
        return math.hypot(point[0] - self._goal[0], point[1] - self._goal[1])

    @staticmethod
    def _step_cost(point: Point, following: Point) -> float:
        return math.hypot(following[0] - point[0], following[1] - point[1])

    def _is_goal(self, point: Point) -> bool:
        return self._heuristic(point) < self._params.goal_threshold