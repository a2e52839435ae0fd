import math

import pytest

from roverkit.astar import AStarPathPlanner, FrontierEntry, PlannerParameters
from roverkit.costmap import LETHAL_OBSTACLE, Costmap, point_key

PARAMS = PlannerParameters(goal_threshold=0.015, grid_size=0.01, collision_radius=0.02)


def free_map():
    return Costmap(40, 40, 0.01, 0.0, 0.0)


def block(costmap, point):
    mx, my = costmap.world_to_map_no_bounds(*point)
    costmap.set_cost(mx, my, LETHAL_OBSTACLE)


def test_default_parameters():
    params = PlannerParameters()
    assert params.goal_threshold == 0.015
    assert params.grid_size == 0.01
    assert params.collision_radius == 0.08


def test_rejects_nonpositive_grid():
    with pytest.raises(ValueError):
        PlannerParameters(grid_size=0.0)


def test_frontier_entries_order_by_cost():
    high = FrontierEntry(2.0, ((0.0, 0.0),))
    low = FrontierEntry(1.0, ((5.0, 5.0),))
    assert sorted([high, low])[0] is low


def test_straight_plan():
    planner = AStarPathPlanner(free_map(), PARAMS)
    start, goal = (0.1, 0.1), (0.2, 0.1)
    path = planner.plan(start, goal)
    assert path[0] == start
    assert math.dist(path[-1], goal) < PARAMS.goal_threshold
    assert all(y == pytest.approx(start[1]) for _, y in path)
    for a, b in zip(path, path[1:]):
        assert b[0] > a[0]
        assert math.dist(a, b) == pytest.approx(PARAMS.grid_size)


def test_diagonal_plan():
    planner = AStarPathPlanner(free_map(), PARAMS)
    start, goal = (0.1, 0.1), (0.15, 0.15)
    path = planner.plan(start, goal)
    assert math.dist(path[-1], goal) < PARAMS.goal_threshold
    for a, b in zip(path, path[1:]):
        assert b[0] - a[0] == pytest.approx(PARAMS.grid_size)
        assert b[1] - a[1] == pytest.approx(PARAMS.grid_size)


def test_goal_in_collision():
    costmap = free_map()
    goal = (0.3, 0.3)
    block(costmap, goal)
    planner = AStarPathPlanner(costmap, PARAMS)
    assert planner.plan((0.1, 0.1), goal) == []
    assert planner.expanded() == ()


def test_start_in_collision():
    costmap = free_map()
    start = (0.1, 0.1)
    block(costmap, start)
    planner = AStarPathPlanner(costmap, PARAMS)
    assert planner.plan(start, (0.3, 0.3)) == []


def test_is_point_in_collision():
    costmap = free_map()
    block(costmap, (0.2, 0.2))
    planner = AStarPathPlanner(costmap, PARAMS)
    assert planner.is_point_in_collision((0.2, 0.2))
    assert planner.is_point_in_collision((0.21, 0.2))
    assert not planner.is_point_in_collision((0.3, 0.3))


def test_plan_around_wall():
    costmap = free_map()
    for my in range(5, 16):
        costmap.set_cost(15, my, LETHAL_OBSTACLE)
    planner = AStarPathPlanner(costmap, PARAMS)
    start, goal = (0.1, 0.1), (0.2, 0.1)
    path = planner.plan(start, goal)
    assert path
    assert math.dist(path[-1], goal) < PARAMS.goal_threshold
    assert not any(planner.is_point_in_collision(p) for p in path)
    assert any(y < 0.05 or y > 0.16 for _, y in path)


def test_expanded_records_search():
    planner = AStarPathPlanner(free_map(), PARAMS)
    path = planner.plan((0.1, 0.1), (0.2, 0.1))
    keys = {point_key(p) for p in planner.expanded()}
    assert point_key(path[0]) in keys
    assert point_key(path[-1]) in keys


def test_replanning_clears_expanded():
    planner = AStarPathPlanner(free_map(), PARAMS)
    planner.plan((0.05, 0.05), (0.1, 0.05))
    planner.plan((0.3, 0.3), (0.35, 0.3))
    keys = {point_key(p) for p in planner.expanded()}
    assert point_key((0.3, 0.3)) in keys
    assert point_key((0.05, 0.05)) not in keys


def test_plan_outside_map_is_free():
    planner = AStarPathPlanner(free_map(), PARAMS)
    goal = (-0.45, -0.5)
    path = planner.plan((-0.5, -0.5), goal)
    assert math.dist(path[-1], goal) < PARAMS.goal_threshold