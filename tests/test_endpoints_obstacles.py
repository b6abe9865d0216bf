import random

import pytest

from maze import (
    ConfigError,
    Grid,
    InvariantError,
    assign_weights,
    clear_obstacles,
    clear_weights,
    endpoint_candidates,
    generate,
    pick_endpoints,
    place_obstacles,
)
from maze.obstacles import enumerate_paths

from conftest import corner_to_corner


def test_endpoints_are_distinct_corners(grid):
    corners = set(endpoint_candidates(grid))
    for seed in range(20):
        start, end = pick_endpoints(grid, random.Random(seed))
        assert start != end
        assert start in corners and end in corners
        assert not grid.cells[start].blocked and not grid.cells[end].blocked


def test_center_candidate_optional():
    g = Grid(5, 5)
    assert g.index(2, 2) not in endpoint_candidates(g)
    assert g.index(2, 2) in endpoint_candidates(g, include_center=True)


def test_candidates_deduplicated_on_tiny_grid():
    g = Grid(2, 2)
    assert sorted(endpoint_candidates(g, include_center=True)) == [0, 1, 2, 3]


def test_endpoint_avoids_blocked_then_unblocks(grid):
    corners = endpoint_candidates(grid)
    for c in corners:
        grid.cells[c].blocked = True
    start, end = pick_endpoints(grid, random.Random(0))
    assert not grid.cells[start].blocked
    assert not grid.cells[end].blocked


def test_enumerate_paths_tree_has_single_path(grid):
    start, end = corner_to_corner(grid)
    paths, truncated = enumerate_paths(grid, start, end)
    assert len(paths) == 1
    assert not truncated
    assert paths[0][0] == start and paths[0][-1] == end


def test_enumerate_paths_respects_bounds():
    g = Grid(6, 6)
    for idx in range(g.size):
        for d, nbr in g.neighbours(idx):
            g.remove_wall_pair(idx, nbr, d)
    paths, truncated = enumerate_paths(g, 0, g.size - 1, max_paths=50)
    assert truncated
    assert len(paths) == 50


def test_safe_branch_keeps_endpoints_connected(rng):
    for seed in range(5):
        g = Grid(8, 8)
        generate(g, "backtracker", random.Random(seed))
        start, end = corner_to_corner(g)
        report = place_obstacles(g, start, end, 0.5, random.Random(seed), unsolvable_chance=0.0)
        assert report.strategy == "safe"
        assert report.blocked_count > 0
        assert g.is_connected(start, end)
        assert not g.cells[start].blocked and not g.cells[end].blocked


def test_choke_branch_cuts_single_path(grid):
    start, end = corner_to_corner(grid)
    report = place_obstacles(grid, start, end, 0.2, random.Random(1), unsolvable_chance=1.0)
    assert report.strategy == "choke"
    assert report.blocked_count > 0
    assert start not in report.blocked_cells and end not in report.blocked_cells
    # a spanning tree has one path, so every interior cell is a choke point
    assert not grid.is_connected(start, end)


def test_place_obstacles_validates_arguments(grid, rng):
    with pytest.raises(ConfigError):
        place_obstacles(grid, 0, 5, 1.5, rng)
    with pytest.raises(ConfigError):
        place_obstacles(grid, 0, 5, 0.2, rng, unsolvable_chance=-0.1)
    with pytest.raises(InvariantError):
        place_obstacles(grid, 3, 3, 0.2, rng)


def test_clear_obstacles(grid, rng):
    start, end = corner_to_corner(grid)
    place_obstacles(grid, start, end, 0.5, rng, unsolvable_chance=0.0)
    clear_obstacles(grid)
    assert not any(c.blocked for c in grid.cells)


def test_weights_in_range_with_unit_endpoints(grid, rng):
    start, end = corner_to_corner(grid)
    assign_weights(grid, start, end, rng, weight_range=(1, 9))
    assert all(1 <= c.weight <= 9 for c in grid.cells)
    assert grid.cells[start].weight == 1 and grid.cells[end].weight == 1
    assert len({c.weight for c in grid.cells}) > 1
    clear_weights(grid)
    assert all(c.weight == 1 for c in grid.cells)


def test_invalid_weight_range(grid, rng):
    with pytest.raises(ConfigError):
        assign_weights(grid, 0, 1, rng, weight_range=(0, 5))
    with pytest.raises(ConfigError):
        assign_weights(grid, 0, 1, rng, weight_range=(5, 2))
