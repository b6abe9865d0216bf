from collections import deque
import random

import pytest

from maze import (
    ConfigError,
    Direction,
    Grid,
    InvariantError,
    add_complexity,
    assign_weights,
    generate,
    place_obstacles,
)
from solvers import SOLVERS, get_solver, mark_path_events, solve
from solvers.event import Event

from conftest import corner_to_corner


def loopy_grid(seed, size=(10, 10)):
    g = Grid(*size)
    rng = random.Random(seed)
    generate(g, "backtracker", rng)
    for _ in range(5):
        add_complexity(g, rng)
    return g, rng


def bfs_distance(g, start, end):
    dist = {start: 0}
    q = deque([start])
    while q:
        u = q.popleft()
        for _, v in g.passable(u):
            if v not in dist:
                dist[v] = dist[u] + 1
                q.append(v)
    return dist.get(end)


def assert_contiguous(g, path, start, end):
    assert path[0][0] == start
    assert path[-1][1] == end
    for (a, b), (c, _) in zip(path, path[1:]):
        assert b == c
    for a, b in path:
        assert b in {n for _, n in g.passable(a)}


@pytest.mark.parametrize("key", sorted(SOLVERS))
def test_every_solver_finds_contiguous_path(key):
    for seed in range(4):
        g, _ = loopy_grid(seed)
        start, end = corner_to_corner(g)
        result = solve(g, key, start, end)
        assert result.found
        assert_contiguous(g, result.path, start, end)
        assert result.path_cells[0] == start and result.path_cells[-1] == end


def test_bfs_is_shortest_by_steps():
    for seed in range(5):
        g, _ = loopy_grid(seed)
        start, end = corner_to_corner(g)
        bfs = solve(g, "bfs", start, end)
        dfs = solve(g, "dfs", start, end)
        assert len(bfs.path) == bfs_distance(g, start, end)
        assert len(bfs.path) <= len(dfs.path)


def test_dijkstra_and_astar_agree_on_weighted_cost():
    for seed in range(5):
        g, rng = loopy_grid(seed, size=(12, 9))
        start, end = corner_to_corner(g)
        assign_weights(g, start, end, rng, weight_range=(1, 9))
        d = solve(g, "dijkstra", start, end, use_weights=True)
        a = solve(g, "astar", start, end, use_weights=True)
        assert d.cost == a.cost
        assert d.cost == sum(g.cells[v].weight for _, v in d.path)
        # never more expensive than the step-shortest route
        b = solve(g, "bfs", start, end)
        assert d.cost <= sum(g.cells[v].weight for _, v in b.path)


def test_unweighted_dijkstra_matches_bfs_length():
    g, rng = loopy_grid(11)
    start, end = corner_to_corner(g)
    assign_weights(g, start, end, rng)
    d = solve(g, "dijkstra", start, end, use_weights=False)
    assert d.cost == len(d.path) == bfs_distance(g, start, end)


@pytest.mark.parametrize("key", sorted(SOLVERS))
def test_unsolvable_grid_yields_empty_path(key, grid):
    start, end = corner_to_corner(grid)
    place_obstacles(grid, start, end, 0.2, random.Random(1), unsolvable_chance=1.0)
    assert not grid.is_connected(start, end)

    result = solve(grid, key, start, end)
    assert result.path == []
    assert not result.found
    if key != "dfs":
        assert all(not e.accepted for e in result.events)
    # every event stays inside the start component
    reach = grid.reachable_from(start)
    assert all(e.to_cell in reach for e in result.events)


def test_dfs_backtrack_pairs_with_descent(grid):
    start, end = corner_to_corner(grid)
    result = solve(grid, "dfs", start, end)
    seen_accept = set()
    rejects = 0
    for e in result.events:
        if e.accepted:
            seen_accept.add(e.edge)
        else:
            assert e.edge in seen_accept, "backtrack emitted before its descent"
            rejects += 1
    accepts = sum(1 for e in result.events if e.accepted)
    assert accepts == rejects + len(result.path)


def test_bfs_events_flagged_only_on_path(grid):
    start, end = corner_to_corner(grid)
    result = solve(grid, "bfs", start, end)
    accepted = [e.edge for e in result.events if e.accepted]
    assert sorted(accepted) == sorted(result.path)


def test_blocked_cells_never_entered():
    g, _ = loopy_grid(3)
    start, end = corner_to_corner(g)
    place_obstacles(g, start, end, 0.4, random.Random(3), unsolvable_chance=0.0)
    for key in SOLVERS:
        result = solve(g, key, start, end)
        assert all(not g.cells[e.to_cell].blocked for e in result.events)


def test_registry_and_dispatch_errors(grid):
    assert get_solver("nope") is None
    assert get_solver("dfs").retracts
    assert get_solver("astar").uses_weights
    with pytest.raises(ConfigError):
        solve(grid, "nope", 0, 1)
    with pytest.raises(InvariantError):
        solve(grid, "bfs", 4, 4)


def test_mark_path_events_returns_new_tuple():
    events = (Event(0, 1), Event(1, 2), Event(1, 5))
    marked = mark_path_events(events, [(0, 1), (1, 2)])
    assert [e.accepted for e in marked] == [True, True, False]
    assert [e.accepted for e in events] == [False, False, False]


def test_solver_on_open_corridor():
    g = Grid(4, 2)
    for x in range(3):
        g.remove_wall_pair(x, x + 1, Direction.EAST)
    for key in SOLVERS:
        result = solve(g, key, 0, 3)
        assert result.path == [(0, 1), (1, 2), (2, 3)]
        assert result.cost == 3.0


@pytest.mark.parametrize("generator", ["backtracker", "prim", "kruskal"])
def test_bfs_on_clear_5x5_matches_reference_distance(generator):
    for seed in range(3):
        g = Grid(5, 5)
        generate(g, generator, random.Random(seed))
        start, end = g.index(0, 0), g.index(4, 4)
        result = solve(g, "bfs", start, end)
        assert result.found
        assert_contiguous(g, result.path, start, end)
        assert len(result.path) == bfs_distance(g, start, end)
        # at least the Manhattan distance
        assert len(result.path) >= 8
