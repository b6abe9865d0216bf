import pytest

from engine import MazeConfig, MazeSession, PlaybackState, Recorder, compare
from engine.playback import BASE_DELAY
from maze import ConfigError
from maze.generators import local_reach


def test_new_session_has_valid_maze(session):
    g = session.grid
    assert (g.cols, g.rows) == (8, 8)
    assert session.start != session.end
    g.check_wall_symmetry()
    assert len(g.reachable_from(session.start)) == g.size
    assert session.grid.cells[session.start].weight == 1
    assert session.grid.cells[session.end].weight == 1
    for idx in (session.start, session.end):
        assert local_reach(g, idx) >= 7


def test_same_seed_same_maze(clock):
    cfg = MazeConfig(cols=9, rows=7, seed=5, generator="prim")
    a = MazeSession(cfg, clock=clock)
    b = MazeSession(cfg, clock=clock)
    assert a.grid.wall_snapshot() == b.grid.wall_snapshot()
    assert (a.start, a.end) == (b.start, b.end)


def test_bad_config_leaves_session_unchanged(session):
    before = session.config
    snapshot = session.grid.wall_snapshot()
    for bad in ({"cols": 3}, {"speed": 0.0}, {"generator": "wilson"},
                {"solver": "bogo"}, {"obstacle_density": 0.9}, {"colour": "red"},
                {"max_weight": 1}, {"rows": "many"}):
        with pytest.raises(ConfigError):
            session.configure(**bad)
        assert session.config is before
    with pytest.raises(ConfigError):
        session.regenerate(cols=200)
    assert session.config is before
    assert session.grid.wall_snapshot() == snapshot


def test_regenerate_with_changes(session):
    session.regenerate(cols=12, rows=6, generator="kruskal")
    assert (session.grid.cols, session.grid.rows) == (12, 6)
    assert session.config.generator == "kruskal"
    session.grid.check_wall_symmetry()


def test_solve_and_play_to_completion(session, clock):
    result = session.start_solve("bfs")
    assert result.found
    assert session.state == PlaybackState.RUNNING
    session.tick(clock.advance(BASE_DELAY * (result.examined + 1)))
    assert session.state == PlaybackState.COMPLETE
    segments = session.segments()
    assert len(segments["success"]) == len(result.path)
    x1, y1, x2, y2 = segments["success"][0]
    assert (x1, y1) == tuple(c + 0.5 for c in session.grid.coords(session.start))
    assert session.metrics.path_length == len(result.path)
    assert session.metrics.events == result.examined


def test_regenerate_during_playback_resets_run(session, clock):
    session.start_solve("dfs")
    session.tick(clock.advance(BASE_DELAY * 2.5))
    assert session.playback.cursor == 2
    session.regenerate()
    assert session.state == PlaybackState.IDLE
    assert session.result is None
    assert session.playback.cursor == 0
    assert session.segments() == {"success": [], "failure": []}


@pytest.mark.parametrize("command", [
    "pick_new_endpoints", "randomize_obstacles", "clear_obstacles",
    "randomize_weights", "clear_weights",
])
def test_grid_mutations_reset_playback(session, command):
    session.start_solve("astar")
    getattr(session, command)()
    assert session.state == PlaybackState.IDLE
    assert session.playback.events == ()


def test_obstacles_keep_session_solvable(session):
    report = session.randomize_obstacles(0.4)
    assert report.strategy == "safe"
    assert session.config.obstacle_density == 0.4
    assert session.grid.is_connected(session.start, session.end)
    assert session.start_solve("dijkstra").found
    session.clear_obstacles()
    assert not any(c.blocked for c in session.grid.cells)


def test_weights_toggle(session):
    session.configure(use_weights=False)
    assert all(c.weight == 1 for c in session.grid.cells)
    with pytest.raises(ConfigError):
        session.randomize_weights()
    session.configure(use_weights=True, max_weight=9)
    session.randomize_weights()
    assert all(1 <= c.weight <= 9 for c in session.grid.cells)


def test_step_mode_and_pause(session, clock):
    session.configure(step_mode=True)
    session.start_solve("bfs")
    assert session.tick(clock.advance(1.0)) == 0
    assert session.step()
    assert session.playback.cursor == 1
    session.configure(step_mode=False)
    assert session.pause()
    assert session.tick(clock.advance(1.0)) == 0
    assert session.resume()
    assert session.tick(clock.advance(BASE_DELAY * 1.5)) == 1


def test_speed_change_applies_to_playback(session):
    session.configure(speed=2.5)
    assert session.playback.speed == 2.5


def test_snapshot_is_plain_data(session):
    session.start_solve("dfs")
    snap = session.snapshot()
    assert snap["state"] == "running"
    assert snap["total_events"] == len(session.playback.events)
    assert snap["config"]["cols"] == 8
    assert snap["metrics"]["algo_key"] == "dfs"
    assert isinstance(snap["path"], list)


def test_recorder_compare(session):
    g, s, e = session.grid, session.start, session.end
    left, right = Recorder(), Recorder()
    left.record(g, "dijkstra", s, e, use_weights=True)
    right.record(g, "astar", s, e, use_weights=True)
    cmp = compare(left, right)
    assert cmp.winner_cost == "tie"
    assert cmp.left.path_cost == cmp.right.path_cost
    assert cmp.winner_events in ("tie", "Dijkstra", "A*")


def test_from_env(monkeypatch):
    monkeypatch.setenv("MAZE_COLS", "15")
    monkeypatch.setenv("MAZE_SEED", "3")
    monkeypatch.setenv("MAZE_SOLVER", "astar")
    cfg = MazeConfig.from_env()
    assert cfg.cols == 15 and cfg.seed == 3 and cfg.solver == "astar"
    monkeypatch.setenv("MAZE_ROWS", "lots")
    with pytest.raises(ConfigError):
        MazeConfig.from_env()


@pytest.mark.parametrize("bad", [
    {"cols": 10.5}, {"rows": True}, {"max_weight": 4.0}, {"seed": 1.5},
    {"speed": "fast"}, {"obstacle_density": None}, {"use_weights": "yes"},
    {"step_mode": 1}, {"generator": 3},
])
def test_wrongly_typed_config_rejected(session, bad):
    before = session.config
    cells = len(session.grid.cells)
    with pytest.raises(ConfigError):
        session.configure(**bad)
    assert session.config is before
    session.regenerate()
    assert (session.grid.cols, session.grid.rows) == (8, 8)
    assert len(session.grid.cells) == cells


def test_integral_numbers_accepted_for_real_fields(session):
    cfg = session.configure(speed=2, obstacle_density=0, unsolvable_chance=0)
    assert cfg.speed == 2 and session.playback.speed == 2


def test_new_endpoints_stay_connected_after_obstacles(clock):
    disconnected = []
    for seed in range(10):
        cfg = MazeConfig(cols=10, rows=10, seed=seed, unsolvable_chance=0.0, obstacle_density=0.6)
        ms = MazeSession(cfg, clock=clock)
        ms.randomize_obstacles()
        for _ in range(3):
            ms.pick_new_endpoints()
            if not ms.grid.is_connected(ms.start, ms.end):
                disconnected.append(seed)
            assert not ms.grid.cells[ms.start].blocked
            assert not ms.grid.cells[ms.end].blocked
    assert not disconnected, f"seeds with cut-off endpoints: {sorted(set(disconnected))}"


def test_new_endpoints_without_obstacles_leave_grid_clear(session):
    session.pick_new_endpoints()
    assert session.last_obstacles is None
    assert not any(c.blocked for c in session.grid.cells)
