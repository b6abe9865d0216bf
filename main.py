"""
main.py — Maze Runner Flask API
================================
Thin JSON surface over MazeSession.  The renderer (out of this repo)
polls /api/state and /api/playback and issues the commands below.

Routes:
  GET  /api/state                  – session snapshot
  GET  /api/maze                   – grid cells (walls, blocked, weight)
  GET  /api/playback               – revealed success / failure segments
  GET  /api/algorithms             – generator + solver registries
  POST /api/config                 – change config (atomic)
  POST /api/maze/regenerate        – new maze (optional config changes)
  POST /api/maze/endpoints         – new start / end
  POST /api/maze/obstacles         – random obstacles  {density?}
  POST /api/maze/obstacles/clear   – remove obstacles
  POST /api/maze/weights           – random weights
  POST /api/maze/weights/clear     – unit weights
  POST /api/solve/start            – solve + start playback  {solver?}
  POST /api/solve/pause            – freeze cursor
  POST /api/solve/resume           – continue
  POST /api/solve/step             – reveal one event
  POST /api/solve/tick             – advance by elapsed time
  POST /api/solve/reset            – discard run
  POST /api/solve/clear            – clear drawn segments

State management:
  One MazeSession per browser session, kept in process memory and keyed
  by a random id stored in the Flask session cookie.
"""

import logging
import os
import secrets
import sys
from typing import Dict

from flask import Flask, jsonify, request, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from maze import ConfigError, GENERATORS
from solvers import list_solvers
from engine import MazeConfig, MazeSession, SPEED_PRESETS


logger = logging.getLogger("maze_runner")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
CONSOLE_HANDLER = "maze_console"


def configure_logging(level: str = None) -> None:
    """Console logging; level from MAZE_LOG_LEVEL (default INFO)."""
    level = (level or os.getenv("MAZE_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    if not any(h.get_name() == CONSOLE_HANDLER for h in root.handlers):
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER)
        console.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(console)


app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

SESSIONS: Dict[str, MazeSession] = {}


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_maze_session() -> MazeSession:
    """Return this browser's MazeSession, creating one on first use."""
    sid = session.get("sid")
    if sid is None or sid not in SESSIONS:
        sid = sid or secrets.token_hex(16)
        session["sid"] = sid
        SESSIONS[sid] = MazeSession(app.config.get("MAZE_CONFIG") or MazeConfig.from_env())
        logger.info("New maze session %s", sid[:8])
    return SESSIONS[sid]


def payload() -> dict:
    return request.get_json(silent=True) or {}


@app.errorhandler(ConfigError)
def handle_config_error(exc: ConfigError):
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------
@app.route("/api/state")
def api_state():
    return jsonify(get_maze_session().snapshot())


@app.route("/api/maze")
def api_maze():
    ms = get_maze_session()
    return jsonify({
        "cols":  ms.grid.cols,
        "rows":  ms.grid.rows,
        "start": ms.grid.coords(ms.start),
        "end":   ms.grid.coords(ms.end),
        "cells": ms.cells(),
    })


@app.route("/api/playback")
def api_playback():
    ms = get_maze_session()
    real, scaled = ms.elapsed()
    return jsonify({
        "state":    ms.state.value,
        "cursor":   ms.playback.cursor,
        "total":    len(ms.playback.events),
        "remaining": ms.playback.remaining,
        "segments": ms.segments(),
        "elapsed":  {"real": real, "scaled": scaled},
    })


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "generators": [
            {"key": g.key, "label": g.label, "description": g.description}
            for g in GENERATORS.values()
        ],
        "solvers": [
            {
                "key": s.key, "label": s.label, "description": s.description,
                "uses_weights": s.uses_weights, "complexity": s.complexity_time,
            }
            for s in list_solvers()
        ],
        "speed_presets": SPEED_PRESETS,
    })


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
@app.route("/api/config", methods=["POST"])
def api_config():
    config = get_maze_session().configure(**payload())
    return jsonify({"config": config.to_dict()})


# ---------------------------------------------------------------------------
# API: Maze Commands
# ---------------------------------------------------------------------------
@app.route("/api/maze/regenerate", methods=["POST"])
def api_maze_regenerate():
    ms = get_maze_session()
    ms.regenerate(**payload())
    return jsonify(ms.snapshot())


@app.route("/api/maze/endpoints", methods=["POST"])
def api_maze_endpoints():
    ms = get_maze_session()
    start, end = ms.pick_new_endpoints()
    return jsonify({"start": ms.grid.coords(start), "end": ms.grid.coords(end)})


@app.route("/api/maze/obstacles", methods=["POST"])
def api_maze_obstacles():
    ms = get_maze_session()
    report = ms.randomize_obstacles(payload().get("density"))
    return jsonify({
        "strategy":    report.strategy,
        "paths_found": report.paths_found,
        "truncated":   report.truncated,
        "blocked":     report.blocked_count,
    })


@app.route("/api/maze/obstacles/clear", methods=["POST"])
def api_maze_obstacles_clear():
    get_maze_session().clear_obstacles()
    return jsonify({"ok": True})


@app.route("/api/maze/weights", methods=["POST"])
def api_maze_weights():
    ms = get_maze_session()
    ms.randomize_weights()
    return jsonify({"weight_range": list(ms.config.weight_range)})


@app.route("/api/maze/weights/clear", methods=["POST"])
def api_maze_weights_clear():
    get_maze_session().clear_weights()
    return jsonify({"ok": True})


# ---------------------------------------------------------------------------
# API: Solve & Playback
# ---------------------------------------------------------------------------
@app.route("/api/solve/start", methods=["POST"])
def api_solve_start():
    ms = get_maze_session()
    result = ms.start_solve(payload().get("solver"))
    return jsonify({
        "state":        ms.state.value,
        "total_events": result.examined,
        "path_found":   result.found,
        "path_length":  len(result.path),
        "path_cost":    result.cost,
    })


@app.route("/api/solve/pause", methods=["POST"])
def api_solve_pause():
    ms = get_maze_session()
    return jsonify({"paused": ms.pause(), "state": ms.state.value})


@app.route("/api/solve/resume", methods=["POST"])
def api_solve_resume():
    ms = get_maze_session()
    return jsonify({"resumed": ms.resume(), "state": ms.state.value})


@app.route("/api/solve/step", methods=["POST"])
def api_solve_step():
    ms = get_maze_session()
    stepped = ms.step()
    return jsonify({"stepped": stepped, "cursor": ms.playback.cursor, "state": ms.state.value})


@app.route("/api/solve/tick", methods=["POST"])
def api_solve_tick():
    ms = get_maze_session()
    consumed = ms.tick()
    return jsonify({"consumed": consumed, "cursor": ms.playback.cursor, "state": ms.state.value})


@app.route("/api/solve/reset", methods=["POST"])
def api_solve_reset():
    ms = get_maze_session()
    ms.reset_run()
    return jsonify({"state": ms.state.value})


@app.route("/api/solve/clear", methods=["POST"])
def api_solve_clear():
    ms = get_maze_session()
    ms.clear_visualization()
    return jsonify({"state": ms.state.value})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    configure_logging()
    logger.info("Maze Runner API starting on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
