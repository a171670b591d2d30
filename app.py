from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request

from game import (
    DRAGON_COLORS,
    EngineConfig,
    GameState,
    auto_solve,
    auto_solve_moves,
    can_collect_dragons,
    collect_dragons,
    compute_undo_state,
    initial_state,
    json_to_state,
    move_card,
    new_game,
    pause_game,
    restart_game,
    resume_game,
    state_to_json,
    toggle_dev_mode,
    trigger_auto_move,
    undo,
)

logger = logging.getLogger(__name__)

CONFIG = EngineConfig.from_env()

app = Flask(__name__)


def _flag(body: Dict[str, Any], key: str, default: bool) -> bool:
    value = body.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value


def _config_from(body: Dict[str, Any]) -> EngineConfig:
    """Request flags override the environment defaults; the engine never stores them."""
    return EngineConfig(
        is_undo_enabled=_flag(body, "undoEnabled", CONFIG.is_undo_enabled),
        no_auto_move_first_move=_flag(body, "noAutoMoveFirstMove", CONFIG.no_auto_move_first_move),
        max_deal_attempts=CONFIG.max_deal_attempts,
        dev_mode=_flag(body, "devMode", CONFIG.dev_mode),
    )


def _payload(before: Optional[GameState], after: GameState, cfg: EngineConfig) -> Dict[str, Any]:
    return {
        "ok": True,
        "changed": after is not before,
        "state": state_to_json(after),
        "historyLength": len(after.history),
        "canUndo": compute_undo_state(after, cfg) is not None,
        "wandAvailable": after.can_mutate and auto_solve_moves(after) is not None,
        "collectable": {c: can_collect_dragons(after, c) for c in DRAGON_COLORS},
    }


def _bad_request(message: str) -> Any:
    return jsonify({"ok": False, "error": message}), 400


def _command(fn: Callable[[GameState, Dict[str, Any], EngineConfig], GameState]) -> Any:
    body = request.get_json(force=True, silent=True) or {}
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return _bad_request("state required")
    try:
        state = json_to_state(s_in)
        cfg = _config_from(body)
        after = fn(state, body, cfg)
    except ValueError as e:
        logger.debug("rejected request: %s", e)
        return _bad_request(str(e))
    return jsonify(_payload(state, after, cfg))


@app.get("/")
def index() -> Any:
    return jsonify({"ok": True, "name": "shenzhen-solitaire", "endpoints": sorted(
        str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/api/")
    )})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed", None)
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        return _bad_request("seed must be an integer")
    prev = body.get("state")
    try:
        cfg = _config_from(body)
        skip = _flag(body, "skipAutoMove", False)
        base = json_to_state(prev) if isinstance(prev, dict) else initial_state(dev_mode=cfg.dev_mode)
    except ValueError as e:
        logger.debug("rejected request: %s", e)
        return _bad_request(str(e))
    state = new_game(base, cfg, seed=seed, skip_auto_move=skip)
    return jsonify(_payload(base if isinstance(prev, dict) else None, state, cfg))


@app.post("/api/restart")
def api_restart() -> Any:
    return _command(lambda s, body, cfg: restart_game(s))


@app.post("/api/move")
def api_move() -> Any:
    def run(s: GameState, body: Dict[str, Any], cfg: EngineConfig) -> GameState:
        return move_card(s, str(body.get("card", "")), str(body.get("target", "")),
                         skip_auto_move=_flag(body, "skipAutoMove", False))
    return _command(run)


@app.post("/api/auto")
def api_auto() -> Any:
    return _command(lambda s, body, cfg: trigger_auto_move(s))


@app.post("/api/collect")
def api_collect() -> Any:
    return _command(lambda s, body, cfg: collect_dragons(s, str(body.get("color", "")).upper()))


@app.post("/api/wand")
def api_wand() -> Any:
    return _command(lambda s, body, cfg: auto_solve(s))


@app.post("/api/undo")
def api_undo() -> Any:
    return _command(lambda s, body, cfg: undo(s, cfg))


@app.post("/api/pause")
def api_pause() -> Any:
    return _command(lambda s, body, cfg: pause_game(s))


@app.post("/api/resume")
def api_resume() -> Any:
    return _command(lambda s, body, cfg: resume_game(s))


@app.post("/api/devmode")
def api_devmode() -> Any:
    return _command(lambda s, body, cfg: toggle_dev_mode(s))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
