from __future__ import annotations

import logging
import os
import threading
import uuid
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Direction,
    TileBoard,
    TileBoardError,
    new_board,
)

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = int(os.getenv("TILEBOARD_WIDTH", "4"))
DEFAULT_HEIGHT = int(os.getenv("TILEBOARD_HEIGHT", "4"))
MAX_BOARDS = int(os.getenv("TILEBOARD_MAX_BOARDS", "256"))
MAX_SIDE = 16
INITIAL_TILES = 2

app = Flask(__name__)

# In-memory boards keyed by id; oldest evicted past MAX_BOARDS
_boards: Dict[str, TileBoard] = {}
_lock = threading.RLock()


def state_to_json(board: TileBoard) -> Dict[str, Any]:
    return {
        "width": board.width,
        "height": board.height,
        "grid": [list(row) for row in board.values()],
        "ranks": [list(row) for row in board.snapshot()],
        "score": board.score,
        "gameOver": board.game_over,
        "settling": board.settling,
    }


def _error(message: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": message}), status


def _json_body() -> Optional[Dict[str, Any]]:
    """Request JSON as a dict; None when the body is valid JSON but not an object."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _register(board: TileBoard) -> str:
    board_id = uuid.uuid4().hex
    with _lock:
        while len(_boards) >= MAX_BOARDS:
            oldest = next(iter(_boards))
            del _boards[oldest]
            logger.info("evicted board %s", oldest)
        _boards[board_id] = board
    return board_id


def _lookup(body: Dict[str, Any]) -> Optional[TileBoard]:
    board_id = body.get("id")
    if not isinstance(board_id, str):
        return None
    with _lock:
        return _boards.get(board_id)


def _size_arg(body: Dict[str, Any], key: str, default: int) -> int:
    value = int(body.get(key, default))
    if not 1 <= value <= MAX_SIDE:
        raise ValueError(f"{key} must be between 1 and {MAX_SIDE}")
    return value


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    try:
        width = _size_arg(body, "width", DEFAULT_WIDTH)
        height = _size_arg(body, "height", DEFAULT_HEIGHT)
        seed = body.get("seed", None)
        if seed is not None:
            seed = int(seed)
    except (TypeError, ValueError) as e:
        return _error(f"bad board settings: {e}")

    board = new_board(width=width, height=height, seed=seed)
    for _ in range(min(INITIAL_TILES, board.capacity)):
        board.spawn_initial_tile()
    board_id = _register(board)
    return jsonify({"ok": True, "id": board_id, "state": state_to_json(board)})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    board = _lookup(body)
    if board is None:
        return _error("unknown board id", 404)
    try:
        direction = Direction.parse(body.get("direction", ""))
    except ValueError as e:
        return _error(str(e))
    try:
        with _lock:
            outcome = board.move(direction)
            state = state_to_json(board)
    except TileBoardError as e:
        return _error(str(e), 409)
    return jsonify({"ok": True, "outcome": outcome.to_json(), "state": state})


@app.post("/api/settle")
def api_settle() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    board = _lookup(body)
    if board is None:
        return _error("unknown board id", 404)
    try:
        with _lock:
            outcome = board.settle()
            state = state_to_json(board)
    except TileBoardError as e:
        return _error(str(e), 409)
    return jsonify({"ok": True, "outcome": outcome.to_json(), "state": state})


@app.post("/api/state")
def api_state() -> Any:
    body = _json_body()
    if body is None:
        return _error("request body must be a JSON object")
    board = _lookup(body)
    if board is None:
        return _error("unknown board id", 404)
    with _lock:
        state = state_to_json(board)
    return jsonify({"ok": True, "state": state})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("TILEBOARD_LOG_LEVEL", "WARNING").upper())
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
