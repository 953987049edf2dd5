from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    GameEngine,
    Move,
    NimError,
    Player,
    Variant,
    WrongTurn,
    create_game,
    parse_rows,
)
from nim_core.config import Settings

log = logging.getLogger(__name__)

app = Flask(__name__)


class BadPayload(Exception):
    pass


# ---------- JSON <-> engine ----------

def _move_to_json(m: Optional[Move]) -> Optional[Dict[str, Any]]:
    return m.to_json() if m is not None else None


def _move_from_json(obj: Any) -> Optional[Move]:
    if not obj:
        return None
    if not isinstance(obj, dict):
        raise BadPayload("bad state: lastMove must be an object")
    return Move(row=int(obj["row"]) - 1, count=int(obj["count"]), player=Player.parse(obj["player"]))


def state_to_json(g: GameEngine) -> Dict[str, Any]:
    winner = g.winner()
    return {
        "rows": g.rows,
        "turn": g.turn.value,
        "variant": g.variant.value,
        "lastMove": _move_to_json(g.last_move),
        "over": g.is_over(),
        "winner": winner.value if winner is not None else None,
    }


def json_to_state(obj: Any) -> GameEngine:
    """Rebuilds an engine from a client-held state. Rows may be zero mid-game."""
    if not isinstance(obj, dict):
        raise BadPayload("state required")
    try:
        rows = [int(x) for x in obj["rows"]]
        turn = Player.parse(obj.get("turn", "human"))
        variant = Variant.parse(obj.get("variant", "standard"))
        last_move = _move_from_json(obj.get("lastMove"))
    except (KeyError, TypeError, ValueError) as e:
        raise BadPayload(f"bad state: {e}") from None
    if not rows or any(x < 0 for x in rows):
        raise BadPayload("bad state: rows must be a non-empty list of non-negative integers")
    if last_move is not None and not 0 <= last_move.row < len(rows):
        raise BadPayload(f"bad state: lastMove row {last_move.row + 1} out of range 1..{len(rows)}")
    return GameEngine(rows, turn=turn, variant=variant, last_move=last_move)


def _error(msg: str, status: int, kind: Optional[str] = None) -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": msg, "kind": kind}), status


@app.errorhandler(BadPayload)
def _bad_request(e: BadPayload) -> Any:
    return _error(str(e), 400)


@app.errorhandler(NimError)
def _nim_error(e: NimError) -> Any:
    status = 409 if isinstance(e, WrongTurn) else 400
    log.info("rejected request: %s (%s)", e.message, e.kind.value)
    return _error(e.message, status, e.kind.value)


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise BadPayload("request body must be a JSON object")
    return body


def _ok(g: GameEngine, **extra: Any) -> Any:
    payload: Dict[str, Any] = {"ok": True, "state": state_to_json(g)}
    payload.update(extra)
    return jsonify(payload)


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _body()
    try:
        variant = Variant.parse(body.get("variant", "standard"))
        opener = Player.parse(body.get("opener", "human"))
    except ValueError as e:
        raise BadPayload(str(e)) from None
    rows_in = body.get("rows")
    if not isinstance(rows_in, list):
        raise BadPayload("rows required")
    g = create_game(parse_rows(rows_in), opener=opener, variant=variant)
    if g.turn is Player.MACHINE:
        g.apply_machine_move()
    return _ok(g)


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    g = json_to_state(body.get("state"))
    move = body.get("move")
    if not isinstance(move, list) or len(move) != 2:
        raise BadPayload("move must be [row, count]")
    try:
        row, count = int(move[0]), int(move[1])
    except (TypeError, ValueError):
        raise BadPayload("move must be [row, count]") from None
    g.apply_human_move(row - 1, count)
    return _ok(g)


@app.post("/api/ai")
def api_ai() -> Any:
    body = _body()
    g = json_to_state(body.get("state"))
    m = g.apply_machine_move()
    return _ok(g, description=m.describe())


@app.post("/api/render")
def api_render() -> Any:
    body = _body()
    g = json_to_state(body.get("state"))
    return jsonify({"ok": True, "text": g.render(bool(body.get("verbose", False)))})


if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    app.run(host=settings.host, port=settings.port, debug=False)
