from __future__ import annotations

import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chessrules import BLACK, Game, Move, WHITE

_log = logging.getLogger(__name__)


def _parse_position(value: object) -> Optional[List[int]]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in value):
        return None
    row, col = value
    if not (0 <= row < 8 and 0 <= col < 8):
        return None
    return [row, col]


def _move_json(move: Optional[Move]) -> Optional[dict]:
    if move is None:
        return None
    return {"from": list(move.from_pos), "to": list(move.to_pos)}


def create_app(ai_color: str = BLACK, seed: Optional[int] = None) -> Flask:
    app = Flask(__name__)

    game = Game(ai_color=ai_color, rng=random.Random(seed))

    def _ai_reply() -> Optional[dict]:
        move = game.ai_move()
        if move is not None:
            _log.info("AI (%s) played %s -> %s", game.ai_color, move.from_pos, move.to_pos)
        return _move_json(move)

    @app.get("/api/state")
    def api_state():
        return jsonify(game.snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        color = (data.get("color") or WHITE).lower()
        if color not in (WHITE, BLACK):
            _log.warning("Rejected new game with color %r", color)
            return jsonify({"error": f"Unknown color: {color}"}), 400

        # The player picks a side; the AI takes the other one
        game.reset(ai_color=BLACK if color == WHITE else WHITE)

        ai_move = None
        if game.is_ai_turn():
            ai_move = _ai_reply()

        snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    @app.post("/api/legal")
    def api_legal():
        payload = request.get_json(silent=True) or {}
        position = _parse_position(payload.get("position"))
        if position is None:
            return jsonify({"error": "Missing or invalid position"}), 400
        moves = [list(p) for p in game.legal_moves(position)]
        return jsonify({"position": position, "moves": moves})

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        from_pos = _parse_position(payload.get("from"))
        to_pos = _parse_position(payload.get("to"))
        if from_pos is None or to_pos is None:
            return jsonify({"error": "Missing or invalid move"}), 400
        if game.is_ai_turn():
            return jsonify({"error": "Not your turn"}), 400

        if not game.make_move(from_pos, to_pos):
            _log.warning("Rejected illegal move %s -> %s", from_pos, to_pos)
            return jsonify({"error": f"Illegal move: {from_pos} -> {to_pos}"}), 400
        _log.info("Player (%s) played %s -> %s", game.human_color, from_pos, to_pos)

        ai_move = None
        if not game.game_over:
            ai_move = _ai_reply()

        snap = game.snapshot()
        snap["ai_move"] = ai_move
        return jsonify(snap)

    return app


app = create_app()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host="0.0.0.0", port=5000, debug=True)
