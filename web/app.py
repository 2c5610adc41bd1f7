from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from geister import AIPlayer, Game, Position
from geister.ai import DEFAULT_DIFFICULTY
from geister.state import Ghost


logger = logging.getLogger(__name__)


class ApiError(ValueError):
    pass


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        GEISTER_DIFFICULTY=DEFAULT_DIFFICULTY,
        GEISTER_THINKING_DELAY=True,
        GEISTER_SEED=None,
    )
    if config:
        app.config.update(config)

    seed = app.config["GEISTER_SEED"]
    game = Game(
        ai=AIPlayer(thinking_delay=app.config["GEISTER_THINKING_DELAY"]),
        difficulty=app.config["GEISTER_DIFFICULTY"],
        rng=random.Random(seed) if seed is not None else None,
    )

    def payload() -> Dict[str, Any]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ApiError("Expected a JSON object")
        return data

    def position_from(data: Dict[str, Any]) -> Position:
        try:
            return Position(int(data["row"]), int(data["col"]))
        except (KeyError, TypeError, ValueError):
            raise ApiError("Missing or malformed row/col") from None

    def ghost_from(data: Dict[str, Any]) -> Ghost:
        ghost = game.state.find_ghost(str(data.get("ghost_id", "")))
        if ghost is None:
            raise ApiError(f"Unknown ghost: {data.get('ghost_id')!r}")
        return ghost

    def respond(ai_move=None):
        snap = game.snapshot()
        snap["ai_move"] = None
        if ai_move is not None:
            snap["ai_move"] = {
                "ghost_id": ai_move.ghost.id,
                "from": ai_move.from_pos.to_dict(),
                "to": ai_move.to_pos.to_dict(),
                "capture": ai_move.is_capture,
            }
        return jsonify(snap)

    def respond_after_player_turn():
        # The computer replies before the response goes out
        ai_move = None
        if game.ai_pending:
            ai_move = asyncio.run(game.run_pending_ai_move())
        return respond(ai_move)

    @app.errorhandler(ApiError)
    def bad_request(exc):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(ValueError)
    def invalid_value(exc):
        logger.warning("Rejected request: %s", exc)
        return jsonify({"error": str(exc)}), 400

    @app.get("/api/state")
    def api_state():
        return respond()

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        if "difficulty" in data:
            game.set_difficulty(str(data["difficulty"]))
        game.reset()
        return respond()

    @app.post("/api/difficulty")
    def api_difficulty():
        game.set_difficulty(str(payload().get("difficulty", "")))
        return respond()

    @app.post("/api/place")
    def api_place():
        data = payload()
        game.handle_place_ghost(ghost_from(data), position_from(data))
        return respond()

    @app.post("/api/place/random")
    def api_place_random():
        game.handle_random_placement()
        return respond()

    @app.post("/api/start")
    def api_start():
        game.handle_start_game_phase()
        return respond()

    @app.post("/api/select")
    def api_select():
        game.handle_ghost_click(ghost_from(payload()))
        return respond()

    @app.post("/api/cell")
    def api_cell():
        game.handle_cell_click(position_from(payload()))
        return respond_after_player_turn()

    @app.post("/api/move")
    def api_move():
        data = payload()
        game.handle_ghost_move(ghost_from(data), position_from(data))
        return respond_after_player_turn()

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="0.0.0.0", port=5000, debug=True)
