from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import replace
from typing import Dict, List, Optional

from .ai import AIPlayer, DEFAULT_DIFFICULTY, get_difficulty
from .board import Position
from .errors import GameError
from .movegen import generate_possible_moves
from .rules import can_move, check_win_condition, execute_move
from .setup_phase import (
    create_initial_game_state,
    place_player_ghost,
    place_player_ghosts_randomly,
    start_game_phase,
)
from .state import COMPUTER, FINISHED, PLAYER, PLAYING, SETUP, GameState, Ghost, Move, WinResult


logger = logging.getLogger(__name__)


class Game:
    """Owns the authoritative game state and sequences player and AI turns.

    Every handler replaces ``self.state`` with a new snapshot (or keeps the
    old one when the request is rejected) and returns it. The computer's
    reply is run as a deferred coroutine: inside a running asyncio loop it is
    scheduled automatically, otherwise the caller drives it by awaiting
    :meth:`run_pending_ai_move`.
    """

    # Pause between the player's move and the AI starting to think
    AI_TRIGGER_DELAY_S = 0.1

    def __init__(
        self,
        ai: Optional[AIPlayer] = None,
        difficulty: str = DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.ai = ai or AIPlayer()
        self.difficulty = get_difficulty(difficulty).name
        self.rng = rng
        self.state: GameState = create_initial_game_state(rng)
        self.is_ai_thinking = False
        self._ai_pending = False
        self._ai_task: Optional[asyncio.Future] = None
        self._ai_timer: Optional[asyncio.TimerHandle] = None
        # Bumped on reset so in-flight AI results from an old game are dropped
        self._epoch = 0

    # -- derived status -------------------------------------------------

    @property
    def win_result(self) -> WinResult:
        return check_win_condition(self.state)

    @property
    def winner(self) -> Optional[str]:
        return self.win_result.winner

    @property
    def win_condition(self) -> Optional[str]:
        return self.win_result.condition

    @property
    def ai_pending(self) -> bool:
        return self._ai_pending

    def reset(self) -> GameState:
        self._epoch += 1
        self.state = create_initial_game_state(self.rng)
        self.is_ai_thinking = False
        self._ai_pending = False
        if self._ai_timer is not None:
            self._ai_timer.cancel()
            self._ai_timer = None
        logger.info("New game started")
        return self.state

    def set_difficulty(self, difficulty: str) -> None:
        self.difficulty = get_difficulty(difficulty).name

    # -- setup phase ----------------------------------------------------

    def handle_place_ghost(self, ghost: Ghost, pos: Position) -> GameState:
        if self.state.game_phase != SETUP:
            return self.state
        try:
            self.state = place_player_ghost(self.state, ghost, pos)
        except GameError as exc:
            logger.warning("Failed to place ghost %s: %s", ghost.id, exc)
        return self.state

    def handle_random_placement(self) -> GameState:
        if self.state.game_phase != SETUP:
            return self.state
        self.state = place_player_ghosts_randomly(self.state, self.rng)
        return self.state

    def handle_start_game_phase(self) -> GameState:
        if self.state.game_phase != SETUP:
            return self.state
        try:
            self.state = start_game_phase(self.state)
        except GameError as exc:
            logger.warning("Failed to start game phase: %s", exc)
        return self.state

    # -- player turn ----------------------------------------------------

    def _player_may_act(self) -> bool:
        return (
            self.state.game_phase == PLAYING
            and self.state.current_player == PLAYER
            and not self.is_ai_thinking
            and self.winner is None
        )

    def handle_ghost_click(self, ghost: Ghost) -> GameState:
        """Select an own ghost, or deselect it when it is already selected."""
        if not self._player_may_act() or ghost.owner != PLAYER:
            return self.state
        current = self.state.find_ghost(ghost.id)
        if current is None or not self.state.is_active(current):
            return self.state

        selected = self.state.selected_piece
        if selected is not None and selected.id == current.id:
            self.state = replace(self.state, selected_piece=None)
        else:
            self.state = replace(self.state, selected_piece=current)
        return self.state

    def handle_cell_click(self, pos: Position) -> GameState:
        """Move the selected ghost to ``pos``; an illegal target only clears the selection."""
        if not self._player_may_act():
            return self.state
        selected = self.state.selected_piece
        if selected is None:
            return self.state
        if not self._player_move(selected.position, pos):
            self.state = replace(self.state, selected_piece=None)
        return self.state

    def handle_ghost_move(self, ghost: Ghost, pos: Position) -> GameState:
        if not self._player_may_act() or ghost.owner != PLAYER:
            return self.state
        current = self.state.find_ghost(ghost.id)
        if current is None or not self.state.is_active(current):
            return self.state
        self._player_move(current.position, pos)
        return self.state

    def _player_move(self, from_pos: Position, to_pos: Position) -> bool:
        if not can_move(self.state, from_pos, to_pos):
            return False
        move = Move(from_pos, to_pos, self.state.at(from_pos), self.state.at(to_pos))
        self.state = execute_move(self.state, self.reveal_capture(move))
        if self.state.current_player == COMPUTER and self.winner is None:
            self._request_ai_move()
        return True

    @staticmethod
    def reveal_capture(move: Move) -> Move:
        """A capture exposes both the capturing and the captured ghost."""
        if move.captured_ghost is None:
            return move
        return replace(
            move,
            ghost=move.ghost.revealed(),
            captured_ghost=move.captured_ghost.revealed(),
        )

    # -- computer turn --------------------------------------------------

    def _request_ai_move(self) -> None:
        if self._ai_pending:
            return
        self._ai_pending = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: the caller runs the pending move itself
            return
        self._ai_timer = loop.call_later(self.AI_TRIGGER_DELAY_S, self._launch_pending_ai_move)

    def _launch_pending_ai_move(self) -> None:
        self._ai_timer = None
        self._ai_task = asyncio.ensure_future(self.run_pending_ai_move())

    async def run_pending_ai_move(self) -> Optional[Move]:
        if not self._ai_pending:
            return None
        self._ai_pending = False
        return await self.execute_ai_move()

    async def execute_ai_move(self) -> Optional[Move]:
        if self.is_ai_thinking or self.state.current_player != COMPUTER or self.winner is not None:
            return None

        epoch = self._epoch
        start_state = self.state
        self.is_ai_thinking = True
        try:
            move = await self.ai.calculate_best_move(start_state, self.difficulty)
            if epoch != self._epoch or self.state is not start_state:
                logger.info("Discarding AI move computed for a superseded state")
                return None
            move = self.reveal_capture(move)
            self.state = execute_move(start_state, move)
            return move
        except Exception:
            logger.exception("AI move failed")
            return None
        finally:
            if epoch == self._epoch:
                self.is_ai_thinking = False

    # -- presentation view ----------------------------------------------

    def snapshot(self) -> Dict[str, object]:
        state = self.state
        result = self.win_result
        captured = {g.id: g for g in state.captured_ghosts}

        legal_moves: List[Dict[str, object]] = []
        if self._player_may_act():
            legal_moves = [
                {"ghost_id": m.ghost.id, "from": m.from_pos.to_dict(), "to": m.to_pos.to_dict()}
                for m in generate_possible_moves(state)
            ]

        last_move: Optional[Dict[str, object]] = None
        if state.move_history:
            last_move = _move_view(state.move_history[-1])

        return {
            "board": [[_ghost_view(cell) if cell else None for cell in row] for row in state.board],
            "current_player": state.current_player,
            "game_phase": FINISHED if result else state.game_phase,
            "selected_piece": state.selected_piece.id if state.selected_piece else None,
            "player_ghosts": [_ghost_view(captured.get(g.id, g)) for g in state.player_ghosts],
            "computer_ghosts": [_ghost_view(captured.get(g.id, g)) for g in state.computer_ghosts],
            "captured_ghosts": [_ghost_view(g) for g in state.captured_ghosts],
            "move_count": len(state.move_history),
            "last_move": last_move,
            "legal_moves": legal_moves,
            "winner": result.winner,
            "win_condition": result.condition,
            "is_ai_thinking": self.is_ai_thinking,
            "difficulty": self.difficulty,
        }


def _ghost_view(ghost: Ghost) -> Dict[str, object]:
    # The computer's colors stay hidden until revealed by a capture
    hidden = ghost.owner == COMPUTER and not ghost.is_revealed
    return {
        "id": ghost.id,
        "owner": ghost.owner,
        "color": None if hidden else ghost.color,
        "position": ghost.position.to_dict(),
        "is_revealed": ghost.is_revealed,
    }


def _move_view(move: Move) -> Dict[str, object]:
    return {
        "ghost_id": move.ghost.id,
        "from": move.from_pos.to_dict(),
        "to": move.to_pos.to_dict(),
        "captured": _ghost_view(move.captured_ghost) if move.captured_ghost else None,
    }
