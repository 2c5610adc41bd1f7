"""Geister game engine: rules, setup phase, evaluation, and AI search.

Modules:
- board: Grid coordinates and escape-square geometry
- state: Immutable ghost, move, and game-state values
- rules: Move legality, move execution, and win detection
- setup_phase: Initial rosters, ghost placement, and the start of play
- movegen / evaluator / ai: Move generation, static evaluation, and minimax with alpha-beta pruning
- game: Orchestrator owning the authoritative state for a UI
"""

from .board import Position, is_escape_square, is_valid_position
from .state import GameState, Ghost, Move, WinResult
from .rules import can_move, check_win_condition, execute_move
from .setup_phase import (
    are_all_player_ghosts_placed,
    create_initial_game_state,
    is_valid_player_placement,
    place_player_ghost,
    start_game_phase,
)
from .movegen import generate_possible_moves
from .evaluator import Evaluator
from .ai import AIPlayer, DIFFICULTIES
from .game import Game

__all__ = [
    "Position",
    "is_escape_square",
    "is_valid_position",
    "GameState",
    "Ghost",
    "Move",
    "WinResult",
    "can_move",
    "check_win_condition",
    "execute_move",
    "are_all_player_ghosts_placed",
    "create_initial_game_state",
    "is_valid_player_placement",
    "place_player_ghost",
    "start_game_phase",
    "generate_possible_moves",
    "Evaluator",
    "AIPlayer",
    "DIFFICULTIES",
    "Game",
]
