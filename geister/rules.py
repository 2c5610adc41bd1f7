from __future__ import annotations

from dataclasses import replace

from .board import is_escape_square, is_orthogonal_step, is_valid_position, Position
from .state import (
    BLUE,
    COMPUTER,
    PLAYER,
    PLAYERS,
    RED,
    GameState,
    Move,
    WinResult,
    board_with,
)


ESCAPE = "escape"
CAPTURE_ALL_BLUE = "capture_all_blue"
LOSE_ALL_RED = "lose_all_red"


def opponent_of(player: str) -> str:
    return COMPUTER if player == PLAYER else PLAYER


def can_move(state: GameState, from_pos: Position, to_pos: Position) -> bool:
    """Whether the side to move may step the ghost on ``from_pos`` to ``to_pos``.

    Never raises; any malformed or illegal request simply answers False.
    """
    if not is_valid_position(from_pos) or not is_valid_position(to_pos):
        return False
    ghost = state.at(from_pos)
    if ghost is None or ghost.owner != state.current_player:
        return False
    if not is_orthogonal_step(from_pos, to_pos):
        return False
    target = state.at(to_pos)
    return target is None or target.owner != state.current_player


def execute_move(state: GameState, move: Move) -> GameState:
    """Apply ``move`` and return the resulting state.

    The input state is left untouched. Reveal flags are taken as given on
    ``move.ghost`` and ``move.captured_ghost``.
    """
    moved = move.ghost.moved_to(move.to_pos)
    captured = move.captured_ghost
    if captured is None:
        occupant = state.at(move.to_pos)
        if occupant is not None and occupant.owner != moved.owner:
            captured = occupant

    board = board_with(state.board, {move.from_pos: None, move.to_pos: moved})
    captured_ghosts = state.captured_ghosts
    if captured is not None and captured.id not in state.captured_ids:
        captured_ghosts = captured_ghosts + (captured,)

    return replace(
        state.with_roster_entry(moved),
        board=board,
        current_player=opponent_of(state.current_player),
        selected_piece=None,
        move_history=state.move_history + (move,),
        captured_ghosts=captured_ghosts,
    )


def check_win_condition(state: GameState) -> WinResult:
    """Evaluate the win conditions in priority order: escape, capture, red loss."""
    for player in PLAYERS:
        for ghost in state.active_ghosts(player, BLUE):
            if is_escape_square(ghost.position, player):
                return WinResult(player, ESCAPE)

    for player in PLAYERS:
        if not state.active_ghosts(player, BLUE):
            return WinResult(opponent_of(player), CAPTURE_ALL_BLUE)

    # Losing every red ghost is a win for the side that lost them
    for player in PLAYERS:
        if not state.active_ghosts(player, RED):
            return WinResult(player, LOSE_ALL_RED)

    return WinResult()
