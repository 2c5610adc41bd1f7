from __future__ import annotations

import logging
from typing import List

from .board import adjacent_positions
from .rules import can_move
from .state import GameState, Move


logger = logging.getLogger(__name__)


def generate_possible_moves(state: GameState) -> List[Move]:
    """All legal single steps for the side to move, in roster order."""
    moves: List[Move] = []
    for ghost in state.active_ghosts(state.current_player):
        # Take the board's copy so the move carries the current snapshot
        mover = state.at(ghost.position)
        if mover is None or mover.id != ghost.id:
            continue
        for to_pos in adjacent_positions(mover.position):
            if can_move(state, mover.position, to_pos):
                moves.append(Move(mover.position, to_pos, mover, state.at(to_pos)))

    logger.debug("Generated %d moves for %s", len(moves), state.current_player)
    return moves
