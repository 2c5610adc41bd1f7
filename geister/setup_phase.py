from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional

from .board import Position, UNPLACED
from .errors import InvalidPlacementError, SetupIncompleteError
from .state import (
    BLUE,
    COMPUTER,
    PLAYER,
    PLAYING,
    RED,
    GameState,
    Ghost,
    board_with,
    build_board,
)


logger = logging.getLogger(__name__)

# Roster colors by slot; ids are <prefix><slot + 1>
ROSTER_COLORS = (BLUE, BLUE, RED, RED, BLUE, BLUE, RED, RED)

PLAYER_SETUP_ROWS = (4, 5)
COMPUTER_SETUP_ROWS = (0, 1)
SETUP_COLUMNS = (1, 2, 3, 4)


def _create_roster(owner: str, prefix: str, is_revealed: bool) -> List[Ghost]:
    return [
        Ghost(id=f"{prefix}{i + 1}", color=color, owner=owner, position=UNPLACED, is_revealed=is_revealed)
        for i, color in enumerate(ROSTER_COLORS)
    ]


def setup_cells(rows: Iterable[int]) -> List[Position]:
    return [Position(row, col) for row in rows for col in SETUP_COLUMNS]


def create_player_ghosts() -> List[Ghost]:
    """Player roster, unplaced and visible to its owner while setting up."""
    return _create_roster(PLAYER, "p", is_revealed=True)


def create_computer_ghosts(rng: Optional[random.Random] = None) -> List[Ghost]:
    rng = rng or random.Random()
    cells = setup_cells(COMPUTER_SETUP_ROWS)
    rng.shuffle(cells)
    return [
        ghost.moved_to(cell)
        for ghost, cell in zip(_create_roster(COMPUTER, "c", is_revealed=False), cells)
    ]


def create_initial_game_state(rng: Optional[random.Random] = None) -> GameState:
    player_ghosts = create_player_ghosts()
    computer_ghosts = create_computer_ghosts(rng)
    return GameState(
        board=build_board(computer_ghosts),
        player_ghosts=tuple(player_ghosts),
        computer_ghosts=tuple(computer_ghosts),
    )


def is_valid_player_placement(pos: Position) -> bool:
    return pos.row in PLAYER_SETUP_ROWS and pos.col in SETUP_COLUMNS


def are_all_player_ghosts_placed(ghosts: Iterable[Ghost]) -> bool:
    return all(ghost.is_placed for ghost in ghosts)


def place_player_ghost(state: GameState, ghost: Ghost, pos: Position) -> GameState:
    """Put ``ghost`` on ``pos``, lifting it from its previous cell if it had one."""
    if not is_valid_player_placement(pos):
        raise InvalidPlacementError(f"Invalid placement position: ({pos.row}, {pos.col})")
    if state.at(pos) is not None:
        raise InvalidPlacementError(f"Position already occupied: ({pos.row}, {pos.col})")

    if ghost.owner != PLAYER:
        raise InvalidPlacementError(f"Ghost {ghost.id} does not belong to the player")

    current = state.find_ghost(ghost.id)
    if current is None:
        raise InvalidPlacementError(f"Unknown ghost: {ghost.id}")
    placed = current.moved_to(pos)
    updates = {}
    if current.is_placed:
        updates[current.position] = None
    updates[pos] = placed
    return replace(state.with_roster_entry(placed), board=board_with(state.board, updates))


def place_player_ghosts_randomly(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    """Place every still-unplaced player ghost on a random free setup cell."""
    rng = rng or random.Random()
    free = [cell for cell in setup_cells(PLAYER_SETUP_ROWS) if state.at(cell) is None]
    rng.shuffle(free)
    for ghost in state.player_ghosts:
        if ghost.is_placed:
            continue
        state = place_player_ghost(state, ghost, free.pop())
    return state


def start_game_phase(state: GameState) -> GameState:
    if not are_all_player_ghosts_placed(state.player_ghosts):
        raise SetupIncompleteError("Cannot start game: not all player ghosts are placed")

    hidden = tuple(ghost.revealed(False) for ghost in state.player_ghosts)
    board = board_with(state.board, {ghost.position: ghost for ghost in hidden})
    logger.info("Setup complete, game phase is now %s", PLAYING)
    return replace(state, board=board, player_ghosts=hidden, game_phase=PLAYING)
