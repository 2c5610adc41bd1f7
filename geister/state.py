from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from .board import BOARD_SIZE, Position, UNPLACED, is_valid_position


PLAYER = "player"
COMPUTER = "computer"
PLAYERS = (PLAYER, COMPUTER)

RED = "red"
BLUE = "blue"

SETUP = "setup"
PLAYING = "playing"
FINISHED = "finished"

Board = Tuple[Tuple[Optional["Ghost"], ...], ...]


@dataclass(frozen=True)
class Ghost:
    id: str
    color: str
    owner: str
    position: Position = UNPLACED
    is_revealed: bool = False

    @property
    def is_placed(self) -> bool:
        return self.position.row >= 0 and self.position.col >= 0

    def moved_to(self, position: Position) -> "Ghost":
        return replace(self, position=position)

    def revealed(self, is_revealed: bool = True) -> "Ghost":
        return replace(self, is_revealed=is_revealed)


@dataclass(frozen=True)
class Move:
    from_pos: Position
    to_pos: Position
    ghost: Ghost
    captured_ghost: Optional[Ghost] = None

    @property
    def is_capture(self) -> bool:
        return self.captured_ghost is not None


@dataclass(frozen=True)
class WinResult:
    winner: Optional[str] = None
    condition: Optional[str] = None

    def __bool__(self) -> bool:
        return self.winner is not None


def empty_board() -> Board:
    return tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))


def board_with(board: Board, updates: Dict[Position, Optional[Ghost]]) -> Board:
    """Copy of ``board`` with the given cells overwritten."""
    rows = [list(row) for row in board]
    for pos, ghost in updates.items():
        rows[pos.row][pos.col] = ghost
    return tuple(tuple(row) for row in rows)


def build_board(ghosts: Iterable[Ghost]) -> Board:
    return board_with(
        empty_board(), {g.position: g for g in ghosts if is_valid_position(g.position)}
    )


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    Transitions never modify an existing snapshot; they build a new one with
    ``dataclasses.replace``. The board is the spatial index and must agree
    with the active entries of the two rosters.
    """

    board: Board = field(default_factory=empty_board)
    current_player: str = PLAYER
    game_phase: str = SETUP
    selected_piece: Optional[Ghost] = None
    move_history: Tuple[Move, ...] = ()
    player_ghosts: Tuple[Ghost, ...] = ()
    computer_ghosts: Tuple[Ghost, ...] = ()
    captured_ghosts: Tuple[Ghost, ...] = ()

    def at(self, pos: Position) -> Optional[Ghost]:
        if not is_valid_position(pos):
            return None
        return self.board[pos.row][pos.col]

    def ghosts_of(self, owner: str) -> Tuple[Ghost, ...]:
        return self.player_ghosts if owner == PLAYER else self.computer_ghosts

    @property
    def captured_ids(self) -> FrozenSet[str]:
        return frozenset(g.id for g in self.captured_ghosts)

    def is_active(self, ghost: Ghost) -> bool:
        return ghost.id not in self.captured_ids

    def active_ghosts(self, owner: str, color: Optional[str] = None) -> Tuple[Ghost, ...]:
        captured = self.captured_ids
        return tuple(
            g
            for g in self.ghosts_of(owner)
            if g.id not in captured and (color is None or g.color == color)
        )

    def find_ghost(self, ghost_id: str) -> Optional[Ghost]:
        for ghost in self.player_ghosts + self.computer_ghosts:
            if ghost.id == ghost_id:
                return ghost
        return None

    def with_roster_entry(self, ghost: Ghost) -> "GameState":
        """Return a copy whose roster entry for ``ghost.id`` is ``ghost``."""
        roster = tuple(ghost if g.id == ghost.id else g for g in self.ghosts_of(ghost.owner))
        if ghost.owner == PLAYER:
            return replace(self, player_ghosts=roster)
        return replace(self, computer_ghosts=roster)
