from __future__ import annotations

from typing import List, NamedTuple


BOARD_SIZE = 6

# Columns holding the escape squares on each side's far edge
ESCAPE_COLUMNS = (0, BOARD_SIZE - 1)


class Position(NamedTuple):
    row: int
    col: int

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col}


UNPLACED = Position(-1, -1)

# up, down, left, right
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def is_valid_position(pos: Position) -> bool:
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def escape_row(player: str) -> int:
    """Row a side must reach to escape: the edge opposite its home rows."""
    return 0 if player == "player" else BOARD_SIZE - 1


def escape_squares(player: str) -> List[Position]:
    row = escape_row(player)
    return [Position(row, col) for col in ESCAPE_COLUMNS]


def is_escape_square(pos: Position, player: str) -> bool:
    return pos.row == escape_row(player) and pos.col in ESCAPE_COLUMNS


def is_orthogonal_step(from_pos: Position, to_pos: Position) -> bool:
    d_row = abs(to_pos.row - from_pos.row)
    d_col = abs(to_pos.col - from_pos.col)
    return d_row + d_col == 1


def adjacent_positions(pos: Position) -> List[Position]:
    neighbours = (Position(pos.row + dr, pos.col + dc) for dr, dc in DIRECTIONS)
    return [p for p in neighbours if is_valid_position(p)]
