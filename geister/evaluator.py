from __future__ import annotations

from .board import ESCAPE_COLUMNS, Position, escape_row, escape_squares
from .rules import check_win_condition, opponent_of
from .state import BLUE, RED, GameState, Ghost


class Evaluator:
    """Static evaluation for Geister positions.

    Scores are from the perspective of ``for_player``: positive favors that
    side, negative favors the opponent.
    """

    WIN_SCORE = 1000

    BLUE_VALUE = 50
    # Each red ghost lost is progress towards the lose-all-red win
    RED_LOSS_VALUE = 20
    RED_PER_SIDE = 4

    ESCAPE_WEIGHT = 5
    MAX_ESCAPE_DISTANCE = 6
    CENTER_WEIGHT = 2
    MAX_CENTER_DISTANCE = 5
    CENTER = 2.5

    IMMEDIATE_ESCAPE_BONUS = 100

    @classmethod
    def evaluate(cls, state: GameState, for_player: str) -> float:
        result = check_win_condition(state)
        if result.winner == for_player:
            return cls.WIN_SCORE
        if result.winner is not None:
            return -cls.WIN_SCORE

        score = 0.0
        score += cls._material(state, for_player)
        score += sum(cls._positional(ghost, for_player) for ghost in state.active_ghosts(for_player))
        score += cls.IMMEDIATE_ESCAPE_BONUS * sum(
            1 for ghost in state.active_ghosts(for_player, BLUE) if cls._threatens_escape(ghost, for_player)
        )
        return score

    @classmethod
    def _material(cls, state: GameState, for_player: str) -> int:
        opponent = opponent_of(for_player)
        my_blue = len(state.active_ghosts(for_player, BLUE))
        my_red = len(state.active_ghosts(for_player, RED))
        their_blue = len(state.active_ghosts(opponent, BLUE))
        their_red = len(state.active_ghosts(opponent, RED))
        return (
            (my_blue - their_blue) * cls.BLUE_VALUE
            + (cls.RED_PER_SIDE - my_red) * cls.RED_LOSS_VALUE
            - (cls.RED_PER_SIDE - their_red) * cls.RED_LOSS_VALUE
        )

    @classmethod
    def _positional(cls, ghost: Ghost, for_player: str) -> float:
        score = cls._center_score(ghost.position)
        if ghost.color == BLUE:
            score += cls._escape_score(ghost.position, for_player)
        return score

    @classmethod
    def _escape_score(cls, pos: Position, for_player: str) -> int:
        distance = min(
            abs(pos.row - square.row) + abs(pos.col - square.col)
            for square in escape_squares(for_player)
        )
        return (cls.MAX_ESCAPE_DISTANCE - distance) * cls.ESCAPE_WEIGHT

    @classmethod
    def _center_score(cls, pos: Position) -> float:
        distance = abs(pos.row - cls.CENTER) + abs(pos.col - cls.CENTER)
        return (cls.MAX_CENTER_DISTANCE - distance) * cls.CENTER_WEIGHT

    @staticmethod
    def _threatens_escape(ghost: Ghost, for_player: str) -> bool:
        """One step short of an escape square, on the row next to the escape row."""
        row = escape_row(for_player)
        adjacent_row = row + 1 if row == 0 else row - 1
        return ghost.position.row == adjacent_row and ghost.position.col in ESCAPE_COLUMNS
