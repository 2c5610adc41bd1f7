from __future__ import annotations

from typing import Iterable

from geister.board import Position
from geister.state import BLUE, COMPUTER, PLAYER, PLAYING, RED, GameState, Ghost, build_board


def ghost(ghost_id: str, color: str, owner: str, row: int, col: int, is_revealed: bool = False) -> Ghost:
    return Ghost(id=ghost_id, color=color, owner=owner, position=Position(row, col), is_revealed=is_revealed)


def make_state(
    ghosts: Iterable[Ghost],
    current_player: str = PLAYER,
    captured: Iterable[Ghost] = (),
    game_phase: str = PLAYING,
) -> GameState:
    ghosts = list(ghosts)
    captured = tuple(captured)
    captured_ids = {g.id for g in captured}
    return GameState(
        board=build_board(g for g in ghosts if g.id not in captured_ids),
        current_player=current_player,
        game_phase=game_phase,
        player_ghosts=tuple(g for g in ghosts if g.owner == PLAYER),
        computer_ghosts=tuple(g for g in ghosts if g.owner == COMPUTER),
        captured_ghosts=captured,
    )


def quiet_ghosts():
    """Two blue and two red ghosts per side, nobody near a win."""
    return [
        ghost("p1", BLUE, PLAYER, 4, 2),
        ghost("p2", BLUE, PLAYER, 4, 3),
        ghost("p3", RED, PLAYER, 5, 2),
        ghost("p4", RED, PLAYER, 5, 3),
        ghost("c1", BLUE, COMPUTER, 1, 2),
        ghost("c2", BLUE, COMPUTER, 1, 3),
        ghost("c3", RED, COMPUTER, 0, 2),
        ghost("c4", RED, COMPUTER, 0, 3),
    ]
