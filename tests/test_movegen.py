from __future__ import annotations

from helpers import ghost, make_state, quiet_ghosts

from geister.board import Position
from geister.movegen import generate_possible_moves
from geister.state import BLUE, COMPUTER, PLAYER, RED


def test_single_ghost_in_open_space_has_four_moves():
    state = make_state([ghost("p1", BLUE, PLAYER, 2, 2), ghost("c1", BLUE, COMPUTER, 0, 2)])
    targets = {m.to_pos for m in generate_possible_moves(state)}
    assert targets == {Position(1, 2), Position(3, 2), Position(2, 1), Position(2, 3)}


def test_corner_ghost_has_two_moves():
    state = make_state([ghost("p1", BLUE, PLAYER, 0, 0), ghost("c1", BLUE, COMPUTER, 5, 3)])
    targets = sorted(m.to_pos for m in generate_possible_moves(state))
    assert targets == [Position(0, 1), Position(1, 0)]


def test_moves_onto_own_ghosts_are_excluded(quiet_state):
    for move in generate_possible_moves(quiet_state):
        target = quiet_state.at(move.to_pos)
        assert target is None or target.owner != PLAYER


def test_only_side_to_move_generates(quiet_state):
    assert all(m.ghost.owner == PLAYER for m in generate_possible_moves(quiet_state))
    computer_turn = make_state(quiet_ghosts(), current_player=COMPUTER)
    assert all(m.ghost.owner == COMPUTER for m in generate_possible_moves(computer_turn))


def test_capture_moves_carry_the_captured_ghost():
    state = make_state(quiet_ghosts() + [ghost("c5", RED, COMPUTER, 3, 2)])
    captures = [m for m in generate_possible_moves(state) if m.is_capture]

    assert len(captures) == 1
    assert captures[0].captured_ghost.id == "c5"
    assert captures[0].from_pos == Position(4, 2)
    assert captures[0].ghost == state.at(Position(4, 2))


def test_captured_ghosts_do_not_move():
    ghosts = quiet_ghosts()
    gone = ghosts[0]
    state = make_state(ghosts, captured=[gone])
    assert all(m.ghost.id != gone.id for m in generate_possible_moves(state))


def test_side_without_ghosts_has_no_moves():
    state = make_state([ghost("c1", BLUE, COMPUTER, 0, 2)], current_player=PLAYER)
    assert generate_possible_moves(state) == []


def test_fully_captured_side_has_no_moves():
    ghosts = quiet_ghosts()
    state = make_state(ghosts, captured=[g for g in ghosts if g.owner == PLAYER])
    assert generate_possible_moves(state) == []
