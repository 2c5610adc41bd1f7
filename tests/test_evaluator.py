from __future__ import annotations

from helpers import ghost, make_state, quiet_ghosts

from geister.evaluator import Evaluator
from geister.state import BLUE, COMPUTER, PLAYER, RED, GameState


def _replace(ghosts, new):
    return [new if g.id == new.id else g for g in ghosts]


def test_winning_and_losing_positions_score_1000():
    ghosts = quiet_ghosts()
    captured = [g for g in ghosts if g.owner == PLAYER and g.color == BLUE]
    state = make_state(ghosts, captured=captured)

    assert Evaluator.evaluate(state, COMPUTER) == 1000
    assert Evaluator.evaluate(state, PLAYER) == -1000


def test_empty_board_is_scored_as_terminal():
    assert Evaluator.evaluate(GameState(), COMPUTER) == 1000
    assert Evaluator.evaluate(GameState(), PLAYER) == -1000


def test_more_blue_ghosts_scores_higher():
    ghosts = quiet_ghosts()
    extra = ghost("c5", BLUE, COMPUTER, 0, 1)
    base = make_state(ghosts + [extra], captured=[extra])
    richer = make_state(ghosts + [extra])

    assert Evaluator.evaluate(richer, COMPUTER) > Evaluator.evaluate(base, COMPUTER)
    assert Evaluator.evaluate(richer, PLAYER) < Evaluator.evaluate(base, PLAYER)


def test_losing_own_red_is_rewarded():
    ghosts = quiet_ghosts() + [ghost("c5", RED, COMPUTER, 0, 1)]
    before = make_state(ghosts)
    after = make_state(ghosts, captured=[ghosts[-1]])

    # Material alone moves by the red-loss value; positional terms drop the lost ghost's center score
    lost_center = (5 - abs(0 - 2.5) - abs(1 - 2.5)) * 2
    assert Evaluator.evaluate(after, COMPUTER) - Evaluator.evaluate(before, COMPUTER) == 20 - lost_center


def test_symmetric_position_scores_equal_for_both_sides(quiet_state):
    assert Evaluator.evaluate(quiet_state, PLAYER) == Evaluator.evaluate(quiet_state, COMPUTER)


def test_blue_near_escape_and_threatening_scores_higher():
    far = make_state(_replace(quiet_ghosts(), ghost("p1", BLUE, PLAYER, 2, 0)))
    near = make_state(_replace(quiet_ghosts(), ghost("p1", BLUE, PLAYER, 1, 0)))

    # +100 escape threat, +5 escape proximity, -2 center distance
    assert Evaluator.evaluate(near, PLAYER) - Evaluator.evaluate(far, PLAYER) == 103


def test_red_on_threat_square_gets_no_bonus():
    far = make_state(_replace(quiet_ghosts(), ghost("p3", RED, PLAYER, 2, 0)))
    near = make_state(_replace(quiet_ghosts(), ghost("p3", RED, PLAYER, 1, 0)))

    assert Evaluator.evaluate(near, PLAYER) - Evaluator.evaluate(far, PLAYER) == -2


def test_computer_threat_row_is_row_four():
    state = make_state(_replace(quiet_ghosts(), ghost("c1", BLUE, COMPUTER, 4, 5)))
    assert Evaluator._threatens_escape(state.find_ghost("c1"), COMPUTER)
    assert not Evaluator._threatens_escape(state.find_ghost("c1"), PLAYER)
