from __future__ import annotations

import pytest

from geister.state import GameState

from helpers import make_state, quiet_ghosts


@pytest.fixture
def quiet_state() -> GameState:
    return make_state(quiet_ghosts())
