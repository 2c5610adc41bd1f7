from __future__ import annotations


class GameError(ValueError):
    """Base class for operations rejected because they would break the game's invariants."""


class InvalidPlacementError(GameError):
    pass


class SetupIncompleteError(GameError):
    pass


class NoMovesAvailableError(GameError):
    pass
