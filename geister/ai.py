from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .errors import NoMovesAvailableError
from .evaluator import Evaluator
from .movegen import generate_possible_moves
from .rules import execute_move
from .state import COMPUTER, GameState, Move


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Difficulty:
    name: str
    depth: int
    thinking_time_s: float


DIFFICULTIES: Dict[str, Difficulty] = {
    "easy": Difficulty("easy", depth=1, thinking_time_s=0.5),
    "medium": Difficulty("medium", depth=3, thinking_time_s=1.0),
    "hard": Difficulty("hard", depth=5, thinking_time_s=2.0),
}

DEFAULT_DIFFICULTY = "medium"


def get_difficulty(name: str) -> Difficulty:
    try:
        return DIFFICULTIES[name]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {name!r}") from None


@dataclass
class SearchResult:
    """Outcome of one root search.

    ``scored_moves`` lists every root move with its minimax score in
    generation order; it is kept for inspection and logging only and plays
    no part in choosing ``best_move``.
    """

    best_move: Optional[Move]
    score: float
    nodes: int
    scored_moves: Optional[List[Tuple[Move, float]]] = None


class AIPlayer:
    """Minimax with alpha-beta pruning over immutable game states.

    Leaves are always scored from ``perspective`` (the computer by default),
    whichever side moved last; the minimizing plies model the opponent
    driving that same score down.
    """

    def __init__(self, thinking_delay: bool = True, perspective: str = COMPUTER) -> None:
        self.thinking_delay = thinking_delay
        self.perspective = perspective
        self.last_result: Optional[SearchResult] = None

    async def calculate_best_move(self, state: GameState, difficulty: str = DEFAULT_DIFFICULTY) -> Move:
        """Pause for the difficulty's thinking time, then search.

        The pause only paces the game for a human watching it; it has no
        effect on which move is chosen.
        """
        level = get_difficulty(difficulty)
        if not generate_possible_moves(state):
            raise NoMovesAvailableError("No valid moves available")
        if self.thinking_delay:
            await asyncio.sleep(level.thinking_time_s)
        return self.choose_move(state, difficulty)

    def choose_move(self, state: GameState, difficulty: str = DEFAULT_DIFFICULTY) -> Move:
        level = get_difficulty(difficulty)
        result = self._alphabeta_root(state, level.depth)
        if result.best_move is None:
            raise NoMovesAvailableError("No valid moves available")

        self.last_result = result
        move = result.best_move
        logger.info(
            "AI (%s, depth %d) chose %s (%d,%d)->(%d,%d) score=%.1f nodes=%d",
            level.name,
            level.depth,
            move.ghost.id,
            move.from_pos.row,
            move.from_pos.col,
            move.to_pos.row,
            move.to_pos.col,
            result.score,
            result.nodes,
        )
        return move

    def _alphabeta_root(self, state: GameState, depth: int) -> SearchResult:
        best_score = -math.inf
        best_move: Optional[Move] = None
        nodes = 0
        scored_moves: List[Tuple[Move, float]] = []

        for move in generate_possible_moves(state):
            score, sub_nodes = self._alphabeta(
                execute_move(state, move), depth - 1, -math.inf, math.inf, maximizing=False
            )
            nodes += sub_nodes + 1
            scored_moves.append((move, score))
            # Strictly greater: ties keep the earliest generated move
            if best_move is None or score > best_score:
                best_score = score
                best_move = move

        if best_move is None:
            best_score = Evaluator.evaluate(state, self.perspective)

        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, scored_moves=scored_moves)

    def minimax(
        self,
        state: GameState,
        depth: int,
        is_maximizing: bool,
        alpha: float = -math.inf,
        beta: float = math.inf,
    ) -> float:
        score, _ = self._alphabeta(state, depth, alpha, beta, maximizing=is_maximizing)
        return score

    def _alphabeta(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> Tuple[float, int]:
        if depth <= 0:
            return Evaluator.evaluate(state, self.perspective), 1

        moves = generate_possible_moves(state)
        if not moves:
            return Evaluator.evaluate(state, self.perspective), 1

        nodes = 0
        if maximizing:
            value = -math.inf
            for move in moves:
                score, child_nodes = self._alphabeta(
                    execute_move(state, move), depth - 1, alpha, beta, maximizing=False
                )
                nodes += child_nodes + 1
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value, nodes

        value = math.inf
        for move in moves:
            score, child_nodes = self._alphabeta(
                execute_move(state, move), depth - 1, alpha, beta, maximizing=True
            )
            nodes += child_nodes + 1
            value = min(value, score)
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value, nodes
