"""
Difficulty -> how the AI picks its move.

Key idea: strategy pattern (lookup table). Each tier is a search depth plus a selector function.
The Game never branches on difficulty itself: it asks for the Strategy and calls `choose()`.
"""

import random
from dataclasses import dataclass
from typing import Callable, Optional

from src.core.shared_types import Difficulty
from src.othello.board import Board
from src.othello.discs import Disc
from src.othello.evaluation import evaluate_move_hard, evaluate_move_superhard
from src.othello.search import (
    AlphaBetaSearch,
    choose_best_scored_move,
    choose_max_flip_move,
)
from src.othello.square import Square

# (board, player to move, search depth, random source, search object) -> chosen move
SelectMoveFn = Callable[
    [Board, Disc, int, random.Random, AlphaBetaSearch], Optional[Square]
]


def _greedy_flips(
    board: Board, player: Disc, depth: int, rng: random.Random, search: AlphaBetaSearch
) -> Optional[Square]:
    return choose_max_flip_move(board, player)


def _hard_heuristic(
    board: Board, player: Disc, depth: int, rng: random.Random, search: AlphaBetaSearch
) -> Optional[Square]:
    return choose_best_scored_move(board, player, evaluate_move_hard, rng)


def _superhard_heuristic(
    board: Board, player: Disc, depth: int, rng: random.Random, search: AlphaBetaSearch
) -> Optional[Square]:
    return choose_best_scored_move(board, player, evaluate_move_superhard, rng)


def _alpha_beta(
    board: Board, player: Disc, depth: int, rng: random.Random, search: AlphaBetaSearch
) -> Optional[Square]:
    return search.find_best_move(board, player, depth)


@dataclass(frozen=True)
class Strategy:
    depth: int
    select: SelectMoveFn

    @property
    def searches(self) -> bool:
        return self.depth > 0

    def choose(
        self,
        board: Board,
        player: Disc,
        rng: Optional[random.Random] = None,
        search: Optional[AlphaBetaSearch] = None,
    ) -> Optional[Square]:
        return self.select(
            board, player, self.depth, rng or random.Random(), search or AlphaBetaSearch()
        )


STRATEGIES: dict[Difficulty, Strategy] = {
    Difficulty.EASY: Strategy(depth=0, select=_greedy_flips),
    Difficulty.HARD: Strategy(depth=0, select=_hard_heuristic),
    Difficulty.SUPERHARD: Strategy(depth=0, select=_superhard_heuristic),
    Difficulty.PRO: Strategy(depth=4, select=_alpha_beta),
    Difficulty.GOD: Strategy(depth=7, select=_alpha_beta),
}


def strategy_for(difficulty: Difficulty) -> Strategy:
    return STRATEGIES[difficulty]
