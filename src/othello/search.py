"""
Move selection for the AI.

* AlphaBetaSearch: depth-bounded minimax with alpha-beta pruning over evaluate_board(), for the searching tiers.
  It works in place on a private copy of the board (make_move / unmake_move), never on the caller's board.
  A time limit and/or a threading.Event can stop it early: it then answers with the best root move found so far.
* choose_max_flip_move() / choose_best_scored_move(): the shallow tiers, no look-ahead.
"""

import logging
import math
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from src.othello.board import Board
from src.othello.discs import Disc
from src.othello.evaluation import LOSS_SCORE, WIN_SCORE, count_flips, evaluate_board
from src.othello.moves import is_game_over, legal_moves, make_move, unmake_move
from src.othello.square import Square

logger = logging.getLogger(__name__)

MIN_SCORE = LOSS_SCORE
MAX_SCORE = WIN_SCORE

MoveScoreFn = Callable[[Board, Square, Disc], float]


@dataclass(frozen=True)
class SearchResult:
    move: Optional[Square]
    score: float


class SearchInterrupted(Exception):
    """Raised inside the recursion once the time budget is spent or the search got cancelled. Never leaves this module."""


class AlphaBetaSearch:
    """One search (object) per AI decision. Keeps the budget and a few statistics for logging."""

    # budget (clock + cancel event) is polled once every N nodes
    CHECK_EVERY_N_NODES = 64

    def __init__(
        self,
        time_limit: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.time_limit = time_limit
        self.cancel_event = cancel_event
        self.clock = clock
        self.nodes_visited = 0
        self.interrupted = False
        self.elapsed = 0.0
        self._start = clock()

    def find_best_move(self, board: Board, player: Disc, depth: int) -> Optional[Square]:
        """
        Root of the search
        ---

        Every root move gets scored by a minimizing alpha_beta() one ply down. The first move reaching the
        best score is kept. Returns None without legal moves (a pass), and also if the search got interrupted before
        any root move was fully scored.
        """
        self._start = self.clock()
        self.nodes_visited = 0
        self.interrupted = False

        root_moves = legal_moves(board, player)
        if not root_moves:
            return None

        work_board = board.copy()
        best_move: Optional[Square] = None
        best_score = -math.inf
        alpha: float = MIN_SCORE
        beta: float = MAX_SCORE
        try:
            for move in root_moves:
                self._check_budget(force=True)
                undo = make_move(work_board, move.row, move.col, player)
                try:
                    result = self.alpha_beta(
                        work_board, depth - 1, alpha, beta, False, player
                    )
                finally:
                    unmake_move(work_board, undo)

                if result.score > best_score:
                    best_score = result.score
                    best_move = move
                alpha = max(alpha, best_score)
        except SearchInterrupted:
            self.interrupted = True
            logger.warning(
                f"Search stopped early after {self.nodes_visited} nodes; "
                f"answering with best move so far: {best_move.to_notation() if best_move else None}"
            )

        self.elapsed = self.clock() - self._start
        logger.debug(
            f"depth={depth} nodes={self.nodes_visited} elapsed={self.elapsed:.3f}s "
            f"best={best_move.to_notation() if best_move else None} score={best_score}"
        )
        return best_move

    def alpha_beta(
        self,
        board: Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        root_player: Disc,
    ) -> SearchResult:
        """
        Minimax with alpha-beta pruning. Scores are always from root_player's point of view.

        NOTE a side without legal moves passes: recurse with the other side to move at the SAME depth.
        NOTE `board` is modified during the call, but is back in its original state when the call returns.
        """
        self.nodes_visited += 1
        self._check_budget()

        if depth == 0 or is_game_over(board):
            return SearchResult(move=None, score=evaluate_board(board, root_player))

        to_move = root_player if maximizing else root_player.opponent
        candidate_moves = legal_moves(board, to_move)
        if not candidate_moves:
            return self.alpha_beta(board, depth, alpha, beta, not maximizing, root_player)

        best_score: float = MIN_SCORE if maximizing else MAX_SCORE
        best_move: Optional[Square] = None
        for move in candidate_moves:
            undo = make_move(board, move.row, move.col, to_move)
            try:
                result = self.alpha_beta(
                    board, depth - 1, alpha, beta, not maximizing, root_player
                )
            finally:
                unmake_move(board, undo)

            if maximizing:
                if result.score > best_score:
                    best_score = result.score
                    best_move = move
                alpha = max(alpha, best_score)
            else:
                if result.score < best_score:
                    best_score = result.score
                    best_move = move
                beta = min(beta, best_score)

            if beta <= alpha:
                break

        return SearchResult(move=best_move, score=best_score)

    def _check_budget(self, force: bool = False) -> None:
        if not force and self.nodes_visited % self.CHECK_EVERY_N_NODES != 0:
            return
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SearchInterrupted("cancelled")
        if self.time_limit is not None and self.clock() - self._start > self.time_limit:
            raise SearchInterrupted("out of time")


# --- CONVENIENCE WRAPPERS (no time limit) ---
def alpha_beta(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    root_player: Disc,
) -> SearchResult:
    """Unbounded alpha-beta on a copy of `board`"""
    return AlphaBetaSearch().alpha_beta(
        board.copy(), depth, alpha, beta, maximizing, root_player
    )


def find_best_move(board: Board, player: Disc, depth: int) -> Optional[Square]:
    return AlphaBetaSearch().find_best_move(board, player, depth)


# --- SHALLOW TIERS ---
def choose_max_flip_move(board: Board, player: Disc) -> Optional[Square]:
    """Greedy: the move flipping the most discs right now. First one found wins ties."""
    best_move: Optional[Square] = None
    most_flips = -1
    for move in legal_moves(board, player):
        flips = count_flips(board, move, player)
        if flips > most_flips:
            most_flips = flips
            best_move = move
    return best_move


def choose_best_scored_move(
    board: Board,
    player: Disc,
    score_move: MoveScoreFn,
    rng: Optional[random.Random] = None,
) -> Optional[Square]:
    """Score every legal move, pick uniformly at random among those sharing the top score."""
    candidate_moves = legal_moves(board, player)
    if not candidate_moves:
        return None

    scores = {move: score_move(board, move, player) for move in candidate_moves}
    top_score = max(scores.values())
    best_moves = [move for move in candidate_moves if scores[move] == top_score]
    return (rng or random).choice(best_moves)
