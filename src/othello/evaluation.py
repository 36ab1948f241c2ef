"""
Scoring of positions and of single moves.

* evaluate_board(): the positional evaluation used at the leaves of the alpha-beta search.
* evaluate_move_*(): move-local heuristics used by the tiers that do not search.
"""

from src.core.shared_types import Winner
from src.othello.board import Board
from src.othello.discs import Disc
from src.othello.moves import (
    apply_move,
    flips_for_move,
    is_game_over,
    legal_moves,
    majority_winner,
)
from src.othello.square import ALL_SQUARES, BOARD_SIZE, CORNERS, Square

WIN_SCORE = 1_000_000
LOSS_SCORE = -1_000_000
DRAW_SCORE = 0

CORNER_WEIGHT = 100
MOBILITY_WEIGHT = 5
DANGER_PENALTY = 25
# material counts from 40 discs onwards, reaching its full weight when the board is full (64 = 40 + 24)
ENDGAME_START = 40
ENDGAME_SPAN = 24
ENDGAME_MATERIAL_FACTOR = 5

# move heuristics (non-search tiers)
MOVE_CORNER_BONUS = 100
MOVE_CORNER_NEIGHBOUR_PENALTY = 50
MOVE_EDGE_BONUS = 20
OPPONENT_MOBILITY_WEIGHT = 2

WINNER_TO_DISC: dict[Winner, Disc] = {
    Winner.DARK: Disc.DARK,
    Winner.LIGHT: Disc.LIGHT,
    Winner.DRAW: Disc.EMPTY,
}


def evaluate_board(board: Board, player: Disc) -> float:
    """
    Score the board from `player`'s point of view (higher is better)
    ---

    A finished game scores exactly WIN_SCORE / LOSS_SCORE / DRAW_SCORE. Otherwise the sum of:

    1. corners: +100 per corner held, -100 per corner held by the opponent
    2. potential mobility: 5 * (empty cells next to a player disc - empty cells next to an opponent disc)
    3. material: disc difference, weighted more heavily as the board fills up
    4. danger: -25 per empty corner that has an opponent disc next to it
    """
    if is_game_over(board):
        return terminal_score(board, player)

    return (
        corner_term(board, player)
        + mobility_term(board, player)
        + material_term(board, player)
        + danger_term(board, player)
    )


def terminal_score(board: Board, player: Disc) -> int:
    winner = WINNER_TO_DISC[majority_winner(board)]
    if winner == player:
        return WIN_SCORE
    if winner == player.opponent:
        return LOSS_SCORE
    return DRAW_SCORE


def corner_term(board: Board, player: Disc) -> int:
    score = 0
    for corner in CORNERS:
        disc = board.cell(corner)
        if disc == player:
            score += CORNER_WEIGHT
        elif disc == player.opponent:
            score -= CORNER_WEIGHT
    return score


def mobility_term(board: Board, player: Disc) -> int:
    """Potential mobility: cheaper proxy for the number of moves either side will have."""
    opponent = player.opponent
    player_adjacent = 0
    opponent_adjacent = 0
    for square in ALL_SQUARES:
        if board.cell(square) != Disc.EMPTY:
            continue
        neighbours = {board.cell(neighbour) for neighbour in square.neighbours()}
        if player in neighbours:
            player_adjacent += 1
        if opponent in neighbours:
            opponent_adjacent += 1
    return (player_adjacent - opponent_adjacent) * MOBILITY_WEIGHT


def endgame_weight(board: Board) -> float:
    """0 up to 40 discs on the board, then linearly up to 1 for a full board."""
    count = board.count_discs()
    return max(0, count.dark + count.light - ENDGAME_START) / ENDGAME_SPAN


def material_term(board: Board, player: Disc) -> float:
    count = board.count_discs()
    difference = count.dark - count.light
    if player == Disc.LIGHT:
        difference = -difference
    return difference * (1 + endgame_weight(board) * ENDGAME_MATERIAL_FACTOR)


def danger_term(board: Board, player: Disc) -> int:
    """An opponent disc next to an empty corner is the X-square risk indicator. Counted once per corner."""
    opponent = player.opponent
    score = 0
    for corner in CORNERS:
        if board.cell(corner) != Disc.EMPTY:
            continue
        if any(board.cell(neighbour) == opponent for neighbour in corner.neighbours()):
            score -= DANGER_PENALTY
    return score


# --- MOVE HEURISTICS ---
def count_flips(board: Board, square: Square, player: Disc) -> int:
    return len(flips_for_move(board, square.row, square.col, player))


def is_next_to_empty_corner(board: Board, square: Square) -> bool:
    """X-squares and C-squares of a corner nobody holds yet"""
    return any(
        board.cell(corner) == Disc.EMPTY and square in corner.neighbours()
        for corner in CORNERS
    )


def is_bad_edge(square: Square) -> bool:
    """Edge squares right next to a corner, along the edge (C-squares)."""
    last = BOARD_SIZE - 1
    on_top_or_bottom = square.row in (0, last) and square.col in (1, last - 1)
    on_left_or_right = square.col in (0, last) and square.row in (1, last - 1)
    return on_top_or_bottom or on_left_or_right


def count_frontier_discs(board: Board, player: Disc) -> int:
    """Player's discs with at least one empty neighbour"""
    return sum(
        1
        for square in board.squares_of(player)
        if any(board.cell(neighbour) == Disc.EMPTY for neighbour in square.neighbours())
    )


def evaluate_move_hard(board: Board, square: Square, player: Disc) -> int:
    """
    Move-local score used by the 'hard' tier
    ----

    * +100 for taking a corner
    * -50 for a square next to a corner that is still empty (judged before the move)
    * edges: +20, except the squares next to a corner along the edge: -20
    * +1 per flipped disc
    * -2 per legal move the opponent has after the move
    """
    score = 0
    if square.is_corner():
        score += MOVE_CORNER_BONUS

    if is_next_to_empty_corner(board, square):
        score -= MOVE_CORNER_NEIGHBOUR_PENALTY

    if square.is_edge():
        score += -MOVE_EDGE_BONUS if is_bad_edge(square) else MOVE_EDGE_BONUS

    score += count_flips(board, square, player)

    after_move = apply_move(board, square.row, square.col, player)
    score -= len(legal_moves(after_move, player.opponent)) * OPPONENT_MOBILITY_WEIGHT
    return score


def evaluate_move_superhard(board: Board, square: Square, player: Disc) -> int:
    """The 'hard' score, minus the player's frontier discs after the move."""
    after_move = apply_move(board, square.row, square.col, player)
    return evaluate_move_hard(board, square, player) - count_frontier_discs(
        after_move, player
    )
