"""
Legality and capture rules.

Key idea: a placed disc captures independently along each of the 8 directions. A run of opposing discs
only counts when it is closed off by a disc of the player's own color.

This is the only module that writes to a Board's cells.
"""

from dataclasses import dataclass, field

from src.core.shared_types import Winner
from src.othello.board import Board
from src.othello.discs import Disc
from src.othello.square import ALL_SQUARES, DIRECTIONS, Square, is_on_board


def scan_direction(
    board: Board, row: int, col: int, player: Disc, d_row: int, d_col: int
) -> list[Square]:
    """
    Raycasting from (row, col) along (d_row, d_col)
    ---

    Collect the opponent's discs starting one step away from the origin. The run gets returned only if it
    is terminated by one of the player's own discs. Running off the board, or into an empty cell, means nothing gets captured.
    """
    opponent = player.opponent
    run: list[Square] = []
    r, c = row + d_row, col + d_col
    while is_on_board(r, c):
        disc = board.grid[r][c]
        if disc == opponent:
            run.append(Square(r, c))
        elif disc == player:
            return run
        else:
            return []
        r += d_row
        c += d_col
    return []


def flips_for_move(board: Board, row: int, col: int, player: Disc) -> list[Square]:
    """All discs captured by placing on (row, col): union of the runs in every direction."""
    flipped: list[Square] = []
    for d_row, d_col in DIRECTIONS:
        flipped.extend(scan_direction(board, row, col, player, d_row, d_col))
    return flipped


def is_legal_move(board: Board, row: int, col: int, player: Disc) -> bool:
    """Empty cell that captures in at least one direction"""
    if not is_on_board(row, col) or board.grid[row][col] != Disc.EMPTY:
        return False
    return any(
        scan_direction(board, row, col, player, d_row, d_col)
        for d_row, d_col in DIRECTIONS
    )


def legal_moves(board: Board, player: Disc) -> list[Square]:
    """Every legal square for the player, in row-major order."""
    return [
        square
        for square in ALL_SQUARES
        if is_legal_move(board, square.row, square.col, player)
    ]


def has_legal_move(board: Board, player: Disc) -> bool:
    """Cheaper than legal_moves() when only existence matters: stops at the first hit."""
    return any(
        is_legal_move(board, square.row, square.col, player) for square in ALL_SQUARES
    )


def apply_move(board: Board, row: int, col: int, player: Disc) -> Board:
    """
    Place a disc and flip every captured run. Returns a NEW board, the input is not touched.

    NOTE precondition: the move is legal. No re-validation happens here (check is_legal_move first).
    """
    new_board = board.copy()
    new_board.grid[row][col] = player
    for square in flips_for_move(board, row, col, player):
        new_board.grid[square.row][square.col] = player
    return new_board


# --- IN PLACE VERSION (search only) ---
@dataclass
class Undo:
    """Exact record of what make_move() changed: enough to revert it."""

    placed: Square
    player: Disc
    flipped: list[Square] = field(default_factory=list)


def make_move(board: Board, row: int, col: int, player: Disc) -> Undo:
    """Same as apply_move(), but mutates `board` and returns the record needed to take the move back."""
    flipped = flips_for_move(board, row, col, player)
    board.grid[row][col] = player
    for square in flipped:
        board.grid[square.row][square.col] = player
    return Undo(placed=Square(row, col), player=player, flipped=flipped)


def unmake_move(board: Board, undo: Undo) -> None:
    """Revert only the cells touched by the matching make_move()"""
    opponent = undo.player.opponent
    for square in undo.flipped:
        board.grid[square.row][square.col] = opponent
    board.grid[undo.placed.row][undo.placed.col] = Disc.EMPTY


# --- END OF GAME ---
def is_game_over(board: Board) -> bool:
    """No empty cell left, or neither side can move."""
    if board.is_full():
        return True
    return not has_legal_move(board, Disc.DARK) and not has_legal_move(
        board, Disc.LIGHT
    )


def majority_winner(board: Board) -> Winner:
    """Side with strictly more discs. Equal counts is a draw."""
    count = board.count_discs()
    if count.dark > count.light:
        return Winner.DARK
    if count.light > count.dark:
        return Winner.LIGHT
    return Winner.DRAW
