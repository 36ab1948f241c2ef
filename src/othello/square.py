"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_uppercase

from src.core.exceptions import InvalidSquareError

# Othello board is always 8x8.
BOARD_SIZE = 8

Vector = tuple[int, int]

# The 8 unit vectors (d_row, d_col) a capture run can follow.
DIRECTIONS: tuple[Vector, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, order=True)
class Square:
    """(row, col), both zero-based. Row 0 is the top of the board, col 0 the left-hand side."""

    row: int
    col: int

    @classmethod
    def from_notation(cls, text: str) -> Square:
        """Notation: column letter + row number. 'A1' - 'H8' get converted to (0,0) - (7,7)"""
        text = text.strip().upper()
        if len(text) != 2 or text[0] not in ascii_uppercase[:BOARD_SIZE]:
            raise InvalidSquareError(f"Cannot interpret {text!r} as a square (ex. 'C4').")
        if not text[1].isdigit() or not (1 <= int(text[1]) <= BOARD_SIZE):
            raise InvalidSquareError(f"Cannot interpret {text!r} as a square (ex. 'C4').")
        col = ord(text[0]) - ord("A")
        row = int(text[1]) - 1
        return cls(row, col)

    def to_notation(self) -> str:
        return f"{ascii_uppercase[self.col]}{self.row + 1}"

    def is_corner(self) -> bool:
        return self in CORNERS

    def is_edge(self) -> bool:
        """Edges exclude the corners themselves."""
        on_border = self.row in (0, BOARD_SIZE - 1) or self.col in (0, BOARD_SIZE - 1)
        return on_border and not self.is_corner()

    def neighbours(self) -> list[Square]:
        """All squares in the 8-neighbourhood that lie on the board"""
        return [
            Square(self.row + d_row, self.col + d_col)
            for d_row, d_col in DIRECTIONS
            if is_on_board(self.row + d_row, self.col + d_col)
        ]


CORNERS: tuple[Square, ...] = (
    Square(0, 0),
    Square(0, BOARD_SIZE - 1),
    Square(BOARD_SIZE - 1, 0),
    Square(BOARD_SIZE - 1, BOARD_SIZE - 1),
)

ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)
