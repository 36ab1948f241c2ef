"""The Game board: the grid of cells and read-only queries on it.

Cells only change through the move resolver (src/othello/moves.py). Nothing else writes to `grid`.
"""

from dataclasses import dataclass
from typing import NamedTuple, Self

from src.core.exceptions import InvalidBoardError
from src.othello.discs import Disc
from src.othello.square import ALL_SQUARES, BOARD_SIZE, Square, is_on_board

Grid = list[list[Disc]]

EMPTY_BOARD_STRING = "/".join(["." * BOARD_SIZE] * BOARD_SIZE)
STARTING_BOARD_STRING = "/".join(
    [
        "........",
        "........",
        "........",
        "...LD...",
        "...DL...",
        "........",
        "........",
        "........",
    ]
)


class DiscCount(NamedTuple):
    dark: int
    light: int
    empty: int

    @property
    def total(self) -> int:
        return self.dark + self.light + self.empty


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[Disc.EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def starting(cls) -> Self:
        """Canonical setup: Light on (3,3) and (4,4), Dark on (3,4) and (4,3)"""
        return cls.from_string(STARTING_BOARD_STRING)

    @classmethod
    def from_string(cls, text: str) -> Self:
        """Construct a board from its text encoding.

        8 rows, top row (row 0) first, separated by slashes. Within a row the first character is column 0 (A).
        ex. the starting position:
        ......../......../......../...LD.../...DL.../......../......../........
        """
        rows = text.strip().split("/")
        if len(rows) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Board must have {BOARD_SIZE} rows separated by '/', got {len(rows)}."
            )
        grid: Grid = []
        for row_idx, row_text in enumerate(rows):
            if len(row_text) != BOARD_SIZE:
                raise InvalidBoardError(
                    f"Row {row_idx} must have {BOARD_SIZE} cells, got {row_text!r}."
                )
            grid.append([Disc.from_char(character) for character in row_text])
        return cls(grid)

    def to_string(self) -> str:
        return "/".join(
            "".join(disc.to_char() for disc in row) for row in self.grid
        )

    def copy(self) -> Self:
        return type(self)([row.copy() for row in self.grid])

    def cell(self, square: Square) -> Disc:
        return self.at(square.row, square.col)

    def at(self, row: int, col: int) -> Disc:
        """Off-board coordinates read as EMPTY"""
        if not is_on_board(row, col):
            return Disc.EMPTY
        return self.grid[row][col]

    def squares_of(self, disc: Disc) -> list[Square]:
        return [square for square in ALL_SQUARES if self.cell(square) == disc]

    def is_full(self) -> bool:
        return not any(Disc.EMPTY in row for row in self.grid)

    def count_discs(self) -> DiscCount:
        """Tally every cell of the board"""
        dark = light = empty = 0
        for row in self.grid:
            for disc in row:
                if disc == Disc.DARK:
                    dark += 1
                elif disc == Disc.LIGHT:
                    light += 1
                else:
                    empty += 1
        return DiscCount(dark, light, empty)
