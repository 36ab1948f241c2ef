"""Defines the contents of a cell: an empty cell or a disc of either color"""

from enum import Enum, auto

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color


class Disc(Enum):
    EMPTY = auto()
    DARK = auto()
    LIGHT = auto()

    @property
    def opponent(self) -> "Disc":
        """The other color. EMPTY has no opponent and maps onto itself."""
        return OPPONENT[self]

    @classmethod
    def from_color(cls, color: Color) -> "Disc":
        return COLOR_TO_DISC[color]

    def to_color(self) -> Color:
        if self == Disc.EMPTY:
            raise ValueError("An empty cell has no color.")
        return DISC_TO_COLOR[self]

    @classmethod
    def from_char(cls, character: str) -> "Disc":
        if character not in CHAR_TO_DISC:
            raise InvalidBoardError(
                f"Unknown cell character {character!r}. Use one of {''.join(CHAR_TO_DISC)}."
            )
        return CHAR_TO_DISC[character]

    def to_char(self) -> str:
        return DISC_TO_CHAR[self]


OPPONENT: dict[Disc, Disc] = {
    Disc.DARK: Disc.LIGHT,
    Disc.LIGHT: Disc.DARK,
    Disc.EMPTY: Disc.EMPTY,
}

COLOR_TO_DISC: dict[Color, Disc] = {
    Color.DARK: Disc.DARK,
    Color.LIGHT: Disc.LIGHT,
}
DISC_TO_COLOR: dict[Disc, Color] = {value: key for key, value in COLOR_TO_DISC.items()}

# text encoding of a single cell (see Board.from_string)
CHAR_TO_DISC: dict[str, Disc] = {
    ".": Disc.EMPTY,
    "D": Disc.DARK,
    "L": Disc.LIGHT,
}
DISC_TO_CHAR: dict[Disc, str] = {value: key for key, value in CHAR_TO_DISC.items()}
