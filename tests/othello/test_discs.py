"""Unit tests for /src/othello/discs.py"""

import pytest

from src.core.exceptions import InvalidBoardError
from src.core.shared_types import Color
from src.othello.discs import Disc


def test_opponent() -> None:
    assert Disc.DARK.opponent == Disc.LIGHT
    assert Disc.LIGHT.opponent == Disc.DARK
    assert Disc.EMPTY.opponent == Disc.EMPTY


@pytest.mark.parametrize("disc, color", [(Disc.DARK, Color.DARK), (Disc.LIGHT, Color.LIGHT)])
def test_color_conversion(disc: Disc, color: Color) -> None:
    assert Disc.from_color(color) == disc
    assert disc.to_color() == color


def test_empty_has_no_color() -> None:
    with pytest.raises(ValueError):
        Disc.EMPTY.to_color()


@pytest.mark.parametrize("char, disc", [("D", Disc.DARK), ("L", Disc.LIGHT), (".", Disc.EMPTY)])
def test_char_conversion(char: str, disc: Disc) -> None:
    assert Disc.from_char(char) == disc
    assert disc.to_char() == char


@pytest.mark.parametrize("char", ["d", "x", "", "DL"])
def test_invalid_char(char: str) -> None:
    with pytest.raises(InvalidBoardError):
        Disc.from_char(char)
