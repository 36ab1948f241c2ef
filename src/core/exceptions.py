"""
Custom exceptions shared across layers.

Every error the domain raises derives from GameError, so the Service (and whatever sits above it) can catch one type.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while playing a game."""


class GameStateError(GameError):
    """The requested action is not allowed in the current status of the game."""


class IllegalMoveError(GameError):
    """The submitted square is not a legal move for the player to move."""


class NotYourTurnError(GameError):
    """A participant tried to act while the other side is to move."""


class InvalidSquareError(GameError):
    """Text could not be parsed into a square on the board (ex. 'C4')."""


class InvalidBoardError(GameError):
    """Text could not be parsed into a board."""


class InvalidRequestError(GameError):
    """Request failed validation at the boundary.

    NOTE not a ValueError: pydantic re-raises it unchanged instead of wrapping it in a ValidationError.
    """


class RepositoryError(GameError):
    """Record not found / could not be stored."""
