"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"
    SURRENDERED = "surrendered"
    ABORTED = "aborted"


TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {Status.FINISHED, Status.SURRENDERED, Status.ABORTED}
)


# --- Color DOES NOT contain an option for empty cells. See src/othello/discs.py for the version including EMPTY.
class Color(StrEnum):
    DARK = "dark"
    LIGHT = "light"


class ParticipantKind(StrEnum):
    HUMAN = "human"
    AI = "ai"
    UNASSIGNED = "unassigned"


class Winner(StrEnum):
    DARK = "dark"
    LIGHT = "light"
    DRAW = "draw"


class Difficulty(StrEnum):
    """AI strength, weakest first. Declaration order is the ordering of the tiers."""

    EASY = "easy"
    HARD = "hard"
    SUPERHARD = "superhard"
    PRO = "pro"
    GOD = "god"
