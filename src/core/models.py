"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
DiscColor = str
ParticipantText = str


@dataclass
class GameModel:
    """Transport-safe representation of an othello game used between API, Service, DB, and Game layers.

    * board: 8 rows joined by '/', 'D' dark, 'L' light, '.' empty (see Board.to_string)
    * participants: 'dark'/'light' -> 'human:<name>', 'ai' or 'unassigned'
    * moves: squares in 'C4' notation, 'pass' for a skipped turn
    * last_think_time: seconds the AI spent on its most recent move (None before its first one)
    """

    board: str
    current_player: DiscColor
    participants: dict[DiscColor, ParticipantText]
    status: str
    difficulty: str
    winner: Optional[str] = None
    last_move_was_pass: bool = False
    moves: list[str] = field(default_factory=list)
    show_hints: bool = False
    last_think_time: Optional[float] = None
