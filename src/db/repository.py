"""Protocol repository: the session store the Service gets injected with (in-memory dict, SQL Alchemy, ...)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Session store for othello games, keyed by game ID.

    Implementations hand out GameModel snapshots: a caller changing a returned model does not change the stored session
    until it calls update_game() with it.
    """

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Snapshot of the session, None for an unknown ID."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Open a new session. Returns what got stored and the ID assigned to it."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the stored session after a resolved move (None: no such session, nothing stored)."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Drop the session. Returns its last state, None if it did not exist."""
        ...
