"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError, InvalidSquareError
from src.core.shared_types import Color, Difficulty, ParticipantKind, Status, Winner
from src.othello.square import Square

DiscColor = str
ParticipantText = str


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """The requesting player takes `color`. The other seat goes to the AI, or stays open for a second human."""

    player_name: str
    color: Color = Color.DARK
    opponent: ParticipantKind = ParticipantKind.AI
    difficulty: Optional[Difficulty] = None
    show_hints: bool = False

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Player name cannot be empty.")
        return value

    @field_validator("opponent")
    @classmethod
    def validate_opponent(cls, value: ParticipantKind) -> ParticipantKind:
        if value == ParticipantKind.HUMAN:
            raise InvalidRequestError(
                "A human opponent joins later (join game). Use 'ai' or 'unassigned'."
            )
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class LegalMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        """Coordinate text like 'C4' (column letter, row number)"""
        try:
            Square.from_notation(value)
        except InvalidSquareError as exc:
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            ) from exc
        return value.strip().upper()


class AiTurnRequest(BaseModel):
    game_id: UUID


class SurrenderRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class DiscCountResponse(BaseModel):
    dark: int
    light: int
    empty: int


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[DiscColor, ParticipantText]
    board: str
    current_player: Color
    status: Status
    is_terminal: bool
    winner: Optional[Winner]
    difficulty: Difficulty
    disc_count: DiscCountResponse
    last_move_was_pass: bool
    move_history: list[str]
    show_hints: bool
    legal_moves: list[str]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]


class MoveResponse(BaseModel):
    """Typed result of a move attempt: rejected moves come back with `accepted=False` and the reason."""

    game_id: UUID
    accepted: bool
    square: Optional[str] = None
    error: Optional[str] = None
    warning: Optional[str] = None
    think_time: Optional[float] = None
    game: Optional[GameResponse] = None


class AiSuggestionResponse(BaseModel):
    game_id: UUID
    square: Optional[str]
