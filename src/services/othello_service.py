"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import random
import threading
from typing import Optional
from uuid import UUID

from src.api.models import (
    AiSuggestionResponse,
    AiTurnRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DiscCountResponse,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    SurrenderRequest,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import GameError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import ParticipantKind
from src.db.repository import GameRepository
from src.othello.discs import Disc
from src.othello.game import Game
from src.othello.participants import Participant
from src.othello.search import AlphaBetaSearch
from src.othello.square import Square

logger = logging.getLogger(__name__)


class OthelloService:
    """Orchestration of layers for othello games.

    The session store is injected: the service itself keeps no games around between calls.
    NOTE no locking in here. Calls for the same game must not overlap (see AiMoveWorker).
    """

    def __init__(
        self,
        repository: GameRepository,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()
        self.rng = rng or random.Random()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game (against the AI, or with an open seat)."""

        requester = Participant.human(request.player_name)
        opponent = (
            Participant.ai()
            if request.opponent == ParticipantKind.AI
            else Participant.unassigned()
        )
        requester_disc = Disc.from_color(request.color)
        seats = {requester_disc: requester, requester_disc.opponent: opponent}

        new_game = Game.new_game(
            dark=seats[Disc.DARK],
            light=seats[Disc.LIGHT],
            difficulty=request.difficulty or self.settings.default_difficulty,
            show_hints=request.show_hints,
        )

        # Store the GameModel in the repository
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info(f"Created game {game_id}")
        return self._create_game_response(game_id, new_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Second player requested to join a game."""

        game = self._load_game(request.game_id)
        game.register_player(request.player_name)
        self._store_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game = self._load_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal moves of the side to move (to render hints)."""

        game = self._load_game(request.game_id)
        return LegalMovesResponse(
            game_id=request.game_id,
            color=game.current_player.to_color(),
            legal_moves=[square.to_notation() for square in game.legal_moves()],
        )

    def submit_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----
        Never raises for a bad move: a rejected move comes back as accepted=False, and the stored game stays as it was.
        """
        try:
            game = self._load_game(request.game_id)
            game.make_move(Square.from_notation(request.square), request.player_name)
        except GameError as exc:
            logger.info(f"Move {request.square} rejected in game {request.game_id}: {exc}")
            return MoveResponse(
                game_id=request.game_id,
                accepted=False,
                square=request.square,
                error=str(exc),
            )

        self._store_game(request.game_id, game)
        return MoveResponse(
            game_id=request.game_id,
            accepted=True,
            square=request.square,
            game=self._create_game_response(request.game_id, game),
        )

    def request_ai_move(self, request: GetGameRequest) -> AiSuggestionResponse:
        """The move the AI would play now, without playing it. Only valid while the AI is to move."""

        game = self._load_game(request.game_id)
        suggestion = game.request_ai_move(rng=self.rng, search=self._new_search())
        return AiSuggestionResponse(
            game_id=request.game_id,
            square=suggestion.to_notation() if suggestion else None,
        )

    def play_ai_turn(
        self, request: AiTurnRequest, cancel_event: Optional[threading.Event] = None
    ) -> MoveResponse:
        """Let the AI play its move. Same typed result as a human move."""
        try:
            game = self._load_game(request.game_id)
            turn = game.play_ai_turn(
                rng=self.rng, search=self._new_search(cancel_event)
            )
        except GameError as exc:
            logger.info(f"AI turn rejected in game {request.game_id}: {exc}")
            return MoveResponse(game_id=request.game_id, accepted=False, error=str(exc))

        self._store_game(request.game_id, game)
        return MoveResponse(
            game_id=request.game_id,
            accepted=True,
            square=turn.square.to_notation(),
            warning=turn.warning,
            think_time=turn.think_time,
            game=self._create_game_response(request.game_id, game),
        )

    def surrender(self, request: SurrenderRequest) -> GameResponse:
        """A participant resigns."""
        game = self._load_game(request.game_id)
        game.surrender(request.player_name)
        self._store_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def abort_game(self, request: GetGameRequest) -> GameResponse:
        """Force the game to end without a winner."""
        game = self._load_game(request.game_id)
        game.abort()
        self._store_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _new_search(
        self, cancel_event: Optional[threading.Event] = None
    ) -> AlphaBetaSearch:
        return AlphaBetaSearch(
            time_limit=self.settings.time_limit, cancel_event=cancel_event
        )

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert a Game into a GameResponse (for game with given ID.)"""
        model = game.to_model()
        count = game.disc_count()
        return GameResponse(
            game_id=game_id,
            players=model.participants,
            board=model.board,
            current_player=game.current_player.to_color(),
            status=game.status,
            is_terminal=game.is_terminal,
            winner=game.winner,
            difficulty=game.difficulty,
            disc_count=DiscCountResponse(
                dark=count.dark, light=count.light, empty=count.empty
            ),
            last_move_was_pass=game.last_move_was_pass,
            move_history=model.moves,
            show_hints=game.show_hints,
            legal_moves=[square.to_notation() for square in game.legal_moves()],
        )

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _store_game(self, game_id: UUID, game: Game) -> None:
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
