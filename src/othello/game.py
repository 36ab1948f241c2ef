"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of othello:
turn order, forced passes, the end of the game, and letting the AI play through the exact same path as a human.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import (
    TERMINAL_STATUSES,
    Color,
    Difficulty,
    Status,
    Winner,
)
from src.othello.board import Board, DiscCount
from src.othello.discs import Disc
from src.othello.moves import (
    apply_move,
    has_legal_move,
    is_legal_move,
    legal_moves,
    majority_winner,
)
from src.othello.participants import Participant
from src.othello.search import AlphaBetaSearch
from src.othello.square import BOARD_SIZE, Square
from src.othello.strategies import strategy_for

logger = logging.getLogger(__name__)

PASS = "pass"


@dataclass(frozen=True)
class AiTurn:
    """What happened during an AI turn. `warning` is set when the strategy failed to come up with a move."""

    square: Square
    think_time: float
    warning: Optional[str] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_player: Disc
    participants: dict[Disc, Participant]
    status: Status
    difficulty: Difficulty
    winner: Optional[Winner] = None
    last_move_was_pass: bool = False
    moves: list[Optional[Square]] = field(default_factory=list)  # None: a pass
    show_hints: bool = False
    last_think_time: Optional[float] = None

    @classmethod
    def new_game(
        cls,
        dark: Participant,
        light: Participant,
        difficulty: Difficulty = Difficulty.EASY,
        show_hints: bool = False,
        board: Optional[Board] = None,
        to_move: Disc = Disc.DARK,
    ) -> Self:
        """Start a game. Without a board: the canonical 4-disc setup, Dark to move.

        A game with an open seat waits for the second player. Otherwise it starts right away.
        """
        if to_move == Disc.EMPTY:
            raise GameStateError("Either dark or light must be the first to move.")
        if dark.is_human and light.is_human and dark.name == light.name:
            raise GameStateError(f"{dark.name} cannot play against themselves.")

        all_seats_taken = dark.is_assigned and light.is_assigned
        game = cls(
            board=board.copy() if board else Board.starting(),
            current_player=to_move,
            participants={Disc.DARK: dark, Disc.LIGHT: light},
            status=Status.IN_PROGRESS if all_seats_taken else Status.WAITING_FOR_PLAYERS,
            difficulty=difficulty,
            show_hints=show_hints,
        )
        if game.status == Status.IN_PROGRESS:
            game._settle_opening()
        logger.info(
            f"New game: {dark.display_name(difficulty)} (dark) vs {light.display_name(difficulty)} (light), status: {game.status}"
        )
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        try:
            status = Status(model.status)
            difficulty = Difficulty(model.difficulty)
            current_player = Disc.from_color(Color(model.current_player))
            winner = Winner(model.winner) if model.winner is not None else None
            seats = {
                Disc.from_color(Color(color)): text
                for color, text in model.participants.items()
            }
        except ValueError as exc:
            raise GameStateError(f"Invalid game record: {exc}") from exc

        participants = {disc: Participant.from_text(text) for disc, text in seats.items()}
        for disc in (Disc.DARK, Disc.LIGHT):
            participants.setdefault(disc, Participant.unassigned())

        moves = [
            None if move == PASS else Square.from_notation(move) for move in model.moves
        ]

        return cls(
            board=Board.from_string(model.board),
            current_player=current_player,
            participants=participants,
            status=status,
            difficulty=difficulty,
            winner=winner,
            last_move_was_pass=model.last_move_was_pass,
            moves=moves,
            show_hints=model.show_hints,
            last_think_time=model.last_think_time,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board=self.board.to_string(),
            current_player=self.current_player.to_color().value,
            participants={
                disc.to_color().value: participant.to_text()
                for disc, participant in self.participants.items()
            },
            status=self.status.value,
            difficulty=self.difficulty.value,
            winner=self.winner.value if self.winner else None,
            last_move_was_pass=self.last_move_was_pass,
            moves=[move.to_notation() if move else PASS for move in self.moves],
            show_hints=self.show_hints,
            last_think_time=self.last_think_time,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def participant_to_move(self) -> Participant:
        return self.participants[self.current_player]

    @property
    def is_ai_turn(self) -> bool:
        return self.status == Status.IN_PROGRESS and self.participant_to_move.is_ai

    def disc_count(self) -> DiscCount:
        return self.board.count_discs()

    def register_player(self, player: str) -> None:
        """Registering the 2nd player to an open game"""
        if self.status != Status.WAITING_FOR_PLAYERS:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )
        if any(p.name == player for p in self.participants.values() if p.is_human):
            raise GameStateError(f"{player} already plays in this game.")

        open_seat = next(
            disc for disc, participant in self.participants.items() if not participant.is_assigned
        )
        self.participants[open_seat] = Participant.human(player)
        self._change_status(Status.IN_PROGRESS)
        self._settle_opening()

    def legal_moves(self) -> list[Square]:
        """
        Legal moves of the side to move.
        ----
        These can be used to display to the user (hints). A game that is not in progress has none.
        """
        if self.status != Status.IN_PROGRESS:
            return []
        return legal_moves(self.board, self.current_player)

    def make_move(self, square: Square, player: str) -> None:
        """
        Attempt to make a move on behalf of a human participant
        -----

        Rejected (nothing changes) if the game is not in progress, if it is not this player's turn, or if the square is not a legal move.
        """
        self._assert_in_progress()
        self._assert_your_turn(player)
        self._play(square)

    def request_ai_move(
        self,
        rng: Optional[random.Random] = None,
        search: Optional[AlphaBetaSearch] = None,
    ) -> Optional[Square]:
        """The move the AI would like to play, without playing it. None: the AI has nothing to play."""
        self._assert_in_progress()
        if not self.participant_to_move.is_ai:
            raise NotYourTurnError(
                f"It is not the AI's turn. Waiting for {self.participant_to_move.display_name()} to make a move first."
            )
        return strategy_for(self.difficulty).choose(
            self.board, self.current_player, rng, search
        )

    def play_ai_turn(
        self,
        rng: Optional[random.Random] = None,
        search: Optional[AlphaBetaSearch] = None,
    ) -> AiTurn:
        """
        Let the AI pick a move and play it through the same path as a human move.
        ----

        If the strategy comes back empty-handed (or with something that is not legal) while legal moves exist,
        play the first legal move instead and report it as a warning.
        """
        started = time.monotonic()
        choice = self.request_ai_move(rng, search)
        think_time = time.monotonic() - started

        warning: Optional[str] = None
        candidates = legal_moves(self.board, self.current_player)
        if not candidates:
            raise GameStateError(
                f"{self.current_player.to_color()} has no legal move but the game is still in progress."
            )
        if choice is None or choice not in candidates:
            warning = (
                f"AI ({self.difficulty}) did not produce a legal move ({choice!r}); "
                f"falling back to {candidates[0].to_notation()}."
            )
            logger.warning(warning)
            choice = candidates[0]

        self.last_think_time = think_time
        self._play(choice)
        return AiTurn(square=choice, think_time=think_time, warning=warning)

    def surrender(self, player: str) -> None:
        """A participant resigns: the other side wins."""
        self._assert_in_progress()
        player_disc = self._get_player_disc(player)
        self._finish(Status.SURRENDERED, Winner(player_disc.opponent.to_color().value))

    def abort(self) -> None:
        """Forcibly end the game. Nobody wins."""
        if self.is_terminal:
            raise GameStateError(f"Game already ended. status: {self.status}")
        self.status = Status.ABORTED
        self.winner = None
        logger.info("Game aborted")

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_your_turn(self, player: str) -> None:
        """You must wait for your turn before making a move."""
        to_move = self.participant_to_move
        if not (to_move.is_human and to_move.name == player):
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {to_move.display_name(self.difficulty)} to make a move first."
            )

    def _get_player_disc(self, player: str) -> Disc:
        for disc, participant in self.participants.items():
            if participant.is_human and participant.name == player:
                return disc
        raise GameStateError(f"{player} does not play in this game.")

    def _play(self, square: Square) -> None:
        """Shared by human and AI moves: validate, apply, hand over the turn."""
        mover = self.current_player
        if not is_legal_move(self.board, square.row, square.col, mover):
            raise IllegalMoveError(f"Not a legal move: {square.to_notation()}")

        self.board = apply_move(self.board, square.row, square.col, mover)
        assert self.board.count_discs().total == BOARD_SIZE * BOARD_SIZE
        self.moves.append(square)
        self.last_move_was_pass = False
        self._settle_turn(mover)

    def _settle_turn(self, mover: Disc) -> None:
        """
        Decide who moves next after `mover` played
        ----

        1. Board full --> game over
        2. Opponent can move --> opponent's turn
        3. Opponent cannot move, but mover can --> opponent passes, mover plays again
        4. Neither side can move --> game over
        """
        opponent = mover.opponent
        if self.board.is_full():
            self._finish(Status.FINISHED, majority_winner(self.board))
        elif has_legal_move(self.board, opponent):
            self.current_player = opponent
        elif has_legal_move(self.board, mover):
            logger.info(f"{opponent.to_color()} has no legal move and passes")
            self.last_move_was_pass = True
            self.moves.append(None)
            self.current_player = mover
        else:
            self._finish(Status.FINISHED, majority_winner(self.board))

    def _settle_opening(self) -> None:
        """A loaded/constructed position where the side to move is stuck: as if the other side just moved."""
        if not self.board.is_full() and has_legal_move(self.board, self.current_player):
            return
        self._settle_turn(self.current_player.opponent)

    def _finish(self, status: Status, winner: Winner) -> None:
        self._change_status(status)
        self.winner = winner
        count = self.board.count_discs()
        logger.info(
            f"Game over ({status}): winner {winner}, dark {count.dark} - light {count.light}"
        )

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
