"""Unit tests for /src/othello/game.py"""

import random
from unittest.mock import MagicMock, patch

import pytest

from src.core.exceptions import GameStateError, IllegalMoveError, NotYourTurnError
from src.core.models import GameModel
from src.core.shared_types import Difficulty, ParticipantKind, Status, Winner
from src.othello.board import STARTING_BOARD_STRING, Board
from src.othello.discs import Disc
from src.othello.game import Game
from src.othello.participants import Participant
from src.othello.search import AlphaBetaSearch
from src.othello.square import Square

EMPTY_ROW = "........"

# Dark to move. After Dark takes (0,0), Light is stuck but Dark can still capture on (5,2).
# After that second capture neither side has a move left: Light wins 8 - 6 on the row at the bottom.
PASS_THEN_END = "/".join(
    [".LD.....", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "DL......", EMPTY_ROW, "LLLLLLLL"]
)
# One empty cell left. Dark fills it: 32 - 32.
LAST_CELL_DRAW = "/".join([".LDDDDDD"] + ["DDDDDDDD"] * 3 + ["LLLLLLLL"] * 4)
# One empty cell left. Dark fills it: 40 - 24.
LAST_CELL_DARK_WINS = "/".join([".LDDDDDD"] + ["DDDDDDDD"] * 4 + ["LLLLLLLL"] * 3)


@pytest.fixture
def two_humans() -> Game:
    return Game.new_game(dark=Participant.human("alice"), light=Participant.human("bob"))


@pytest.fixture
def human_vs_ai() -> Game:
    return Game.new_game(dark=Participant.human("alice"), light=Participant.ai())


def game_from(board: str) -> Game:
    return Game.new_game(
        dark=Participant.human("alice"),
        light=Participant.human("bob"),
        board=Board.from_string(board),
    )


# -- NEW GAME ---
def test_new_game_defaults(two_humans: Game) -> None:
    assert two_humans.board.to_string() == STARTING_BOARD_STRING
    assert two_humans.current_player == Disc.DARK
    assert two_humans.status == Status.IN_PROGRESS
    assert two_humans.winner is None
    assert two_humans.moves == []
    assert not two_humans.last_move_was_pass
    count = two_humans.disc_count()
    assert (count.dark, count.light, count.empty) == (2, 2, 60)


def test_new_game_with_open_seat_waits() -> None:
    game = Game.new_game(dark=Participant.human("alice"), light=Participant.unassigned())
    assert game.status == Status.WAITING_FOR_PLAYERS
    assert game.legal_moves() == []


def test_new_game_against_yourself() -> None:
    with pytest.raises(GameStateError):
        Game.new_game(dark=Participant.human("alice"), light=Participant.human("alice"))


def test_new_game_empty_cannot_start() -> None:
    with pytest.raises(GameStateError):
        Game.new_game(
            dark=Participant.human("alice"), light=Participant.ai(), to_move=Disc.EMPTY
        )


def test_new_game_from_a_finished_position() -> None:
    game = game_from("/".join(["DDDDDLLL"] * 8))
    assert game.status == Status.FINISHED
    assert game.winner == Winner.DARK


def test_new_game_side_to_move_stuck() -> None:
    """Light to move but without a move on this board: Dark plays instead"""
    board = Board.from_string(
        "/".join(["DDD.....", EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, EMPTY_ROW, "DL......", EMPTY_ROW, "LLLLLLLL"])
    )
    game = Game.new_game(
        dark=Participant.human("alice"),
        light=Participant.human("bob"),
        board=board,
        to_move=Disc.LIGHT,
    )
    assert game.current_player == Disc.DARK
    assert game.last_move_was_pass


def test_legal_moves_in_opening(two_humans: Game) -> None:
    assert two_humans.legal_moves() == [Square(2, 3), Square(3, 2), Square(4, 5), Square(5, 4)]


# -- MODEL CONVERSION ---
def test_model_roundtrip(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    model = human_vs_ai.to_model()

    assert model.current_player == "light"
    assert model.participants == {"dark": "human:alice", "light": "ai"}
    assert model.moves == ["D3"]
    assert Game.from_model(model) == human_vs_ai


def test_model_records_passes() -> None:
    game = game_from(PASS_THEN_END)
    game.make_move(Square(0, 0), "alice")
    model = game.to_model()
    assert model.moves == ["A1", "pass"]
    assert Game.from_model(model).moves == [Square(0, 0), None]


def test_from_invalid_model() -> None:
    model = GameModel(
        board=STARTING_BOARD_STRING,
        current_player="dark",
        participants={"dark": "human:alice", "light": "ai"},
        status="paused",
        difficulty="easy",
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


@pytest.mark.parametrize(
    "participants",
    [
        {"purple": "human:alice", "light": "ai"},
        {"dark": "human:alice", "light": "robot"},
    ],
)
def test_from_model_with_corrupt_participants(participants: dict[str, str]) -> None:
    """A damaged record always surfaces as a GameError, never as a bare ValueError"""
    model = GameModel(
        board=STARTING_BOARD_STRING,
        current_player="dark",
        participants=participants,
        status="in progress",
        difficulty="easy",
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


def test_think_time_survives_the_model(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    turn = human_vs_ai.play_ai_turn()

    reloaded = Game.from_model(human_vs_ai.to_model())

    assert reloaded.last_think_time == turn.think_time
    assert reloaded == human_vs_ai


# -- JOINING ---
def test_register_player() -> None:
    game = Game.new_game(dark=Participant.human("alice"), light=Participant.unassigned())
    game.register_player("bob")
    assert game.status == Status.IN_PROGRESS
    assert game.participants[Disc.LIGHT] == Participant.human("bob")


def test_register_player_twice(two_humans: Game) -> None:
    with pytest.raises(GameStateError):
        two_humans.register_player("carol")


def test_register_same_name() -> None:
    game = Game.new_game(dark=Participant.human("alice"), light=Participant.unassigned())
    with pytest.raises(GameStateError):
        game.register_player("alice")
    assert game.status == Status.WAITING_FOR_PLAYERS


# -- MOVES ---
def test_make_move_hands_over_turn(two_humans: Game) -> None:
    two_humans.make_move(Square(2, 3), "alice")
    assert two_humans.current_player == Disc.LIGHT
    assert two_humans.moves == [Square(2, 3)]
    count = two_humans.disc_count()
    assert (count.dark, count.light) == (4, 1)


def test_illegal_move_changes_nothing(two_humans: Game) -> None:
    before = two_humans.to_model()
    with pytest.raises(IllegalMoveError):
        two_humans.make_move(Square(0, 0), "alice")
    with pytest.raises(IllegalMoveError):
        two_humans.make_move(Square(3, 3), "alice")  # occupied
    assert two_humans.to_model() == before


def test_not_your_turn_changes_nothing(two_humans: Game) -> None:
    before = two_humans.to_model()
    with pytest.raises(NotYourTurnError):
        two_humans.make_move(Square(2, 4), "bob")
    with pytest.raises(NotYourTurnError):
        two_humans.make_move(Square(2, 3), "mallory")
    assert two_humans.to_model() == before


def test_human_cannot_move_for_the_ai(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    with pytest.raises(NotYourTurnError):
        human_vs_ai.make_move(Square(2, 2), "alice")


def test_move_while_waiting() -> None:
    game = Game.new_game(dark=Participant.human("alice"), light=Participant.unassigned())
    with pytest.raises(GameStateError):
        game.make_move(Square(2, 3), "alice")


# -- PASSES AND THE END OF THE GAME ---
def test_opponent_without_moves_passes() -> None:
    game = game_from(PASS_THEN_END)
    game.make_move(Square(0, 0), "alice")

    assert game.status == Status.IN_PROGRESS
    assert game.current_player == Disc.DARK
    assert game.last_move_was_pass
    assert game.legal_moves() == [Square(5, 2)]


def test_both_sides_stuck_ends_the_game() -> None:
    game = game_from(PASS_THEN_END)
    game.make_move(Square(0, 0), "alice")
    game.make_move(Square(5, 2), "alice")

    assert game.status == Status.FINISHED
    assert game.is_terminal
    assert game.winner == Winner.LIGHT
    count = game.disc_count()
    assert (count.dark, count.light) == (6, 8)
    assert game.legal_moves() == []


def test_move_after_pass_clears_flag() -> None:
    game = game_from(PASS_THEN_END)
    game.make_move(Square(0, 0), "alice")
    game.make_move(Square(5, 2), "alice")
    assert not game.last_move_was_pass


@pytest.mark.parametrize(
    "board, winner",
    [(LAST_CELL_DRAW, Winner.DRAW), (LAST_CELL_DARK_WINS, Winner.DARK)],
)
def test_full_board_ends_the_game(board: str, winner: Winner) -> None:
    game = game_from(board)
    game.make_move(Square(0, 0), "alice")
    assert game.board.is_full()
    assert game.status == Status.FINISHED
    assert game.winner == winner


def test_no_moves_after_the_end() -> None:
    game = game_from(LAST_CELL_DRAW)
    game.make_move(Square(0, 0), "alice")
    with pytest.raises(GameStateError):
        game.make_move(Square(0, 0), "bob")


# -- AI TURNS ---
def test_easy_ai_turn(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    assert human_vs_ai.is_ai_turn

    turn = human_vs_ai.play_ai_turn()

    # Light's answers all flip 1 disc: the first one wins
    assert turn.square == Square(2, 2)
    assert turn.warning is None
    assert turn.think_time >= 0
    assert human_vs_ai.last_think_time == turn.think_time
    assert human_vs_ai.current_player == Disc.DARK
    assert human_vs_ai.moves == [Square(2, 3), Square(2, 2)]


def test_ai_cannot_play_for_a_human(human_vs_ai: Game) -> None:
    with pytest.raises(NotYourTurnError):
        human_vs_ai.play_ai_turn()
    with pytest.raises(NotYourTurnError):
        human_vs_ai.request_ai_move()


def test_request_ai_move_does_not_play(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    before = human_vs_ai.to_model()
    assert human_vs_ai.request_ai_move() == Square(2, 2)
    assert human_vs_ai.to_model() == before


def test_ai_without_a_choice_falls_back_to_first_legal_move(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    broken = MagicMock()
    broken.choose.return_value = None

    with patch("src.othello.game.strategy_for", return_value=broken):
        turn = human_vs_ai.play_ai_turn()

    assert turn.square == Square(2, 2)
    assert turn.warning is not None
    assert human_vs_ai.current_player == Disc.DARK


def test_ai_with_illegal_choice_falls_back(human_vs_ai: Game) -> None:
    human_vs_ai.make_move(Square(2, 3), "alice")
    broken = MagicMock()
    broken.choose.return_value = Square(7, 7)

    with patch("src.othello.game.strategy_for", return_value=broken):
        turn = human_vs_ai.play_ai_turn()

    assert turn.square == Square(2, 2)
    assert turn.warning is not None


def test_ai_vs_ai_plays_to_the_end() -> None:
    game = Game.new_game(dark=Participant.ai(), light=Participant.ai(), difficulty=Difficulty.HARD)
    rng = random.Random(7)
    for _ in range(120):
        if game.is_terminal:
            break
        turn = game.play_ai_turn(rng=rng)
        assert turn.warning is None
    assert game.status == Status.FINISHED
    assert game.winner is not None


def test_searching_ai_under_time_pressure(human_vs_ai: Game) -> None:
    """Whatever the search managed in its budget, the AI ends up playing a legal move"""
    human_vs_ai.difficulty = Difficulty.PRO
    human_vs_ai.make_move(Square(2, 3), "alice")
    candidates = human_vs_ai.legal_moves()

    turn = human_vs_ai.play_ai_turn(search=AlphaBetaSearch(time_limit=0.05))

    assert turn.square in candidates


# -- SURRENDER / ABORT ---
def test_surrender(two_humans: Game) -> None:
    two_humans.surrender("alice")
    assert two_humans.status == Status.SURRENDERED
    assert two_humans.winner == Winner.LIGHT
    assert two_humans.is_terminal


def test_surrender_out_of_turn(two_humans: Game) -> None:
    two_humans.surrender("bob")
    assert two_humans.winner == Winner.DARK


def test_surrender_by_stranger(two_humans: Game) -> None:
    with pytest.raises(GameStateError):
        two_humans.surrender("mallory")
    assert two_humans.status == Status.IN_PROGRESS


def test_abort(two_humans: Game) -> None:
    two_humans.abort()
    assert two_humans.status == Status.ABORTED
    assert two_humans.winner is None
    with pytest.raises(GameStateError):
        two_humans.abort()


def test_abort_waiting_game() -> None:
    game = Game.new_game(dark=Participant.human("alice"), light=Participant.unassigned())
    game.abort()
    assert game.status == Status.ABORTED
    assert game.participants[Disc.LIGHT].kind == ParticipantKind.UNASSIGNED
