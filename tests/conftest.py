"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

import random
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.othello.board import Board
from src.othello.discs import Disc
from src.othello.moves import apply_move, is_game_over, legal_moves

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

Position = tuple[Board, Disc]


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


def random_playout(seed: int, max_plies: int = 60) -> list[Position]:
    """Every (board, side to move) reached by playing random legal moves from the starting position. Passes included."""
    rng = random.Random(seed)
    board = Board.starting()
    player = Disc.DARK
    positions: list[Position] = [(board, player)]
    for _ in range(max_plies):
        if is_game_over(board):
            break
        moves = legal_moves(board, player)
        if moves:
            move = rng.choice(moves)
            board = apply_move(board, move.row, move.col, player)
        player = player.opponent
        positions.append((board, player))
    return positions


@pytest.fixture(scope="session")
def reachable_positions() -> list[Position]:
    """A few hundred positions from complete random games (seeded: same positions on every run)."""
    positions: list[Position] = []
    for seed in range(6):
        positions.extend(random_playout(seed))
    return positions
