"""Unit tests for src/db/database.py"""

from uuid import uuid4

from sqlalchemy import inspect

from src.core.config import Settings
from src.core.shared_types import Difficulty
from src.db.database import create_db_engine, get_db, session_factory
from src.db.sql_repository import SQLGameRepository


def test_engine_creates_tables() -> None:
    settings = Settings(
        database_url="sqlite://",
        sql_echo=False,
        default_difficulty=Difficulty.EASY,
        search_time_limit=0,
        ai_workers=1,
        log_level="INFO",
    )
    engine = create_db_engine(settings)
    assert "othello_games" in inspect(engine).get_table_names()

    sessions = get_db(session_factory(engine))
    db = next(sessions)
    assert SQLGameRepository(db).get_game(uuid4()) is None
    sessions.close()
