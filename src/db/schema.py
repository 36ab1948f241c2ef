"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "othello_games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[str]
    current_player: Mapped[str]
    participants: Mapped[dict[str, str]] = mapped_column(JSON)
    status: Mapped[str]
    difficulty: Mapped[str]
    winner: Mapped[Optional[str]]
    last_move_was_pass: Mapped[bool] = mapped_column(default=False)
    moves: Mapped[list[str]] = mapped_column(JSON, default=list)
    show_hints: Mapped[bool] = mapped_column(default=False)
    last_think_time: Mapped[Optional[float]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
