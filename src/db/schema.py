"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """One row per game: the latest snapshot of its state"""

    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board_fen: Mapped[str]
    moved_squares: Mapped[list[int]] = mapped_column(JSON, default=list)
    current_turn: Mapped[str]
    status: Mapped[str]
    move_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    last_pawn_move: Mapped[Optional[dict[str, int]]] = mapped_column(JSON, nullable=True)
    pending_promotion: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    white_player: Mapped[str]
    black_player: Mapped[str]
    result: Mapped[str] = mapped_column(default="*")
    difficulty: Mapped[str] = mapped_column(default="medium")
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
