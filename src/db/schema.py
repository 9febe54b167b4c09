"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    """
    An archived game. Records are written once and never updated.
    ----

    * number: archive order (autoincrement), games are listed by it
    * game_id: the ID handed out to clients
    * icn: the game as normalized ICN (see ICNService.save_game)
    * variant / result: copies of the metadata entries, so games can be looked up by them
    """

    __tablename__ = "games"
    number: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    game_id: Mapped[UUID] = mapped_column(unique=True, index=True)
    variant: Mapped[Optional[str]] = mapped_column(index=True)
    result: Mapped[Optional[str]]
    icn: Mapped[str] = mapped_column(Text)
    # NOTE: 'metadata' is reserved by SQLAlchemy's declarative base, only the column uses that name
    game_metadata: Mapped[dict[str, str]] = mapped_column("metadata", JSON, default=dict)
    move_count: Mapped[int] = mapped_column(default=0)
    archived_at: Mapped[datetime] = mapped_column(default=utc_now)
