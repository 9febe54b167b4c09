"""Game archive on top of SQLAlchemy"""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


def to_record(game: GameModel, game_id: UUID) -> DBGame:
    return DBGame(
        game_id=game_id,
        variant=game.variant,
        result=game.result,
        icn=game.icn,
        game_metadata=dict(game.metadata),
        move_count=game.move_count,
    )


def to_model(record: DBGame) -> GameModel:
    return GameModel(
        icn=record.icn,
        metadata=dict(record.game_metadata),
        move_count=record.move_count,
    )


class SQLGameRepository:
    """Archived games in a single 'games' table. Variant and result get their own (indexed) columns for searching."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        record = to_record(game, uuid4())
        self.db.add(record)
        self.db.commit()
        return to_model(record), record.game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        record = self._find_record(game_id)
        return None if record is None else to_model(record)

    def find_games(
        self,
        variant: Optional[str] = None,
        result: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[tuple[UUID, GameModel]]:
        query = select(DBGame).order_by(DBGame.number)
        if variant is not None:
            query = query.where(DBGame.variant == variant)
        if result is not None:
            query = query.where(DBGame.result == result)
        if limit is not None:
            query = query.limit(limit)
        return [(record.game_id, to_model(record)) for record in self.db.scalars(query)]

    def delete_game(self, game_id: UUID) -> GameModel | None:
        record = self._find_record(game_id)
        if record is None:
            return None
        deleted = to_model(record)
        self.db.delete(record)
        self.db.commit()
        return deleted

    def _find_record(self, game_id: UUID) -> DBGame | None:
        return self.db.scalars(select(DBGame).where(DBGame.game_id == game_id)).one_or_none()
