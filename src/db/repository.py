"""Protocol repository (implemented with SQLAlchemy in src/db/sql_repository.py)"""

from typing import Optional, Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Archive of decoded games. Records are immutable: a game is stored, read, searched or removed."""

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]: ...

    def get_game(self, game_id: UUID) -> GameModel | None: ...

    def find_games(
        self,
        variant: Optional[str] = None,
        result: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[tuple[UUID, GameModel]]:
        """Archived games, oldest first, optionally only those of one variant and/or result."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record. Returns what was removed, or None for an unknown ID."""
        ...
