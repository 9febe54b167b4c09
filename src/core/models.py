"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The service and the db layer exchange archived games through the model(s) defined here,
so neither depends on how the other represents a game.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameModel:
    """Transport-safe representation of an archived game: the ICN itself, plus a few fields worth querying on."""

    icn: str
    metadata: dict[str, str]
    move_count: int

    @property
    def variant(self) -> Optional[str]:
        return self.metadata.get("Variant") or None

    @property
    def result(self) -> Optional[str]:
        return self.metadata.get("Result") or None
