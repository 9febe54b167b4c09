"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PieceName, PlayerName

COMPACTNESS_LEVELS = (0, 1, 2)
CASTLE_WITH_NAMES = (PieceName.ROOK, PieceName.GUARD)


# --- REQUEST MODELS ---
class ICNRequest(BaseModel):
    icn: str

    @field_validator("icn")
    @classmethod
    def validate_icn(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("ICN string is empty.")
        return value


class DecodeRequest(ICNRequest):
    pass


class ConvertRequest(ICNRequest):
    """Options for writing the game back to ICN"""

    compactness: int = 0
    newlines: bool = True
    include_position: bool = True
    comments: bool = False

    @field_validator("compactness")
    @classmethod
    def validate_compactness(cls, value: int) -> int:
        if value not in COMPACTNESS_LEVELS:
            raise InvalidRequestError(
                f"Compactness must be one of {COMPACTNESS_LEVELS}, got {value}."
            )
        return value


class ProjectRequest(ConvertRequest):
    ply_count: Optional[int] = None

    @field_validator("ply_count")
    @classmethod
    def validate_ply_count(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise InvalidRequestError(f"Cannot replay a negative number of moves: {value}")
        return value


class SpecialRightsRequest(BaseModel):
    position: str
    pawn_double_push: bool = True
    castle_with: Optional[PieceName] = None

    @field_validator("castle_with")
    @classmethod
    def validate_castle_with(cls, value: Optional[PieceName]) -> Optional[PieceName]:
        if value is not None and value not in CASTLE_WITH_NAMES:
            raise InvalidRequestError(
                f"Kings can only castle with one of {[str(name) for name in CASTLE_WITH_NAMES]}, got {value}."
            )
        return value


class SaveGameRequest(ICNRequest):
    pass


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class ListGamesRequest(BaseModel):
    """Search the archive. Without filters every game is listed."""

    variant: Optional[str] = None
    result: Optional[str] = None
    limit: Optional[int] = None

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidRequestError(f"Limit must be a positive number, got {value}.")
        return value


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: Optional[UUID] = None
    metadata: dict[str, str]
    turn_order: list[PlayerName]
    enpassant: Optional[str]
    move_rule: Optional[str]
    full_move: int
    position: str
    moves: list[str]
    icn: str


class ICNResponse(BaseModel):
    icn: str


class SpecialRightsResponse(BaseModel):
    position: str
    special_rights: list[str]


class GameSummaryResponse(BaseModel):
    game_id: UUID
    variant: Optional[str]
    result: Optional[str]
    metadata: dict[str, str]
    move_count: int
