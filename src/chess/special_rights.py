"""
Helpers to determine special rights (double pawn push, castling) of a starting position.

Variants often only supply the position. Which pieces may still use their first-move privileges follows from two gamerule hints:
* pawnDoublePush: all pawns may still move two squares
* castleWith: the kind of piece that kings castle with (a rook or a guard)
"""

from typing import Optional

from src.chess.coords import Coords
from src.chess.pieces import JUMPING_ROYALS, Player, RawType
from src.chess.position import Position, SpecialRights
from src.core.exceptions import UnsupportedCastlingPiece

# A castling partner must be at least this many files away from its king
MIN_CASTLING_DISTANCE = 3

CASTLE_WITH_TYPES: tuple[RawType, ...] = (RawType.ROOK, RawType.GUARD)


def generate_special_rights(
    position: Position, pawn_double_push: bool, castle_with: Optional[RawType] = None
) -> SpecialRights:
    """
    Squares of the pieces that keep their special rights.
    ----

    1. every pawn, if pawn_double_push
    2. every jumping royal (king, royal centaur), if castle_with is given
    3. every piece of type castle_with that is on the same rank as a royal of the same player, at least 3 files away from it.

    Raises UnsupportedCastlingPiece if castle_with is neither a rook nor a guard.
    """
    if castle_with is not None and castle_with not in CASTLE_WITH_TYPES:
        raise UnsupportedCastlingPiece(
            f"Cannot castle with a {castle_with.name.lower()}. Pick one from {[t.name.lower() for t in CASTLE_WITH_TYPES]}"
        )

    special_rights: SpecialRights = set()
    royals: list[tuple[Coords, Player]] = []
    castling_candidates: list[tuple[Coords, Player]] = []

    for coords, piece in position.items():
        if piece.type == RawType.PAWN:
            if pawn_double_push:
                special_rights.add(coords)
        elif castle_with is not None and piece.type in JUMPING_ROYALS:
            special_rights.add(coords)
            royals.append((coords, piece.player))
        elif castle_with is not None and piece.type == castle_with:
            castling_candidates.append((coords, piece.player))

    for coords, player in castling_candidates:
        if _has_castling_royal(coords, player, royals):
            special_rights.add(coords)

    return special_rights


def _has_castling_royal(
    coords: Coords, player: Player, royals: list[tuple[Coords, Player]]
) -> bool:
    """Is there a royal of the same player on the same rank, far enough away to castle with?"""
    return any(
        royal.y == coords.y
        and royal_player == player
        and abs(royal.x - coords.x) >= MIN_CASTLING_DISTANCE
        for royal, royal_player in royals
    )
