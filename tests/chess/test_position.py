"""Unit tests for src/chess/position.py"""

import pytest

from src.chess.coords import Coords
from src.chess.pieces import Piece, Player, RawType
from src.chess.position import Position, position_from_short, position_to_short
from src.core.exceptions import (
    MalformedCoordinate,
    MalformedPositionToken,
    UnknownPieceType,
)

WHITE_PAWN = Piece(RawType.PAWN, Player.WHITE)
BLACK_KING = Piece(RawType.KING, Player.BLACK)
RED_ROOK = Piece(RawType.ROOK, Player.RED)
OBSTACLE = Piece(RawType.OBSTACLE, Player.NEUTRAL)


def test_position_to_short() -> None:
    """'+' marks the squares with special rights, in the order of the position"""
    position = {Coords(1, 2): WHITE_PAWN, Coords(-1000, 2500): BLACK_KING}
    assert position_to_short(position, {Coords(1, 2)}) == "P1,2+|k-1000,2500"


def test_position_to_short_without_rights() -> None:
    assert position_to_short({Coords(0, 0): OBSTACLE}) == "ob0,0"


def test_position_from_short() -> None:
    position, special_rights = position_from_short("P1,2+|k-1000,2.5e3|3r10,10|ob0,0")
    assert position == {
        Coords(1, 2): WHITE_PAWN,
        Coords(-1000, 2500): BLACK_KING,
        Coords(10, 10): RED_ROOK,
        Coords(0, 0): OBSTACLE,
    }
    assert special_rights == {Coords(1, 2)}


def test_empty_position() -> None:
    assert position_from_short("") == ({}, set())
    assert position_to_short({}) == ""


@pytest.mark.parametrize(
    "position, special_rights",
    [
        ({Coords(1, 2): WHITE_PAWN}, {Coords(1, 2)}),
        (
            {Coords(-5000, 123456): BLACK_KING, Coords(10**40, -(10**40)): RED_ROOK},
            {Coords(10**40, -(10**40))},
        ),
        ({Coords(-1, -1): OBSTACLE, Coords(9999, 0): WHITE_PAWN}, set()),
    ],
)
def test_position_round_trip(position: Position, special_rights: set[Coords]) -> None:
    """Large and negative coordinates survive encoding + decoding"""
    short = position_to_short(position, special_rights)
    assert position_from_short(short) == (position, special_rights)


@pytest.mark.parametrize(
    "short",
    [
        "P1,2||K1,1",  # empty token
        "1,2",  # no piece
        "P1,2+x",  # junk after the special rights marker
        "P",  # no coordinates
    ],
)
def test_malformed_position_tokens(short: str) -> None:
    with pytest.raises(MalformedPositionToken):
        position_from_short(short)


def test_malformed_coordinate_in_position() -> None:
    with pytest.raises(MalformedCoordinate):
        position_from_short("P1.5,2|K1,1")


def test_unknown_piece_in_position() -> None:
    with pytest.raises(UnknownPieceType):
        position_from_short("XX3,3")


def test_signed_exponents() -> None:
    """The '+' of an exponent is not a special rights marker"""
    position, special_rights = position_from_short("P1,2e+3|K-1e+1,1e+0+")
    assert position == {
        Coords(1, 2000): WHITE_PAWN,
        Coords(-10, 1): Piece(RawType.KING, Player.WHITE),
    }
    assert special_rights == {Coords(-10, 1)}
