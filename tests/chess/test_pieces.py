"""Unit tests for src/chess/pieces.py"""

import pytest

from src.chess.pieces import (
    PIECE_TO_SHORT,
    RAW_TO_SHORT,
    Piece,
    Player,
    RawType,
    code_to_player,
    piece_to_short,
    player_to_code,
    short_to_piece,
)
from src.core.exceptions import InvalidTurnOrderAbbreviation, UnknownPieceType


@pytest.mark.parametrize("raw_type", [raw_type for raw_type in RawType])
@pytest.mark.parametrize("player", [player for player in Player])
def test_piece_codec_bijection(raw_type: RawType, player: Player) -> None:
    """Every piece, curated abbreviation or not, survives the round trip"""
    piece = Piece(raw_type, player)
    assert short_to_piece(piece_to_short(piece)) == piece


@pytest.mark.parametrize(
    "piece, expected",
    [
        (Piece(RawType.KING, Player.WHITE), "K"),
        (Piece(RawType.KING, Player.BLACK), "k"),
        (Piece(RawType.AMAZON, Player.WHITE), "AM"),
        (Piece(RawType.AMAZON, Player.BLACK), "am"),
        (Piece(RawType.ROYALCENTAUR, Player.WHITE), "RC"),
        (Piece(RawType.OBSTACLE, Player.NEUTRAL), "ob"),
        (Piece(RawType.VOID, Player.NEUTRAL), "vo"),
    ],
)
def test_curated_abbreviations(piece: Piece, expected: str) -> None:
    """Capital letters are used for white pieces, lower case for black"""
    assert piece_to_short(piece) == expected


@pytest.mark.parametrize(
    "piece, expected",
    [
        (Piece(RawType.ROOK, Player.RED), "3r"),
        (Piece(RawType.ARCHBISHOP, Player.GREEN), "6ar"),
        (Piece(RawType.KING, Player.NEUTRAL), "0k"),
        (Piece(RawType.OBSTACLE, Player.WHITE), "1ob"),
    ],
)
def test_fallback_abbreviations(piece: Piece, expected: str) -> None:
    """Pieces without curated abbreviation get their player number as prefix"""
    assert piece_to_short(piece) == expected
    assert short_to_piece(expected) == piece


def test_player_number_forces_lower_case() -> None:
    assert short_to_piece("3R") == Piece(RawType.ROOK, Player.RED)


def test_curated_table_covers_white_and_black() -> None:
    neutral_only = {RawType.OBSTACLE, RawType.VOID}
    expected_size = 2 * (len(RAW_TO_SHORT) - len(neutral_only)) + len(neutral_only)
    assert len(PIECE_TO_SHORT) == expected_size


@pytest.mark.parametrize(
    "short",
    [
        "",  # empty
        "X",  # no such piece
        "OB",  # obstacles only exist in lower case
        "k3",  # digits after the letters
        "9k",  # no player 9
        "3xx",  # prefix is fine, letters are not
    ],
)
def test_unknown_piece_abbreviations(short: str) -> None:
    with pytest.raises(UnknownPieceType):
        short_to_piece(short)


def test_piece_from_and_to_short() -> None:
    piece = Piece.from_short("Q")
    assert piece == Piece(RawType.QUEEN, Player.WHITE)
    assert piece.to_short() == "Q"


@pytest.mark.parametrize("player", [player for player in Player])
def test_player_codes(player: Player) -> None:
    assert code_to_player(player_to_code(player)) == player


def test_unknown_player_code() -> None:
    with pytest.raises(InvalidTurnOrderAbbreviation):
        code_to_player("x")
