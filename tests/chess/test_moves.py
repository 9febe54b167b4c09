"""Unit tests for src/chess/moves.py"""

import pytest

from src.chess.coords import Coords
from src.chess.moves import Compactness, Move, moves_from_icn, moves_to_icn
from src.chess.pieces import Piece, Player, RawType
from src.core.exceptions import MalformedMoveToken, UnclosedCommentBlock

W, B = Player.WHITE, Player.BLACK
WHITE_PAWN = Piece(RawType.PAWN, W)
BLACK_PAWN = Piece(RawType.PAWN, B)
WHITE_KNIGHT = Piece(RawType.KNIGHT, W)
WHITE_QUEEN = Piece(RawType.QUEEN, W)

OPENING = [
    Move(Coords(1, 2), Coords(1, 4), piece=WHITE_PAWN),
    Move(Coords(1, 7), Coords(1, 5), piece=BLACK_PAWN),
    Move(Coords(2, 1), Coords(3, 3), piece=WHITE_KNIGHT),
]
OPENING_COMPACT = ["1,2>1,4", "1,7>1,5", "2,1>3,3"]


# --- COMPACT MOVES ---
@pytest.mark.parametrize(
    "compact, start, end, promotion",
    [
        ("1,2>1,4", Coords(1, 2), Coords(1, 4), None),
        ("3,7>3,8=Q", Coords(3, 7), Coords(3, 8), WHITE_QUEEN),
        ("3,2>3,1=q", Coords(3, 2), Coords(3, 1), Piece(RawType.QUEEN, B)),
        ("3,7>3,8Q", Coords(3, 7), Coords(3, 8), WHITE_QUEEN),  # without '='
        ("1,7>1,8=3r", Coords(1, 7), Coords(1, 8), Piece(RawType.ROOK, Player.RED)),
        ("-5,2e3>10,2e3", Coords(-5, 2000), Coords(10, 2000), None),
    ],
)
def test_move_from_compact(
    compact: str, start: Coords, end: Coords, promotion: Piece | None
) -> None:
    move = Move.from_compact(compact)
    assert move.start == start
    assert move.end == end
    assert move.promotion == promotion


@pytest.mark.parametrize("compact", ["", "1,2", "1,2-1,4", "a,b>c,d"])
def test_invalid_compact_moves(compact: str) -> None:
    with pytest.raises(MalformedMoveToken):
        Move.from_compact(compact)


def test_compact_property() -> None:
    move = Move(Coords(1, 7), Coords(1, 8), promotion=WHITE_QUEEN, piece=WHITE_PAWN)
    assert move.compact == "1,7>1,8=Q"
    assert Move.from_compact(move.compact).promotion == WHITE_QUEEN


# --- SINGLE MOVES ---
@pytest.mark.parametrize(
    "move, pretty, medium, minimal",
    [
        (OPENING[0], "P1,2 > 1,4", "P1,2>1,4", "1,2>1,4"),
        (
            Move(
                Coords(4, 4),
                Coords(5, 5),
                piece=Piece(RawType.BISHOP, B),
                capture=True,
                check=True,
            ),
            "b4,4 x 5,5 +",
            "b4,4x5,5+",
            "4,4>5,5",
        ),
        (
            Move(
                Coords(1, 7),
                Coords(1, 8),
                promotion=WHITE_QUEEN,
                piece=WHITE_PAWN,
                mate=True,
            ),
            "P1,7 > 1,8 =Q #",
            "P1,7>1,8=Q#",
            "1,7>1,8=Q",
        ),
        (Move(Coords(0, 0), Coords(0, 1)), "0,0 > 0,1", "0,0>0,1", "0,0>0,1"),
    ],
)
def test_move_to_icn(move: Move, pretty: str, medium: str, minimal: str) -> None:
    """Minimal notation drops the piece, capture and check markers"""
    assert move.to_icn(Compactness.PRETTY) == pretty
    assert move.to_icn(Compactness.MEDIUM) == medium
    assert move.to_icn(Compactness.MINIMAL) == minimal


def test_move_comments() -> None:
    move = Move(
        Coords(1, 2),
        Coords(1, 4),
        piece=WHITE_PAWN,
        comment="Best move",
        clock_stamp=117300,
    )
    assert (
        move.to_icn(Compactness.MEDIUM, comments=True)
        == "P1,2>1,4 {[%clk 0:01:57.3] Best move}"
    )
    assert move.to_icn(Compactness.MEDIUM) == "P1,2>1,4"
    assert move.to_icn(Compactness.MINIMAL, comments=True) == "1,2>1,4"


# --- MOVE LISTS ---
def test_pretty_move_list() -> None:
    """One line per cycle of the turn order"""
    assert (
        moves_to_icn(OPENING, [W, B])
        == "1. P1,2 > 1,4 | p1,7 > 1,5\n2. N2,1 > 3,3"
    )


def test_pretty_move_list_without_newlines() -> None:
    assert (
        moves_to_icn(OPENING, [W, B], newlines=False)
        == "1. P1,2 > 1,4 | p1,7 > 1,5 | 2. N2,1 > 3,3"
    )


def test_pretty_move_list_starts_at_full_move() -> None:
    assert moves_to_icn(OPENING, [W, B], full_move=5).startswith("5. ")


def test_move_numbers_follow_turn_order_length() -> None:
    """With four players, a move number covers four moves"""
    turn_order = [Player.RED, Player.BLUE, Player.YELLOW, Player.GREEN]
    moves = [Move(Coords(i, 0), Coords(i, 1)) for i in range(5)]
    assert moves_to_icn(moves, turn_order) == (
        "1. 0,0 > 0,1 | 1,0 > 1,1 | 2,0 > 2,1 | 3,0 > 3,1\n2. 4,0 > 4,1"
    )


@pytest.mark.parametrize(
    "compactness, expected",
    [
        (Compactness.MEDIUM, "P1,2>1,4|p1,7>1,5|N2,1>3,3"),
        (Compactness.MINIMAL, "1,2>1,4|1,7>1,5|2,1>3,3"),
    ],
)
def test_compact_move_lists(compactness: Compactness, expected: str) -> None:
    """No move numbers below the pretty level"""
    assert moves_to_icn(OPENING, [W, B], compactness=compactness) == expected


def test_empty_move_list() -> None:
    assert moves_to_icn([], [W, B]) == ""
    assert moves_from_icn("") == []


@pytest.mark.parametrize("compactness", [c for c in Compactness])
@pytest.mark.parametrize("newlines", [True, False])
def test_move_list_round_trip(compactness: Compactness, newlines: bool) -> None:
    """Only the squares (and promotions) can be read back"""
    icn = moves_to_icn(OPENING, [W, B], compactness=compactness, newlines=newlines)
    assert [move.compact for move in moves_from_icn(icn)] == OPENING_COMPACT


def test_annotations_are_skipped() -> None:
    icn = "1. P1,2 > 1,4 !? | p1,7 > 1,5 +\n2. P1,7 x 2,8 =Q #"
    moves = moves_from_icn(icn)
    assert [move.compact for move in moves] == ["1,2>1,4", "1,7>1,5", "1,7>2,8=Q"]


def test_decoded_moves_do_not_know_captures() -> None:
    (move,) = moves_from_icn("b4,4x5,5+")
    assert move.capture is False
    assert move.piece is None
    assert move.check is False


def test_comments_belong_to_previous_move() -> None:
    moves = moves_from_icn("P1,2>1,4 {[%clk 0:01:57.3] Good}|p1,7>1,5")
    assert moves[0].comment == "Good"
    assert moves[0].clock_stamp == 117300
    assert moves[1].comment == ""
    assert moves[1].clock_stamp is None


def test_moves_inside_comments_are_ignored() -> None:
    moves = moves_from_icn("1,2>1,4 {1,7>1,5 was expected}|2,2>2,3")
    assert [move.compact for move in moves] == ["1,2>1,4", "2,2>2,3"]


def test_comment_round_trip() -> None:
    move = Move(Coords(1, 2), Coords(1, 4), comment="Hello", clock_stamp=60000)
    (decoded,) = moves_from_icn(moves_to_icn([move], [W, B], comments=True))
    assert decoded.comment == "Hello"
    assert decoded.clock_stamp == 60000


def test_unclosed_comment() -> None:
    with pytest.raises(UnclosedCommentBlock):
        moves_from_icn("1,2>1,4 {oops|1,7>1,5")
