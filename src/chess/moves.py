"""
Moves and the move list of an ICN string.

The move list can be written at three levels of compactness:
* PRETTY:  "1. P1,2 > 1,4 | p1,7 > 1,5\n2. N2,1 > 3,3 | ..."  numbered once per cycle of the turn order
* MEDIUM:  "P1,2>1,4|p1,7>1,5|N2,1>3,3|..."  same symbols, no spaces or numbers
* MINIMAL: "1,2>1,4|1,7>1,5|2,1>3,3|..."  only the squares and promotions

Reading works the same for all three, but only the squares and promotions can be recovered.
Captures, en passant and castling are not part of the text: replaying the moves fills those in.
"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Self

from src.chess.comments import MoveComment, combine_comment, extract_comment
from src.chess.coords import SCIENTIFIC_NUMBER, Coords
from src.chess.pieces import Piece, Player, piece_to_short, short_to_piece
from src.core.exceptions import MalformedMoveToken, UnclosedCommentBlock


class Compactness(IntEnum):
    PRETTY = 0
    MEDIUM = 1
    MINIMAL = 2


_COORDS = rf"{SCIENTIFIC_NUMBER},{SCIENTIFIC_NUMBER}"

# <piece>?<start> (x|>) <end> (=<promotion> | <promotion>)?
MOVE_PATTERN = re.compile(
    rf"(?P<piece>[0-9]*[a-zA-Z]+)?(?P<start>{_COORDS})\s*[x>]+\s*(?P<end>{_COORDS})"
    rf"(?:\s*=\s*(?P<promotion>[0-9]*[a-zA-Z]+)|(?P<suffix>[a-zA-Z]+))?"
)

TURN_SEPARATOR = {
    Compactness.PRETTY: " | ",
    Compactness.MEDIUM: "|",
    Compactness.MINIMAL: "|",
}


@dataclass(frozen=True)
class Castle:
    """The partner piece that castles along with the moving king, and the direction the king moves in (+1 / -1)"""

    coords: Coords
    direction: int


@dataclass
class Move:
    """A move as recorded in a game. Legality has been checked elsewhere."""

    start: Coords
    end: Coords
    promotion: Optional[Piece] = None
    piece: Optional[Piece] = None
    capture: bool = False
    check: bool = False
    mate: bool = False
    enpassant: bool | Coords = False
    castle: Optional[Castle] = None
    comment: str = ""
    clock_stamp: Optional[int] = None  # milliseconds left on the clock of the moving player

    @classmethod
    def from_compact(cls, compact: str) -> Self:
        """
        Compact notation:
        ---

        examples:
        * "1,2>1,4": move the piece on 1,2 to 1,4
        * "3,7>3,8=Q": (white pawn) moves to 3,8 and promotes to a queen
        * "-5,2e3>10,2e3": coordinates may be written in scientific notation
        """
        match = MOVE_PATTERN.fullmatch(compact.strip())
        if match is None:
            raise MalformedMoveToken(f"Cannot interpret {compact!r} as a move.")
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> Self:
        start = Coords.from_string(match.group("start"))
        end = Coords.from_string(match.group("end"))
        promotion_short = match.group("promotion") or match.group("suffix")
        promotion = short_to_piece(promotion_short) if promotion_short else None
        return cls(start, end, promotion)

    @property
    def compact(self) -> str:
        promotion = f"={piece_to_short(self.promotion)}" if self.promotion else ""
        return f"{self.start}>{self.end}{promotion}"

    def to_icn(self, compactness: Compactness, comments: bool = False) -> str:
        if compactness == Compactness.MINIMAL:
            return self.compact

        piece = piece_to_short(self.piece) if self.piece else ""
        parts = [f"{piece}{self.start}", "x" if self.capture else ">", str(self.end)]
        if self.promotion:
            parts.append(f"={piece_to_short(self.promotion)}")
        if self.mate:
            parts.append("#")
        elif self.check:
            parts.append("+")

        text = " ".join(parts) if compactness == Compactness.PRETTY else "".join(parts)
        if comments and (self.comment.strip() or self.clock_stamp is not None):
            text += " {" + combine_comment(MoveComment(self.comment, self.clock_stamp)) + "}"
        return text


def moves_to_icn(
    moves: list[Move],
    turn_order: list[Player],
    full_move: int = 1,
    compactness: Compactness = Compactness.PRETTY,
    newlines: bool = True,
    comments: bool = False,
) -> str:
    """
    Write the move list.
    ----

    Only PRETTY numbers the moves: the number goes up each time the turn order has been cycled through,
    and every cycle gets its own line (or is separated by ' | ' when no newlines are wanted).
    """
    separator = TURN_SEPARATOR[compactness]
    if compactness != Compactness.PRETTY:
        return separator.join(move.to_icn(compactness, comments) for move in moves)

    lines: list[str] = []
    cycle: list[str] = []
    move_number = full_move
    for move in moves:
        cycle.append(move.to_icn(compactness, comments))
        if len(cycle) == len(turn_order):
            lines.append(f"{move_number}. {separator.join(cycle)}")
            cycle = []
            move_number += 1
    if cycle:
        lines.append(f"{move_number}. {separator.join(cycle)}")

    return ("\n" if newlines else separator).join(lines)


def moves_from_icn(moves_icn: str) -> list[Move]:
    """
    Read a move list of any compactness.
    ----

    Anything in between the moves (numbers, '|', '+', '#', '!', '?') is skipped.
    A comment {...} belongs to the move in front of it.
    """
    moves: list[Move] = []
    cursor = 0
    next_brace = moves_icn.find("{")
    while True:
        if -1 < next_brace < cursor:
            next_brace = moves_icn.find("{", cursor)
        match = MOVE_PATTERN.search(moves_icn, cursor)

        if next_brace != -1 and (match is None or next_brace < match.start()):
            closing = moves_icn.find("}", next_brace)
            if closing == -1:
                raise UnclosedCommentBlock(
                    f"Comment starting at index {next_brace} is never closed with '}}'"
                )
            if moves:
                comment = extract_comment(moves_icn[next_brace + 1 : closing])
                moves[-1].comment = comment.text
                moves[-1].clock_stamp = comment.clock_stamp
            cursor = closing + 1
            continue

        if match is None:
            break
        moves.append(Move._from_match(match))
        cursor = match.end()

    return moves
