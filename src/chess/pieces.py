"""Defines the types of pieces, the players owning them, and their abbreviations in ICN"""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Self

from src.core.exceptions import InvalidTurnOrderAbbreviation, UnknownPieceType


class RawType(Enum):
    """Kind of piece, independent of who owns it."""

    KING = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    AMAZON = auto()
    HAWK = auto()
    CHANCELLOR = auto()
    ARCHBISHOP = auto()
    GUARD = auto()
    CAMEL = auto()
    GIRAFFE = auto()
    ZEBRA = auto()
    CENTAUR = auto()
    ROYALQUEEN = auto()
    ROYALCENTAUR = auto()
    KNIGHTRIDER = auto()
    HUYGEN = auto()
    ROSE = auto()
    OBSTACLE = auto()
    VOID = auto()


class Player(IntEnum):
    """Values are the player numbers used as prefix in fallback abbreviations (e.g. '3r' for a red rook)"""

    NEUTRAL = 0
    WHITE = 1
    BLACK = 2
    RED = 3
    BLUE = 4
    YELLOW = 5
    GREEN = 6


# Codes used in the turn order, e.g. "w:b" or "r:bu:y:g"
PLAYER_TO_CODE: dict[Player, str] = {
    Player.NEUTRAL: "n",
    Player.WHITE: "w",
    Player.BLACK: "b",
    Player.RED: "r",
    Player.BLUE: "bu",
    Player.YELLOW: "y",
    Player.GREEN: "g",
}

CODE_TO_PLAYER: dict[str, Player] = {value: key for key, value in PLAYER_TO_CODE.items()}


# Abbreviations of the raw types. Colorless, so always lower case.
RAW_TO_SHORT: dict[RawType, str] = {
    RawType.KING: "k",
    RawType.PAWN: "p",
    RawType.KNIGHT: "n",
    RawType.BISHOP: "b",
    RawType.ROOK: "r",
    RawType.QUEEN: "q",
    RawType.AMAZON: "am",
    RawType.HAWK: "ha",
    RawType.CHANCELLOR: "ch",
    RawType.ARCHBISHOP: "ar",
    RawType.GUARD: "gu",
    RawType.CAMEL: "ca",
    RawType.GIRAFFE: "gi",
    RawType.ZEBRA: "ze",
    RawType.CENTAUR: "ce",
    RawType.ROYALQUEEN: "rq",
    RawType.ROYALCENTAUR: "rc",
    RawType.KNIGHTRIDER: "nr",
    RawType.HUYGEN: "hu",
    RawType.ROSE: "ro",
    RawType.OBSTACLE: "ob",
    RawType.VOID: "vo",
}

SHORT_TO_RAW: dict[str, RawType] = {value: key for key, value in RAW_TO_SHORT.items()}

# Royal pieces that move by jumping. They are the ones that castle.
JUMPING_ROYALS: tuple[RawType, ...] = (RawType.KING, RawType.ROYALCENTAUR)

# Obstacles and voids only exist as neutral pieces
NEUTRAL_ONLY: tuple[RawType, ...] = (RawType.OBSTACLE, RawType.VOID)


@dataclass(frozen=True)
class Piece:
    type: RawType
    player: Player

    @classmethod
    def from_short(cls, short: str) -> Self:
        piece = short_to_piece(short)
        return cls(piece.type, piece.player)

    def to_short(self) -> str:
        return piece_to_short(self)


def _curated_abbreviations() -> dict[Piece, str]:
    """Upper case for white pieces, lower case for black pieces, plus the neutral-only pieces"""
    curated: dict[Piece, str] = {}
    for raw_type, short in RAW_TO_SHORT.items():
        if raw_type in NEUTRAL_ONLY:
            curated[Piece(raw_type, Player.NEUTRAL)] = short
            continue
        curated[Piece(raw_type, Player.WHITE)] = short.upper()
        curated[Piece(raw_type, Player.BLACK)] = short
    return curated


PIECE_TO_SHORT: dict[Piece, str] = _curated_abbreviations()
SHORT_TO_PIECE: dict[str, Piece] = {value: key for key, value in PIECE_TO_SHORT.items()}

_SHORT_PATTERN = re.compile(r"([0-9]*)([a-zA-Z]+)")


def piece_to_short(piece: Piece) -> str:
    """
    Abbreviation of a piece.
    Pieces without a curated abbreviation (e.g. a red rook) get the player number as prefix: '3r'
    """
    short = PIECE_TO_SHORT.get(piece)
    if short is not None:
        return short
    return f"{piece.player.value}{RAW_TO_SHORT[piece.type]}"


def short_to_piece(short: str) -> Piece:
    """Reverse of piece_to_short. Letters are case sensitive, unless preceded by a player number."""
    match = _SHORT_PATTERN.fullmatch(short)
    if match is None:
        raise UnknownPieceType(f"Cannot interpret {short!r} as a piece abbreviation.")

    player_number, letters = match.groups()
    if not player_number:
        if letters not in SHORT_TO_PIECE:
            raise UnknownPieceType(f"Unknown piece abbreviation: {short!r}")
        return SHORT_TO_PIECE[letters]

    # Fallback notation: <player number><raw abbreviation>
    letters = letters.lower()
    if letters not in SHORT_TO_RAW:
        raise UnknownPieceType(f"Unknown piece abbreviation: {short!r}")
    try:
        player = Player(int(player_number))
    except ValueError:
        raise UnknownPieceType(f"Unknown player number in {short!r}") from None
    return Piece(SHORT_TO_RAW[letters], player)


def player_to_code(player: Player) -> str:
    return PLAYER_TO_CODE[player]


def code_to_player(code: str) -> Player:
    if code not in CODE_TO_PLAYER:
        raise InvalidTurnOrderAbbreviation(
            f"Unknown player code: {code!r}. Pick one from {','.join(CODE_TO_PLAYER)}"
        )
    return CODE_TO_PLAYER[code]
