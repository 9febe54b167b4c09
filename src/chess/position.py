"""
The position: which piece stands on which square, plus the squares whose piece still has its special (first move) rights.

Short form in ICN: tokens <piece abbreviation><x>,<y>[+] joined by '|', where '+' marks a special right.
ex) "K5,1+|R1,1+|R8,1+|k5,8+|P3,2+|p-1000,2.5e3"
"""

import re

from src.chess.coords import SCIENTIFIC_NUMBER, Coords
from src.chess.pieces import Piece, piece_to_short, short_to_piece
from src.core.exceptions import MalformedPositionToken

Position = dict[Coords, Piece]
SpecialRights = set[Coords]

_TOKEN_PATTERN = re.compile(
    rf"([0-9]*[a-zA-Z]+)({SCIENTIFIC_NUMBER},{SCIENTIFIC_NUMBER})(\+?)"
)


def position_to_short(
    position: Position, special_rights: SpecialRights | None = None
) -> str:
    """Pieces are written in the (insertion) order of the position."""
    special_rights = special_rights or set()
    tokens = []
    for coords, piece in position.items():
        rights = "+" if coords in special_rights else ""
        tokens.append(f"{piece_to_short(piece)}{coords}{rights}")
    return "|".join(tokens)


def position_from_short(short: str) -> tuple[Position, SpecialRights]:
    """Parse the short form into a position + set of squares with special rights"""
    position: Position = {}
    special_rights: SpecialRights = set()
    if not short:
        return position, special_rights

    for token in short.split("|"):
        match = _TOKEN_PATTERN.fullmatch(token)
        if match is None:
            raise MalformedPositionToken(
                f"Cannot interpret {token!r} as <piece><x>,<y>[+] in position {short!r}"
            )
        piece_short, coords_str, rights = match.groups()
        coords = Coords.from_string(coords_str)
        position[coords] = short_to_piece(piece_short)
        if rights:
            special_rights.add(coords)
    return position, special_rights
