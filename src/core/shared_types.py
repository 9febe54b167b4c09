"""
Type definitions used across layers
"""

from enum import StrEnum

# --- Same members as Player and RawType in src/chess/pieces.py, but with readable values for the API layer.
# --- Convert by name, e.g. Player[PlayerName.WHITE.name]


class PlayerName(StrEnum):
    NEUTRAL = "neutral"
    WHITE = "white"
    BLACK = "black"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GREEN = "green"


class PieceName(StrEnum):
    KING = "king"
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    AMAZON = "amazon"
    HAWK = "hawk"
    CHANCELLOR = "chancellor"
    ARCHBISHOP = "archbishop"
    GUARD = "guard"
    CAMEL = "camel"
    GIRAFFE = "giraffe"
    ZEBRA = "zebra"
    CENTAUR = "centaur"
    ROYALQUEEN = "royalqueen"
    ROYALCENTAUR = "royalcentaur"
    KNIGHTRIDER = "knightrider"
    HUYGEN = "huygen"
    ROSE = "rose"
    OBSTACLE = "obstacle"
    VOID = "void"
