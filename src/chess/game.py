"""
The Game is the structured form of an ICN string, and the entrypoint into the domain layer for the service layer.

Besides holding the data, this module can replay the moves of a game on top of its starting position,
to get the game as it stood after any number of half-moves (plies).
"""

import logging
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional

from src.chess.coords import Coords
from src.chess.gamerules import GameRules
from src.chess.moves import Castle, Move
from src.chess.pieces import Piece, Player, RawType
from src.chess.position import Position, SpecialRights
from src.core.exceptions import PositionNotStructured, UnsupportedLeadPlayer

logger = logging.getLogger(__name__)

# Direction in which the pawns of the player to move advance
Y_PARITY: dict[Player, int] = {Player.WHITE: 1, Player.BLACK: -1}


@dataclass
class Game:
    """
    All information needed to (re)start a game, and the moves played since.
    ----

    * starting_position: the position before the first move. May also be the short form string of a position,
        which is written to ICN as is (but cannot be replayed).
    * special_rights: squares whose piece can still double push or castle
    * enpassant: the square a pawn may capture on, right after a double push
    * move_rule_state: plies since the last capture or pawn move. The ceiling is a gamerule.
    * full_move: number of the current turn-order cycle, starting at 1
    """

    metadata: dict[str, str] = field(default_factory=dict)
    game_rules: GameRules = field(default_factory=GameRules)
    starting_position: Position | str = field(default_factory=dict)
    special_rights: SpecialRights = field(default_factory=set)
    moves: list[Move] = field(default_factory=list)
    enpassant: Optional[Coords] = None
    move_rule_state: Optional[int] = None
    full_move: int = 1

    @property
    def turn_order(self) -> list[Player]:
        return self.game_rules.turn_order

    @property
    def move_rule(self) -> Optional[str]:
        """'X/Y': X plies since the last capture or pawn move, draw when it reaches Y"""
        if self.move_rule_state is None or self.game_rules.move_rule is None:
            return None
        return f"{self.move_rule_state}/{self.game_rules.move_rule}"


def project(
    game: Game, ply_count: Optional[int] = None, mutate_in_place: bool = False
) -> Game:
    """
    Replay the first `ply_count` moves (all of them if None) on top of the starting position.
    ----

    Returns the game as it stands after those moves, with an empty move list.
    The input is left untouched, unless mutate_in_place is set (skips copying, the input can no longer be used afterwards).
    """
    projected = game if mutate_in_place else deepcopy(game)
    position = projected.starting_position
    if isinstance(position, str):
        raise PositionNotStructured(
            "Cannot replay moves on a position that is still in short form."
        )
    y_parity = _y_parity(projected.turn_order)

    total_moves = len(projected.moves)
    plies = total_moves if ply_count is None else max(0, min(ply_count, total_moves))

    # The pawn that just double pushed sits one square behind the en passant square (seen from the player to move)
    pawn_key = projected.enpassant.offset(0, -y_parity) if projected.enpassant else None
    for move in projected.moves[:plies]:
        pawn_key = _play_move(projected, position, move, pawn_key)

    projected.full_move += plies // len(projected.turn_order)
    projected.moves = []
    logger.debug("Replayed %d of %d moves", plies, total_moves)
    return projected


# -- PRIVATE HELPERS ---
def _y_parity(turn_order: list[Player]) -> int:
    lead_player = turn_order[0]
    if lead_player not in Y_PARITY:
        raise UnsupportedLeadPlayer(
            f"Cannot replay moves when {lead_player.name.lower()} moves first. Only white or black are supported."
        )
    return Y_PARITY[lead_player]


def _play_move(
    game: Game, position: Position, move: Move, pawn_key: Optional[Coords]
) -> Optional[Coords]:
    """
    Update the game with the effects of a single move.
    Returns the square of the pawn that can now be captured en passant (if any)
    """
    moved_piece = move.piece or position.get(move.start)
    is_capture = move.capture or bool(move.enpassant) or move.end in position

    _update_position(game, position, move)
    _update_move_rule(game, moved_piece, is_capture)

    if move.enpassant:
        captured = move.enpassant if isinstance(move.enpassant, Coords) else pawn_key
        if captured is not None:
            position.pop(captured, None)
            game.special_rights.discard(captured)

    pawn_key = _update_enpassant(game, move, moved_piece)

    if move.castle:
        _move_castling_partner(game, position, move.castle, move.end)

    # next player
    game.turn_order.append(game.turn_order.pop(0))
    return pawn_key


def _update_position(game: Game, position: Position, move: Move) -> None:
    piece = position.pop(move.start, None)
    placed = move.promotion or piece
    if placed is not None:
        position[move.end] = placed
    game.special_rights.discard(move.start)
    game.special_rights.discard(move.end)


def _update_move_rule(game: Game, moved_piece: Optional[Piece], is_capture: bool) -> None:
    if game.move_rule_state is None:
        return
    if is_capture or _is_pawn(moved_piece):
        game.move_rule_state = 0
    else:
        game.move_rule_state += 1


def _update_enpassant(
    game: Game, move: Move, moved_piece: Optional[Piece]
) -> Optional[Coords]:
    """A pawn moving two squares can be captured en passant on the square it skipped"""
    if _is_pawn(moved_piece) and abs(move.end.y - move.start.y) == 2:
        game.enpassant = Coords(move.end.x, (move.start.y + move.end.y) // 2)
        return move.end
    game.enpassant = None
    return None


def _move_castling_partner(
    game: Game, position: Position, castle: Castle, king_end: Coords
) -> None:
    """The partner lands right next to the king, on the side the king came from"""
    partner = position.pop(castle.coords, None)
    game.special_rights.discard(castle.coords)
    if partner is not None:
        position[Coords(king_end.x - castle.direction, king_end.y)] = partner


def _is_pawn(piece: Optional[Piece]) -> bool:
    return piece is not None and piece.type == RawType.PAWN
