"""
Infinite Chess Notation (ICN): the text form of a complete game.
----

[Event "Casual local Classical infinite chess game"]
[Variant "Classical"]
[UTCDate "2024.07.05"]

w 0/100 1 (8|1) {"slideLimit":100}
P1,2+|P2,2+|...|K5,1+|k5,8+
1. P4,2 > 4,4 | p4,7 > 4,5
2. ...

<metadata><blank line><turn order> <en passant?> <move rule?> <full move> <promotions?> <win conditions?> <extra gamerules JSON?>
<position><moves>

Reading the part after the metadata works token by token (separated by whitespace). Each token is tried against the
fields in a fixed order (turn order, en passant, move rule, full move, promotions, win conditions, position, moves).
The order matters: several fields are only told apart by their shape, which is why e.g. win conditions are tried after
everything that may contain digits. Once the moves start, the rest of the string is the move list.
"""

import logging
import re

from src.chess.coords import SCIENTIFIC_NUMBER, Coords
from src.chess.game import Game
from src.chess.gamerules import (
    extra_gamerules_to_icn,
    promotions_from_icn,
    promotions_to_icn,
    splice_extra_gamerules,
    turn_order_from_icn,
    turn_order_to_icn,
    win_conditions_from_icn,
    win_conditions_to_icn,
)
from src.chess.metadata import metadata_from_icn, metadata_to_icn
from src.chess.moves import Compactness, moves_from_icn, moves_to_icn
from src.chess.position import position_from_short, position_to_short

logger = logging.getLogger(__name__)

_COORDS = rf"{SCIENTIFIC_NUMBER},{SCIENTIFIC_NUMBER}"

TURN_ORDER_PATTERN = re.compile(r"[a-z]{1,2}(?::[a-z]{1,2})*")
ENPASSANT_PATTERN = re.compile(_COORDS)
MOVE_RULE_PATTERN = re.compile(r"([0-9]+)/([0-9]+)")
FULL_MOVE_PATTERN = re.compile(r"[0-9]+")
PROMOTION_PATTERN = re.compile(rf"\((?:{SCIENTIFIC_NUMBER})?[,;|]")
WIN_CONDITION_PATTERN = re.compile(r"\(?[a-zA-Z][^0-9:]+")
POSITION_PATTERN = re.compile(rf"[0-9]*[a-zA-Z]+{_COORDS}\+?(?:$|\|)")
MOVES_START_PATTERN = re.compile(
    rf"[0-9]+\.(?:\s|$)|[0-9]*[a-zA-Z]*{_COORDS}\s*[x>]"
)
_TOKEN = re.compile(r"\S+")


def is_turn_order(token: str) -> bool:
    return TURN_ORDER_PATTERN.fullmatch(token) is not None


def is_enpassant(token: str) -> bool:
    return ENPASSANT_PATTERN.fullmatch(token) is not None


def is_move_rule(token: str) -> bool:
    return MOVE_RULE_PATTERN.fullmatch(token) is not None


def is_full_move(token: str) -> bool:
    return FULL_MOVE_PATTERN.fullmatch(token) is not None


def is_promotion_block(token: str) -> bool:
    return PROMOTION_PATTERN.match(token) is not None


def is_win_condition_block(token: str) -> bool:
    return WIN_CONDITION_PATTERN.fullmatch(token) is not None


def is_position(token: str) -> bool:
    return POSITION_PATTERN.match(token) is not None


def is_moves_start(text: str, index: int = 0) -> bool:
    """Whether the move list starts at text[index]. Looks beyond a single token, since pretty moves contain spaces."""
    return MOVES_START_PATTERN.match(text, index) is not None


def rules_section_end(text: str) -> int:
    """Index where the position or the move list starts (length of the text if neither does)"""
    for match in _TOKEN.finditer(text):
        if is_position(match.group()) or is_moves_start(text, match.start()):
            return match.start()
    return len(text)


def decode(icn: str) -> Game:
    """Read an ICN string into a Game"""
    # The header ends at the first character outside of a [...] entry, so it never reaches the JSON block
    metadata, text = metadata_from_icn(icn)
    text, extra_rules = splice_extra_gamerules(text, rules_section_end(text))

    game = Game(metadata=metadata)
    rules = game.game_rules
    found: set[str] = set()

    for match in _TOKEN.finditer(text):
        token = match.group()

        if "turn_order" not in found and is_turn_order(token):
            rules.turn_order = turn_order_from_icn(token)
            found.add("turn_order")
        elif "enpassant" not in found and is_enpassant(token):
            game.enpassant = Coords.from_string(token)
            found.add("enpassant")
        elif "move_rule" not in found and is_move_rule(token):
            state, ceiling = token.split("/")
            game.move_rule_state = int(state)
            rules.move_rule = int(ceiling)
            found.add("move_rule")
        elif "full_move" not in found and is_full_move(token):
            game.full_move = int(token)
            found.add("full_move")
        elif "promotions" not in found and is_promotion_block(token):
            rules.promotion_ranks, rules.promotions_allowed = promotions_from_icn(token)
            found.add("promotions")
        elif "win_conditions" not in found and is_win_condition_block(token):
            rules.win_conditions = win_conditions_from_icn(token)
            found.add("win_conditions")
        elif (
            "position" not in found
            and is_position(token)
            # A lone "P1,2" may also be the start of a spaced move "P1,2 > 1,4"
            and not is_moves_start(text, match.start())
        ):
            game.starting_position, game.special_rights = position_from_short(token)
            found.add("position")
        elif is_moves_start(text, match.start()):
            game.moves = moves_from_icn(text[match.start() :])
            break
        else:
            logger.warning("Skipping unrecognized ICN token %r", token)

    if extra_rules is not None:
        rules.slide_limit = extra_rules.slide_limit
        rules.extra = dict(extra_rules.model_extra or {})

    logger.debug(
        "Decoded ICN with %d metadata entries, fields %s and %d moves",
        len(metadata),
        sorted(found),
        len(game.moves),
    )
    return game


def encode(
    game: Game,
    compactness: Compactness = Compactness.PRETTY,
    newlines: bool = True,
    include_position: bool = True,
    comments: bool = False,
) -> str:
    """
    Write a Game as ICN.
    ----

    * compactness: how the moves are written (see src/chess/moves.py)
    * newlines: put the metadata entries, position and move cycles on separate lines. Otherwise everything is on one line.
    * include_position: leave out the position (for variants whose starting position is already known)
    * comments: write move comments and clock stamps (not for MINIMAL)
    """
    rules = game.game_rules
    tokens = [turn_order_to_icn(rules.turn_order)]
    if game.enpassant is not None:
        tokens.append(str(game.enpassant))
    if game.move_rule is not None:
        tokens.append(game.move_rule)
    tokens.append(str(game.full_move))

    optional_tokens = [
        promotions_to_icn(rules.promotion_ranks, rules.promotions_allowed),
        win_conditions_to_icn(rules.win_conditions),
        extra_gamerules_to_icn(rules.slide_limit, rules.extra),
    ]
    tokens.extend(token for token in optional_tokens if token)
    sections = [" ".join(tokens)]

    if include_position:
        position = (
            game.starting_position
            if isinstance(game.starting_position, str)
            else position_to_short(game.starting_position, game.special_rights)
        )
        if position:
            sections.append(position)

    if game.moves:
        sections.append(
            moves_to_icn(
                game.moves,
                rules.turn_order,
                game.full_move,
                compactness,
                newlines,
                comments,
            )
        )

    body = ("\n" if newlines else " ").join(sections)
    logger.debug("Encoded game with %d moves", len(game.moves))
    return metadata_to_icn(game.metadata, newlines) + body
