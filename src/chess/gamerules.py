"""
Rules of the game that can vary between variants, and their encodings in ICN.

ex) "w 0/100 1 (8|1) checkmate,allpiecescaptured {"slideLimit":100}"
* turn order: "w" (shorthand for "w:b"), or colon separated player codes "r:bu:y:g"
* promotion block: (whiteRanks[;whitePromotions]|blackRanks[;blackPromotions])
* win conditions: same for both players "checkmate,royalcapture", or per player "(checkmate|royalcapture)"
* anything not covered by dedicated fields goes into a JSON block
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.chess.coords import standardize_number_string
from src.chess.pieces import (
    Piece,
    Player,
    RawType,
    code_to_player,
    piece_to_short,
    player_to_code,
    short_to_piece,
)
from src.core.exceptions import (
    InvalidExtraGamerulesJson,
    MalformedGameRule,
    UnclosedExtraGamerulesBlock,
)

DEFAULT_TURN_ORDER: tuple[Player, ...] = (Player.WHITE, Player.BLACK)
DEFAULT_PROMOTIONS: tuple[RawType, ...] = (
    RawType.QUEEN,
    RawType.ROOK,
    RawType.BISHOP,
    RawType.KNIGHT,
)
DEFAULT_WIN_CONDITION = "checkmate"

# The two players that have an entry in the promotion block
PROMOTION_PLAYERS: tuple[Player, Player] = (Player.WHITE, Player.BLACK)

# Have their own field in ICN, so never written into the JSON block
EXCLUDED_GAME_RULES: frozenset[str] = frozenset(
    {"promotionRanks", "promotionsAllowed", "winConditions", "turnOrder", "moveRule"}
)


def default_win_conditions() -> dict[Player, list[str]]:
    return {player: [DEFAULT_WIN_CONDITION] for player in PROMOTION_PLAYERS}


@dataclass
class GameRules:
    turn_order: list[Player] = field(default_factory=lambda: list(DEFAULT_TURN_ORDER))
    win_conditions: dict[Player, list[str]] = field(
        default_factory=default_win_conditions
    )
    promotion_ranks: Optional[dict[Player, list[int]]] = None
    promotions_allowed: Optional[dict[Player, list[RawType]]] = None
    move_rule: Optional[int] = None
    slide_limit: Optional[int] = None
    extra: dict[str, Any] = field(default_factory=dict)


class ExtraGameRules(BaseModel):
    """The JSON block. Keys without a dedicated field are kept as extras."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    slide_limit: Optional[int] = Field(default=None, alias="slideLimit")


# --- TURN ORDER ---
def turn_order_to_icn(turn_order: list[Player]) -> str:
    """The default two player orders are abbreviated to 'w' and 'b'"""
    if list(turn_order) == [Player.WHITE, Player.BLACK]:
        return "w"
    if list(turn_order) == [Player.BLACK, Player.WHITE]:
        return "b"
    return ":".join(player_to_code(player) for player in turn_order)


def turn_order_from_icn(turn_order: str) -> list[Player]:
    if turn_order == "w":
        turn_order = "w:b"
    elif turn_order == "b":
        turn_order = "b:w"
    return [code_to_player(code) for code in turn_order.split(":")]


# --- PROMOTIONS ---
def promotions_to_icn(
    promotion_ranks: Optional[dict[Player, list[int]]],
    promotions_allowed: Optional[dict[Player, list[RawType]]],
) -> Optional[str]:
    """
    ex) "(8|1)", "(8;Q,R|1;q,r)", "(8,16|)", "(8;|1)"

    The list of promotions is only written when it differs from what would be assumed when reading:
    the default promotions for a player with promotion ranks, nothing for a player without.
    """
    if promotion_ranks is None:
        return None

    sides = []
    for player in PROMOTION_PLAYERS:
        ranks = promotion_ranks.get(player, [])
        side = ",".join(str(rank) for rank in ranks)

        assumed = list(DEFAULT_PROMOTIONS) if ranks else []
        promotions = (
            promotions_allowed.get(player, assumed)
            if promotions_allowed is not None
            else assumed
        )
        if set(promotions) != set(assumed):
            side += ";" + ",".join(
                piece_to_short(Piece(raw_type, player)) for raw_type in promotions
            )
        sides.append(side)
    return f"({'|'.join(sides)})"


def promotions_from_icn(
    block: str,
) -> tuple[dict[Player, list[int]], dict[Player, list[RawType]]]:
    """Reverse of promotions_to_icn: returns (promotion ranks, promotions allowed)"""
    if not (block.startswith("(") and block.endswith(")")):
        raise MalformedGameRule(f"Promotion block must be parenthesized: {block!r}")

    sides = block[1:-1].split("|")
    if len(sides) != len(PROMOTION_PLAYERS):
        raise MalformedGameRule(
            f"Promotion block needs exactly one '|' between white and black: {block!r}"
        )

    promotion_ranks: dict[Player, list[int]] = {}
    promotions_allowed: dict[Player, list[RawType]] = {}
    for player, side in zip(PROMOTION_PLAYERS, sides):
        ranks_str, explicit, promotions_str = side.partition(";")
        ranks = [
            int(standardize_number_string(rank))
            for rank in ranks_str.split(",")
            if rank
        ]
        if explicit:
            promotions = [
                short_to_piece(short).type
                for short in promotions_str.split(",")
                if short
            ]
        else:
            promotions = list(DEFAULT_PROMOTIONS) if ranks else []

        promotion_ranks[player] = ranks
        promotions_allowed[player] = promotions
    return promotion_ranks, promotions_allowed


# --- WIN CONDITIONS ---
def win_conditions_to_icn(win_conditions: dict[Player, list[str]]) -> Optional[str]:
    """Nothing is written when both players simply need to checkmate."""
    white, black = (
        win_conditions.get(player, [DEFAULT_WIN_CONDITION])
        for player in PROMOTION_PLAYERS
    )
    if set(white) == set(black):
        if set(white) == {DEFAULT_WIN_CONDITION}:
            return None
        return ",".join(white)
    return f"({','.join(white)}|{','.join(black)})"


def win_conditions_from_icn(block: str) -> dict[Player, list[str]]:
    if not block.startswith("("):
        conditions = [condition for condition in block.split(",") if condition]
        return {player: list(conditions) for player in PROMOTION_PLAYERS}

    sides = block.strip("()").split("|")
    if len(sides) != len(PROMOTION_PLAYERS):
        raise MalformedGameRule(
            f"Win conditions per player need exactly one '|': {block!r}"
        )
    return {
        player: [condition for condition in side.split(",") if condition]
        for player, side in zip(PROMOTION_PLAYERS, sides)
    }


# --- EXTRA GAMERULES (JSON) ---
# Opening brace of a JSON object: '{' followed by a key or by the closing brace
_JSON_START = re.compile(r"\{\s*[\"}]")


def extra_gamerules_to_icn(
    slide_limit: Optional[int], extra: dict[str, Any]
) -> Optional[str]:
    """Compact JSON, without the rules that ICN writes in their own field"""
    kept = {key: value for key, value in extra.items() if key not in EXCLUDED_GAME_RULES}
    if slide_limit is not None:
        kept["slideLimit"] = slide_limit
    rules = ExtraGameRules.model_validate(kept)
    # Extra rules keep their null values, only an absent slide limit is left out
    encoded = rules.model_dump_json(
        by_alias=True, exclude={"slide_limit"} if slide_limit is None else None
    )
    return None if encoded == "{}" else encoded


def splice_extra_gamerules(
    icn: str, stop: Optional[int] = None
) -> tuple[str, Optional[ExtraGameRules]]:
    """
    Cut the JSON block out of the rule section of an ICN string.
    ----

    * stop: index where the rule section ends (start of the position or the moves). A '{' from there on opens a move comment.

    The block runs from the first '{' that opens a JSON object up to the closing '}' for which the block is valid JSON.
    Nested objects survive. Only one closing brace can complete the object, so the search stops at the first that does.
    Returns the ICN without the block, and the parsed rules (None if there is no block).
    """
    stop = len(icn) if stop is None else stop
    match = _JSON_START.search(icn)
    if match is None or match.start() >= stop:
        return icn, None

    start = match.start()
    end = icn.find("}", start)
    if end == -1:
        raise UnclosedExtraGamerulesBlock(
            f"Gamerules block starting at index {start} is never closed with '}}'"
        )

    while end != -1:
        try:
            rules = ExtraGameRules.model_validate_json(icn[start : end + 1])
        except ValidationError:
            end = icn.find("}", end + 1)
            continue
        return f"{icn[:start]} {icn[end + 1:]}", rules

    raise InvalidExtraGamerulesJson(
        f"Gamerules block starting at index {start} is not a valid JSON object."
    )
