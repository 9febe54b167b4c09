"""
Exceptions raised across layers.

Codec failures all derive from ICNError, so callers that only care about "could this be read?" can catch a single type.
"""


# --- CODEC ERRORS ---
class ICNError(ValueError):
    """Base class for any failure while reading or replaying Infinite Chess Notation."""


class UnknownPieceType(ICNError):
    """Abbreviation not in the piece dictionary, also not after splitting off a player number."""


class MalformedCoordinate(ICNError):
    """Numeral or coordinate pair that cannot be read as an (integer) coordinate."""


class MalformedPositionToken(ICNError):
    """A token of the position block does not follow <piece><x>,<y>[+]."""


class MalformedMoveToken(ICNError):
    """Compact move string does not follow <x>,<y>><x>,<y>[=<piece>]."""


class MalformedGameRule(ICNError):
    """Promotion or win condition block with a broken structure."""


class UnclosedMetadataBracket(ICNError):
    pass


class UnclosedExtraGamerulesBlock(ICNError):
    pass


class UnclosedCommentBlock(ICNError):
    pass


class InvalidExtraGamerulesJson(ICNError):
    """The spliced {...} block is not a JSON object."""


class InvalidTurnOrderAbbreviation(ICNError):
    """Player code in the turn order that does not belong to any player."""


class InvalidCommentCommand(ICNError):
    """A [%cmd value] inside a move comment with a value that cannot be read."""


class PositionNotStructured(ICNError):
    """Replaying moves requires a decoded position, not the short-form string."""


class UnsupportedLeadPlayer(ICNError):
    """En passant parity is only defined when white or black moves first."""


class UnsupportedCastlingPiece(ICNError):
    """Kings can only castle with rooks or guards."""


# --- SERVICE / API ERRORS ---
class InvalidRequestError(Exception):
    """Request data rejected by the request models.

    NOTE: not a ValueError, so pydantic lets it propagate instead of wrapping it into a ValidationError.
    """


class RepositoryError(Exception):
    """Requested record not found (or could not be stored)."""
