"""Orchestration of communication from API models to the ICN codec and the game archive (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    ConvertRequest,
    DecodeRequest,
    DeleteGameRequest,
    GameResponse,
    GameSummaryResponse,
    GetGameRequest,
    ICNResponse,
    ListGamesRequest,
    ProjectRequest,
    SaveGameRequest,
    SpecialRightsRequest,
    SpecialRightsResponse,
)
from src.chess.game import Game, project
from src.chess.icn import decode, encode
from src.chess.moves import Compactness
from src.chess.pieces import RawType
from src.chess.position import position_from_short, position_to_short
from src.chess.special_rights import generate_special_rights
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import PlayerName
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ICNService:
    """Orchestration of layers for reading, converting and archiving games."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Codec logic ---
    def decode_game(self, request: DecodeRequest) -> GameResponse:
        game = decode(request.icn)
        return self._create_game_response(game, request.icn)

    def convert_game(self, request: ConvertRequest) -> ICNResponse:
        """Rewrite an ICN string with other options (e.g. compactness)."""
        game = decode(request.icn)
        return ICNResponse(icn=self._encode(game, request))

    def project_game(self, request: ProjectRequest) -> GameResponse:
        """
        The game after the requested number of moves.
        ----
        The decoded game is not used for anything else, so it can be replayed in place.
        """
        game = project(decode(request.icn), request.ply_count, mutate_in_place=True)
        return self._create_game_response(game, self._encode(game, request))

    def derive_special_rights(
        self, request: SpecialRightsRequest
    ) -> SpecialRightsResponse:
        """Mark the pieces of a bare position that keep their special rights."""
        position, _ = position_from_short(request.position)
        castle_with = RawType[request.castle_with.name] if request.castle_with else None
        special_rights = generate_special_rights(
            position, request.pawn_double_push, castle_with
        )
        return SpecialRightsResponse(
            position=position_to_short(position, special_rights),
            special_rights=[str(coords) for coords in position if coords in special_rights],
        )

    # -- Archive logic ---
    def save_game(self, request: SaveGameRequest) -> GameResponse:
        """
        Store a game. Only readable ICN gets archived.
        ----
        The archive holds the game re-encoded (medium compactness, comments kept), not the text as submitted.
        Two spellings of the same game are stored identically.
        """
        game = decode(request.icn)
        model = GameModel(
            icn=encode(game, Compactness.MEDIUM, comments=True),
            metadata=game.metadata,
            move_count=len(game.moves),
        )
        stored_model, game_id = self.repo.create_game(model)
        logger.info("Archived game %s with %d moves", game_id, stored_model.move_count)
        return self._create_game_response(game, stored_model.icn, game_id)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        stored_model = self._fetch_game(request.game_id)
        return self._create_game_response(
            decode(stored_model.icn), stored_model.icn, request.game_id
        )

    def list_games(self, request: ListGamesRequest) -> list[GameSummaryResponse]:
        """Archived games (oldest first), without decoding them."""
        found = self.repo.find_games(request.variant, request.result, request.limit)
        return [
            GameSummaryResponse(
                game_id=game_id,
                variant=model.variant,
                result=model.result,
                metadata=model.metadata,
                move_count=model.move_count,
            )
            for game_id, model in found
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        deleted = self.repo.delete_game(request.game_id)
        if deleted is None:
            raise RepositoryError(f"Cannot find game with ID: {request.game_id}")
        logger.info("Deleted game %s", request.game_id)

    # -- Helpers ---
    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Retrieve the game or throw an exception."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Cannot find game with ID: {game_id}")
        return game_model

    def _encode(self, game: Game, options: ConvertRequest) -> str:
        return encode(
            game,
            compactness=Compactness(options.compactness),
            newlines=options.newlines,
            include_position=options.include_position,
            comments=options.comments,
        )

    def _create_game_response(
        self, game: Game, icn: str, game_id: Optional[UUID] = None
    ) -> GameResponse:
        position = (
            game.starting_position
            if isinstance(game.starting_position, str)
            else position_to_short(game.starting_position, game.special_rights)
        )
        return GameResponse(
            game_id=game_id,
            metadata=game.metadata,
            turn_order=[PlayerName[player.name] for player in game.turn_order],
            enpassant=str(game.enpassant) if game.enpassant else None,
            move_rule=game.move_rule,
            full_move=game.full_move,
            position=position,
            moves=[move.compact for move in game.moves],
            icn=icn,
        )
