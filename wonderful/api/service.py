"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Delegates storage and serialization of actions to the GameManager
3. Formats responses, including rule violations as ErrorResponse

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..engine_core.action import ActionResult
from ..engine_core.errors import RulesError
from ..engine_core.state import LifecycleState, ResourceType
from ..session import GameManager
from .schemas import (
    ActionResponse,
    CardActionRequest,
    CreateGameRequest,
    EndGameResponse,
    ErrorCode,
    ErrorResponse,
    GameCreatedResponse,
    GameStatusResponse,
    GameSummaryInfo,
    InvestRequest,
    Lifecycle,
    Outcome,
    Phase,
    PlayerRef,
    ReadyRequest,
    Resource,
    ScoresResponse,
)
from .views import build_game_status


def _error_code(code: str | None) -> ErrorCode:
    try:
        return ErrorCode(code)
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


def error_from_rules(error: RulesError) -> ErrorResponse:
    return ErrorResponse(
        error=error.message,
        error_code=_error_code(error.error_code),
        details={"kind": error.kind},
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        created = service.create_game(CreateGameRequest(player_names=["Ada", "Bo"]))
        status = service.get_status(created.game_id, created.players[0].player_id)
        response = service.draft_card(created.game_id, CardActionRequest(...))
    """
    manager: GameManager = field(default_factory=GameManager)

    def create_game(self, request: CreateGameRequest) -> GameCreatedResponse | ErrorResponse:
        """Create and start a game."""
        try:
            game = self.manager.create_game(
                request.player_names,
                seed=request.seed,
                host_index=request.host_index,
            )
        except RulesError as e:
            return error_from_rules(e)

        return GameCreatedResponse(
            game_id=game.game_id,
            players=[PlayerRef(player_id=p.player_id, name=p.name) for p in game.players],
            host_id=game.host_id,
            current_round=game.current_round,
            phase=Phase(game.phase.value),
        )

    def get_status(self, game_id: str, player_id: str) -> GameStatusResponse | ErrorResponse:
        """The game as seen by one player; finished games include final scores."""
        try:
            game = self.manager.require_game(game_id)
            if game.lifecycle is LifecycleState.FINISHED:
                self.manager.final_scores(game_id)
                game = self.manager.require_game(game_id)
            return build_game_status(game, player_id)
        except RulesError as e:
            return error_from_rules(e)

    def draft_card(self, game_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        result = self.manager.draft_card(game_id, request.player_id, request.card_id)
        return self._action_response(game_id, result)

    def move_to_construction(
        self, game_id: str, request: CardActionRequest
    ) -> ActionResponse | ErrorResponse:
        result = self.manager.move_to_construction(game_id, request.player_id, request.card_id)
        return self._action_response(game_id, result)

    def discard_card(self, game_id: str, request: CardActionRequest) -> ActionResponse | ErrorResponse:
        result = self.manager.discard_card(game_id, request.player_id, request.card_id)
        return self._action_response(game_id, result)

    def add_resource_to_card(
        self, game_id: str, request: InvestRequest
    ) -> ActionResponse | ErrorResponse:
        result = self.manager.add_resource_to_card(
            game_id,
            request.player_id,
            request.card_id,
            ResourceType(request.resource.value),
        )
        return self._action_response(game_id, result)

    def set_player_ready(self, game_id: str, request: ReadyRequest) -> ActionResponse | ErrorResponse:
        result = self.manager.set_player_ready(game_id, request.player_id)
        return self._action_response(game_id, result)

    def get_scores(self, game_id: str) -> ScoresResponse | ErrorResponse:
        """Final scores; an error while the game is still running."""
        try:
            scores, winner_id = self.manager.final_scores(game_id)
        except RulesError as e:
            return error_from_rules(e)
        return ScoresResponse(game_id=game_id, scores=scores, winner_id=winner_id)

    def list_games(self) -> list[GameSummaryInfo] | ErrorResponse:
        try:
            summaries = self.manager.list_games()
        except RulesError as e:
            return error_from_rules(e)
        return [
            GameSummaryInfo(
                game_id=s.game_id,
                player_count=s.player_count,
                current_round=s.current_round,
                phase=Phase(s.phase.value),
                lifecycle=Lifecycle(s.lifecycle.value),
            )
            for s in summaries
        ]

    def end_game(self, game_id: str) -> EndGameResponse | ErrorResponse:
        try:
            removed = self.manager.end_game(game_id)
        except RulesError as e:
            return error_from_rules(e)
        return EndGameResponse(success=removed, game_id=game_id)

    def _action_response(self, game_id: str, result: ActionResult) -> ActionResponse | ErrorResponse:
        """Convert an ActionResult into the API response."""
        if not result.success:
            return ErrorResponse(
                error=result.error or "Action failed",
                error_code=_error_code(result.error_code),
                details={"kind": result.error_kind} if result.error_kind else None,
            )

        state = result.new_state
        outcome = result.outcome
        return ActionResponse(
            game_id=game_id,
            changes=result.state_changes,
            phase=Phase(state.phase.value),
            current_round=state.current_round,
            production_step=(
                Resource(state.production_step.value) if state.production_step else None
            ),
            outcome=Outcome(outcome.kind.value) if outcome else None,
            round_number=outcome.round_number if outcome else None,
            granted_bonus=(
                {Resource(r.value): amount for r, amount in result.granted_bonus.items()}
                if result.granted_bonus else None
            ),
        )
