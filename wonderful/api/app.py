"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/v1/games                        Create and start a game
    GET    /api/v1/games                        List games
    DELETE /api/v1/games/{id}                   Remove a game
    GET    /api/v1/games/{id}/status            Game as seen by one player
    POST   /api/v1/games/{id}/draft             Draft a card
    POST   /api/v1/games/{id}/construct         Move a drafted card to construction
    POST   /api/v1/games/{id}/discard           Recycle a drafted card
    POST   /api/v1/games/{id}/invest            Invest one resource into a card
    POST   /api/v1/games/{id}/ready             Signal readiness
    GET    /api/v1/games/{id}/scores            Final scores and winner

Rule violations come back as ErrorResponse: 404 when the game, player or
card does not exist, 409 when the game does not allow the action yet, 501
when the configured store cannot list or delete games.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Union
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import (
    ActionResponse,
    CardActionRequest,
    CreateGameRequest,
    EndGameResponse,
    ErrorResponse,
    GameCreatedResponse,
    GameListResponse,
    GameStatusResponse,
    HealthResponse,
    InvestRequest,
    ReadyRequest,
    ScoresResponse,
)
from .service import APIService

# Environment configuration
WONDERFUL_ENV = os.getenv("WONDERFUL_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Game, player or card not found"},
    409: {"model": ErrorResponse, "description": "Action not allowed in the current state"},
}


def status_code_for(error: ErrorResponse) -> int:
    kind = (error.details or {}).get("kind")
    if kind == "not_found":
        return 404
    if kind == "unsupported":
        return 501
    if kind == "invalid_state":
        return 409
    return 400


def make_error_response(error: ErrorResponse) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code_for(error),
        content=error.model_dump(mode="json"),
    )


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Wonderful Engine API",
        description="""
Rules engine for a simultaneous-action card-drafting game.

## Round structure

1. **Draft**: every player drafts one card, then hands pass on
2. **Planning**: construct or recycle drafted cards, invest resources, then `ready`
3. **Production**: one step per resource; everyone calls `ready` to advance

After four rounds the game is over and `/scores` returns the result.
        """,
        version=API_VERSION,
        docs_url="/api/docs" if WONDERFUL_ENV != "production" else None,
        redoc_url="/api/redoc" if WONDERFUL_ENV != "production" else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameCreatedResponse,
        responses={409: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Create and start a game",
    )
    async def create_game(body: CreateGameRequest) -> Union[GameCreatedResponse, JSONResponse]:
        """Seat the players, build the deck and deal the first hands."""
        return respond(api_service.create_game(body))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        responses={501: {"model": ErrorResponse}},
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> Union[GameListResponse, JSONResponse]:
        games = api_service.list_games()
        if isinstance(games, ErrorResponse):
            return make_error_response(games)
        return GameListResponse(games=games, count=len(games))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        responses={501: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Remove a game",
    )
    async def end_game(game_id: str) -> Union[EndGameResponse, JSONResponse]:
        return respond(api_service.end_game(game_id))

    @app.get(
        "/api/v1/games/{game_id}/status",
        response_model=GameStatusResponse,
        responses=ERROR_RESPONSES,
        tags=["Games"],
        summary="Game as seen by one player",
    )
    async def get_status(
        game_id: str,
        player_id: Annotated[str, Query(description="The viewing player")],
    ) -> Union[GameStatusResponse, JSONResponse]:
        """Other players' hands are hidden; only their sizes are shown."""
        return respond(api_service.get_status(game_id, player_id))

    # =========================================================================
    # Player Actions
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/draft",
        response_model=ActionResponse,
        responses=ERROR_RESPONSES,
        tags=["Actions"],
        summary="Draft a card from your hand",
    )
    async def draft_card(game_id: str, body: CardActionRequest) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.draft_card(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/construct",
        response_model=ActionResponse,
        responses=ERROR_RESPONSES,
        tags=["Actions"],
        summary="Move a drafted card to your construction area",
    )
    async def move_to_construction(
        game_id: str, body: CardActionRequest
    ) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.move_to_construction(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/discard",
        response_model=ActionResponse,
        responses=ERROR_RESPONSES,
        tags=["Actions"],
        summary="Recycle a drafted card for its bonus",
    )
    async def discard_card(game_id: str, body: CardActionRequest) -> Union[ActionResponse, JSONResponse]:
        """The response's `granted_bonus` holds the resource gained."""
        return respond(api_service.discard_card(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/invest",
        response_model=ActionResponse,
        responses=ERROR_RESPONSES,
        tags=["Actions"],
        summary="Invest one resource into a card under construction",
    )
    async def invest(game_id: str, body: InvestRequest) -> Union[ActionResponse, JSONResponse]:
        return respond(api_service.add_resource_to_card(game_id, body))

    @app.post(
        "/api/v1/games/{game_id}/ready",
        response_model=ActionResponse,
        responses=ERROR_RESPONSES,
        tags=["Actions"],
        summary="Signal that you are done with the current phase or step",
    )
    async def ready(game_id: str, body: ReadyRequest) -> Union[ActionResponse, JSONResponse]:
        """
        `outcome` is `round_started` or `game_over` when this signal closed a
        round, `continuing` otherwise.
        """
        return respond(api_service.set_player_ready(game_id, body))

    @app.get(
        "/api/v1/games/{game_id}/scores",
        response_model=ScoresResponse,
        responses=ERROR_RESPONSES,
        tags=["Games"],
        summary="Final scores and winner",
    )
    async def get_scores(game_id: str) -> Union[ScoresResponse, JSONResponse]:
        return respond(api_service.get_scores(game_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="wonderful-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Wonderful Engine API",
            "version": API_VERSION,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn wonderful.api.app:app
app = create_app()
