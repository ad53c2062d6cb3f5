"""
API Module - Game client interface.

Exposes the engine via REST API. A client:
1. Creates a game with the players' names
2. Polls the status as one of the players
3. Drafts, constructs, recycles and invests cards
4. Signals readiness to move the game along
5. Reads the final scores once the game is over

Games live in the server process. No persistent user accounts required.
"""

from .schemas import (
    # Enums
    Resource,
    Phase,
    Lifecycle,
    Direction,
    Outcome,
    ErrorCode,
    # Requests
    CreateGameRequest,
    CardActionRequest,
    InvestRequest,
    ReadyRequest,
    # Responses
    ErrorResponse,
    GameCreatedResponse,
    GameStatusResponse,
    ActionResponse,
    ScoresResponse,
    GameListResponse,
    EndGameResponse,
    HealthResponse,
    # Shared
    CardInfo,
    PlayerStatus,
    PlayerRef,
    GameSummaryInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Enums
    "Resource",
    "Phase",
    "Lifecycle",
    "Direction",
    "Outcome",
    "ErrorCode",
    # Requests
    "CreateGameRequest",
    "CardActionRequest",
    "InvestRequest",
    "ReadyRequest",
    # Responses
    "ErrorResponse",
    "GameCreatedResponse",
    "GameStatusResponse",
    "ActionResponse",
    "ScoresResponse",
    "GameListResponse",
    "EndGameResponse",
    "HealthResponse",
    # Shared
    "CardInfo",
    "PlayerStatus",
    "PlayerRef",
    "GameSummaryInfo",
    # Service
    "APIService",
    "create_app",
]
