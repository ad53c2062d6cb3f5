"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between clients and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- GAME_NOT_FOUND / PLAYER_NOT_FOUND / CARD_NOT_FOUND: the target does not exist (404)
- WRONG_PHASE, ALREADY_DRAFTED, INSUFFICIENT_RESOURCES, ...: the game does not
  allow the action right now (409)
- VALIDATION_ERROR: malformed request (422)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class Resource(str, Enum):
    """Resource types, in canonical order."""
    MATERIALS = "materials"
    ENERGY = "energy"
    SCIENCE = "science"
    GOLD = "gold"
    EXPLORATION = "exploration"
    KRYSTALLIUM = "krystallium"


class Phase(str, Enum):
    """Phase of the current round."""
    DRAFT = "draft"
    PLANNING = "planning"
    PRODUCTION = "production"
    GAME_OVER = "game_over"


class Lifecycle(str, Enum):
    """Lifecycle of a game."""
    LOBBY = "lobby"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Direction(str, Enum):
    """Direction hands travel during the draft."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


class Outcome(str, Enum):
    """What a readiness signal led to."""
    CONTINUING = "continuing"
    ROUND_STARTED = "round_started"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    # Not found
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    # Wrong state
    GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
    GAME_NOT_FINISHED = "GAME_NOT_FINISHED"
    GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
    WRONG_PHASE = "WRONG_PHASE"
    ALREADY_DRAFTED = "ALREADY_DRAFTED"
    ALREADY_READY = "ALREADY_READY"
    DRAFTING_AREA_NOT_EMPTY = "DRAFTING_AREA_NOT_EMPTY"
    RESOURCE_NOT_REQUIRED = "RESOURCE_NOT_REQUIRED"
    ALREADY_INVESTED = "ALREADY_INVESTED"
    INSUFFICIENT_RESOURCES = "INSUFFICIENT_RESOURCES"
    PLAYERS_NOT_READY = "PLAYERS_NOT_READY"
    NO_PRODUCTION_STEP = "NO_PRODUCTION_STEP"
    INVALID_PLAYER_COUNT = "INVALID_PLAYER_COUNT"
    INVALID_HOST = "INVALID_HOST"
    # Store
    STORE_UNSUPPORTED = "STORE_UNSUPPORTED"
    # Request
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    card_type: str = Field(description="structure, vehicle, research, project, discovery")
    construction_cost: dict[Resource, int] = Field(default_factory=dict)
    production: dict[Resource, int] = Field(default_factory=dict)
    invested: dict[Resource, int] = Field(default_factory=dict)
    victory_points: int = 0
    combo_victory_points: int = 0
    general_bonus: int = 0
    financier_bonus: int = 0
    recycling_bonus: Resource
    special_ability: str = "none"

    model_config = {"from_attributes": True}


class PlayerStatus(BaseModel):
    """
    One player as seen by the viewer.

    `hand` is only filled for the viewer; everyone else shows `hand_count`.
    """
    player_id: str
    name: str
    is_host: bool = False
    resources: dict[Resource, int] = Field(default_factory=dict)
    characters: dict[str, int] = Field(default_factory=dict)
    hand: Optional[list[CardInfo]] = None
    hand_count: int = 0
    drafting_area: list[CardInfo] = Field(default_factory=list)
    construction_area: list[CardInfo] = Field(default_factory=list)
    empire: list[CardInfo] = Field(default_factory=list)
    is_ready: bool = False
    has_drafted: bool = False
    discarded_pool: int = 0

    model_config = {"from_attributes": True}


class PlayerRef(BaseModel):
    """A seated player."""
    player_id: str
    name: str


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create and start a game."""
    player_names: list[str] = Field(
        ..., min_length=2, max_length=5, description="Display names, in seating order"
    )
    host_index: int = Field(0, ge=0, description="Seat of the host")
    seed: Optional[int] = Field(None, description="Seed for a reproducible deck")


class CardActionRequest(BaseModel):
    """Draft, construct or discard a card."""
    player_id: str
    card_id: str


class InvestRequest(BaseModel):
    """Invest one unit of a resource into a card under construction."""
    player_id: str
    card_id: str
    resource: Resource


class ReadyRequest(BaseModel):
    """Signal that a player is done with the current phase or step."""
    player_id: str


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameCreatedResponse(BaseModel):
    """Response after creating a game."""
    game_id: str
    players: list[PlayerRef]
    host_id: str
    current_round: int
    phase: Phase
    api_version: str = "v1"


class GameStatusResponse(BaseModel):
    """Game as seen by one player."""
    game_id: str
    lifecycle: Lifecycle
    phase: Phase
    current_round: int
    production_step: Optional[Resource] = None
    draft_direction: Direction
    deck_count: int = 0
    host_id: Optional[str] = None
    you: PlayerStatus
    other_players: list[PlayerStatus] = Field(default_factory=list)
    final_scores: Optional[dict[str, int]] = None
    winner_id: Optional[str] = None
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Response after a player action."""
    game_id: str
    success: bool = True
    changes: list[str] = Field(default_factory=list)
    phase: Phase
    current_round: int
    production_step: Optional[Resource] = None
    outcome: Optional[Outcome] = None
    round_number: Optional[int] = Field(None, description="Set when a new round started")
    granted_bonus: Optional[dict[Resource, int]] = Field(
        None, description="Resources granted by a discard"
    )
    api_version: str = "v1"


class ScoresResponse(BaseModel):
    """Final scores of a finished game."""
    game_id: str
    scores: dict[str, int]
    winner_id: Optional[str] = Field(None, description="Unset when the tie could not be broken")
    api_version: str = "v1"


class GameSummaryInfo(BaseModel):
    """One entry of the game list."""
    game_id: str
    player_count: int
    current_round: int
    phase: Phase
    lifecycle: Lifecycle


class GameListResponse(BaseModel):
    """Response listing games."""
    games: list[GameSummaryInfo]
    count: int


class EndGameResponse(BaseModel):
    """Response after removing a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
