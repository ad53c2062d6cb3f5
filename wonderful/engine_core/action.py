"""
Action System - Actions, payloads, results and phase outcomes.

Actions represent the player operations of a round:
1. Draft a card from the hand
2. Plan drafted cards (construct or discard)
3. Invest resources into cards under construction
4. Signal readiness (end of planning, end of a production step)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import ResourceType


class ActionType(Enum):
    """Types of player actions."""
    DRAFT = "draft"
    MOVE_TO_CONSTRUCTION = "move_to_construction"
    DISCARD = "discard"
    ADD_RESOURCE = "add_resource"
    SET_READY = "set_ready"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Validation happens in the engines, not here.
    """
    player_id: str
    card_id: str | None = None
    resource: ResourceType | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def draft(cls, player_id: str, card_id: str) -> Action:
        return cls(
            action_type=ActionType.DRAFT,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def move_to_construction(cls, player_id: str, card_id: str) -> Action:
        return cls(
            action_type=ActionType.MOVE_TO_CONSTRUCTION,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def discard(cls, player_id: str, card_id: str) -> Action:
        return cls(
            action_type=ActionType.DISCARD,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def add_resource(cls, player_id: str, card_id: str, resource: ResourceType) -> Action:
        return cls(
            action_type=ActionType.ADD_RESOURCE,
            payload=ActionPayload(player_id=player_id, card_id=card_id, resource=resource),
        )

    @classmethod
    def set_ready(cls, player_id: str) -> Action:
        return cls(
            action_type=ActionType.SET_READY,
            payload=ActionPayload(player_id=player_id),
        )


class OutcomeKind(Enum):
    CONTINUING = "continuing"
    ROUND_STARTED = "round_started"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PhaseOutcome:
    """
    What a readiness signal led to.

    CONTINUING covers everything short of a round boundary (still waiting
    for players, next production step, planning handed over to production).
    """
    kind: OutcomeKind
    round_number: int | None = None

    @classmethod
    def continuing(cls) -> PhaseOutcome:
        return cls(kind=OutcomeKind.CONTINUING)

    @classmethod
    def round_started(cls, round_number: int) -> PhaseOutcome:
        return cls(kind=OutcomeKind.ROUND_STARTED, round_number=round_number)

    @classmethod
    def game_over(cls) -> PhaseOutcome:
        return cls(kind=OutcomeKind.GAME_OVER)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error message, code and kind (if failed)
    - Human-readable changes, for logs and UI
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    error_kind: str | None = None  # "not_found" or "invalid_state"

    state_changes: list[str] = field(default_factory=list)

    # Set by readiness actions
    outcome: PhaseOutcome | None = None

    # Set by discards
    granted_bonus: dict[ResourceType, int] | None = None

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        error_kind: str | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, error_kind=error_kind)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        outcome: PhaseOutcome | None = None,
        granted_bonus: dict[ResourceType, int] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            outcome=outcome,
            granted_bonus=granted_bonus,
        )
