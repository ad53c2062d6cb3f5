"""
Readiness - The single "I'm done" signal, routed by phase.
"""

from __future__ import annotations

from .action import PhaseOutcome
from .construction import mark_planning_ready
from .errors import InvalidStateError
from .production import mark_production_ready
from .state import GamePhase, GameState


def set_player_ready(game: GameState, player_id: str) -> PhaseOutcome:
    """
    Mark a player ready for the current phase.

    Planning: the player has routed every drafted card.
    Production: the player is done with the current step.
    """
    game.require_in_progress()
    if game.phase is GamePhase.PLANNING:
        return mark_planning_ready(game, player_id)
    if game.phase is GamePhase.PRODUCTION:
        return mark_production_ready(game, player_id)
    raise InvalidStateError(
        f"Players cannot signal readiness during the {game.phase.value} phase",
        "WRONG_PHASE",
    )
