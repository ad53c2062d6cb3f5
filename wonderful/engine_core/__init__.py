"""
Engine Core - Game state and the rules engines that transform it.

The engine is the runtime that:
1. Builds the deck and deals hands
2. Runs the draft and passes hands
3. Applies planning actions (construct, discard, invest)
4. Produces resources step by step and closes rounds
5. Scores the finished game
"""

from .state import (
    BASE_RESOURCES,
    Card,
    CardType,
    CharacterType,
    DraftDirection,
    GamePhase,
    GameState,
    LifecycleState,
    PlayerState,
    ResourcePool,
    ResourceType,
    SpecialAbility,
    Zone,
)
from .rules import RulesConfig, DEFAULT_RULES
from .errors import RulesError, NotFoundError, InvalidStateError, UnsupportedError
from .action import Action, ActionType, ActionPayload, ActionResult, OutcomeKind, PhaseOutcome
from .deck import DeckGenerator, build_deck
from .setup import create_game, initialize_game, deal_cards, start_new_round
from .draft import draft_card
from .construction import add_resource_to_card, discard_card, move_to_construction
from .production import PRODUCTION_ORDER, CONVERSIONS
from .readiness import set_player_ready
from .scoring import ScoreBreakdown, calculate_final_scores, score_breakdown
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "BASE_RESOURCES",
    "Card",
    "CardType",
    "CharacterType",
    "DraftDirection",
    "GamePhase",
    "GameState",
    "LifecycleState",
    "PlayerState",
    "ResourcePool",
    "ResourceType",
    "SpecialAbility",
    "Zone",
    "RulesConfig",
    "DEFAULT_RULES",
    "RulesError",
    "NotFoundError",
    "InvalidStateError",
    "UnsupportedError",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "OutcomeKind",
    "PhaseOutcome",
    "DeckGenerator",
    "build_deck",
    "create_game",
    "initialize_game",
    "deal_cards",
    "start_new_round",
    "draft_card",
    "add_resource_to_card",
    "discard_card",
    "move_to_construction",
    "PRODUCTION_ORDER",
    "CONVERSIONS",
    "set_player_ready",
    "ScoreBreakdown",
    "calculate_final_scores",
    "score_breakdown",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
]
