"""
Production Engine - Step-by-step resource production and round end.

Production walks the base resources in canonical order. Each step pays
every player the yield of their empire for that resource; players then
signal readiness to move on. After the last step the round ends:
special abilities resolve, the round counter advances, the draft
direction flips, and either a new round is dealt or the game ends.
"""

from __future__ import annotations

from .action import PhaseOutcome
from .errors import InvalidStateError
from .setup import start_new_round
from .state import (
    BASE_RESOURCES,
    GamePhase,
    GameState,
    LifecycleState,
    PlayerState,
    ResourceType,
    SpecialAbility,
)


PRODUCTION_ORDER: tuple[ResourceType, ...] = BASE_RESOURCES

# (from, to, rate) for the resource-conversion ability
CONVERSIONS: tuple[tuple[ResourceType, ResourceType, int], ...] = (
    (ResourceType.MATERIALS, ResourceType.KRYSTALLIUM, 3),
    (ResourceType.ENERGY, ResourceType.SCIENCE, 2),
    (ResourceType.GOLD, ResourceType.EXPLORATION, 2),
)


def production_for(player: PlayerState, resource: ResourceType) -> int:
    """Total yield of a resource across a player's empire."""
    return sum(card.yield_of(resource) for card in player.empire)


def begin_production(game: GameState) -> None:
    """Start at the first resource and pay it out."""
    game.production_step = PRODUCTION_ORDER[0]
    run_production_step(game)


def run_production_step(game: GameState) -> None:
    """Pay every player for the active resource and clear ready flags."""
    step = game.production_step
    if step is None:
        raise InvalidStateError("No production step is active", "NO_PRODUCTION_STEP")

    for player in game.players:
        player.resources.add(step, production_for(player, step))
        player.is_ready = False


def mark_production_ready(game: GameState, player_id: str) -> PhaseOutcome:
    """
    Signal that a player is done with the current production step.

    When everyone is ready the next step runs, or the round ends.
    """
    game.require_phase(GamePhase.PRODUCTION)
    player = game.require_player(player_id)
    if player.is_ready:
        raise InvalidStateError(f"{player.name} is already ready", "ALREADY_READY")

    player.is_ready = True
    if not game.all_ready():
        return PhaseOutcome.continuing()
    return advance_production(game)


def advance_production(game: GameState) -> PhaseOutcome:
    """Move to the next production step, or finish the phase after the last."""
    index = PRODUCTION_ORDER.index(game.production_step)
    if index + 1 < len(PRODUCTION_ORDER):
        game.production_step = PRODUCTION_ORDER[index + 1]
        run_production_step(game)
        return PhaseOutcome.continuing()
    return finish_production(game)


def apply_victory_point_bonus(player: PlayerState, divisor: int) -> int:
    """
    Each victory-point-bonus card gains one point per `divisor` resources held.

    Returns the points granted per card.
    """
    bonus = player.resources.total() // divisor
    for card in player.empire:
        if card.special_ability is SpecialAbility.VICTORY_POINT_BONUS:
            card.bonus_victory_points += bonus
    return bonus


def apply_resource_conversion(player: PlayerState) -> dict[ResourceType, int]:
    """
    Convert resources at fixed rates if the player owns a conversion card.

    Remainders are kept. Returns what was gained per target resource.
    """
    gained: dict[ResourceType, int] = {}
    if player.empire_count(SpecialAbility.RESOURCE_CONVERSION) == 0:
        return gained

    for source, target, rate in CONVERSIONS:
        amount = player.resources[source] // rate
        if amount > 0:
            player.resources.take(source, amount * rate)
            player.resources.add(target, amount)
            gained[target] = gained.get(target, 0) + amount
    return gained


def finish_production(game: GameState) -> PhaseOutcome:
    """Resolve abilities and close the round."""
    for player in game.players:
        apply_victory_point_bonus(player, game.rules.vp_bonus_divisor)
        apply_resource_conversion(player)

    game.production_step = None
    game.current_round += 1
    game.draft_direction = game.draft_direction.flipped()

    if game.current_round > game.rules.rounds:
        game.phase = GamePhase.GAME_OVER
        game.lifecycle = LifecycleState.FINISHED
        for player in game.players:
            player.is_ready = False
        return PhaseOutcome.game_over()

    start_new_round(game)
    return PhaseOutcome.round_started(game.current_round)
