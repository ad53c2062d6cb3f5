"""
Construction Engine - Planning-phase card routing and resource investment.

During planning every drafted card is either moved to the construction
area or discarded for its recycling bonus. Cards under construction
receive one resource unit at a time; the unit that completes a card
moves it to the empire immediately.

When every player is ready, leftover resources are discarded, converted
into Krystallium, and production begins.
"""

from __future__ import annotations

from .action import PhaseOutcome
from .errors import InvalidStateError, NotFoundError
from .production import begin_production
from .state import (
    BASE_RESOURCES,
    Card,
    GamePhase,
    GameState,
    PlayerState,
    ResourceType,
    SpecialAbility,
)


def _require_planning(game: GameState, player_id: str) -> PlayerState:
    game.require_phase(GamePhase.PLANNING)
    return game.require_player(player_id)


def _drafted_card(player: PlayerState, card_id: str) -> Card:
    card = player.drafting_area.find(card_id)
    if card is None:
        raise NotFoundError(
            f"Card {card_id} not in {player.name}'s drafting area", "CARD_NOT_FOUND"
        )
    return card


def move_to_construction(game: GameState, player_id: str, card_id: str) -> Card:
    """
    Move a drafted card into the construction area.

    The player's current cost-reduction cards are counted now and fixed
    on the card for the rest of its construction.
    """
    player = _require_planning(game, player_id)
    card = _drafted_card(player, card_id)

    player.drafting_area.remove(card)
    card.cost_reduction = player.empire_count(SpecialAbility.REDUCED_CONSTRUCTION_COST)
    player.construction_area.add(card)

    if card.is_constructed:
        _complete(player, card)
    return card


def discard_card(game: GameState, player_id: str, card_id: str) -> dict[ResourceType, int]:
    """
    Recycle a drafted card for one unit of its recycling-bonus resource.

    Returns the bonus granted.
    """
    player = _require_planning(game, player_id)
    card = _drafted_card(player, card_id)

    player.drafting_area.remove(card)
    player.resources.add(card.recycling_bonus)
    return {card.recycling_bonus: 1}


def add_resource_to_card(
    game: GameState,
    player_id: str,
    card_id: str,
    resource: ResourceType,
) -> bool:
    """
    Invest one unit of a resource into a card under construction.

    Returns True if this unit completed the card (it is now in the empire).
    """
    player = _require_planning(game, player_id)

    card = player.construction_area.find(card_id)
    if card is None:
        raise NotFoundError(
            f"Card {card_id} not in {player.name}'s construction area", "CARD_NOT_FOUND"
        )
    if resource not in card.construction_cost:
        raise InvalidStateError(
            f"{card.name} does not need {resource.value}", "RESOURCE_NOT_REQUIRED"
        )
    if card.remaining(resource) <= 0:
        raise InvalidStateError(
            f"{card.name} already has all the {resource.value} it needs", "ALREADY_INVESTED"
        )
    if player.resources[resource] <= 0:
        raise InvalidStateError(
            f"{player.name} has no {resource.value}", "INSUFFICIENT_RESOURCES"
        )

    player.resources.take(resource)
    card.invest(resource)

    if card.is_constructed:
        _complete(player, card)
        return True
    return False


def _complete(player: PlayerState, card: Card) -> None:
    player.construction_area.remove(card)
    player.empire.add(card)


def mark_planning_ready(game: GameState, player_id: str) -> PhaseOutcome:
    """
    Signal that a player has finished planning.

    Requires an empty drafting area. The last player to get ready ends
    the planning phase.
    """
    player = _require_planning(game, player_id)

    if not player.drafting_area.is_empty:
        raise InvalidStateError(
            f"{player.name} still has {player.drafting_area.count} drafted card(s) to plan",
            "DRAFTING_AREA_NOT_EMPTY",
        )
    if player.is_ready:
        raise InvalidStateError(f"{player.name} is already ready", "ALREADY_READY")

    player.is_ready = True
    if game.all_ready():
        end_planning_phase(game)
    return PhaseOutcome.continuing()


def convert_excess_resources(player: PlayerState, rate: int) -> int:
    """
    Discard every non-premium resource into the player's pool and turn
    each full `rate` of the pool into one Krystallium.

    Returns the Krystallium gained. The remainder stays in the pool.
    """
    for resource in BASE_RESOURCES:
        player.discarded_pool += player.resources.clear(resource)

    gained = player.discarded_pool // rate
    player.resources.add(ResourceType.KRYSTALLIUM, gained)
    player.discarded_pool %= rate
    return gained


def end_planning_phase(game: GameState) -> None:
    """Convert leftovers, then hand over to production."""
    if not game.all_ready():
        raise InvalidStateError("Not all players are ready", "PLAYERS_NOT_READY")

    for player in game.players:
        convert_excess_resources(player, game.rules.premium_rate)

    game.phase = GamePhase.PRODUCTION
    begin_production(game)
