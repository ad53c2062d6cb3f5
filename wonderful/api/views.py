"""
Status projection - What one player is allowed to see.

The viewer sees their own hand; other players' hands are reduced to a
count. Everything else on the table is public.
"""

from __future__ import annotations

from ..engine_core.state import Card, GameState, PlayerState, ResourceType
from .schemas import (
    CardInfo,
    Direction,
    GameStatusResponse,
    Lifecycle,
    Phase,
    PlayerStatus,
    Resource,
)


def _resources(amounts: dict[ResourceType, int]) -> dict[Resource, int]:
    return {Resource(resource.value): amount for resource, amount in amounts.items()}


def card_info(card: Card) -> CardInfo:
    """Public view of a card. Costs shown are the effective costs."""
    return CardInfo(
        card_id=card.card_id,
        name=card.name,
        card_type=card.card_type.value,
        construction_cost=_resources(
            {resource: card.required(resource) for resource in card.construction_cost}
        ),
        production=_resources(card.production),
        invested=_resources(card.invested),
        victory_points=card.total_victory_points,
        combo_victory_points=card.combo_victory_points,
        general_bonus=card.general_bonus,
        financier_bonus=card.financier_bonus,
        recycling_bonus=Resource(card.recycling_bonus.value),
        special_ability=card.special_ability.value,
    )


def player_status(player: PlayerState, host_id: str | None, show_hand: bool) -> PlayerStatus:
    return PlayerStatus(
        player_id=player.player_id,
        name=player.name,
        is_host=player.player_id == host_id,
        resources=_resources(player.resources.as_dict()),
        characters={c.value: count for c, count in player.characters.items()},
        hand=[card_info(c) for c in player.hand] if show_hand else None,
        hand_count=player.hand.count,
        drafting_area=[card_info(c) for c in player.drafting_area],
        construction_area=[card_info(c) for c in player.construction_area],
        empire=[card_info(c) for c in player.empire],
        is_ready=player.is_ready,
        has_drafted=player.has_drafted,
        discarded_pool=player.discarded_pool,
    )


def build_game_status(game: GameState, viewer_id: str) -> GameStatusResponse:
    """
    Project the game for one player.

    Raises NotFoundError if the viewer is not seated in the game.
    """
    viewer = game.require_player(viewer_id)

    return GameStatusResponse(
        game_id=game.game_id,
        lifecycle=Lifecycle(game.lifecycle.value),
        phase=Phase(game.phase.value),
        current_round=game.current_round,
        production_step=(
            Resource(game.production_step.value) if game.production_step else None
        ),
        draft_direction=Direction(game.draft_direction.value),
        deck_count=game.deck.count,
        host_id=game.host_id,
        you=player_status(viewer, game.host_id, show_hand=True),
        other_players=[
            player_status(p, game.host_id, show_hand=False)
            for p in game.players
            if p.player_id != viewer_id
        ],
        final_scores=dict(game.final_scores) if game.final_scores is not None else None,
        winner_id=game.winner_id,
    )
