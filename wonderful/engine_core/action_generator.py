"""
Action Generator - Generates the legal actions of a player.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action
from .state import GamePhase, GameState, LifecycleState, PlayerState


@dataclass
class ActionGenerator:
    """Generates legal actions for one player in the current phase."""

    def generate(self, state: GameState, player_id: str) -> list[Action]:
        """
        Generate all legal actions for a player.

        Returns a list of fully-specified Action objects.
        """
        if state.lifecycle is not LifecycleState.IN_PROGRESS:
            return []

        player = state.get_player(player_id)
        if not player:
            return []

        if state.phase == GamePhase.DRAFT:
            return self._generate_draft_actions(player)
        if state.phase == GamePhase.PLANNING:
            return self._generate_planning_actions(player)
        if state.phase == GamePhase.PRODUCTION:
            return [] if player.is_ready else [Action.set_ready(player_id)]
        return []

    def _generate_draft_actions(self, player: PlayerState) -> list[Action]:
        """One draft action per card in hand, unless already drafted."""
        if player.has_drafted:
            return []
        return [Action.draft(player.player_id, card.card_id) for card in player.hand]

    def _generate_planning_actions(self, player: PlayerState) -> list[Action]:
        """Route drafted cards, invest what can be invested, then get ready."""
        actions = []

        for card in player.drafting_area:
            actions.append(Action.move_to_construction(player.player_id, card.card_id))
            actions.append(Action.discard(player.player_id, card.card_id))

        for card in player.construction_area:
            for resource in card.construction_cost:
                if card.remaining(resource) > 0 and player.resources[resource] > 0:
                    actions.append(
                        Action.add_resource(player.player_id, card.card_id, resource)
                    )

        if player.drafting_area.is_empty and not player.is_ready:
            actions.append(Action.set_ready(player.player_id))

        return actions


def legal_actions(state: GameState, player_id: str) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(state, player_id)


def is_legal(state: GameState, action: Action) -> bool:
    """Check if a specific action is legal."""
    legal = legal_actions(state, action.payload.player_id)
    # Compare by type and key payload fields
    for a in legal:
        if (
            a.action_type == action.action_type
            and a.payload.card_id == action.payload.card_id
            and a.payload.resource == action.payload.resource
        ):
            return True
    return False
