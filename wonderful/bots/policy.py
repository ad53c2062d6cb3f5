"""
Bot Policies - Automated seats.

Every policy receives the state, the seat it plays and that seat's legal
actions (from the action generator), and returns one of those actions
wrapped in a BotDecision. Policies never build actions themselves, so a
bot cannot play an illegal move.

Policies:
- RandomPolicy: uniform pick, seeded for reproducible simulations
- FirstLegalPolicy: always the first action; builds everything it drafts
- BuilderPolicy: drafts for points, builds what it can pay for, recycles
  the rest
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import Card, GameState, PlayerState


@dataclass
class BotDecision:
    """The chosen action, with a short reason for logs."""
    action: Action
    explanation: str = ""


class BotPolicy(ABC):
    """Chooses one action for a seat."""

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        player_id: str,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Pick one of `legal_actions` for `player_id`.

        Raises ValueError when there is nothing to pick.
        """

    def get_name(self) -> str:
        return self.__class__.__name__


def _require_choices(legal_actions: list[Action]) -> None:
    if not legal_actions:
        raise ValueError("No legal actions available")


class RandomPolicy(BotPolicy):
    """Uniform choice; the seed makes a whole simulation repeatable."""

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state, player_id, legal_actions):
        _require_choices(legal_actions)
        return BotDecision(action=self.rng.choice(legal_actions), explanation="random pick")


class FirstLegalPolicy(BotPolicy):
    """
    Deterministic baseline.

    The generator lists construction before recycling, so this bot builds
    every drafted card and never recycles.
    """

    def select_action(self, state, player_id, legal_actions):
        _require_choices(legal_actions)
        return BotDecision(action=legal_actions[0], explanation="first legal action")


class BuilderPolicy(BotPolicy):
    """
    A simple economic player.

    Draft: take the card worth the most points for this empire.
    Planning: build a drafted card when current resources cover at least
    `build_threshold` of its cost, otherwise recycle it; then invest in
    the card closest to completion; ready when nothing is left.
    Production: ready.
    """

    def __init__(self, build_threshold: float = 0.5):
        self.build_threshold = build_threshold

    def select_action(self, state, player_id, legal_actions):
        _require_choices(legal_actions)
        player = state.require_player(player_id)
        by_type: dict[ActionType, list[Action]] = {}
        for action in legal_actions:
            by_type.setdefault(action.action_type, []).append(action)

        if ActionType.DRAFT in by_type:
            return self._draft(player, by_type[ActionType.DRAFT])
        if ActionType.MOVE_TO_CONSTRUCTION in by_type:
            return self._route(player, by_type)
        if ActionType.ADD_RESOURCE in by_type:
            return self._invest(player, by_type[ActionType.ADD_RESOURCE])
        return BotDecision(action=legal_actions[0], explanation="nothing else to do")

    def card_value(self, player: PlayerState, card: Card) -> float:
        """Points the card would be worth in this empire, less a cost penalty."""
        same_type = sum(1 for c in player.empire if c.card_type is card.card_type)
        cost = sum(card.construction_cost.values())
        return (
            card.victory_points
            + card.combo_victory_points * (same_type + 1)
            + card.general_bonus
            + card.financier_bonus
            + 0.5 * sum(card.production.values())
            - 0.25 * cost
        )

    def coverage(self, player: PlayerState, card: Card) -> float:
        """Share of the card's cost the player could pay right now."""
        needed = sum(card.construction_cost.values())
        if needed == 0:
            return 1.0
        payable = sum(
            min(player.resources[resource], amount)
            for resource, amount in card.construction_cost.items()
        )
        return payable / needed

    def _draft(self, player, drafts):
        scored = [
            (self.card_value(player, player.hand.find(a.payload.card_id)), a) for a in drafts
        ]
        value, action = max(scored, key=lambda item: item[0])
        return BotDecision(action=action, explanation=f"highest value card ({value:.1f})")

    def _route(self, player, by_type):
        move = by_type[ActionType.MOVE_TO_CONSTRUCTION][0]
        card = player.drafting_area.find(move.payload.card_id)
        share = self.coverage(player, card)
        if share >= self.build_threshold:
            return BotDecision(action=move, explanation="affordable, building")

        for discard in by_type.get(ActionType.DISCARD, []):
            if discard.payload.card_id == card.card_id:
                return BotDecision(action=discard, explanation="too expensive, recycling")
        return BotDecision(action=move, explanation="building")

    def _invest(self, player, investments):
        def remaining(action):
            card = player.construction_area.find(action.payload.card_id)
            return sum(card.remaining(r) for r in card.construction_cost)

        action = min(investments, key=remaining)
        return BotDecision(action=action, explanation="closest to completion")
