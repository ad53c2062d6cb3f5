"""
Pytest fixtures for Wonderful tests.
"""

import random

import pytest

from ..engine_core.rules import RulesConfig
from ..engine_core.setup import create_game, initialize_game
from ..engine_core.state import (
    Card,
    CardType,
    GamePhase,
    GameState,
    LifecycleState,
    PlayerState,
    ResourceType,
    SpecialAbility,
    Zone,
)
from ..session.store import GameStore


def make_card(
    card_id,
    cost=None,
    production=None,
    card_type=CardType.STRUCTURE,
    victory_points=1,
    ability=SpecialAbility.NONE,
    recycling_bonus=ResourceType.MATERIALS,
    **kwargs,
) -> Card:
    """Build a card with explicit economics."""
    return Card(
        card_id=card_id,
        name=card_id.replace("_", " ").title(),
        card_type=card_type,
        construction_cost=dict(cost or {ResourceType.MATERIALS: 1}),
        production=dict(production or {}),
        victory_points=victory_points,
        recycling_bonus=recycling_bonus,
        special_ability=ability,
        **kwargs,
    )


def make_state(num_players=2, phase=GamePhase.PLANNING) -> GameState:
    """A started game with empty zones and players p1..pN."""
    players = [PlayerState(player_id=f"p{i + 1}", name=f"Player {i + 1}") for i in range(num_players)]
    return GameState(
        game_id="test_game",
        players=players,
        host_id="p1",
        phase=phase,
        lifecycle=LifecycleState.IN_PROGRESS,
    )


def hand_of(*card_ids) -> Zone:
    return Zone(name="hand", cards=[make_card(card_id) for card_id in card_ids])


class DictStore(GameStore):
    """A store with only the required capabilities."""

    def __init__(self):
        self.games = {}

    def get(self, game_id):
        return self.games.get(game_id)

    def put(self, game):
        self.games[game.game_id] = game


@pytest.fixture
def small_rules() -> RulesConfig:
    """Three-card hands and a short deck, to keep games small."""
    return RulesConfig(deck_size=60, hand_size=3)


@pytest.fixture
def new_game(small_rules) -> GameState:
    """A 3-player game just after the first deal."""
    game = create_game(["Ada", "Bo", "Cy"], rules=small_rules, game_id="test_game")
    return initialize_game(game, rng=random.Random(7))


@pytest.fixture
def draft_state() -> GameState:
    """
    A 3-player draft with known hands.

    p1: a1 a2 / p2: b1 b2 / p3: c1 c2
    """
    state = make_state(num_players=3, phase=GamePhase.DRAFT)
    state.players[0].hand = hand_of("a1", "a2")
    state.players[1].hand = hand_of("b1", "b2")
    state.players[2].hand = hand_of("c1", "c2")
    return state


@pytest.fixture
def planning_state() -> GameState:
    """
    A 2-player planning phase.

    p1 has drafted a cheap card (2 materials, 1 energy) and holds enough
    to build it; p2 has drafted a card it cannot afford.
    """
    state = make_state(num_players=2, phase=GamePhase.PLANNING)
    p1, p2 = state.players

    p1.drafting_area.add(make_card(
        "factory",
        cost={ResourceType.MATERIALS: 2, ResourceType.ENERGY: 1},
        production={ResourceType.MATERIALS: 2},
        recycling_bonus=ResourceType.GOLD,
    ))
    p1.resources.add(ResourceType.MATERIALS, 3)
    p1.resources.add(ResourceType.ENERGY, 1)

    p2.drafting_area.add(make_card(
        "observatory",
        cost={ResourceType.SCIENCE: 3},
        production={ResourceType.SCIENCE: 1},
        recycling_bonus=ResourceType.SCIENCE,
    ))
    return state
