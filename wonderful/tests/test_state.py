"""
Tests for the state containers.

Tests:
- Resource counters
- Card cost, investment and yield rules
- Zones
- Game state lookups and cloning
"""

import pytest

from ..engine_core.errors import InvalidStateError, NotFoundError
from ..engine_core.state import (
    BASE_RESOURCES,
    CharacterType,
    DraftDirection,
    GamePhase,
    LifecycleState,
    PlayerState,
    ResourcePool,
    ResourceType,
    SpecialAbility,
    Zone,
)
from .conftest import make_card, make_state


class TestResourcePool:
    """Tests for resource counters."""

    def test_every_resource_starts_at_zero(self):
        """A new pool holds a zero counter for every resource."""
        pool = ResourcePool()
        assert pool.as_dict() == {r: 0 for r in ResourceType}

    def test_add_and_take(self):
        pool = ResourcePool()
        pool.add(ResourceType.GOLD, 3)
        pool.take(ResourceType.GOLD, 2)
        assert pool[ResourceType.GOLD] == 1

    def test_take_more_than_held_raises(self):
        """Counters never go negative."""
        pool = ResourcePool()
        pool.add(ResourceType.ENERGY, 1)
        with pytest.raises(ValueError):
            pool.take(ResourceType.ENERGY, 2)
        assert pool[ResourceType.ENERGY] == 1

    def test_clear_returns_held_amount(self):
        pool = ResourcePool.of({ResourceType.SCIENCE: 4})
        assert pool.clear(ResourceType.SCIENCE) == 4
        assert pool[ResourceType.SCIENCE] == 0

    def test_total(self):
        pool = ResourcePool.of({ResourceType.MATERIALS: 2, ResourceType.KRYSTALLIUM: 3})
        assert pool.total() == 5

    def test_base_resources_exclude_krystallium(self):
        assert ResourceType.KRYSTALLIUM not in BASE_RESOURCES
        assert len(BASE_RESOURCES) == 5
        assert BASE_RESOURCES[0] is ResourceType.MATERIALS


class TestCard:
    """Tests for card rules."""

    def test_card_with_cost_is_not_constructed(self):
        card = make_card("lab", cost={ResourceType.SCIENCE: 2})
        assert not card.is_constructed
        assert card.remaining(ResourceType.SCIENCE) == 2

    def test_fully_invested_card_is_constructed(self):
        card = make_card("lab", cost={ResourceType.SCIENCE: 2})
        card.invest(ResourceType.SCIENCE)
        card.invest(ResourceType.SCIENCE)
        assert card.is_constructed

    def test_cannot_invest_past_cost(self):
        card = make_card("lab", cost={ResourceType.SCIENCE: 1})
        card.invest(ResourceType.SCIENCE)
        with pytest.raises(ValueError):
            card.invest(ResourceType.SCIENCE)

    def test_cost_reduction_never_below_one(self):
        """Reductions lower each cost but leave at least one unit."""
        card = make_card("lab", cost={ResourceType.SCIENCE: 3, ResourceType.GOLD: 1})
        card.cost_reduction = 2
        assert card.required(ResourceType.SCIENCE) == 1
        assert card.required(ResourceType.GOLD) == 1
        assert card.required(ResourceType.ENERGY) == 0

    def test_double_production_doubles_yield(self):
        card = make_card(
            "dam",
            production={ResourceType.ENERGY: 2},
            ability=SpecialAbility.DOUBLE_PRODUCTION,
        )
        assert card.yield_of(ResourceType.ENERGY) == 4
        assert card.yield_of(ResourceType.GOLD) == 0

    def test_cards_compare_by_id(self):
        assert make_card("x", victory_points=1) == make_card("x", victory_points=5)
        assert make_card("x") != make_card("y")

    def test_total_victory_points_includes_bonus(self):
        card = make_card("x", victory_points=3)
        card.bonus_victory_points = 2
        assert card.total_victory_points == 5


class TestZone:
    """Tests for card zones."""

    def test_draw_takes_front_card(self):
        zone = Zone(name="deck", cards=[make_card("a"), make_card("b")])
        assert zone.draw().card_id == "a"
        assert zone.count == 1

    def test_draw_from_empty_zone(self):
        assert Zone(name="deck").draw() is None

    def test_find_and_remove(self):
        zone = Zone(name="hand", cards=[make_card("a"), make_card("b")])
        card = zone.find("b")
        zone.remove(card)
        assert zone.find("b") is None
        assert [c.card_id for c in zone] == ["a"]


class TestDraftDirection:
    """Tests for the draft direction."""

    def test_flip_alternates(self):
        assert DraftDirection.CLOCKWISE.flipped() is DraftDirection.COUNTERCLOCKWISE
        assert DraftDirection.COUNTERCLOCKWISE.flipped() is DraftDirection.CLOCKWISE

    def test_steps(self):
        assert DraftDirection.CLOCKWISE.step == 1
        assert DraftDirection.COUNTERCLOCKWISE.step == -1


class TestGameState:
    """Tests for game state lookups."""

    def test_new_player_has_every_character(self):
        player = PlayerState(player_id="p1", name="Ada")
        assert player.characters == {CharacterType.GENERAL: 0, CharacterType.FINANCIER: 0}

    def test_require_unknown_player(self):
        state = make_state()
        with pytest.raises(NotFoundError) as exc:
            state.require_player("nobody")
        assert exc.value.error_code == "PLAYER_NOT_FOUND"

    def test_require_phase(self):
        state = make_state(phase=GamePhase.DRAFT)
        with pytest.raises(InvalidStateError) as exc:
            state.require_phase(GamePhase.PLANNING)
        assert exc.value.error_code == "WRONG_PHASE"

    def test_require_phase_outside_play(self):
        state = make_state(phase=GamePhase.DRAFT)
        state.lifecycle = LifecycleState.LOBBY
        with pytest.raises(InvalidStateError) as exc:
            state.require_phase(GamePhase.DRAFT)
        assert exc.value.error_code == "GAME_NOT_IN_PROGRESS"

    def test_clone_is_independent(self):
        state = make_state()
        state.players[0].hand.add(make_card("a"))
        copy = state.clone()
        copy.players[0].hand.draw()
        copy.players[0].resources.add(ResourceType.GOLD)
        assert state.players[0].hand.count == 1
        assert state.players[0].resources[ResourceType.GOLD] == 0

    def test_total_cards_counts_every_zone(self):
        state = make_state()
        p1 = state.players[0]
        p1.hand.add(make_card("a"))
        p1.drafting_area.add(make_card("b"))
        p1.construction_area.add(make_card("c"))
        p1.empire.add(make_card("d"))
        state.deck.add(make_card("e"))
        assert state.total_cards() == 5
