"""
Deck Generator - Builds the development deck.

Cards cycle through a fixed set of name templates and the five card
types; their economics are randomized. The random source is passed in,
so a seeded generator produces the same deck every time.
"""

from __future__ import annotations
import random
import uuid

from .rules import RulesConfig, DEFAULT_RULES
from .state import (
    BASE_RESOURCES,
    Card,
    CardType,
    ResourceType,
    SpecialAbility,
)


CARD_NAMES: tuple[str, ...] = (
    "Recycling Plant",
    "Wind Turbines",
    "Research Lab",
    "Financial District",
    "Space Station",
    "Hydroelectric Dam",
    "Quantum Computer",
    "Stock Exchange",
    "Mars Colony",
    "Fusion Reactor",
    "AI Research Center",
    "Orbital Hotel",
    "Underwater City",
    "Time Machine",
    "Antimatter Factory",
)

CARD_TYPES: tuple[CardType, ...] = tuple(CardType)

ABILITIES: tuple[SpecialAbility, ...] = tuple(
    a for a in SpecialAbility if a is not SpecialAbility.NONE
)


class DeckGenerator:
    """
    Generates card instances from the name templates.

    Usage:
        generator = DeckGenerator(random.Random(42))
        deck = generator.generate_deck()
    """

    def __init__(self, rng: random.Random | None = None, rules: RulesConfig = DEFAULT_RULES):
        self.rng = rng or random.Random()
        self.rules = rules

    def generate_card(self, name: str, card_type: CardType) -> Card:
        """Generate one card with randomized cost, production and points."""
        rng = self.rng

        if rng.random() < self.rules.ability_chance:
            ability = rng.choice(ABILITIES)
        else:
            ability = SpecialAbility.NONE

        return Card(
            card_id=self._new_id(),
            name=name,
            card_type=card_type,
            # Krystallium can be spent on construction but is never produced
            construction_cost=self._random_amounts(tuple(ResourceType), 1, 3),
            production=self._random_amounts(BASE_RESOURCES, 1, 2),
            victory_points=rng.randint(1, 5),
            combo_victory_points=rng.randint(0, 2),
            general_bonus=rng.randint(0, 1),
            financier_bonus=rng.randint(0, 1),
            recycling_bonus=rng.choice(BASE_RESOURCES),
            special_ability=ability,
        )

    def generate_deck(self, size: int | None = None) -> list[Card]:
        """Generate a shuffled deck, cycling names and card types."""
        if size is None:
            size = self.rules.deck_size

        deck = [
            self.generate_card(
                CARD_NAMES[i % len(CARD_NAMES)],
                CARD_TYPES[i % len(CARD_TYPES)],
            )
            for i in range(size)
        ]
        self.rng.shuffle(deck)
        return deck

    def _random_amounts(
        self,
        resources: tuple[ResourceType, ...],
        min_kinds: int,
        max_kinds: int,
    ) -> dict[ResourceType, int]:
        """Pick distinct resources and give each 1-3 units."""
        kinds = self.rng.randint(min_kinds, max_kinds)
        chosen = self.rng.sample(resources, kinds)
        return {resource: self.rng.randint(1, 3) for resource in chosen}

    def _new_id(self) -> str:
        return str(uuid.UUID(int=self.rng.getrandbits(128), version=4))


def build_deck(
    seed: int | None = None,
    size: int | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Card]:
    """
    Convenience function to build a shuffled deck.

    A seed makes the deck reproducible.
    """
    generator = DeckGenerator(rng=random.Random(seed), rules=rules)
    return generator.generate_deck(size)
