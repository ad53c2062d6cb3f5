"""
Ruleset constants.

A game carries its own RulesConfig so that tests (and variants) can shrink
the deck or hands without touching module globals.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RulesConfig:
    """Numeric parameters of the ruleset."""
    deck_size: int = 150
    hand_size: int = 7
    rounds: int = 4
    min_players: int = 2
    max_players: int = 5

    # Discarded resources needed per Krystallium at the end of planning
    premium_rate: int = 5

    # Resources per victory point granted by the victory-point-bonus ability
    vp_bonus_divisor: int = 5

    # Probability that a generated card carries a special ability
    ability_chance: float = 0.2


DEFAULT_RULES = RulesConfig()
