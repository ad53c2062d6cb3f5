"""
Game State - The aggregate every engine operates on.

Design principles:
- One mutable aggregate per game; engines transform it in place
- The reducer applies actions to a clone, so a rejected action never
  touches the caller's copy
- Resource counters are fixed-size arrays indexed by resource ordinal,
  so every resource type is always present
- Serializable: plain dataclasses and enums
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum

from .errors import NotFoundError, InvalidStateError
from .rules import RulesConfig


class ResourceType(Enum):
    """Resource types in canonical order."""
    MATERIALS = "materials"
    ENERGY = "energy"
    SCIENCE = "science"
    GOLD = "gold"
    EXPLORATION = "exploration"
    KRYSTALLIUM = "krystallium"

    @property
    def ordinal(self) -> int:
        return _RESOURCE_ORDINALS[self]

    @property
    def is_premium(self) -> bool:
        return self is ResourceType.KRYSTALLIUM


_RESOURCE_ORDINALS = {resource: i for i, resource in enumerate(ResourceType)}

# Everything except Krystallium, in production order
BASE_RESOURCES: tuple[ResourceType, ...] = tuple(
    r for r in ResourceType if not r.is_premium
)


class CharacterType(Enum):
    GENERAL = "general"
    FINANCIER = "financier"


class CardType(Enum):
    STRUCTURE = "structure"
    VEHICLE = "vehicle"
    RESEARCH = "research"
    PROJECT = "project"
    DISCOVERY = "discovery"


class SpecialAbility(Enum):
    NONE = "none"
    DOUBLE_PRODUCTION = "double_production"
    EXTRA_CARD_DRAW = "extra_card_draw"
    RESOURCE_CONVERSION = "resource_conversion"
    VICTORY_POINT_BONUS = "victory_point_bonus"
    REDUCED_CONSTRUCTION_COST = "reduced_construction_cost"


class GamePhase(Enum):
    """Phases of a round."""
    DRAFT = "draft"
    PLANNING = "planning"
    PRODUCTION = "production"
    GAME_OVER = "game_over"


class LifecycleState(Enum):
    """Lifecycle gate, owned by the lobby/session collaborator."""
    LOBBY = "lobby"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class DraftDirection(Enum):
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def step(self) -> int:
        """Seat offset a hand travels when passed."""
        return 1 if self is DraftDirection.CLOCKWISE else -1

    def flipped(self) -> DraftDirection:
        if self is DraftDirection.CLOCKWISE:
            return DraftDirection.COUNTERCLOCKWISE
        return DraftDirection.CLOCKWISE


@dataclass
class ResourcePool:
    """
    One non-negative counter per resource type.

    Decrements are guarded: taking more than is held raises ValueError.
    Engines check availability first, so that guard is never hit by a
    legal action.
    """
    counts: list[int] = field(default_factory=lambda: [0] * len(ResourceType))

    def __getitem__(self, resource: ResourceType) -> int:
        return self.counts[resource.ordinal]

    def add(self, resource: ResourceType, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError(f"Cannot add a negative amount of {resource.value}")
        self.counts[resource.ordinal] += amount

    def take(self, resource: ResourceType, amount: int = 1) -> None:
        if amount < 0 or amount > self.counts[resource.ordinal]:
            raise ValueError(
                f"Cannot take {amount} {resource.value}, "
                f"only {self.counts[resource.ordinal]} held"
            )
        self.counts[resource.ordinal] -= amount

    def set(self, resource: ResourceType, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"{resource.value} cannot be negative")
        self.counts[resource.ordinal] = amount

    def clear(self, resource: ResourceType) -> int:
        """Zero a counter and return what it held."""
        held = self.counts[resource.ordinal]
        self.counts[resource.ordinal] = 0
        return held

    def total(self) -> int:
        return sum(self.counts)

    def as_dict(self) -> dict[ResourceType, int]:
        return {resource: self.counts[resource.ordinal] for resource in ResourceType}

    @classmethod
    def of(cls, amounts: dict[ResourceType, int]) -> ResourcePool:
        pool = cls()
        for resource, amount in amounts.items():
            pool.set(resource, amount)
        return pool


@dataclass
class Card:
    """
    A development card instance.

    Definition fields are fixed at deck generation. Only `invested`,
    `cost_reduction` and `bonus_victory_points` change during play.
    """
    card_id: str
    name: str
    card_type: CardType
    construction_cost: dict[ResourceType, int] = field(default_factory=dict)
    production: dict[ResourceType, int] = field(default_factory=dict)
    victory_points: int = 0
    combo_victory_points: int = 0
    general_bonus: int = 0
    financier_bonus: int = 0
    recycling_bonus: ResourceType = ResourceType.MATERIALS
    special_ability: SpecialAbility = SpecialAbility.NONE

    # Play-time state
    invested: dict[ResourceType, int] = field(default_factory=dict)
    cost_reduction: int = 0  # Fixed when the card enters construction
    bonus_victory_points: int = 0

    def __hash__(self):
        return hash(self.card_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.card_id == other.card_id

    @property
    def has_ability(self) -> bool:
        return self.special_ability is not SpecialAbility.NONE

    def required(self, resource: ResourceType) -> int:
        """Effective cost for a resource; reductions never drop a cost below 1."""
        cost = self.construction_cost.get(resource, 0)
        if cost <= 0:
            return 0
        return max(1, cost - self.cost_reduction)

    def invested_in(self, resource: ResourceType) -> int:
        return self.invested.get(resource, 0)

    def remaining(self, resource: ResourceType) -> int:
        return max(0, self.required(resource) - self.invested_in(resource))

    def invest(self, resource: ResourceType) -> None:
        if self.remaining(resource) <= 0:
            raise ValueError(f"{self.name} needs no more {resource.value}")
        self.invested[resource] = self.invested_in(resource) + 1

    @property
    def is_constructed(self) -> bool:
        return all(
            self.invested_in(resource) >= self.required(resource)
            for resource in self.construction_cost
        )

    def yield_of(self, resource: ResourceType) -> int:
        """Production of one resource, doubled by the double-production ability."""
        amount = self.production.get(resource, 0)
        if self.special_ability is SpecialAbility.DOUBLE_PRODUCTION:
            amount *= 2
        return amount

    @property
    def total_victory_points(self) -> int:
        return self.victory_points + self.bonus_victory_points


@dataclass
class Zone:
    """
    A named collection of cards (hand, drafting area, empire, deck).

    Order is kept but carries no meaning except for the deck, which is
    drawn from the front.
    """
    name: str
    cards: list[Card] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def __iter__(self):
        return iter(self.cards)

    def __len__(self):
        return len(self.cards)

    def add(self, card: Card) -> None:
        self.cards.append(card)

    def remove(self, card: Card) -> None:
        self.cards = [c for c in self.cards if c.card_id != card.card_id]

    def find(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.card_id == card_id:
                return card
        return None

    def draw(self) -> Card | None:
        """Remove and return the front card."""
        if not self.cards:
            return None
        return self.cards.pop(0)


@dataclass
class PlayerState:
    """State for a single player."""
    player_id: str
    name: str

    hand: Zone = field(default_factory=lambda: Zone(name="hand"))
    drafting_area: Zone = field(default_factory=lambda: Zone(name="drafting_area"))
    construction_area: Zone = field(default_factory=lambda: Zone(name="construction_area"))
    empire: Zone = field(default_factory=lambda: Zone(name="empire"))

    resources: ResourcePool = field(default_factory=ResourcePool)
    characters: dict[CharacterType, int] = field(
        default_factory=lambda: {c: 0 for c in CharacterType}
    )
    discarded_pool: int = 0

    is_ready: bool = False
    has_drafted: bool = False

    def empire_count(self, ability: SpecialAbility) -> int:
        """Number of empire cards carrying an ability."""
        return sum(1 for card in self.empire if card.special_ability is ability)

    @property
    def character_tokens(self) -> int:
        return sum(self.characters.values())

    @property
    def card_count(self) -> int:
        return (
            self.hand.count
            + self.drafting_area.count
            + self.construction_area.count
            + self.empire.count
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the single source of truth; engines are stateless
    transformations over it.
    """
    game_id: str
    players: list[PlayerState] = field(default_factory=list)
    host_id: str | None = None

    current_round: int = 1
    phase: GamePhase = GamePhase.DRAFT
    lifecycle: LifecycleState = LifecycleState.LOBBY

    deck: Zone = field(default_factory=lambda: Zone(name="deck"))

    # Draft bookkeeping
    drafted_players: set[str] = field(default_factory=set)
    pass_pending: bool = False
    draft_direction: DraftDirection = DraftDirection.CLOCKWISE

    # Only meaningful during PRODUCTION
    production_step: ResourceType | None = None

    # Set once, at game end
    winner_id: str | None = None
    final_scores: dict[str, int] | None = None

    rules: RulesConfig = field(default_factory=RulesConfig)

    # History (for replay, auditing)
    action_history: list[Any] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def player_ids(self) -> list[str]:
        return [p.player_id for p in self.players]

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def require_player(self, player_id: str) -> PlayerState:
        player = self.get_player(player_id)
        if player is None:
            raise NotFoundError(f"Player {player_id} not found", "PLAYER_NOT_FOUND")
        return player

    def require_in_progress(self) -> None:
        if self.lifecycle is not LifecycleState.IN_PROGRESS:
            raise InvalidStateError("The game is not in progress", "GAME_NOT_IN_PROGRESS")

    def require_phase(self, phase: GamePhase) -> None:
        self.require_in_progress()
        if self.phase is not phase:
            raise InvalidStateError(
                f"It's not the {phase.value} phase (current: {self.phase.value})",
                "WRONG_PHASE",
            )

    def all_ready(self) -> bool:
        return all(p.is_ready for p in self.players)

    def total_cards(self) -> int:
        """Cards in play plus the undrawn deck; only recycling lowers it."""
        return self.deck.count + sum(p.card_count for p in self.players)

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
