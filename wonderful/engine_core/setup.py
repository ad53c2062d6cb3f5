"""
Game Setup - Creates games, builds the deck and deals hands.

Lobby bookkeeping (join/leave) belongs to the session collaborator; this
module only turns a list of player names into a started game and deals
the hands of every new round.
"""

from __future__ import annotations
import random
import uuid

from .deck import DeckGenerator
from .draft import check_draft_end
from .errors import InvalidStateError
from .rules import RulesConfig
from .state import (
    GamePhase,
    GameState,
    LifecycleState,
    PlayerState,
    SpecialAbility,
    Zone,
)


def create_game(
    player_names: list[str],
    host_index: int = 0,
    rules: RulesConfig | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Create a game in the lobby state.

    Args:
        player_names: Display names, in seating order
        host_index: Which player hosts the game
        rules: Ruleset parameters (defaults to the standard ruleset)
        game_id: Optional explicit ID

    Returns:
        GameState with players seated and an empty deck
    """
    rules = rules or RulesConfig()
    if not rules.min_players <= len(player_names) <= rules.max_players:
        raise InvalidStateError(
            f"The game requires {rules.min_players} to {rules.max_players} players",
            "INVALID_PLAYER_COUNT",
        )
    if not 0 <= host_index < len(player_names):
        raise InvalidStateError(f"No player at seat {host_index}", "INVALID_HOST")

    players = [
        PlayerState(player_id=str(uuid.uuid4()), name=name)
        for name in player_names
    ]
    return GameState(
        game_id=game_id or str(uuid.uuid4()),
        players=players,
        host_id=players[host_index].player_id,
        rules=rules,
    )


def initialize_game(game: GameState, rng: random.Random | None = None) -> GameState:
    """
    Build and shuffle the deck, deal the first hands and start the game.

    The game is mutated in place and returned for chaining.
    """
    rules = game.rules
    if game.lifecycle is not LifecycleState.LOBBY:
        raise InvalidStateError("The game is not in lobby state", "GAME_ALREADY_STARTED")
    if not rules.min_players <= game.num_players <= rules.max_players:
        raise InvalidStateError(
            f"The game requires {rules.min_players} to {rules.max_players} players",
            "INVALID_PLAYER_COUNT",
        )

    generator = DeckGenerator(rng=rng, rules=rules)
    game.deck = Zone(name="deck", cards=generator.generate_deck())
    game.current_round = 1
    game.lifecycle = LifecycleState.IN_PROGRESS
    start_new_round(game)
    return game


def cards_to_deal(player: PlayerState, hand_size: int) -> int:
    """Hand size plus one card per extra-draw card in the empire."""
    return hand_size + player.empire_count(SpecialAbility.EXTRA_CARD_DRAW)


def deal_cards(game: GameState) -> None:
    """Deal each player their hand from the top of the deck, while cards last."""
    for player in game.players:
        for _ in range(cards_to_deal(player, game.rules.hand_size)):
            card = game.deck.draw()
            if card is None:
                break
            player.hand.add(card)
        player.has_drafted = False


def start_new_round(game: GameState) -> None:
    """Deal fresh hands and reopen the draft."""
    deal_cards(game)
    game.phase = GamePhase.DRAFT
    game.production_step = None
    game.drafted_players.clear()
    game.pass_pending = False
    for player in game.players:
        player.has_drafted = False
        player.is_ready = False

    # An exhausted deck can leave every hand empty
    check_draft_end(game)
