"""
Draft Engine - One pick per player, then hands rotate.

Flow of a draft turn:
1. Each player drafts one card from their hand into their drafting area
2. Once everyone has drafted, every remaining hand moves one seat along
   the current draft direction
3. When all hands are empty, the game moves to planning

Players whose hand has run dry (possible when extra-draw abilities make
hands uneven) count as having drafted, so the others are never blocked.
"""

from __future__ import annotations

from .errors import InvalidStateError, NotFoundError
from .state import Card, GamePhase, GameState


def draft_card(game: GameState, player_id: str, card_id: str) -> Card:
    """
    Move a card from a player's hand to their drafting area.

    Triggers the hand pass and the phase-end check, in that order.
    Returns the drafted card.
    """
    game.require_phase(GamePhase.DRAFT)
    player = game.require_player(player_id)

    if player.has_drafted:
        raise InvalidStateError(
            f"{player.name} has already drafted this turn", "ALREADY_DRAFTED"
        )

    card = player.hand.find(card_id)
    if card is None:
        raise NotFoundError(f"Card {card_id} not in {player.name}'s hand", "CARD_NOT_FOUND")

    player.hand.remove(card)
    player.drafting_area.add(card)
    player.has_drafted = True
    game.drafted_players.add(player_id)

    _skip_empty_hands(game)
    if game.drafted_players >= set(game.player_ids):
        game.pass_pending = True

    pass_hands_if_needed(game)
    check_draft_end(game)
    return card


def _skip_empty_hands(game: GameState) -> None:
    for player in game.players:
        if player.hand.is_empty and player.player_id not in game.drafted_players:
            player.has_drafted = True
            game.drafted_players.add(player.player_id)


def pass_hands_if_needed(game: GameState) -> bool:
    """Pass hands if a pass is pending. Returns whether hands moved."""
    if not game.pass_pending:
        return False
    pass_hands(game)
    game.drafted_players.clear()
    game.pass_pending = False
    return True


def pass_hands(game: GameState) -> None:
    """Give each hand to the next seat along the draft direction."""
    hands = [player.hand for player in game.players]
    count = game.num_players
    step = game.draft_direction.step

    for i, hand in enumerate(hands):
        receiver = game.players[(i + step) % count]
        receiver.hand = hand

    for player in game.players:
        player.has_drafted = False


def check_draft_end(game: GameState) -> bool:
    """Move to planning once every hand is empty."""
    if all(player.hand.is_empty for player in game.players):
        game.phase = GamePhase.PLANNING
        return True
    return False
