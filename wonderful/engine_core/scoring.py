"""
Scoring Engine - Final victory points and winner determination.

Score per player:
- Gross: victory points printed on empire cards (plus ability bonuses)
- Combo: each card's combo points times the number of OTHER empire cards
  of its type
- Characters: for Generals and Financiers separately, tokens held plus
  the matching bonus on every empire card

Ties are broken by empire size, then by combined character tokens. A tie
that survives both leaves the game without a winner.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass

from .errors import InvalidStateError
from .state import CharacterType, GameState, LifecycleState, PlayerState


@dataclass(frozen=True)
class ScoreBreakdown:
    player_id: str
    gross: int
    combo: int
    generals: int
    financiers: int

    @property
    def total(self) -> int:
        return self.gross + self.combo + self.generals + self.financiers


def gross_victory_points(player: PlayerState) -> int:
    return sum(card.total_victory_points for card in player.empire)


def combo_victory_points(player: PlayerState) -> int:
    type_counts = Counter(card.card_type for card in player.empire)
    return sum(
        card.combo_victory_points * (type_counts[card.card_type] - 1)
        for card in player.empire
    )


def character_victory_points(player: PlayerState, character: CharacterType) -> int:
    if character is CharacterType.GENERAL:
        bonus = sum(card.general_bonus for card in player.empire)
    else:
        bonus = sum(card.financier_bonus for card in player.empire)
    return player.characters[character] + bonus


def score_breakdown(player: PlayerState) -> ScoreBreakdown:
    return ScoreBreakdown(
        player_id=player.player_id,
        gross=gross_victory_points(player),
        combo=combo_victory_points(player),
        generals=character_victory_points(player, CharacterType.GENERAL),
        financiers=character_victory_points(player, CharacterType.FINANCIER),
    )


def determine_winner(game: GameState, scores: dict[str, int]) -> str | None:
    """
    Pick the winner from final scores.

    Returns None when the tie survives every tiebreaker.
    """
    if not scores:
        return None

    best = max(scores.values())
    contenders = [game.require_player(pid) for pid, score in scores.items() if score == best]

    tiebreakers = (
        lambda p: p.empire.count,
        lambda p: p.character_tokens,
    )
    for key in tiebreakers:
        if len(contenders) == 1:
            break
        top = max(key(p) for p in contenders)
        contenders = [p for p in contenders if key(p) == top]

    if len(contenders) == 1:
        return contenders[0].player_id
    return None


def calculate_final_scores(game: GameState) -> dict[str, int]:
    """
    Score every player and record the winner.

    Scores are computed once; later calls return the recorded result.
    """
    if game.lifecycle is not LifecycleState.FINISHED:
        raise InvalidStateError("The game is not finished yet", "GAME_NOT_FINISHED")

    if game.final_scores is None:
        scores = {p.player_id: score_breakdown(p).total for p in game.players}
        game.winner_id = determine_winner(game, scores)
        game.final_scores = scores

    return dict(game.final_scores)
