"""
Game Manager - Creates games and serializes the actions applied to them.

CONCURRENCY:
- Several invariants (drafted set, ready count) are read-then-write, so
  at most one action may be in flight per game. The manager holds one
  lock per game id and applies each action under it.
- Different games share nothing and proceed in parallel.

PERSISTENCE:
- The manager owns no storage; games are loaded from and saved to the
  injected GameStore around every action.
- A rejected action is never saved, so the stored game is always the
  result of the last applied action.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import random
import threading

from ..engine_core.action import Action, ActionResult, OutcomeKind
from ..engine_core.errors import NotFoundError, UnsupportedError
from ..engine_core.reducer import Reducer
from ..engine_core.rules import RulesConfig
from ..engine_core.scoring import calculate_final_scores
from ..engine_core.setup import create_game, initialize_game
from ..engine_core.state import GamePhase, GameState, LifecycleState, ResourceType
from .store import GameStore, InMemoryGameStore

logger = logging.getLogger(__name__)


@dataclass
class GameSummary:
    """One line of the game list."""
    game_id: str
    player_count: int
    current_round: int
    phase: GamePhase
    lifecycle: LifecycleState


class GameManager:
    """
    Manages running games.

    Responsibilities:
    - Create and start games
    - Apply player actions one at a time per game
    - Compute final scores once a game is finished
    """

    def __init__(self, store: GameStore | None = None, rules: RulesConfig | None = None):
        self.store = store or InMemoryGameStore()
        self.rules = rules or RulesConfig()
        self._reducer = Reducer()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = self._locks[game_id] = threading.Lock()
            return lock

    def create_game(
        self,
        player_names: list[str],
        seed: int | None = None,
        host_index: int = 0,
        rules: RulesConfig | None = None,
    ) -> GameState:
        """
        Create a game, build its deck, deal the first hands and save it.

        Args:
            player_names: Display names in seating order (2-5)
            seed: Optional seed for a reproducible deck
            host_index: Seat of the host
            rules: Ruleset override for this game

        Returns:
            The started game
        """
        game = create_game(player_names, host_index=host_index, rules=rules or self.rules)
        initialize_game(game, rng=random.Random(seed))
        self.store.put(game)

        logger.info(
            "Game %s created with %d players (deck: %d cards)",
            game.game_id, game.num_players, game.deck.count,
        )
        return game

    def get_game(self, game_id: str) -> GameState | None:
        """Get a game by ID."""
        return self.store.get(game_id)

    def require_game(self, game_id: str) -> GameState:
        game = self.store.get(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found", "GAME_NOT_FOUND")
        return game

    def apply(self, game_id: str, action: Action) -> ActionResult:
        """
        Apply one action to a stored game.

        The game is saved only if the action succeeded.
        """
        with self._lock_for(game_id):
            game = self.store.get(game_id)
            if game is None:
                return ActionResult.failure(
                    f"Game {game_id} not found",
                    error_code="GAME_NOT_FOUND",
                    error_kind=NotFoundError.kind,
                )

            result = self._reducer.apply(game, action)
            if not result.success:
                logger.info(
                    "Game %s rejected %s from %s: %s",
                    game_id, action.action_type.value, action.payload.player_id, result.error,
                )
                return result

            self.store.put(result.new_state)

        for change in result.state_changes:
            logger.info("Game %s: %s", game_id, change)
        if result.outcome and result.outcome.kind is OutcomeKind.GAME_OVER:
            logger.info("Game %s is over after %d rounds", game_id, game.rules.rounds)
        return result

    def draft_card(self, game_id: str, player_id: str, card_id: str) -> ActionResult:
        return self.apply(game_id, Action.draft(player_id, card_id))

    def move_to_construction(self, game_id: str, player_id: str, card_id: str) -> ActionResult:
        return self.apply(game_id, Action.move_to_construction(player_id, card_id))

    def discard_card(self, game_id: str, player_id: str, card_id: str) -> ActionResult:
        return self.apply(game_id, Action.discard(player_id, card_id))

    def add_resource_to_card(
        self,
        game_id: str,
        player_id: str,
        card_id: str,
        resource: ResourceType,
    ) -> ActionResult:
        return self.apply(game_id, Action.add_resource(player_id, card_id, resource))

    def set_player_ready(self, game_id: str, player_id: str) -> ActionResult:
        return self.apply(game_id, Action.set_ready(player_id))

    def final_scores(self, game_id: str) -> tuple[dict[str, int], str | None]:
        """
        Final scores and winner of a finished game.

        Raises NotFoundError for unknown games and InvalidStateError while
        the game is still running.
        """
        with self._lock_for(game_id):
            game = self.require_game(game_id)
            first_time = game.final_scores is None
            scores = calculate_final_scores(game)
            if first_time:
                self.store.put(game)
                if game.winner_id:
                    logger.info("Game %s won by %s", game_id, game.winner_id)
                else:
                    logger.info("Game %s ended in an unresolved tie", game_id)
            return scores, game.winner_id

    def end_game(self, game_id: str) -> bool:
        """
        Remove a game from the store.

        Waits for any action in flight on the game, so nothing writes it
        back afterwards. Raises UnsupportedError if the store cannot delete.
        """
        with self._lock_for(game_id):
            try:
                removed = self.store.delete(game_id)
            except NotImplementedError as e:
                raise UnsupportedError(str(e)) from e
            with self._locks_guard:
                self._locks.pop(game_id, None)
        if removed:
            logger.info("Game %s removed", game_id)
        return removed

    def list_games(self) -> list[GameSummary]:
        """Summaries of every stored game."""
        try:
            game_ids = self.store.list_ids()
        except NotImplementedError as e:
            raise UnsupportedError(str(e)) from e

        summaries = []
        for game_id in game_ids:
            game = self.store.get(game_id)
            if game is None:
                continue
            summaries.append(GameSummary(
                game_id=game.game_id,
                player_count=game.num_players,
                current_round=game.current_round,
                phase=game.phase,
                lifecycle=game.lifecycle,
            ))
        return summaries
