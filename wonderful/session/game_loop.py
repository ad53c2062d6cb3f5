"""
Game Loop - Drives a game with bots until it ends.

The loop sweeps the seats in order; every player with a legal action
takes one per sweep. Since all phases wait on every player, this is
enough to move the game forward. Used by the simulate command and the
end-to-end tests.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameState, LifecycleState

if TYPE_CHECKING:
    from ..bots import BotPolicy

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    STALLED = "stalled"  # Nobody has a legal action
    GAME_OVER = "game_over"


@dataclass
class LoopResult:
    """Final state of a loop run, with its log."""
    state: GameState
    loop_state: LoopState
    actions_applied: int = 0
    log: list[str] = field(default_factory=list)


class GameLoop:
    """
    Usage:
        loop = GameLoop(game, {pid: RandomPolicy(seed=1) for pid in game.player_ids})
        result = loop.run()
    """

    def __init__(
        self,
        state: GameState,
        policies: dict[str, BotPolicy],
        max_actions: int = 20000,
    ):
        self.state = state
        self.policies = policies
        self.max_actions = max_actions
        self._reducer = Reducer()

    def sweep(self) -> list[str]:
        """
        Let every seat act once, if it can.

        Returns the changes applied; empty when nobody could act.
        """
        changes: list[str] = []
        for player_id in self.state.player_ids:
            if self.state.lifecycle is not LifecycleState.IN_PROGRESS:
                break
            actions = legal_actions(self.state, player_id)
            if not actions:
                continue

            policy = self.policies[player_id]
            decision = policy.select_action(self.state, player_id, actions)
            logger.debug(
                "%s (%s) chose %s: %s",
                player_id, policy.get_name(), decision.action.action_type.value, decision.explanation,
            )
            result = self._reducer.apply(self.state, decision.action)
            if not result.success:
                raise RuntimeError(
                    f"Bot chose an illegal action for {player_id}: {result.error}"
                )
            self.state = result.new_state
            changes.extend(result.state_changes)
        return changes

    def run(self) -> LoopResult:
        """Play until the game ends, stalls, or the action budget is spent."""
        log: list[str] = []
        applied = 0

        while self.state.lifecycle is LifecycleState.IN_PROGRESS:
            if applied >= self.max_actions:
                return LoopResult(self.state, LoopState.RUNNING, applied, log)

            history_before = len(self.state.action_history)
            log.extend(self.sweep())
            step = len(self.state.action_history) - history_before
            if step == 0:
                return LoopResult(self.state, LoopState.STALLED, applied, log)
            applied += step

        return LoopResult(self.state, LoopState.GAME_OVER, applied, log)
