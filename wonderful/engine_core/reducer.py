"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation for player actions.

Design principles:
- (state, action) -> ActionResult; the input state is never modified
- Engines validate before they mutate; the reducer works on a clone so
  a rejected action leaves no trace either way
- Returns ActionResult with success/failure, changes and phase outcome
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action, ActionResult, ActionType, OutcomeKind
from .construction import add_resource_to_card, discard_card, move_to_construction
from .draft import draft_card
from .errors import RulesError
from .readiness import set_player_ready
from .state import GamePhase, GameState


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code="NO_HANDLER",
            )

        new_state = state.clone()
        try:
            result = handler(new_state, action)
        except RulesError as e:
            return ActionResult.failure(e.message, error_code=e.error_code, error_kind=e.kind)

        # Log action to history if successful
        if result.success:
            new_state.action_history.append(action)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.DRAFT: self._handle_draft,
            ActionType.MOVE_TO_CONSTRUCTION: self._handle_move_to_construction,
            ActionType.DISCARD: self._handle_discard,
            ActionType.ADD_RESOURCE: self._handle_add_resource,
            ActionType.SET_READY: self._handle_set_ready,
        }
        return handlers.get(action_type)

    def _player_name(self, state: GameState, player_id: str) -> str:
        player = state.get_player(player_id)
        return player.name if player else player_id

    def _handle_draft(self, state: GameState, action: Action) -> ActionResult:
        """Handle draft action."""
        payload = action.payload
        round_number = state.current_round
        card = draft_card(state, payload.player_id, payload.card_id)

        changes = [f"{self._player_name(state, payload.player_id)} drafted {card.name}"]
        if state.phase is GamePhase.PLANNING:
            changes.append(f"Draft of round {round_number} complete, planning begins")
        return ActionResult.success_with_state(state, changes=changes)

    def _handle_move_to_construction(self, state: GameState, action: Action) -> ActionResult:
        """Handle move of a drafted card into the construction area."""
        payload = action.payload
        card = move_to_construction(state, payload.player_id, payload.card_id)
        name = self._player_name(state, payload.player_id)
        return ActionResult.success_with_state(
            state,
            changes=[f"{name} started building {card.name}"],
        )

    def _handle_discard(self, state: GameState, action: Action) -> ActionResult:
        """Handle recycling of a drafted card."""
        payload = action.payload
        bonus = discard_card(state, payload.player_id, payload.card_id)
        name = self._player_name(state, payload.player_id)
        gained = ", ".join(f"{amount} {resource.value}" for resource, amount in bonus.items())
        return ActionResult.success_with_state(
            state,
            changes=[f"{name} recycled a card for {gained}"],
            granted_bonus=bonus,
        )

    def _handle_add_resource(self, state: GameState, action: Action) -> ActionResult:
        """Handle investment of one resource unit."""
        payload = action.payload
        if payload.resource is None:
            return ActionResult.failure("No resource given", error_code="VALIDATION_ERROR")

        completed = add_resource_to_card(
            state, payload.player_id, payload.card_id, payload.resource
        )
        name = self._player_name(state, payload.player_id)
        changes = [f"{name} invested 1 {payload.resource.value}"]
        if completed:
            player = state.require_player(payload.player_id)
            card = player.empire.find(payload.card_id)
            changes.append(f"{name} completed {card.name}")
        return ActionResult.success_with_state(state, changes=changes)

    def _handle_set_ready(self, state: GameState, action: Action) -> ActionResult:
        """Handle a readiness signal."""
        payload = action.payload
        phase_before = state.phase
        step_before = state.production_step
        outcome = set_player_ready(state, payload.player_id)

        changes = [f"{self._player_name(state, payload.player_id)} is ready"]
        if phase_before is GamePhase.PLANNING and state.phase is GamePhase.PRODUCTION:
            changes.append(f"Planning complete, producing {state.production_step.value}")
        elif state.phase is GamePhase.PRODUCTION and state.production_step is not step_before:
            changes.append(f"Producing {state.production_step.value}")
        if outcome.kind is OutcomeKind.ROUND_STARTED:
            changes.append(f"Round {outcome.round_number} started")
        elif outcome.kind is OutcomeKind.GAME_OVER:
            changes.append("Game over")

        return ActionResult.success_with_state(state, changes=changes, outcome=outcome)


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
