"""
Rules Errors - Typed failures raised by the engines.

Three kinds reach the caller:
- NotFoundError: the player or card is not where the action expects it
- InvalidStateError: the entities exist but the game is not in a state
  that allows the action (wrong phase, already acted, no resources, ...)
- UnsupportedError: the injected store lacks an optional capability

All are raised before any mutation, so a failed action leaves the
game exactly as it was.
"""

from __future__ import annotations


class RulesError(Exception):
    """Base class for every precondition violation reported by the engines."""

    error_code = "RULES_ERROR"
    kind = "rules_error"

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        if error_code:
            self.error_code = error_code

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(RulesError):
    """A player or card is absent from the collection the action targets."""

    error_code = "NOT_FOUND"
    kind = "not_found"


class InvalidStateError(RulesError):
    """The right entities, but the game does not allow the action now."""

    error_code = "INVALID_STATE"
    kind = "invalid_state"


class UnsupportedError(RulesError):
    """The injected store lacks an optional capability (listing, deletion)."""

    error_code = "STORE_UNSUPPORTED"
    kind = "unsupported"
