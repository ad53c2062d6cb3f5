"""
Game Store - Where games live between actions.

The engine never owns storage. A store only needs two capabilities,
`get` and `put`; the in-memory store is enough for a single process and
for tests.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from copy import deepcopy

from ..engine_core.state import GameState


class GameStore(ABC):
    """Storage capability injected into the GameManager."""

    @abstractmethod
    def get(self, game_id: str) -> GameState | None:
        """Load a game, or None if unknown."""
        pass

    @abstractmethod
    def put(self, game: GameState) -> None:
        """Save a game under its game_id."""
        pass

    def delete(self, game_id: str) -> bool:
        """Forget a game. Returns whether it existed; optional for stores."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support deletion")

    def list_ids(self) -> list[str]:
        """IDs of every stored game; optional for stores."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support listing")


class InMemoryGameStore(GameStore):
    """
    Process-local store.

    Copies on the way in and out, so callers never share a live aggregate
    with the store.
    """

    def __init__(self):
        self._games: dict[str, GameState] = {}

    def get(self, game_id: str) -> GameState | None:
        game = self._games.get(game_id)
        return deepcopy(game) if game is not None else None

    def put(self, game: GameState) -> None:
        self._games[game.game_id] = deepcopy(game)

    def delete(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None

    def list_ids(self) -> list[str]:
        return list(self._games)
