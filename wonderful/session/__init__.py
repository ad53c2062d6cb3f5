"""
Session Module - Holds games between actions and drives them.

- GameStore: injected storage (get/put); InMemoryGameStore for one process
- GameManager: creates games and applies actions one at a time per game
- GameLoop: plays a game with bots (simulation, tests)
"""

from .store import GameStore, InMemoryGameStore
from .manager import GameManager, GameSummary
from .game_loop import GameLoop, LoopState, LoopResult

__all__ = [
    "GameStore",
    "InMemoryGameStore",
    "GameManager",
    "GameSummary",
    "GameLoop",
    "LoopState",
    "LoopResult",
]
