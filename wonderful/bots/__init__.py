"""
Bots module - Automated players.

Bots fill empty seats and drive the simulate command:
- BotPolicy: interface every bot implements
- RandomPolicy: uniform choice among legal actions
- FirstLegalPolicy: deterministic baseline
- BuilderPolicy: point-seeking heuristic
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, BuilderPolicy

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "BuilderPolicy",
]
