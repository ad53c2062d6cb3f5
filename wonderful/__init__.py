"""
Wonderful - Card-Drafting Game Engine

A rules engine for a simultaneous-action, four-round card-drafting game
where players build an empire of cards. The engine provides:
- Deck generation and dealing
- Draft, planning and production phase rules
- Legal action generation and bot policies
- Final scoring with tiebreaks
- A REST API for game clients
"""

__version__ = "0.1.0"
