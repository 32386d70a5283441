"""
Hold'em Engine - Texas Hold'em rules engine for 2-4 player tables

A standalone Texas Hold'em simulator core with:
- Pure Python betting state machine, hand evaluator and side pot calculator
- FastAPI server layer exposing the action API to a local UI
- Agent interface for AI opponents that play through the public API

Usage:
    from holdem_engine.core import TexasHoldemGame, evaluate_best_hand
    from holdem_engine.agents import BaseAgent, RandomAgent
"""

__version__ = "0.1.0"

from holdem_engine.core.card import Card, Deck
from holdem_engine.core.player import Player
from holdem_engine.core.game import TexasHoldemGame, apply_action
from holdem_engine.core.hand import HandRank, evaluate_best_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "TexasHoldemGame",
    "apply_action",
    "HandRank",
    "evaluate_best_hand",
    "__version__",
]
