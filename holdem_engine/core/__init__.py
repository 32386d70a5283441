"""
Hold'em Engine Core - Pure Python Texas Hold'em Rules Engine

This module contains all game logic without any network dependencies.
"""

from holdem_engine.core.card import Card, Deck, Rank, Suit, new_deck, shuffle_deck, deal_cards
from holdem_engine.core.player import Player
from holdem_engine.core.hand import (
    HandRank, HandEvaluation, evaluate_hand, evaluate_best_of_six,
    evaluate_best_of_seven, evaluate_best_hand, compare_hands, determine_winners,
)
from holdem_engine.core.pots import Pot, Contribution, calculate_side_pots, distribute_pot
from holdem_engine.core.rules import GamePhase, ActionType, TableConfig
from holdem_engine.core.state import GameState
from holdem_engine.core.actions import (
    StartHand, PlayerAction, AdvancePhase, DetermineWinner, ResetForNextHand, EliminatePlayer,
)
from holdem_engine.core.game import TexasHoldemGame, apply_action, create_initial_state

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "new_deck",
    "shuffle_deck",
    "deal_cards",
    "Player",
    "HandRank",
    "HandEvaluation",
    "evaluate_hand",
    "evaluate_best_of_six",
    "evaluate_best_of_seven",
    "evaluate_best_hand",
    "compare_hands",
    "determine_winners",
    "Pot",
    "Contribution",
    "calculate_side_pots",
    "distribute_pot",
    "GamePhase",
    "ActionType",
    "TableConfig",
    "GameState",
    "StartHand",
    "PlayerAction",
    "AdvancePhase",
    "DetermineWinner",
    "ResetForNextHand",
    "EliminatePlayer",
    "TexasHoldemGame",
    "apply_action",
    "create_initial_state",
]
