"""
Drive a table with agents.

The runner plays the role of the UI: it asks the acting seat's agent for a
decision, submits it through the public action API, and advances phases or
resolves the hand when betting closes.
"""

from typing import Dict
import logging

from holdem_engine.agents.base import BaseAgent
from holdem_engine.core.game import TexasHoldemGame
from holdem_engine.core.rules import GamePhase
from holdem_engine.core.state import GameState


logger = logging.getLogger(__name__)

MAX_STEPS_PER_HAND = 1000


def play_hand(game: TexasHoldemGame, agents: Dict[str, BaseAgent]) -> GameState:
    """
    Play one full hand, from dealing to payout.

    Args:
        game: The table
        agents: Agent per player id for every seat dealt in

    Returns:
        The completed state
    """
    game.start_hand()

    for _ in range(MAX_STEPS_PER_HAND):
        state = game.state
        if state.is_hand_complete:
            return state

        if state.phase == GamePhase.SHOWDOWN or len(state.live_players()) == 1:
            game.determine_winner()
        elif game.is_betting_complete():
            game.advance_phase()
        else:
            player = game.get_current_player()
            decision = agents[player.player_id].get_action_for_game(game.get_state(player.player_id))
            game.player_action(player.player_id, decision["action"], decision.get("amount"))

    raise RuntimeError(f"Hand #{game.state.hand_number} did not finish in {MAX_STEPS_PER_HAND} steps")


def play_session(game: TexasHoldemGame, agents: Dict[str, BaseAgent], max_hands: int = 100) -> int:
    """
    Play hands until one player holds every chip or ``max_hands`` is reached.

    Returns:
        Number of hands played
    """
    hands = 0
    while hands < max_hands and not game.is_game_over():
        play_hand(game, agents)
        game.reset_for_next_hand()
        hands += 1

    logger.info(f"Session over after {hands} hands")
    return hands
