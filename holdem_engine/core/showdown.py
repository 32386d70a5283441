"""
Showdown resolution with side pot support.

1. Evaluate every live (non-folded) player's best hand
2. Build the pots from total contributions
3. For each pot, find the best hand among that pot's eligible players only
4. Split each pot among its winners

Players are only read here; the state machine applies the payouts.
"""

from __future__ import annotations
from typing import Dict, List, Sequence
from dataclasses import dataclass, field
import logging

from holdem_engine.core.card import Card
from holdem_engine.core.hand import HandEvaluation, evaluate_best_hand, determine_winners
from holdem_engine.core.player import Player
from holdem_engine.core.pots import Pot, calculate_side_pots, merge_equal_pots, distribute_pot


logger = logging.getLogger(__name__)


@dataclass
class ShowdownResult:
    """Outcome of a showdown."""
    payouts: Dict[str, int] = field(default_factory=dict)
    winner_ids: List[str] = field(default_factory=list)
    evaluations: Dict[str, HandEvaluation] = field(default_factory=dict)
    pots: List[Pot] = field(default_factory=list)


def resolve_showdown(players: Sequence[Player], community_cards: Sequence[Card]) -> ShowdownResult:
    """
    Work out who wins which pot.

    Args:
        players: Every player at the table, in seat order
        community_cards: The board

    Returns:
        ShowdownResult with payouts per player id and winners in seat order
    """
    live_players = [p for p in players if not p.is_folded]
    evaluations = {
        p.player_id: evaluate_best_hand(list(p.hole_cards) + list(community_cards))
        for p in live_players
    }

    pots = merge_equal_pots(calculate_side_pots(players))
    payouts: Dict[str, int] = {}

    for pot in pots:
        eligible = [p for p in live_players if p.player_id in pot.eligible_player_ids]
        if not eligible:
            continue

        winner_indices = determine_winners([evaluations[p.player_id] for p in eligible])
        pot_winner_ids = [eligible[i].player_id for i in winner_indices]

        for player_id, amount in distribute_pot(pot, pot_winner_ids).items():
            payouts[player_id] = payouts.get(player_id, 0) + amount

        logger.debug(f"Pot of {pot.amount} to {pot_winner_ids}")

    winner_ids = [p.player_id for p in players if p.player_id in payouts]
    return ShowdownResult(payouts=payouts, winner_ids=winner_ids, evaluations=evaluations, pots=pots)
