"""
Side pot calculation and pot distribution.

Pots are built from each player's total contribution for the hand. Every
distinct contribution level opens a pot funded by everyone who reached that
level; only players who did not fold are eligible to win it. Folded players'
chips stay in the pot as dead money.

Example:
    A folded after putting in 10, B all-in for 20, C and D in for 50.
    Main pot: 10*4 + 10*3 = 70 (B, C, D eligible)
    Side pot: 30*2 = 60 (C, D eligible)

Odd chips: when a pot does not split evenly, the whole remainder goes to the
first winner in the order given. The engine always passes winners in seat
order, so the odd chips land on the lowest seat among the winners.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, NamedTuple, Tuple
from dataclasses import dataclass, field
import logging

from holdem_engine.core.errors import NoWinners, WinnerNotFound


logger = logging.getLogger(__name__)


class Contribution(NamedTuple):
    """A player's final stake in the hand."""
    player_id: str
    total_bet: int
    folded: bool


@dataclass(frozen=True)
class Pot:
    """Represents a pot (main pot or side pot)."""
    amount: int = 0
    eligible_player_ids: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {"amount": self.amount, "eligible_player_ids": list(self.eligible_player_ids)}


def _as_contribution(entry) -> Contribution:
    if isinstance(entry, Contribution):
        return entry
    if isinstance(entry, tuple):
        return Contribution(*entry)
    # Player-like object
    return Contribution(entry.player_id, entry.total_bet, entry.is_folded)


def calculate_side_pots(entries: Iterable) -> List[Pot]:
    """
    Partition the money on the table into pots, main pot first.

    Args:
        entries: Contribution records, (id, total_bet, folded) tuples or
            Player objects. Entries with no contribution are ignored.

    Returns:
        Pots ordered from main pot to the last side pot. The amounts always
        sum to the total contributed.
    """
    contributions = [c for c in map(_as_contribution, entries) if c.total_bet > 0]
    if not contributions:
        return []

    levels = sorted({c.total_bet for c in contributions})

    pots: List[Pot] = []
    previous_level = 0
    dead_money = 0

    for level in levels:
        contributors = [c for c in contributions if c.total_bet >= level]
        amount = (level - previous_level) * len(contributors) + dead_money
        eligible = tuple(c.player_id for c in contributors if not c.folded)
        previous_level = level

        if not eligible:
            # Nobody can win this level; roll it into the next pot
            dead_money = amount
            continue

        dead_money = 0
        pots.append(Pot(amount=amount, eligible_player_ids=eligible))

    if dead_money:
        if pots:
            last = pots[-1]
            pots[-1] = Pot(last.amount + dead_money, last.eligible_player_ids)
        else:
            logger.warning(f"All {dead_money} chips contributed by folded players")
            pots.append(Pot(amount=dead_money, eligible_player_ids=()))

    return pots


def merge_equal_pots(pots: List[Pot]) -> List[Pot]:
    """Join adjacent pots that have the same eligible players."""
    merged: List[Pot] = []
    for pot in pots:
        if merged and set(merged[-1].eligible_player_ids) == set(pot.eligible_player_ids):
            previous = merged.pop()
            pot = Pot(previous.amount + pot.amount, previous.eligible_player_ids)
        merged.append(pot)
    return merged


def distribute_pot(pot: Pot, winner_ids: List[str]) -> Dict[str, int]:
    """
    Split a pot among its winners.

    Each winner gets ``amount // len(winners)``; the remainder goes entirely
    to the first winner in ``winner_ids``.

    Args:
        pot: The pot to distribute
        winner_ids: IDs of the winners, in payout priority order

    Returns:
        Mapping of player id to chips won

    Raises:
        NoWinners: If winner_ids is empty
        WinnerNotFound: If a winner is not eligible for this pot
    """
    if not winner_ids:
        raise NoWinners("Cannot distribute pot with no winners")

    for winner_id in winner_ids:
        if winner_id not in pot.eligible_player_ids:
            raise WinnerNotFound(f"Winner not found among eligible players: {winner_id}")

    share, remainder = divmod(pot.amount, len(winner_ids))
    payouts: Dict[str, int] = {}
    for index, winner_id in enumerate(winner_ids):
        payouts[winner_id] = payouts.get(winner_id, 0) + share + (remainder if index == 0 else 0)

    return payouts
