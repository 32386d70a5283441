"""
Tagged actions consumed by the betting state machine.

Each class is one kind of event the table can receive. They carry only the
data the transition needs; ``apply_action`` dispatches on the class.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from holdem_engine.core.rules import ActionType


@dataclass(frozen=True)
class StartHand:
    """Shuffle, post blinds and deal hole cards."""


@dataclass(frozen=True)
class PlayerAction:
    """
    A betting decision by the acting player.

    ``new_round_total`` is only used for raises and is the player's new total
    bet for this round, not the number of chips added.
    """
    player_id: str
    action: ActionType
    new_round_total: Optional[int] = None

    @classmethod
    def fold(cls, player_id: str) -> PlayerAction:
        return cls(player_id, ActionType.FOLD)

    @classmethod
    def check(cls, player_id: str) -> PlayerAction:
        return cls(player_id, ActionType.CHECK)

    @classmethod
    def call(cls, player_id: str) -> PlayerAction:
        return cls(player_id, ActionType.CALL)

    @classmethod
    def raise_to(cls, player_id: str, new_round_total: int) -> PlayerAction:
        return cls(player_id, ActionType.RAISE, new_round_total)


@dataclass(frozen=True)
class AdvancePhase:
    """Close the betting round and deal the next street."""


@dataclass(frozen=True)
class DetermineWinner:
    """Award the pot(s) and complete the hand."""


@dataclass(frozen=True)
class ResetForNextHand:
    """Drop busted players and move the button."""


@dataclass(frozen=True)
class EliminatePlayer:
    """Remove a player from the table between hands."""
    player_id: str


Action = Union[StartHand, PlayerAction, AdvancePhase, DetermineWinner, ResetForNextHand, EliminatePlayer]
