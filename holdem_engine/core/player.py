"""
Player record for Texas Hold'em.

Manages per-hand player state including:
- Chip stack
- Hole cards (0 or 2)
- Current round bet and total hand bet
- Folded / all-in / has-acted flags

Only the betting state machine moves chips; it does so through bet().
"""

from __future__ import annotations
from typing import List, Dict, Any
from dataclasses import dataclass, field

from holdem_engine.core.card import Card


@dataclass
class Player:
    """
    A player at the table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name
        chips: Current chip count
        seat: Seat position at the table (0-indexed, contiguous)
        hole_cards: The player's private cards (0 or 2)
        current_bet: Amount bet in the current betting round
        total_bet: Total amount bet in the current hand (for pot calculations)
        is_folded: Has folded (or is sitting this hand out)
        is_all_in: Has committed every chip
        has_acted: Has acted since the last bet increase in this round
        is_user: Seat is controlled by a human
    """
    player_id: str
    chips: int
    name: str = ""
    seat: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    is_folded: bool = False
    is_all_in: bool = False
    has_acted: bool = False
    is_user: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Player {self.player_id}"

    def reset_for_new_hand(self) -> None:
        """Reset player state for a new hand."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet = 0
        self.is_folded = False
        self.is_all_in = False
        self.has_acted = False

    def reset_for_new_round(self) -> None:
        """Reset player state for a new betting round (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted = False

    def bet(self, amount: int) -> int:
        """
        Move chips from the stack into the pot.

        Args:
            amount: Amount to bet

        Returns:
            Actual amount bet (less than asked when the player goes all-in)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.chips)

        self.chips -= actual_amount
        self.current_bet += actual_amount
        self.total_bet += actual_amount

        if self.chips == 0:
            self.is_all_in = True

        return actual_amount

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot (not folded)."""
        return not self.is_folded

    @property
    def can_act(self) -> bool:
        """Check if player can take an action."""
        return not self.is_folded and not self.is_all_in and self.chips > 0

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result: Dict[str, Any] = {
            "id": self.player_id,
            "name": self.name,
            "seat": self.seat,
            "chips": self.chips,
            "current_bet": self.current_bet,
            "total_bet": self.total_bet,
            "is_folded": self.is_folded,
            "is_all_in": self.is_all_in,
            "has_acted": self.has_acted,
            "is_user": self.is_user,
            "has_cards": bool(self.hole_cards),
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.player_id}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.is_folded}, all_in={self.is_all_in})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"
