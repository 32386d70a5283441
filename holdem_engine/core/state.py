"""
GameState: the single mutable root for one table.

Holds players, chips in the pot, board, phase, positions and betting
figures, plus the results of the last showdown. Read-only queries live here;
every state change goes through ``holdem_engine.core.game.apply_action``.
"""

from __future__ import annotations
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field
import random

from holdem_engine.core.card import Card
from holdem_engine.core.hand import HandEvaluation
from holdem_engine.core.player import Player
from holdem_engine.core.pots import Pot
from holdem_engine.core.rules import (
    GamePhase, ActionType, BETTING_PHASES,
    DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND,
)
from holdem_engine.core.errors import PlayerNotFound


@dataclass(frozen=True)
class ActionRecord:
    """One entry of the current hand's action history."""
    player_id: str
    player_name: str
    action: ActionType
    amount: int
    phase: GamePhase
    pot_after: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "action": self.action.value,
            "amount": self.amount,
            "phase": self.phase.value,
            "pot_after": self.pot_after,
        }


@dataclass
class GameState:
    """
    Complete state of one table.

    Attributes:
        players: Players in seat order
        pot: Chips committed this hand and not yet paid out
        community_cards: The board (0, 3, 4 or 5 cards)
        phase: Current phase
        dealer_position: Seat index of the button
        current_player_index: Seat index of the player to act
        current_bet: Bet every live player must match this round
        min_raise: Smallest legal total for a full raise
        small_blind, big_blind: Blind amounts
        deck: Undealt cards, top first
        is_hand_complete: Winner(s) have been paid
        winners: Ids of the players who won chips, seat order
        winning_hands: Evaluations of the winners (empty when uncontested)
        payouts: Chips won per player id in the last resolved hand
        pots: Pots the last showdown was paid from
        action_history: Actions taken in the current hand
        rng: Random source for shuffling
    """
    players: List[Player] = field(default_factory=list)
    pot: int = 0
    community_cards: List[Card] = field(default_factory=list)
    phase: GamePhase = GamePhase.WAITING
    dealer_position: int = 0
    current_player_index: int = 0
    current_bet: int = 0
    min_raise: int = DEFAULT_BIG_BLIND
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    deck: List[Card] = field(default_factory=list)
    is_hand_complete: bool = False
    winners: List[str] = field(default_factory=list)
    winning_hands: List[HandEvaluation] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    pots: List[Pot] = field(default_factory=list)
    hand_number: int = 0
    small_blind_position: int = 0
    big_blind_position: int = 0
    action_history: List[ActionRecord] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def num_players(self) -> int:
        """Number of players at the table."""
        return len(self.players)

    @property
    def is_hand_running(self) -> bool:
        """A hand has been dealt and not yet paid out."""
        return self.phase != GamePhase.WAITING and not self.is_hand_complete

    @property
    def is_betting_phase(self) -> bool:
        return self.is_hand_running and self.phase in BETTING_PHASES

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_betting_phase or not self.players:
            return None
        return self.players[self.current_player_index]

    @property
    def total_chips(self) -> int:
        """Chips on the table: every stack plus the pot."""
        return sum(p.chips for p in self.players) + self.pot

    def get_player(self, player_id: str) -> Player:
        """
        Get player by ID.

        Raises:
            PlayerNotFound: If no such player sits at the table
        """
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise PlayerNotFound(f"Player not found: {player_id}")

    def index_of(self, player_id: str) -> int:
        for i, player in enumerate(self.players):
            if player.player_id == player_id:
                return i
        raise PlayerNotFound(f"Player not found: {player_id}")

    def live_players(self) -> List[Player]:
        """Players that have not folded."""
        return [p for p in self.players if not p.is_folded]

    def next_actor_index(self, after: int) -> Optional[int]:
        """
        First seat after ``after`` (wrapping) whose player can still act.

        Returns:
            Seat index, or None when nobody can act
        """
        n = self.num_players
        for step in range(1, n + 1):
            index = (after + step) % n
            if self.players[index].can_act:
                return index
        return None

    def amount_to_call(self, player_id: str) -> int:
        """Chips the player needs to add to match the current bet."""
        player = self.get_player(player_id)
        return max(0, self.current_bet - player.current_bet)

    def is_betting_complete(self) -> bool:
        """
        Check if the current betting round is complete.

        Folded and all-in players are ignored. The round is complete when
        nobody else can act, when a single player can act and owes nothing,
        or when every player who can act has acted and matched the bet.
        There is no betting at showdown.
        """
        if self.phase == GamePhase.SHOWDOWN:
            return True

        actors = [p for p in self.players if not p.is_folded and not p.is_all_in]

        if not actors:
            return True

        if len(actors) == 1:
            return actors[0].current_bet >= self.current_bet

        return all(p.has_acted and p.current_bet == self.current_bet for p in actors)

    def to_dict(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Snapshot for rendering.

        Hole cards are shown for ``for_player_id`` only, except after the hand
        completes, when every live player's cards are revealed.
        """
        reveal_all = self.is_hand_complete and len(self.live_players()) > 1
        players = []
        for p in self.players:
            show = (reveal_all and not p.is_folded) or p.player_id == for_player_id
            players.append(p.to_dict(hide_cards=not show))

        current = self.current_player
        return {
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "community_cards": [c.to_dict() for c in self.community_cards],
            "dealer_position": self.dealer_position,
            "small_blind_position": self.small_blind_position,
            "big_blind_position": self.big_blind_position,
            "current_player_index": self.current_player_index,
            "current_player": current.player_id if current else None,
            "current_bet": self.current_bet,
            "min_raise": self.min_raise,
            "small_blind": self.small_blind,
            "big_blind": self.big_blind,
            "cards_remaining": len(self.deck),
            "is_hand_complete": self.is_hand_complete,
            "is_betting_complete": self.is_betting_complete() if self.is_betting_phase else True,
            "players": players,
            "winners": list(self.winners),
            "winning_hands": [h.to_dict() for h in self.winning_hands],
            "payouts": dict(self.payouts),
            "pots": [pot.to_dict() for pot in self.pots],
            "action_history": [a.to_dict() for a in self.action_history],
        }
