"""
Texas Hold'em Rules, Constants and Table Configuration.

Rules implemented by the engine:

1. Heads-up (2 players): Dealer posts small blind, non-dealer posts big blind.
   Preflop: Dealer acts first. Postflop: Non-dealer acts first.

2. Minimum raise: a raise must reach at least current bet + big blind.
   A smaller raise is only legal when it puts the raiser all-in.

3. Any increase of the bet sends the action back to every other player who
   is still able to act.

4. Side pots: When players are all-in for different amounts, separate pots
   are created for each contribution level.
"""

from enum import Enum
from dataclasses import dataclass
from typing import List, Optional, Tuple


class GamePhase(Enum):
    """Phases of a Texas Hold'em hand."""
    WAITING = "waiting"       # No hand dealt yet
    PREFLOP = "pre-flop"      # After hole cards dealt, before flop
    FLOP = "flop"             # After 3 community cards
    TURN = "turn"             # After 4th community card
    RIVER = "river"           # After 5th community card
    SHOWDOWN = "showdown"     # Betting is over


BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)

NEXT_PHASE = {
    GamePhase.PREFLOP: GamePhase.FLOP,
    GamePhase.FLOP: GamePhase.TURN,
    GamePhase.TURN: GamePhase.RIVER,
    GamePhase.RIVER: GamePhase.SHOWDOWN,
}


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"


# Default game settings
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_STARTING_CHIPS = 100
DEFAULT_NUM_PLAYERS = 4
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

CARDS_FOR_PHASE = {
    GamePhase.FLOP: FLOP_CARDS,
    GamePhase.TURN: TURN_CARDS,
    GamePhase.RIVER: RIVER_CARDS,
}


@dataclass
class TableConfig:
    """
    Table setup.

    Attributes:
        num_players: Seats to create when player_ids is not given
        small_blind: Small blind amount
        big_blind: Big blind amount
        starting_chips: Starting stack for each player
        player_ids: Optional explicit player ids, in seat order
        player_names: Optional display names, parallel to player_ids
        user_seat: Seat controlled by a human, if any
    """
    num_players: int = DEFAULT_NUM_PLAYERS
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND
    starting_chips: int = DEFAULT_STARTING_CHIPS
    player_ids: Optional[List[str]] = None
    player_names: Optional[List[str]] = None
    user_seat: Optional[int] = None

    def __post_init__(self) -> None:
        if self.player_ids is not None:
            self.num_players = len(self.player_ids)
        if not MIN_PLAYERS <= self.num_players <= MAX_PLAYERS:
            raise ValueError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.starting_chips <= 0:
            raise ValueError("Starting chips must be positive")
        if self.player_ids is not None and len(set(self.player_ids)) != len(self.player_ids):
            raise ValueError("Player ids must be unique")
        if self.player_names is not None and len(self.player_names) != self.num_players:
            raise ValueError("player_names must match the number of players")

    def resolved_player_ids(self) -> List[str]:
        if self.player_ids is not None:
            return list(self.player_ids)
        return [str(i) for i in range(self.num_players)]


def get_blind_positions(num_players: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    In heads-up play, the dealer posts the small blind.

    Args:
        num_players: Number of players dealt in
        dealer_position: Position of the dealer among them (0-indexed)

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_players < MIN_PLAYERS:
        raise ValueError("Need at least 2 players")

    if num_players == 2:
        sb_pos = dealer_position
        bb_pos = (dealer_position + 1) % num_players
    else:
        sb_pos = (dealer_position + 1) % num_players
        bb_pos = (dealer_position + 2) % num_players

    return sb_pos, bb_pos


def calculate_min_raise(current_bet: int, big_blind: int) -> int:
    """Smallest legal total a full raise must reach."""
    return current_bet + big_blind
