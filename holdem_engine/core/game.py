"""
Texas Hold'em Game Engine - State Machine Implementation.

This module implements the betting state machine for one table. It handles:
- Blind posting (heads-up aware) and hole card dealing
- Player actions (fold, check, call, raise) with turn and bet validation
- Betting round completion and phase advancement
- Showdown with side pots, and uncontested wins
- Busted player removal and dealer button rotation

Every transition goes through ``apply_action(state, action)``, which works on
a deep copy and returns the new state. An illegal action raises a PokerError
and the state passed in is left untouched. ``TexasHoldemGame`` wraps this
with a method per action for callers that keep a single live table.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Union
import copy
import logging
import random

from holdem_engine.core.actions import (
    Action, StartHand, PlayerAction, AdvancePhase, DetermineWinner,
    ResetForNextHand, EliminatePlayer,
)
from holdem_engine.core.card import new_deck, shuffle_deck, deal_cards
from holdem_engine.core.errors import (
    PokerError, NotPlayersTurn, CannotCheck, NotEnoughPlayers, IncompleteBoard,
    NoWinners, InvalidAction, BettingRoundIncomplete, HandNotInProgress, HandInProgress,
)
from holdem_engine.core.player import Player
from holdem_engine.core.pots import Pot
from holdem_engine.core.rules import (
    GamePhase, ActionType, TableConfig, NEXT_PHASE, CARDS_FOR_PHASE,
    get_blind_positions, calculate_min_raise,
    DEFAULT_NUM_PLAYERS, DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND, DEFAULT_STARTING_CHIPS,
    HOLE_CARDS, TOTAL_COMMUNITY_CARDS,
)
from holdem_engine.core.showdown import resolve_showdown
from holdem_engine.core.state import GameState, ActionRecord


logger = logging.getLogger(__name__)


def create_initial_state(
    config: TableConfig,
    dealer_position: int = 0,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Seat the players described by ``config`` with no hand dealt."""
    player_ids = config.resolved_player_ids()
    names = config.player_names or [""] * len(player_ids)

    players = [
        Player(
            player_id=pid,
            chips=config.starting_chips,
            name=name,
            seat=i,
            is_user=(i == config.user_seat),
        )
        for i, (pid, name) in enumerate(zip(player_ids, names))
    ]

    if not 0 <= dealer_position < len(players):
        raise ValueError(f"Dealer position {dealer_position} is not a seat")

    return GameState(
        players=players,
        dealer_position=dealer_position,
        small_blind=config.small_blind,
        big_blind=config.big_blind,
        min_raise=config.big_blind,
        rng=rng if rng is not None else random.Random(),
    )


def apply_action(state: GameState, action: Action) -> GameState:
    """
    Apply one action and return the resulting state.

    Args:
        state: Current state (not modified)
        action: The action to apply

    Returns:
        A new GameState

    Raises:
        PokerError: If the action is illegal in ``state``
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise InvalidAction(f"Unknown action: {action!r}")

    new_state = copy.deepcopy(state)
    handler(new_state, action)
    return new_state


# ============= Hand start =============

def _start_hand(state: GameState, action: StartHand) -> None:
    if state.is_hand_running:
        raise HandInProgress("Cannot start a hand while one is in progress")

    funded = [i for i, p in enumerate(state.players) if p.chips > 0]
    if len(funded) < 2:
        raise NotEnoughPlayers(f"Not enough players to start a hand: {len(funded)} with chips")

    state.hand_number += 1
    logger.info(f"Starting hand #{state.hand_number}")

    state.deck = shuffle_deck(new_deck(), state.rng)
    state.community_cards = []
    state.pot = 0
    state.current_bet = 0
    state.is_hand_complete = False
    state.winners = []
    state.winning_hands = []
    state.payouts = {}
    state.pots = []
    state.action_history = []
    state.phase = GamePhase.PREFLOP

    for player in state.players:
        player.reset_for_new_hand()
        if player.chips == 0:
            # Busted seats not yet removed sit the hand out
            player.is_folded = True

    if state.dealer_position not in funded:
        state.dealer_position = next(
            (i for i in funded if i > state.dealer_position), funded[0]
        )

    sb_rel, bb_rel = get_blind_positions(len(funded), funded.index(state.dealer_position))
    state.small_blind_position = funded[sb_rel]
    state.big_blind_position = funded[bb_rel]

    _post_blind(state, state.small_blind_position, state.small_blind)
    _post_blind(state, state.big_blind_position, state.big_blind)

    state.current_bet = state.big_blind
    state.min_raise = calculate_min_raise(state.current_bet, state.big_blind)

    for player in state.players:
        if not player.is_folded:
            player.hole_cards = deal_cards(state.deck, HOLE_CARDS)

    first = state.next_actor_index(state.big_blind_position)
    state.current_player_index = first if first is not None else state.big_blind_position

    logger.debug(
        f"Dealer={state.dealer_position} SB={state.small_blind_position} "
        f"BB={state.big_blind_position} first to act={state.current_player_index}"
    )


def _post_blind(state: GameState, seat: int, amount: int) -> None:
    """Post a blind; a short stack posts what it has and is all-in."""
    player = state.players[seat]
    posted = player.bet(amount)
    state.pot += posted
    logger.debug(f"{player.player_id} posts blind {posted}" + (" (all-in)" if player.is_all_in else ""))


# ============= Betting =============

def _player_action(state: GameState, action: PlayerAction) -> None:
    if not state.is_betting_phase:
        raise HandNotInProgress("No betting round in progress")

    player = state.get_player(action.player_id)
    current = state.players[state.current_player_index]
    if current.player_id != player.player_id:
        raise NotPlayersTurn(current.player_id, player.player_id)

    if state.is_betting_complete():
        raise InvalidAction("Betting round is complete, advance the phase")
    if not player.can_act:
        raise InvalidAction(f"Player {player.player_id} cannot act")

    amount_to_call = state.current_bet - player.current_bet
    recorded = 0

    if action.action == ActionType.FOLD:
        player.is_folded = True

    elif action.action == ActionType.CHECK:
        if amount_to_call > 0:
            raise CannotCheck(amount_to_call)

    elif action.action == ActionType.CALL:
        recorded = player.bet(amount_to_call)
        state.pot += recorded

    elif action.action == ActionType.RAISE:
        recorded = _raise(state, player, action.new_round_total)

    else:
        raise InvalidAction(f"Unknown action: {action.action}")

    player.has_acted = True
    state.action_history.append(ActionRecord(
        player_id=player.player_id,
        player_name=player.name,
        action=action.action,
        amount=recorded,
        phase=state.phase,
        pot_after=state.pot,
    ))
    logger.debug(f"{player.player_id} {action.action.value} {recorded}, pot={state.pot}")

    if not state.is_betting_complete():
        nxt = state.next_actor_index(state.current_player_index)
        if nxt is not None:
            state.current_player_index = nxt


def _raise(state: GameState, player: Player, new_round_total: Optional[int]) -> int:
    """
    Raise the player's round bet to ``new_round_total``.

    Returns:
        The player's new round total
    """
    if new_round_total is None:
        raise InvalidAction("Raise requires a new round total")

    max_total = player.current_bet + player.chips
    is_all_in = new_round_total >= max_total

    if is_all_in:
        new_round_total = max_total
    elif new_round_total < state.min_raise:
        raise InvalidAction(
            f"Minimum raise is to ${state.min_raise} (current bet: ${state.current_bet})"
        )

    state.pot += player.bet(new_round_total - player.current_bet)

    if player.current_bet > state.current_bet:
        state.current_bet = player.current_bet
        state.min_raise = calculate_min_raise(state.current_bet, state.big_blind)

        # Everyone still able to act must respond to the new bet
        for other in state.players:
            if other is not player and not other.is_folded and not other.is_all_in:
                other.has_acted = False

    return player.current_bet


# ============= Streets =============

def _advance_phase(state: GameState, action: AdvancePhase) -> None:
    if not state.is_betting_phase:
        raise HandNotInProgress(f"Cannot advance from phase {state.phase.value}")
    if not state.is_betting_complete():
        raise BettingRoundIncomplete("Betting round is not complete")

    state.current_bet = 0
    state.min_raise = calculate_min_raise(0, state.big_blind)
    for player in state.players:
        player.reset_for_new_round()

    next_phase = NEXT_PHASE[state.phase]
    if next_phase == GamePhase.SHOWDOWN:
        state.phase = next_phase
        logger.debug("Betting closed, showdown")
        return

    state.community_cards.extend(deal_cards(state.deck, CARDS_FOR_PHASE[next_phase]))
    state.phase = next_phase

    first = state.next_actor_index(state.dealer_position)
    if first is not None:
        state.current_player_index = first

    logger.debug(f"{next_phase.value}: {' '.join(str(c) for c in state.community_cards)}")


# ============= Showdown =============

def _determine_winner(state: GameState, action: DetermineWinner) -> None:
    if not state.is_hand_running:
        raise HandNotInProgress("No hand in progress")

    live = state.live_players()
    if not live:
        raise NoWinners("Cannot determine winner - no active players")

    if len(live) == 1:
        winner = live[0]
        amount = state.pot
        winner.chips += amount
        state.winners = [winner.player_id]
        state.winning_hands = []
        state.payouts = {winner.player_id: amount}
        state.pots = [Pot(amount=amount, eligible_player_ids=(winner.player_id,))]
        logger.info(f"{winner.player_id} wins {amount} uncontested")
    else:
        if len(state.community_cards) != TOTAL_COMMUNITY_CARDS:
            raise IncompleteBoard(
                f"Cannot evaluate hands at showdown - expected 5 community cards "
                f"but got {len(state.community_cards)} (phase: {state.phase.value}, "
                f"live players: {len(live)})"
            )
        for player in live:
            if len(player.hole_cards) != HOLE_CARDS:
                raise InvalidAction(
                    f"Player {player.player_id} has {len(player.hole_cards)} hole cards (expected 2)"
                )

        result = resolve_showdown(state.players, state.community_cards)
        for player_id, amount in result.payouts.items():
            state.get_player(player_id).chips += amount

        state.winners = result.winner_ids
        state.winning_hands = [result.evaluations[pid] for pid in result.winner_ids]
        state.payouts = result.payouts
        state.pots = result.pots
        logger.info(
            "Showdown: " + ", ".join(
                f"{pid} wins {result.payouts[pid]} with {result.evaluations[pid].description}"
                for pid in result.winner_ids
            )
        )

    state.pot = 0
    state.phase = GamePhase.SHOWDOWN
    state.is_hand_complete = True


# ============= Between hands =============

def _reset_for_next_hand(state: GameState, action: ResetForNextHand) -> None:
    if state.is_hand_running:
        raise HandInProgress("Cannot reset while a hand is in progress")

    old_players = state.players
    survivors = [p for p in old_players if p.chips > 0]

    new_dealer: Optional[Player] = None
    for step in range(1, len(old_players) + 1):
        candidate = old_players[(state.dealer_position + step) % len(old_players)]
        if candidate.chips > 0:
            new_dealer = candidate
            break

    for player in old_players:
        if player.chips == 0:
            logger.info(f"{player.player_id} eliminated")

    state.players = survivors
    _recompact_seats(state)
    state.dealer_position = survivors.index(new_dealer) if new_dealer is not None else 0
    _clear_table(state)


def _eliminate_player(state: GameState, action: EliminatePlayer) -> None:
    if state.is_hand_running:
        raise HandInProgress("Cannot remove a player while a hand is in progress")

    index = state.index_of(action.player_id)
    del state.players[index]
    _recompact_seats(state)

    if index < state.dealer_position:
        state.dealer_position -= 1
    if state.dealer_position >= len(state.players):
        state.dealer_position = 0

    logger.info(f"{action.player_id} removed from the table")
    _clear_table(state)


def _recompact_seats(state: GameState) -> None:
    for seat, player in enumerate(state.players):
        player.seat = seat


def _clear_table(state: GameState) -> None:
    for player in state.players:
        player.reset_for_new_hand()
    state.phase = GamePhase.WAITING
    state.community_cards = []
    state.deck = []
    state.current_bet = 0
    state.min_raise = state.big_blind
    state.current_player_index = 0


_HANDLERS: Dict[type, Callable[[GameState, Any], None]] = {
    StartHand: _start_hand,
    PlayerAction: _player_action,
    AdvancePhase: _advance_phase,
    DetermineWinner: _determine_winner,
    ResetForNextHand: _reset_for_next_hand,
    EliminatePlayer: _eliminate_player,
}


class TexasHoldemGame:
    """
    A single table holding the live GameState.

    Usage:
        game = TexasHoldemGame(num_players=4, small_blind=5, big_blind=10, seed=7)
        game.start_hand()

        while not game.state.is_hand_complete:
            if game.is_betting_complete():
                if game.state.phase == GamePhase.SHOWDOWN or len(game.state.live_players()) == 1:
                    game.determine_winner()
                else:
                    game.advance_phase()
                continue
            player = game.get_current_player()
            game.player_action(player.player_id, "call")

        game.reset_for_next_hand()
    """

    def __init__(
        self,
        num_players: int = DEFAULT_NUM_PLAYERS,
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        starting_chips: int = DEFAULT_STARTING_CHIPS,
        player_ids: Optional[List[str]] = None,
        player_names: Optional[List[str]] = None,
        user_seat: Optional[int] = None,
        dealer_position: int = 0,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a new table.

        Args:
            num_players: Number of players (2-10)
            small_blind: Small blind amount
            big_blind: Big blind amount
            starting_chips: Starting stack for each player
            player_ids: Optional list of player IDs
            player_names: Optional display names
            user_seat: Seat controlled by a human, if any
            dealer_position: Seat holding the button for the first hand
            seed: Seed for a private random source (ignored if rng is given)
            rng: Random source used for every shuffle
        """
        config = TableConfig(
            num_players=num_players,
            small_blind=small_blind,
            big_blind=big_blind,
            starting_chips=starting_chips,
            player_ids=player_ids,
            player_names=player_names,
            user_seat=user_seat,
        )
        if rng is None:
            rng = random.Random(seed)
        self.config = config
        self.state = create_initial_state(config, dealer_position=dealer_position, rng=rng)

    @classmethod
    def from_config(
        cls,
        config: TableConfig,
        dealer_position: int = 0,
        seed: Optional[int] = None,
    ) -> TexasHoldemGame:
        return cls(
            num_players=config.num_players,
            small_blind=config.small_blind,
            big_blind=config.big_blind,
            starting_chips=config.starting_chips,
            player_ids=config.player_ids,
            player_names=config.player_names,
            user_seat=config.user_seat,
            dealer_position=dealer_position,
            seed=seed,
        )

    # ----- actions -----

    def dispatch(self, action: Action) -> GameState:
        """Apply an action to the live state; on error the state is unchanged."""
        try:
            self.state = apply_action(self.state, action)
        except PokerError as e:
            logger.warning(f"Rejected {type(action).__name__}: {e}")
            raise
        return self.state

    def start_hand(self) -> GameState:
        """Shuffle, post blinds and deal hole cards."""
        return self.dispatch(StartHand())

    def player_action(
        self,
        player_id: str,
        action: Union[ActionType, str],
        amount: Optional[int] = None,
    ) -> GameState:
        """
        Submit a betting action for the acting player.

        Args:
            player_id: The acting player's id
            action: fold, check, call or raise
            amount: For raise, the player's new total bet for this round
        """
        if isinstance(action, str):
            try:
                action = ActionType(action.lower())
            except ValueError:
                raise InvalidAction(f"Unknown action: {action}") from None
        return self.dispatch(PlayerAction(player_id, action, amount))

    def advance_phase(self) -> GameState:
        """Deal the next street (or move from the river to showdown)."""
        return self.dispatch(AdvancePhase())

    def determine_winner(self) -> GameState:
        """Pay the pot(s) and complete the hand."""
        return self.dispatch(DetermineWinner())

    def reset_for_next_hand(self) -> GameState:
        """Remove busted players and move the dealer button."""
        return self.dispatch(ResetForNextHand())

    def eliminate_player(self, player_id: str) -> GameState:
        """Remove a player between hands."""
        return self.dispatch(EliminatePlayer(player_id))

    # ----- queries -----

    @property
    def players(self) -> List[Player]:
        return self.state.players

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def pot(self) -> int:
        return self.state.pot

    def get_amount_to_call(self, player_id: str) -> int:
        """Chips the player must add to call."""
        return self.state.amount_to_call(player_id)

    def is_betting_complete(self) -> bool:
        """Whether the current betting round is closed."""
        return self.state.is_betting_complete()

    def get_current_player(self) -> Optional[Player]:
        """The player whose turn it is, if a betting round is open."""
        return self.state.current_player

    def is_game_over(self) -> bool:
        """Fewer than two players have chips and no hand is running."""
        return not self.state.is_hand_running and sum(1 for p in self.state.players if p.chips > 0) < 2

    def get_legal_actions(self, player_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Legal actions for a player (default: the current player).

        Returns:
            List of action dicts with type and constraints. Empty when it is
            not that player's turn or the round is closed.
        """
        current = self.state.current_player
        if current is None or self.state.is_betting_complete():
            return []
        if player_id is not None and player_id != current.player_id:
            return []
        if not current.can_act:
            return []

        chips_to_call = max(0, self.state.current_bet - current.current_bet)
        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD.value}]

        if chips_to_call == 0:
            actions.append({"type": ActionType.CHECK.value})
        else:
            actions.append({
                "type": ActionType.CALL.value,
                "amount": min(chips_to_call, current.chips),
            })

        if current.chips > chips_to_call:
            max_total = current.current_bet + current.chips
            actions.append({
                "type": ActionType.RAISE.value,
                "min": min(self.state.min_raise, max_total),
                "max": max_total,
            })

        return actions

    def get_state(self, for_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Snapshot of the table.

        Args:
            for_player_id: If specified, include that player's hole cards and,
                on their turn, their legal actions
        """
        snapshot = self.state.to_dict(for_player_id=for_player_id)
        if for_player_id is not None:
            snapshot["legal_actions"] = self.get_legal_actions(for_player_id)
            snapshot["amount_to_call"] = self.state.amount_to_call(for_player_id)
        return snapshot
