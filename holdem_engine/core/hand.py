"""
Hand Evaluation for Texas Hold'em.

This module evaluates 5, 6 or 7 cards and returns the best 5-card hand as a
HandEvaluation. Evaluations are totally ordered by (category, tie-break
values), so they can be compared directly: higher = better.

Hand Rankings (best to worst):
9. Royal Flush: A♠ K♠ Q♠ J♠ 10♠
8. Straight Flush: 5 consecutive cards of same suit
7. Four of a Kind: 4 cards of same rank
6. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
4. Straight: 5 consecutive cards
3. Three of a Kind: 3 cards of same rank
2. Two Pair: 2 different pairs
1. One Pair: 2 cards of same rank
0. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which ranks 5-high.
"""

from __future__ import annotations
from typing import List, Tuple, Optional, Sequence
from itertools import combinations
from dataclasses import dataclass, field
from enum import IntEnum
from collections import Counter

from holdem_engine.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.HIGH_CARD: "High Card",
}

HAND_SIZE = 5

_WHEEL = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


class InvalidHandSize(ValueError):
    """Raised when an evaluator receives the wrong number of cards."""


@dataclass(frozen=True)
class HandEvaluation:
    """
    The best 5-card hand found in a set of cards.

    Attributes:
        rank: Hand category
        cards: The five cards making the hand, combination cards first
        values: Tie-break sequence, most significant first
        description: Human-readable label, e.g. "Pair of Js"

    Equality and ordering only look at (rank, values), so two hands built
    from different suits compare equal when they are the same poker hand.
    """
    rank: HandRank
    cards: Tuple[Card, ...] = field(compare=False)
    values: Tuple[int, ...]
    description: str = field(default="", compare=False)

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.rank), self.values

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def __lt__(self, other: HandEvaluation) -> bool:
        return self.key < other.key

    def __le__(self, other: HandEvaluation) -> bool:
        return self.key <= other.key

    def __gt__(self, other: HandEvaluation) -> bool:
        return self.key > other.key

    def __ge__(self, other: HandEvaluation) -> bool:
        return self.key >= other.key

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": self.rank.name,
            "name": self.name,
            "description": self.description,
            "values": list(self.values),
            "cards": [card.to_dict() for card in self.cards],
        }


def evaluate_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate exactly 5 cards.

    Raises:
        InvalidHandSize: If not exactly 5 cards are given
    """
    if len(cards) != HAND_SIZE:
        raise InvalidHandSize(f"Hand evaluation requires exactly 5 cards, got {len(cards)}")

    # Sort by rank descending
    sorted_cards = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    straight_high = _straight_high(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)

    if straight_high is not None and is_flush:
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        if straight_high == Rank.ACE:
            return _make(HandRank.ROYAL_FLUSH, sorted_cards, [Rank.ACE], "Royal Flush")
        return _make(
            HandRank.STRAIGHT_FLUSH, sorted_cards, [straight_high],
            f"Straight Flush, {_label(straight_high)}-high",
        )

    if counts == [4, 1]:
        quad = _ranks_with_count(rank_counts, 4)[0]
        kicker = _ranks_with_count(rank_counts, 1)[0]
        return _make(
            HandRank.FOUR_OF_A_KIND, _sort_by_count(sorted_cards, rank_counts),
            [quad, kicker], f"Four of a Kind, {_label(quad)}s",
        )

    if counts == [3, 2]:
        trips = _ranks_with_count(rank_counts, 3)[0]
        pair = _ranks_with_count(rank_counts, 2)[0]
        return _make(
            HandRank.FULL_HOUSE, _sort_by_count(sorted_cards, rank_counts),
            [trips, pair], f"Full House, {_label(trips)}s over {_label(pair)}s",
        )

    if is_flush:
        return _make(HandRank.FLUSH, sorted_cards, ranks, f"Flush, {_label(ranks[0])}-high")

    if straight_high is not None:
        if straight_high == Rank.FIVE:
            sorted_cards = _reorder_wheel(sorted_cards)
        return _make(
            HandRank.STRAIGHT, sorted_cards, [straight_high],
            f"Straight, {_label(straight_high)}-high",
        )

    if counts == [3, 1, 1]:
        trips = _ranks_with_count(rank_counts, 3)[0]
        kickers = _ranks_with_count(rank_counts, 1)
        return _make(
            HandRank.THREE_OF_A_KIND, _sort_by_count(sorted_cards, rank_counts),
            [trips] + kickers, f"Three of a Kind, {_label(trips)}s",
        )

    if counts == [2, 2, 1]:
        pairs = _ranks_with_count(rank_counts, 2)
        kicker = _ranks_with_count(rank_counts, 1)[0]
        return _make(
            HandRank.TWO_PAIR, _sort_by_count(sorted_cards, rank_counts),
            pairs + [kicker], f"Two Pair, {_label(pairs[0])}s and {_label(pairs[1])}s",
        )

    if counts == [2, 1, 1, 1]:
        pair = _ranks_with_count(rank_counts, 2)[0]
        kickers = _ranks_with_count(rank_counts, 1)
        return _make(
            HandRank.ONE_PAIR, _sort_by_count(sorted_cards, rank_counts),
            [pair] + kickers, f"Pair of {_label(pair)}s",
        )

    return _make(HandRank.HIGH_CARD, sorted_cards, ranks, f"High Card, {_label(ranks[0])}")


def evaluate_best_of_six(cards: Sequence[Card]) -> HandEvaluation:
    """Best 5-card hand out of exactly 6 cards (6 combinations)."""
    if len(cards) != 6:
        raise InvalidHandSize(f"evaluate_best_of_six requires exactly 6 cards, got {len(cards)}")
    return _best_of(cards)


def evaluate_best_of_seven(cards: Sequence[Card]) -> HandEvaluation:
    """Best 5-card hand out of exactly 7 cards (21 combinations)."""
    if len(cards) != 7:
        raise InvalidHandSize(f"evaluate_best_of_seven requires exactly 7 cards, got {len(cards)}")
    return _best_of(cards)


def evaluate_best_hand(cards: Sequence[Card]) -> HandEvaluation:
    """
    Evaluate 5-7 cards, dispatching on the count.

    Raises:
        InvalidHandSize: If not 5-7 cards provided
    """
    if len(cards) == 5:
        return evaluate_hand(cards)
    if len(cards) == 6:
        return evaluate_best_of_six(cards)
    if len(cards) == 7:
        return evaluate_best_of_seven(cards)
    raise InvalidHandSize(f"Need 5-7 cards, got {len(cards)}")


def _best_of(cards: Sequence[Card]) -> HandEvaluation:
    best: Optional[HandEvaluation] = None
    for combo in combinations(cards, HAND_SIZE):
        evaluation = evaluate_hand(combo)
        if best is None or evaluation > best:
            best = evaluation
    return best


def compare_hands(hand1: HandEvaluation, hand2: HandEvaluation) -> int:
    """
    Compare two evaluations.

    Returns:
        Positive if hand1 wins, negative if hand2 wins, 0 if tie
    """
    if hand1.key > hand2.key:
        return 1
    if hand1.key < hand2.key:
        return -1
    return 0


def determine_winners(evaluations: Sequence[HandEvaluation]) -> List[int]:
    """
    Find the index of every evaluation tied for best.

    Returns:
        Winning indices in input order (several on a split), empty for no input
    """
    if not evaluations:
        return []

    best_key = max(e.key for e in evaluations)
    return [i for i, e in enumerate(evaluations) if e.key == best_key]


def get_hand_description(cards: Sequence[Card]) -> str:
    """Get a human-readable description of the best hand in 5-7 cards."""
    if len(cards) < HAND_SIZE:
        return "Incomplete hand"
    return evaluate_best_hand(cards).description


def _make(rank: HandRank, cards: List[Card], values: List[Rank], description: str) -> HandEvaluation:
    return HandEvaluation(
        rank=rank,
        cards=tuple(cards),
        values=tuple(int(v) for v in values),
        description=description,
    )


def _straight_high(ranks: List[Rank]) -> Optional[Rank]:
    """
    Return the high card of a straight, or None.

    Expects ranks sorted descending. The wheel returns FIVE.
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return unique_ranks[0]

    if unique_ranks == _WHEEL:
        return Rank.FIVE

    return None


def _ranks_with_count(rank_counts: Counter, count: int) -> List[Rank]:
    """Ranks appearing exactly ``count`` times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c == count), reverse=True)


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _reorder_wheel(cards: List[Card]) -> List[Card]:
    """Reorder wheel straight so Ace is last (5-4-3-2-A)."""
    ace = [c for c in cards if c.rank == Rank.ACE][0]
    others = sorted((c for c in cards if c.rank != Rank.ACE), key=lambda c: c.rank, reverse=True)
    return others + [ace]


def _label(rank: Rank) -> str:
    return {
        Rank.TEN: "10", Rank.JACK: "J", Rank.QUEEN: "Q",
        Rank.KING: "K", Rank.ACE: "A",
    }.get(rank, str(int(rank)))
