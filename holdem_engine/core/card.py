"""
Card and Deck model for Texas Hold'em.

Cards are immutable (rank, suit) values. A deck is a plain list of cards
that is created in canonical suit-major order, shuffled with an injectable
random source, and dealt from the front without replacement.

Usage:
    rng = random.Random(42)
    deck = Deck(rng=rng)
    hole_cards = deck.deal(2)
    flop = deck.deal(3)
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
from enum import IntEnum

from holdem_engine.core.errors import InsufficientCards


class Suit(IntEnum):
    """Card suits in canonical deck order."""
    HEARTS = 0    # ♥
    DIAMONDS = 1  # ♦
    CLUBS = 2     # ♣
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks; the value is the rank's comparison value (Ace high = 14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Display labels use "10" rather than "T"
RANK_LABELS = {**RANK_CHARS, Rank.TEN: "10"}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["10"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}

DECK_SIZE = 52


@dataclass(frozen=True)
class Card:
    """
    A playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    - Integer (0-51): Card.from_int(51) = Ace of Spades

    The integer encoding follows canonical deck order:
    card_int = suit * 13 + (rank - 2)
    """
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "As", "Kh", "Td", "10d", "2c" (rank + suit char)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        if s[:2] == "10":
            rank_part, suit_part = "10", s[2:]
        else:
            rank_part, suit_part = s[0].upper(), s[1:]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        # Try suit char first, then symbol
        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    @classmethod
    def from_int(cls, card_int: int) -> Card:
        """Create a card from integer (0-51)."""
        if not 0 <= card_int < DECK_SIZE:
            raise ValueError(f"Card int must be 0-51, got {card_int}")
        return cls(Rank(card_int % 13 + 2), Suit(card_int // 13))

    def to_int(self) -> int:
        """Return the integer representation (0-51)."""
        return int(self.suit) * 13 + int(self.rank) - 2

    def __int__(self) -> int:
        return self.to_int()

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_LABELS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Td'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_LABELS[self.rank],
            "suit": self.suit.name.lower(),
            "text": str(self),
            "color": self.color,
        }


def new_deck() -> List[Card]:
    """Create the 52 cards in canonical suit-major order (unshuffled)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle_deck(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Shuffle cards in place with Fisher-Yates.

    Args:
        cards: Cards to permute (modified in place)
        rng: Random source; pass a seeded ``random.Random`` for replays

    Returns:
        The same list, permuted
    """
    if rng is None:
        rng = random.Random()
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def deal_cards(cards: List[Card], n: int) -> List[Card]:
    """
    Remove and return the first n cards.

    Raises:
        InsufficientCards: If not enough cards remain. The deck is left as is.
        ValueError: If n is negative.
    """
    if n < 0:
        raise ValueError(f"Cannot deal a negative number of cards: {n}")
    if n > len(cards):
        raise InsufficientCards(n, len(cards))

    dealt = cards[:n]
    del cards[:n]
    return dealt


class Deck:
    """
    A standard 52-card deck.

    Usage:
        deck = Deck(rng=random.Random(7))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        """Initialize a new deck, optionally shuffled with the given random source."""
        self._cards: List[Card] = new_deck()
        self._dealt: List[Card] = []
        if shuffle:
            self.shuffle(rng)

    def shuffle(self, rng: Optional[random.Random] = None) -> None:
        """Shuffle the remaining cards in the deck."""
        shuffle_deck(self._cards, rng)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            InsufficientCards: If not enough cards remain.
        """
        dealt = deal_cards(self._cards, n)
        self._dealt.extend(dealt)
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    @property
    def cards(self) -> List[Card]:
        """Copy of the undealt cards, top first."""
        return self._cards.copy()

    @property
    def dealt_cards(self) -> List[Card]:
        """List of cards that have been dealt."""
        return self._dealt.copy()

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "As Kh Td" (space-separated)
    - "AsKhTd" (no separator, 2 chars each)
    - "A♠ K♥ 10♦" (with symbols)

    Returns:
        List of Card objects
    """
    cards_str = cards_str.strip()
    if not cards_str:
        return []

    if " " in cards_str:
        return [Card.from_string(s) for s in cards_str.split()]

    result = []
    i = 0
    while i < len(cards_str):
        width = 3 if cards_str[i:i + 2] == "10" else 2
        chunk = cards_str[i:i + width]
        if len(chunk) < width:
            raise ValueError(f"Cannot parse card at position {i}: {cards_str[i:]}")
        result.append(Card.from_string(chunk))
        i += width

    return result
