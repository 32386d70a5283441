"""
Pytest configuration and shared fixtures for Hold'em Engine tests.
"""

import random

import pytest
from holdem_engine.core.card import Card, Deck, Rank, Suit, parse_cards
from holdem_engine.core.player import Player
from holdem_engine.core.game import TexasHoldemGame


@pytest.fixture
def rng():
    """A seeded random source."""
    return random.Random(42)


@pytest.fixture
def deck(rng):
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=rng)


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 100 chips."""
    return Player(player_id="test_player", chips=100, seat=0)


@pytest.fixture
def two_player_game():
    """Create a 2-player game (heads-up)."""
    return TexasHoldemGame(
        num_players=2,
        small_blind=5,
        big_blind=10,
        starting_chips=100,
        seed=1,
    )


@pytest.fixture
def four_player_game():
    """Create a 4-player game with the button on seat 0."""
    return TexasHoldemGame(
        num_players=4,
        small_blind=5,
        big_blind=10,
        starting_chips=100,
        seed=1,
    )


@pytest.fixture
def sample_hand():
    """Create a sample 5-card hand (pair of aces)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return parse_cards("As Ks Qs Js Ts")


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return parse_cards("9h 8h 7h 6h 5h")


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return parse_cards("As 2h 3d 4c 5s")
