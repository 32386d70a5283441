"""
Tests for side pot calculation and pot distribution.

These tests verify the correct handling of side pots when players go all-in
with different stack sizes, including chips left behind by folded players.
"""

import pytest
from holdem_engine.core.pots import (
    Pot, Contribution, calculate_side_pots, merge_equal_pots, distribute_pot,
)
from holdem_engine.core.player import Player
from holdem_engine.core.errors import NoWinners, WinnerNotFound, PokerError


class TestSidePotCalculation:
    """Tests for side pot calculation logic."""

    def test_three_all_ins(self):
        """
        A all-in 20, B all-in 50, C all-in 100
        Main pot 60 (A, B, C), side pot 60 (B, C), side pot 50 (C)
        """
        pots = calculate_side_pots([
            Contribution("A", 20, False),
            Contribution("B", 50, False),
            Contribution("C", 100, False),
        ])

        assert [p.amount for p in pots] == [60, 60, 50]
        assert pots[0].eligible_player_ids == ("A", "B", "C")
        assert pots[1].eligible_player_ids == ("B", "C")
        assert pots[2].eligible_player_ids == ("C",)

    def test_equal_contributions_single_pot(self):
        pots = calculate_side_pots([("A", 30, False), ("B", 30, False), ("C", 30, False)])
        assert pots == [Pot(90, ("A", "B", "C"))]

    def test_folded_money_is_dead(self):
        """Folded chips stay in the pots but the folder is never eligible."""
        pots = calculate_side_pots([
            Contribution("A", 10, True),
            Contribution("B", 20, False),
            Contribution("C", 50, False),
            Contribution("D", 50, False),
        ])

        assert [p.amount for p in pots] == [40, 30, 60]
        assert all("A" not in p.eligible_player_ids for p in pots)
        assert sum(p.amount for p in pots) == 130

    def test_dead_money_at_top_level_joins_last_pot(self):
        """A folded overbet nobody matched goes to the highest live pot."""
        pots = calculate_side_pots([
            Contribution("A", 10, False),
            Contribution("B", 30, True),
        ])

        assert pots == [Pot(40, ("A",))]

    def test_folded_levels_still_open_pots(self):
        """Live players who bet more are eligible at every lower level."""
        pots = calculate_side_pots([
            Contribution("A", 10, True),
            Contribution("B", 10, True),
            Contribution("C", 40, False),
            Contribution("D", 40, False),
        ])

        assert pots == [Pot(40, ("C", "D")), Pot(60, ("C", "D"))]
        assert merge_equal_pots(pots) == [Pot(100, ("C", "D"))]

    def test_everyone_folded(self):
        pots = calculate_side_pots([Contribution("A", 10, True)])
        assert pots == [Pot(10, ())]

    def test_zero_contributions_ignored(self):
        pots = calculate_side_pots([
            Contribution("A", 0, False),
            Contribution("B", 10, False),
            Contribution("C", 10, False),
        ])
        assert pots == [Pot(20, ("B", "C"))]

    def test_no_contributions(self):
        assert calculate_side_pots([]) == []

    def test_from_players(self):
        """Player objects are read through total_bet and is_folded."""
        players = [
            Player("A", chips=0, total_bet=20, is_all_in=True),
            Player("B", chips=50, total_bet=50, is_folded=True),
            Player("C", chips=0, total_bet=50, is_all_in=True),
        ]
        pots = calculate_side_pots(players)

        assert [p.amount for p in pots] == [60, 60]
        assert pots[1].eligible_player_ids == ("C",)

    @pytest.mark.parametrize("bets", [
        [(5, False), (17, False), (17, True), (100, False)],
        [(1, True), (2, False), (3, True), (4, False)],
        [(40, False), (40, False), (40, True), (12, False)],
    ])
    def test_conservation(self, bets):
        """Pot amounts always add up to the money contributed."""
        contributions = [Contribution(str(i), bet, folded) for i, (bet, folded) in enumerate(bets)]
        pots = calculate_side_pots(contributions)
        assert sum(p.amount for p in pots) == sum(bet for bet, _ in bets)


class TestMergeEqualPots:
    """Tests for joining pots with identical eligibility."""

    def test_merges_adjacent(self):
        pots = [Pot(40, ("B", "C", "D")), Pot(30, ("B", "C", "D")), Pot(60, ("C", "D"))]
        assert merge_equal_pots(pots) == [Pot(70, ("B", "C", "D")), Pot(60, ("C", "D"))]

    def test_keeps_distinct(self):
        pots = [Pot(60, ("A", "B", "C")), Pot(60, ("B", "C")), Pot(50, ("C",))]
        assert merge_equal_pots(pots) == pots


class TestDistributePot:
    """Tests for splitting a pot between winners."""

    def test_single_winner(self):
        assert distribute_pot(Pot(100, ("A", "B")), ["B"]) == {"B": 100}

    def test_even_split(self):
        assert distribute_pot(Pot(100, ("A", "B")), ["A", "B"]) == {"A": 50, "B": 50}

    def test_remainder_to_first_winner(self):
        """Odd chips go to the first winner listed."""
        payouts = distribute_pot(Pot(100, ("A", "B", "C")), ["B", "A", "C"])
        assert payouts == {"B": 34, "A": 33, "C": 33}
        assert sum(payouts.values()) == 100

    def test_no_winners(self):
        with pytest.raises(NoWinners):
            distribute_pot(Pot(100, ("A",)), [])

    def test_ineligible_winner(self):
        with pytest.raises(WinnerNotFound) as exc_info:
            distribute_pot(Pot(100, ("A", "B")), ["C"])
        assert isinstance(exc_info.value, PokerError)

    def test_pot_to_dict(self):
        assert Pot(30, ("A", "B")).to_dict() == {"amount": 30, "eligible_player_ids": ["A", "B"]}
