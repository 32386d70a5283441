"""
Tests for multi-hand play driven by agents.

These tests verify:
- Blind positions for different player counts
- Dealer button rotation over several hands
- Chip conservation across random play
- Sessions running until one player holds every chip
"""

import random

import pytest
from holdem_engine.agents import BaseAgent, CallAgent, HumanAgent, RandomAgent, play_hand, play_session
from holdem_engine.core.game import TexasHoldemGame
from holdem_engine.core.rules import get_blind_positions


def make_agents(game, factory):
    return {p.player_id: factory(p.player_id) for p in game.players}


class TestBlindPositions:
    """Tests for blind position calculation across different player counts."""

    @pytest.mark.parametrize("num_players", [3, 4, 5, 6])
    def test_blind_positions_valid(self, num_players):
        """Blinds should be positioned correctly for all player counts."""
        for dealer_pos in range(num_players):
            sb_pos, bb_pos = get_blind_positions(num_players, dealer_pos)
            assert sb_pos == (dealer_pos + 1) % num_players
            assert bb_pos == (dealer_pos + 2) % num_players

    @pytest.mark.parametrize("num_players", [2, 3, 4])
    def test_first_to_act_preflop(self, num_players):
        """The seat after the big blind opens the action."""
        game = TexasHoldemGame(num_players=num_players, seed=0)
        state = game.start_hand()
        assert state.current_player_index == (state.big_blind_position + 1) % num_players


class TestButtonRotation:
    """Tests for the dealer button over several hands."""

    def test_button_moves_each_hand(self):
        game = TexasHoldemGame(num_players=4, starting_chips=1000, seed=11)
        agents = make_agents(game, CallAgent)

        dealers = []
        for _ in range(5):
            dealers.append(game.state.dealer_position)
            play_hand(game, agents)
            game.reset_for_next_hand()

        assert dealers == [0, 1, 2, 3, 0]


class TestAgentPlay:
    """Tests for full hands played by agents."""

    def test_call_agents_reach_showdown(self):
        game = TexasHoldemGame(num_players=4, seed=3)
        state = play_hand(game, make_agents(game, CallAgent))

        assert state.is_hand_complete
        assert len(state.community_cards) == 5
        assert state.total_chips == 400
        assert sum(state.payouts.values()) == 40

    @pytest.mark.parametrize("seed", range(10))
    def test_random_play_conserves_chips(self, seed):
        rng = random.Random(seed)
        game = TexasHoldemGame(num_players=4, seed=seed)
        agents = make_agents(game, lambda pid: RandomAgent(pid, rng=rng))

        for _ in range(20):
            if game.is_game_over():
                break
            state = play_hand(game, agents)
            assert state.is_hand_complete
            assert state.pot == 0
            assert state.total_chips == 400
            assert all(p.chips >= 0 for p in state.players)
            game.reset_for_next_hand()

    def test_session_ends_with_one_player(self):
        rng = random.Random(99)
        game = TexasHoldemGame(num_players=3, starting_chips=50, seed=99)
        agents = make_agents(
            game, lambda pid: RandomAgent(pid, fold_probability=0.0, raise_probability=0.8, rng=rng)
        )

        hands = play_session(game, agents, max_hands=500)

        assert hands > 0
        assert game.state.total_chips == 150
        if game.is_game_over():
            assert len(game.players) == 1
            assert game.players[0].chips == 150

    def test_max_hands_respected(self):
        game = TexasHoldemGame(num_players=2, starting_chips=1000, seed=5)
        assert play_session(game, make_agents(game, CallAgent), max_hands=3) == 3
        assert game.state.hand_number == 3


class TestAgents:
    """Tests for the agent classes."""

    def test_random_agent_picks_legal_action(self):
        game = TexasHoldemGame(num_players=4, seed=1)
        game.start_hand()
        snapshot = game.get_state("3")
        legal = {a["type"] for a in snapshot["legal_actions"]}

        agent = RandomAgent("3", rng=random.Random(0))
        for _ in range(50):
            decision = agent.get_action_for_game(snapshot)
            assert decision["action"] in legal
            if decision["action"] == "raise":
                assert 20 <= decision["amount"] <= 100

    def test_random_agent_never_folds_free(self):
        agent = RandomAgent("0", fold_probability=1.0, rng=random.Random(0))
        decision = agent.act({}, [{"type": "fold"}, {"type": "check"}])
        assert decision == {"action": "check"}

    def test_call_agent(self):
        agent = CallAgent("0")
        assert agent.act({}, [{"type": "fold"}, {"type": "call", "amount": 10}]) == {"action": "call"}
        assert agent.act({}, [{"type": "fold"}, {"type": "check"}]) == {"action": "check"}

    def test_human_agent_defers_to_api(self):
        with pytest.raises(NotImplementedError):
            HumanAgent("0").act({}, [])

    def test_base_agent_is_abstract(self):
        with pytest.raises(TypeError):
            BaseAgent("0")

    def test_agent_names(self):
        assert RandomAgent("1").name == "Random-1"
        assert repr(CallAgent("2")) == "CallAgent(2, Caller-2)"
