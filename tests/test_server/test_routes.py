"""
Tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from holdem_engine.server.app import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        test_client.post("/reset_game")
        yield test_client
        test_client.post("/reset_game")


@pytest.fixture
def table(client):
    """A 4-player table with the first hand dealt."""
    response = client.post("/init_game", json={"player_count": 4, "seed": 1})
    assert response.status_code == 200
    response = client.post("/start_hand")
    assert response.status_code == 200
    return client


class TestInitGame:
    """Tests for seating a table."""

    def test_init_defaults(self, client):
        response = client.post("/init_game", json={})
        assert response.status_code == 200

        data = response.json()
        assert data["phase"] == "waiting"
        assert len(data["players"]) == 4
        assert all(p["chips"] == 100 for p in data["players"])
        assert data["small_blind"] == 5
        assert data["big_blind"] == 10

    def test_init_custom(self, client):
        response = client.post("/init_game", json={
            "player_count": 2,
            "small_blind": 1,
            "big_blind": 2,
            "starting_chips": 40,
            "player_ids": ["you", "bot"],
        })
        data = response.json()
        assert [p["id"] for p in data["players"]] == ["you", "bot"]
        assert data["big_blind"] == 2

    def test_invalid_player_count(self, client):
        response = client.post("/init_game", json={"player_count": 1})
        assert response.status_code == 422

    def test_small_blind_above_big_blind(self, client):
        response = client.post("/init_game", json={"small_blind": 20, "big_blind": 10})
        assert response.status_code == 422

    def test_not_initialized(self, client):
        response = client.get("/state")
        assert response.status_code == 400


class TestHandFlow:
    """Tests for playing through a hand over HTTP."""

    def test_start_hand(self, table):
        data = table.get("/state").json()
        assert data["phase"] == "pre-flop"
        assert data["pot"] == 15
        assert data["current_bet"] == 10
        assert data["min_raise"] == 20
        assert data["current_player"] == "3"

    def test_viewer_sees_own_cards(self, table):
        data = table.get("/state", params={"viewer": "3"}).json()
        by_id = {p["id"]: p for p in data["players"]}
        assert len(by_id["3"]["cards"]) == 2
        assert by_id["0"]["cards"] is None
        assert data["amount_to_call"] == 10

    def test_player_action(self, table):
        response = table.post("/player_action", json={"player_id": "3", "action": "raise", "amount": 30})
        assert response.status_code == 200

        data = response.json()
        assert data["current_bet"] == 30
        assert data["min_raise"] == 40
        assert data["current_player"] == "0"
        assert data["action_history"][-1]["action"] == "raise"

    def test_legal_actions(self, table):
        actions = table.get("/legal_actions").json()
        assert actions[0]["type"] == "fold"
        assert actions[1] == {"type": "call", "amount": 10, "min": None, "max": None}
        assert actions[2]["min"] == 20
        assert actions[2]["max"] == 100

    def test_amount_to_call(self, table):
        data = table.get("/amount_to_call/1").json()
        assert data == {"player_id": "1", "amount_to_call": 5}

    def test_full_hand(self, table):
        for player_id in ("3", "0", "1"):
            assert table.post("/player_action", json={"player_id": player_id, "action": "call"}).status_code == 200
        table.post("/player_action", json={"player_id": "2", "action": "check"})
        assert table.get("/betting_complete").json() == {"is_betting_complete": True}

        data = table.post("/advance_phase").json()
        assert data["phase"] == "flop"
        assert len(data["community_cards"]) == 3

        while data["phase"] != "showdown":
            while not table.get("/betting_complete").json()["is_betting_complete"]:
                current = table.get("/state").json()["current_player"]
                table.post("/player_action", json={"player_id": current, "action": "check"})
            data = table.post("/advance_phase").json()

        data = table.post("/determine_winner").json()
        assert data["is_hand_complete"]
        assert data["pot"] == 0
        assert sum(data["payouts"].values()) == 40
        assert data["winners"]
        assert data["winning_hands"]

        data = table.post("/reset_for_next_hand").json()
        assert data["phase"] == "waiting"
        assert data["dealer_position"] == 1


class TestErrors:
    """Engine errors come back as 400 with the error class name."""

    def test_not_players_turn(self, table):
        response = table.post("/player_action", json={"player_id": "0", "action": "call"})
        assert response.status_code == 400
        assert response.json()["error"] == "NotPlayersTurn"

    def test_cannot_check(self, table):
        response = table.post("/player_action", json={"player_id": "3", "action": "check"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "CannotCheck"
        assert "10" in body["detail"]

    def test_unknown_action(self, table):
        response = table.post("/player_action", json={"player_id": "3", "action": "bet"})
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidAction"

    def test_advance_too_early(self, table):
        response = table.post("/advance_phase")
        assert response.status_code == 400
        assert response.json()["error"] == "BettingRoundIncomplete"

    def test_incomplete_board(self, table):
        for player_id in ("3", "0", "1"):
            table.post("/player_action", json={"player_id": player_id, "action": "call"})
        table.post("/player_action", json={"player_id": "2", "action": "check"})
        table.post("/advance_phase")

        response = table.post("/determine_winner")
        assert response.status_code == 400
        assert response.json()["error"] == "IncompleteBoard"

    def test_start_twice(self, table):
        response = table.post("/start_hand")
        assert response.status_code == 400
        assert response.json()["error"] == "HandInProgress"

    def test_unknown_player(self, table):
        response = table.get("/amount_to_call/nobody")
        assert response.status_code == 400
        assert response.json()["error"] == "PlayerNotFound"

    def test_state_unchanged_after_error(self, table):
        table.post("/player_action", json={"player_id": "0", "action": "call"})
        data = table.get("/state").json()
        assert data["pot"] == 15
        assert data["current_player"] == "3"
