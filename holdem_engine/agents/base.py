"""
Base Agent Interface for Hold'em Engine.

An agent decides *what* to do; it sees only the public snapshot (plus its
own hole cards) and submits its decision through the same
``TexasHoldemGame.player_action`` call a human seat uses.

Usage:
    class MyAgent(BaseAgent):
        def act(self, game_state, legal_actions):
            return {"action": "call"}
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional


class BaseAgent(ABC):
    """
    Abstract base class for poker agents.

    Attributes:
        player_id: The seat this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current game state.

        Called before every decision. Override to keep memory between
        decisions.
        """

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose an action given the current game state.

        Args:
            game_state: Snapshot from ``TexasHoldemGame.get_state(player_id)``
            legal_actions: List of legal action dicts, each containing:
                - type: fold, check, call or raise
                - amount: Chips needed (for call)
                - min/max: Valid new round totals (for raise)

        Returns:
            Action dictionary with:
                - action: Action type string
                - amount: New round total for raise (optional)

        Example:
            return {"action": "raise", "amount": 40}
        """

    def reset(self) -> None:
        """Reset internal state between games."""

    def get_action_for_game(self, game_state: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convenience method that combines observe and act.

        Args:
            game_state: Snapshot including ``legal_actions``
        """
        self.observe(game_state)
        return self.act(game_state, game_state.get("legal_actions", []))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"


class HumanAgent(BaseAgent):
    """
    Placeholder agent for human players.

    Marks a seat as human-controlled; decisions come through the API.
    """

    def __init__(self, player_id: str, name: Optional[str] = None):
        super().__init__(player_id, name or f"Human-{player_id}")

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        raise NotImplementedError("Human actions should come through the API")
