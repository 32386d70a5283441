"""
Baseline agents.

RandomAgent picks random legal actions; CallAgent always checks or calls.
Both are useful for driving the engine in tests and simulations.
"""

import random
from typing import Dict, List, Any, Optional

from holdem_engine.agents.base import BaseAgent


class RandomAgent(BaseAgent):
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to raise vs call/check
    """

    def __init__(
        self,
        player_id: str,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the random agent.

        Args:
            player_id: Unique identifier
            name: Optional name
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of raising (0-1)
            rng: Random source, for reproducible play
        """
        super().__init__(player_id, name or f"Random-{player_id}")
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.rng = rng or random.Random()

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Select a random legal action, biased by the configured probabilities."""
        if not legal_actions:
            return {"action": "fold"}

        by_type = {a["type"]: a for a in legal_actions}
        roll = self.rng.random()

        # Only fold when there is something to call
        if "call" in by_type and roll < self.fold_probability:
            return {"action": "fold"}

        raise_action = by_type.get("raise")
        if raise_action and roll < self.fold_probability + self.raise_probability:
            amount = self.rng.randint(raise_action["min"], raise_action["max"])
            return {"action": "raise", "amount": amount}

        if "check" in by_type:
            return {"action": "check"}
        if "call" in by_type:
            return {"action": "call"}
        return {"action": "fold"}


class CallAgent(BaseAgent):
    """An agent that always checks or calls."""

    def __init__(self, player_id: str, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        action_types = [a["type"] for a in legal_actions]
        if "check" in action_types:
            return {"action": "check"}
        if "call" in action_types:
            return {"action": "call"}
        return {"action": "fold"}
