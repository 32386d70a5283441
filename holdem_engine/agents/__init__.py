"""
Hold'em Engine Agents - AI Agent Framework

Agents observe public snapshots and act through the same action API as a
human seat. Baseline agents are provided for testing and simulation.
"""

from holdem_engine.agents.base import BaseAgent, HumanAgent
from holdem_engine.agents.random_agent import RandomAgent, CallAgent
from holdem_engine.agents.runner import play_hand, play_session

__all__ = ["BaseAgent", "HumanAgent", "RandomAgent", "CallAgent", "play_hand", "play_session"]
