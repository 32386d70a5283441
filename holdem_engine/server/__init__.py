"""
Hold'em Engine Server - FastAPI Layer
"""

from holdem_engine.server.app import app, create_app

__all__ = ["app", "create_app"]
