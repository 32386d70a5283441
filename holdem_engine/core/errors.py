"""
Error taxonomy for the Hold'em engine.

Every error here is a caller error: an illegal call against the current
state. The engine raises immediately and never corrects the call itself.
"""


class PokerError(ValueError):
    """Base class for all engine errors."""


class NotPlayersTurn(PokerError):
    """Action submitted for a seat other than the current actor."""

    def __init__(self, expected_id: str, got_id: str):
        super().__init__(f"Not player's turn: expected {expected_id}, got {got_id}")
        self.expected_id = expected_id
        self.got_id = got_id


class CannotCheck(PokerError):
    """Check attempted while the player still owes chips."""

    def __init__(self, amount_to_call: int):
        super().__init__(f"Cannot check, must call ${amount_to_call} or fold")
        self.amount_to_call = amount_to_call


class InsufficientCards(PokerError):
    """Deck does not hold enough cards for the requested deal."""

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"Cannot deal {requested} cards, only {remaining} remain")
        self.requested = requested
        self.remaining = remaining


class NotEnoughPlayers(PokerError):
    """Fewer than two players have chips."""


class IncompleteBoard(PokerError):
    """Showdown requested with live players but fewer than 5 community cards."""


class NoWinners(PokerError):
    """Pot distribution invoked with an empty winner list."""


class WinnerNotFound(PokerError):
    """Pot distribution invoked with a winner that cannot take the pot."""


class PlayerNotFound(PokerError):
    """No player with the given id sits at the table."""


class InvalidAction(PokerError):
    """Action is malformed or illegal in the current betting situation."""


class BettingRoundIncomplete(PokerError):
    """Phase advance requested before the betting round closed."""


class HandNotInProgress(PokerError):
    """Hand-level action submitted while no hand is running."""


class HandInProgress(PokerError):
    """Between-hands action submitted while a hand is still running."""
