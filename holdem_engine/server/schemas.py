"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, model_validator

from holdem_engine.core.rules import (
    DEFAULT_NUM_PLAYERS, DEFAULT_SMALL_BLIND, DEFAULT_BIG_BLIND, DEFAULT_STARTING_CHIPS,
    MIN_PLAYERS, MAX_PLAYERS,
)


# ============= Request Schemas =============

class InitGameRequest(BaseModel):
    """Request to seat a new table."""
    player_count: int = Field(ge=MIN_PLAYERS, le=MAX_PLAYERS, default=DEFAULT_NUM_PLAYERS)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    starting_chips: int = Field(gt=0, default=DEFAULT_STARTING_CHIPS)
    player_ids: Optional[List[str]] = None
    player_names: Optional[List[str]] = None
    user_seat: Optional[int] = Field(default=None, ge=0)
    dealer_position: int = Field(default=0, ge=0)
    seed: Optional[int] = Field(default=None, description="Seed for reproducible shuffles")

    @model_validator(mode="after")
    def check_blinds(self) -> "InitGameRequest":
        if self.small_blind > self.big_blind:
            raise ValueError("small_blind cannot exceed big_blind")
        return self


class ActionRequest(BaseModel):
    """Request to take a betting action."""
    player_id: str
    action: str = Field(..., description="Action type: fold, check, call, raise")
    amount: Optional[int] = Field(
        default=None, ge=0, description="For raise: the player's new total bet this round"
    )


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Player information; cards only when visible to the viewer."""
    id: str
    name: str
    seat: int
    chips: int
    current_bet: int
    total_bet: int
    is_folded: bool
    is_all_in: bool
    has_acted: bool
    is_user: bool
    has_cards: bool
    cards: Optional[List[CardSchema]] = None


class HandEvaluationSchema(BaseModel):
    """A winning hand."""
    rank: str
    name: str
    description: str
    values: List[int]
    cards: List[CardSchema]


class PotSchema(BaseModel):
    """A main or side pot."""
    amount: int
    eligible_player_ids: List[str]


class ActionRecordSchema(BaseModel):
    """One entry of the hand's action history."""
    player_id: str
    player_name: str
    action: str
    amount: int
    phase: str
    pot_after: int


class LegalActionSchema(BaseModel):
    """Available action."""
    type: str
    amount: Optional[int] = None
    min: Optional[int] = None
    max: Optional[int] = None


class GameStateSchema(BaseModel):
    """Complete table snapshot."""
    phase: str
    hand_number: int
    pot: int
    community_cards: List[CardSchema]
    dealer_position: int
    small_blind_position: int
    big_blind_position: int
    current_player_index: int
    current_player: Optional[str] = None
    current_bet: int
    min_raise: int
    small_blind: int
    big_blind: int
    cards_remaining: int
    is_hand_complete: bool
    is_betting_complete: bool
    players: List[PlayerSchema]
    winners: List[str]
    winning_hands: List[HandEvaluationSchema]
    payouts: Dict[str, int]
    pots: List[PotSchema]
    action_history: List[ActionRecordSchema]
    legal_actions: Optional[List[LegalActionSchema]] = None
    amount_to_call: Optional[int] = None


class AmountToCallSchema(BaseModel):
    player_id: str
    amount_to_call: int


class BettingCompleteSchema(BaseModel):
    is_betting_complete: bool


class ErrorSchema(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


def error_body(error: str, detail: Any = None) -> Dict[str, Any]:
    return ErrorSchema(error=error, detail=None if detail is None else str(detail)).model_dump()
