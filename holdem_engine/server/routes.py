"""
HTTP API Routes for Hold'em Engine.

One route per engine call. Every mutating route returns the new table
snapshot, seen from the player given in the ``viewer`` query parameter.
Illegal calls surface as HTTP 400 via the PokerError handler in app.py.
"""

from typing import Optional
import logging

from fastapi import APIRouter, HTTPException

from holdem_engine.core.game import TexasHoldemGame
from holdem_engine.server.schemas import (
    InitGameRequest, ActionRequest, GameStateSchema, LegalActionSchema,
    AmountToCallSchema, BettingCompleteSchema,
)

router = APIRouter()
logger = logging.getLogger(__name__)

# Single table per process
_game: Optional[TexasHoldemGame] = None


def get_game() -> TexasHoldemGame:
    """Get the current game instance."""
    if _game is None:
        raise HTTPException(status_code=400, detail="Game not initialized")
    return _game


def _snapshot(game: TexasHoldemGame, viewer: Optional[str]) -> GameStateSchema:
    return GameStateSchema(**game.get_state(for_player_id=viewer))


@router.post("/init_game", response_model=GameStateSchema)
async def init_game(req: InitGameRequest, viewer: Optional[str] = None) -> GameStateSchema:
    """Seat a new table, replacing any existing one."""
    global _game

    try:
        _game = TexasHoldemGame(
            num_players=req.player_count,
            small_blind=req.small_blind,
            big_blind=req.big_blind,
            starting_chips=req.starting_chips,
            player_ids=req.player_ids,
            player_names=req.player_names,
            user_seat=req.user_seat,
            dealer_position=req.dealer_position,
            seed=req.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Table initialized with {_game.state.num_players} players")
    return _snapshot(_game, viewer)


@router.post("/start_hand", response_model=GameStateSchema)
async def start_hand(viewer: Optional[str] = None) -> GameStateSchema:
    """Shuffle, post blinds and deal."""
    game = get_game()
    game.start_hand()
    return _snapshot(game, viewer)


@router.post("/player_action", response_model=GameStateSchema)
async def player_action(req: ActionRequest, viewer: Optional[str] = None) -> GameStateSchema:
    """Submit a betting action for the acting player."""
    game = get_game()
    game.player_action(req.player_id, req.action, req.amount)
    return _snapshot(game, viewer or req.player_id)


@router.post("/advance_phase", response_model=GameStateSchema)
async def advance_phase(viewer: Optional[str] = None) -> GameStateSchema:
    """Deal the next street once betting is complete."""
    game = get_game()
    game.advance_phase()
    return _snapshot(game, viewer)


@router.post("/determine_winner", response_model=GameStateSchema)
async def determine_winner(viewer: Optional[str] = None) -> GameStateSchema:
    """Pay out the hand."""
    game = get_game()
    game.determine_winner()
    return _snapshot(game, viewer)


@router.post("/reset_for_next_hand", response_model=GameStateSchema)
async def reset_for_next_hand(viewer: Optional[str] = None) -> GameStateSchema:
    """Remove busted players and move the button."""
    game = get_game()
    game.reset_for_next_hand()
    return _snapshot(game, viewer)


@router.get("/state", response_model=GameStateSchema)
async def get_game_state(viewer: Optional[str] = None) -> GameStateSchema:
    """Current table snapshot."""
    return _snapshot(get_game(), viewer)


@router.get("/legal_actions", response_model=list[LegalActionSchema])
async def get_legal_actions() -> list:
    """Legal actions for the acting player."""
    return get_game().get_legal_actions()


@router.get("/amount_to_call/{player_id}", response_model=AmountToCallSchema)
async def get_amount_to_call(player_id: str) -> AmountToCallSchema:
    game = get_game()
    return AmountToCallSchema(player_id=player_id, amount_to_call=game.get_amount_to_call(player_id))


@router.get("/betting_complete", response_model=BettingCompleteSchema)
async def is_betting_complete() -> BettingCompleteSchema:
    return BettingCompleteSchema(is_betting_complete=get_game().is_betting_complete())


@router.post("/reset_game")
async def reset_game() -> dict:
    """Drop the table (for development/testing)."""
    global _game
    _game = None
    return {"success": True, "message": "Game reset"}
