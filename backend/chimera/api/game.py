"""
Game API endpoints - Narrative fetch and player actions
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from chimera import config
from chimera.engine.narrative import NarrativeEngine
from chimera.engine.store import StateStore, create_store
from chimera.errors import ChimeraError, ModelClientError, StoreError
from chimera.models.game import ActionRequest, NarrativeResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Process-wide store, created from configuration on first use
_store: StateStore | None = None


def get_store() -> StateStore:
    global _store
    if _store is None:
        _store = create_store()
    return _store


def get_engine(store: StateStore = Depends(get_store)) -> NarrativeEngine:
    return NarrativeEngine(store)


def _require_valid_game_id(game_id: str) -> None:
    if not config.is_valid_game_id(game_id):
        raise HTTPException(
            status_code=400,
            detail="game_id must be 1-64 letters, digits, '-' or '_'.",
        )


@router.get("/narrative", response_model=NarrativeResponse, response_model_exclude_none=True)
def get_narrative(
    game_id: str = config.DEFAULT_GAME_ID,
    engine: NarrativeEngine = Depends(get_engine),
):
    """Get the current narrative, starting the game if it has not begun

    A plain def so FastAPI runs the blocking store I/O in its threadpool.
    """
    _require_valid_game_id(game_id)

    try:
        narrative = engine.fetch_narrative(game_id)
    except (StoreError, FileNotFoundError) as e:
        logger.error(f"Error fetching narrative for game '{game_id}': {e}")
        raise HTTPException(
            status_code=500,
            detail="Failed to retrieve game state from the database.",
        )

    return NarrativeResponse(narrative=narrative, game_id=game_id)


@router.post("/action", response_model=NarrativeResponse, response_model_exclude_none=True)
async def process_action(
    request: ActionRequest,
    engine: NarrativeEngine = Depends(get_engine),
):
    """Process a player action and return the new narrative"""
    if not request.action or not request.action.strip():
        raise HTTPException(status_code=400, detail="Player action is required.")
    _require_valid_game_id(request.game_id)

    try:
        result = await engine.process_turn(
            request.action, game_id=request.game_id, debug=request.debug
        )
    except ModelClientError as e:
        logger.error(f"Model API error for game '{request.game_id}': {e.details}")
        raise HTTPException(
            status_code=e.status_code,
            detail={"message": e.message, "details": e.details},
        )
    except ChimeraError as e:
        if e.status_code >= 500:
            logger.error(f"Error processing action for game '{request.game_id}': {e}")
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception(f"Unexpected error processing action for game '{request.game_id}'")
        raise HTTPException(status_code=500, detail="Failed to process player action.")

    return NarrativeResponse(
        narrative=result.narrative,
        game_id=request.game_id,
        llm_debug=result.debug_info,
    )
