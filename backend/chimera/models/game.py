"""
Game API models - Pydantic request and response models
"""

from pydantic import BaseModel

from chimera.config import DEFAULT_GAME_ID


class GenerateRequest(BaseModel):
    """Request to relay a prompt to the model"""
    prompt: str | None = None


class GenerateResponse(BaseModel):
    """Generated text returned by the model"""
    text: str


class ActionRequest(BaseModel):
    """Request to process a player action"""
    action: str | None = None
    game_id: str = DEFAULT_GAME_ID
    debug: bool = False  # Include the prompt and raw reply in the response


class LLMDebugInfo(BaseModel):
    """Debug info for a model interaction"""
    prompt: str
    raw_response: str
    model: str
    timestamp: str
    state_updated: bool = False


class NarrativeResponse(BaseModel):
    """Current narrative of a game"""
    narrative: str
    game_id: str = DEFAULT_GAME_ID
    llm_debug: LLMDebugInfo | None = None  # Only present when debug was requested


class TurnResult(BaseModel):
    """Outcome of one processed turn"""
    narrative: str
    state_updated: bool = False
    debug_info: LLMDebugInfo | None = None
