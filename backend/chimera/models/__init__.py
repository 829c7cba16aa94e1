"""Pydantic models for Project Chimera"""

from chimera.models.game import (
    ActionRequest,
    GenerateRequest,
    GenerateResponse,
    LLMDebugInfo,
    NarrativeResponse,
    TurnResult,
)

__all__ = [
    "ActionRequest",
    "GenerateRequest",
    "GenerateResponse",
    "LLMDebugInfo",
    "NarrativeResponse",
    "TurnResult",
]
