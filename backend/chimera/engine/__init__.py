"""Narrative game engine and state store"""

from chimera.engine.narrative import NarrativeEngine, build_turn_prompt, extract_block
from chimera.engine.store import FileStore, MemoryStore, StateStore, create_store

__all__ = [
    "NarrativeEngine",
    "build_turn_prompt",
    "extract_block",
    "FileStore",
    "MemoryStore",
    "StateStore",
    "create_store",
]
