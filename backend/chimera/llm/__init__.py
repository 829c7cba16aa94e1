"""LLM integration components.

- `client.py`: LiteLLM client wrapper with the fixed generation settings
- `prompt_loader.py`: Loads the static game texts
- `session_logger.py`: Optional per-game turn logs
"""

from chimera.llm.client import LLMClient, get_completion, get_model_string
from chimera.llm.prompt_loader import get_loader

__all__ = [
    "LLMClient",
    "get_completion",
    "get_model_string",
    "get_loader",
]
