"""
LLM client - Provider-agnostic LLM integration using LiteLLM
"""

import os
import logging
from typing import Any

from dotenv import load_dotenv

from chimera.errors import GenerationError, ModelClientError

# Load environment variables
load_dotenv()

# Configure logging
logger = logging.getLogger(__name__)

# Fixed generation parameters shared by every request
TEMPERATURE = 0.7
TOP_K = 1
TOP_P = 1.0
MAX_OUTPUT_TOKENS = 2048

HARM_CATEGORIES = [
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
]
SAFETY_THRESHOLD = "BLOCK_MEDIUM_AND_ABOVE"

API_KEY_VARS = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def get_provider() -> str:
    """Get configured LLM provider"""
    return os.getenv("LLM_PROVIDER", "gemini")


def get_model() -> str:
    """Get configured model name"""
    return os.getenv("LLM_MODEL", "gemini-1.5-pro-latest")


def get_model_string() -> str:
    """Get the full model string for LiteLLM"""
    provider = get_provider()
    model = get_model()

    # LiteLLM uses prefixed model names for some providers
    if provider == "gemini":
        return f"gemini/{model}"
    elif provider == "anthropic":
        return f"anthropic/{model}"
    elif provider == "ollama":
        return f"ollama/{model}"
    else:
        # OpenAI doesn't need a prefix
        return model


def get_safety_settings() -> list[dict[str, str]]:
    """Content-safety thresholds sent with every Gemini request"""
    return [
        {"category": category, "threshold": SAFETY_THRESHOLD}
        for category in HARM_CATEGORIES
    ]


def is_api_key_configured() -> bool:
    """Check whether the configured provider has an API key available.

    Ollama runs locally and needs no key.
    """
    env_var = API_KEY_VARS.get(get_provider())
    if env_var is None:
        return True
    return bool(os.getenv(env_var))


def build_completion_kwargs(prompt: str, model: str | None = None) -> dict[str, Any]:
    """Build the keyword arguments for a single-prompt completion call"""
    kwargs: dict[str, Any] = {
        "model": model or get_model_string(),
        "messages": [{"role": "user", "content": prompt}],
        "temperature": TEMPERATURE,
        "top_p": TOP_P,
        "max_tokens": MAX_OUTPUT_TOKENS,
    }

    # top_k and safety settings are Gemini-specific; LiteLLM forwards them
    if get_provider() == "gemini":
        kwargs["top_k"] = TOP_K
        kwargs["safety_settings"] = get_safety_settings()

    return kwargs


async def get_completion(prompt: str, model: str | None = None) -> str:
    """
    Get completion from configured LLM provider.

    Args:
        prompt: The full prompt text, sent as a single user message
        model: Optional model override

    Returns:
        The generated text response

    Raises:
        ModelClientError: The upstream API call failed
        GenerationError: The reply had no generated text
    """
    import litellm

    # Configure API keys from environment
    _configure_api_keys()

    kwargs = build_completion_kwargs(prompt, model)

    logger.info(
        f"LLM Request: model={kwargs['model']}, temperature={TEMPERATURE}, "
        f"max_tokens={MAX_OUTPUT_TOKENS}, prompt_length={len(prompt)}"
    )

    try:
        response = await litellm.acompletion(**kwargs)
    except Exception as e:
        logger.error(f"LLM Error: {type(e).__name__}: {e}")
        raise ModelClientError(
            "Error from model API",
            status_code=getattr(e, "status_code", None),
            details=getattr(e, "message", None) or str(e),
        ) from e

    try:
        choice = response.choices[0]
        content = choice.message.content
    except (AttributeError, IndexError, TypeError) as e:
        logger.error(f"Unexpected LLM response shape: {response}")
        raise GenerationError("Model reply did not contain generated text.") from e

    finish_reason = getattr(choice, "finish_reason", "unknown")
    logger.info(
        f"LLM Response: finish_reason={finish_reason}, content_length={len(content) if content else 0}"
    )

    if finish_reason == "length":
        logger.warning(
            f"Response TRUNCATED due to max_tokens limit ({MAX_OUTPUT_TOKENS})."
        )

    if not content:
        logger.warning(f"LLM returned empty content. Full response: {response}")
        raise GenerationError("Model did not return any text.")

    # Log first 200 chars of response for debugging
    preview = content[:200] + "..." if len(content) > 200 else content
    logger.debug(f"Response preview: {preview}")

    return content


def _configure_api_keys():
    """Configure API keys for LiteLLM from environment"""
    import litellm

    provider = get_provider()
    logger.debug(f"Configuring API keys for provider: {provider}")

    if provider == "gemini":
        api_key = os.getenv("GEMINI_API_KEY")
        if api_key:
            os.environ["GEMINI_API_KEY"] = api_key
            logger.debug(f"GEMINI_API_KEY configured (length: {len(api_key)})")
        else:
            logger.warning("GEMINI_API_KEY not found in environment")

    elif provider == "openai":
        api_key = os.getenv("OPENAI_API_KEY")
        if api_key:
            litellm.api_key = api_key
            logger.debug(f"OPENAI_API_KEY configured (length: {len(api_key)})")
        else:
            logger.warning("OPENAI_API_KEY not found in environment")

    elif provider == "anthropic":
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if api_key:
            os.environ["ANTHROPIC_API_KEY"] = api_key
            logger.debug(f"ANTHROPIC_API_KEY configured (length: {len(api_key)})")
        else:
            logger.warning("ANTHROPIC_API_KEY not found in environment")

    elif provider == "ollama":
        base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
        os.environ["OLLAMA_API_BASE"] = base_url
        logger.debug(f"OLLAMA_API_BASE configured: {base_url}")


class LLMClient:
    """Async completion client used by the engine.

    Wraps get_completion so the engine can be handed a mock with the
    same `complete` method in tests.
    """

    def __init__(self, model: str | None = None):
        self._model = model

    @property
    def model(self) -> str:
        return self._model or get_model_string()

    async def complete(self, prompt: str) -> str:
        return await get_completion(prompt, model=self._model)
