"""
Error types raised by the narrative engine, state store and LLM client.

The API layer maps each of these onto an HTTP status code.
"""


class ChimeraError(Exception):
    """Base class for all errors raised by the service"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChimeraError):
    """A required request field was missing, empty or malformed"""

    status_code = 400


class StateNotInitializedError(ChimeraError):
    """A turn was attempted before the game state was bootstrapped"""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Game state not found. Please access /api/narrative first to initialize the game."
        )


class StoreError(ChimeraError):
    """The key-value store could not be read or written"""


class GenerationError(ChimeraError):
    """The model reply did not contain any generated text"""


class ModelClientError(ChimeraError):
    """The upstream model API reported a failure.

    Attributes:
        status_code: Status reported by the upstream API (500 if unknown)
        details: Upstream error payload or message, passed back to the caller
    """

    def __init__(self, message: str, status_code: int | None = None, details=None):
        super().__init__(message)
        self.status_code = status_code or 500
        self.details = details
