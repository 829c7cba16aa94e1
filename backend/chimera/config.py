"""
Service configuration - environment-driven settings

Values are read on every call so that tests (and a reloaded .env) take
effect without restarting the process.
"""

import os
import re
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_GAME_ID = "default"
DEFAULT_KEY_PREFIX = "project_chimera"

GAME_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

DEFAULT_CORS_HEADERS = [
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def get_store_backend() -> str:
    """Get configured state store backend ("memory" or "file")"""
    return os.getenv("CHIMERA_STORE", "memory").strip().lower()


def get_state_dir() -> Path:
    """Directory used by the file store"""
    return Path(os.getenv("CHIMERA_STATE_DIR", "state"))


def get_key_prefix() -> str:
    """Prefix for every store key"""
    return os.getenv("CHIMERA_KEY_PREFIX", DEFAULT_KEY_PREFIX)


def get_turn_log_dir() -> Path | None:
    """Directory for per-game turn logs, or None when turn logging is off"""
    value = os.getenv("CHIMERA_TURN_LOG_DIR")
    return Path(value) if value else None


def update_game_state_enabled() -> bool:
    """Whether turns replace the GameState with the block found in the model reply"""
    return _get_bool("CHIMERA_UPDATE_GAME_STATE")


def get_log_level() -> str:
    return os.getenv("CHIMERA_LOG_LEVEL", "INFO").upper()


def get_cors_origins() -> list[str]:
    """Allowed CORS origins (comma separated, defaults to any origin)"""
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def is_valid_game_id(game_id: str) -> bool:
    return bool(GAME_ID_PATTERN.match(game_id))
