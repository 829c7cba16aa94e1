"""
Prompt Loader - Loads the static game texts from package data files.

Texts live in subdirectories of prompts/, one directory per game:
- chimera/system_behavior.txt - Narrative engine instructions
- chimera/world_context.txt - Setting and starting situation
- chimera/initial_game_state.txt - Default GameState document
- chimera/initial_narrative.txt - Opening narrative shown before the first turn

Files are cached after the first read and reloaded when their
modification time changes, so texts can be edited while the server runs.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "chimera"

SYSTEM_BEHAVIOR = "system_behavior.txt"
WORLD_CONTEXT = "world_context.txt"
INITIAL_GAME_STATE = "initial_game_state.txt"
INITIAL_NARRATIVE = "initial_narrative.txt"


class PromptLoader:
    """Loads and caches prompt texts with modification-time reloading."""

    def __init__(self, prompts_dir: Path | None = None):
        """
        Args:
            prompts_dir: Directory containing prompt categories. Defaults to
                        the prompts/ directory next to this module.
        """
        if prompts_dir is None:
            prompts_dir = Path(__file__).parent / "prompts"

        self.prompts_dir = Path(prompts_dir)
        self._cache: dict[str, str] = {}
        self._mtimes: dict[str, float] = {}

    def _path(self, category: str, filename: str) -> Path:
        return self.prompts_dir / category / filename

    def get_prompt(
        self, filename: str, category: str = DEFAULT_CATEGORY, reload: bool = False
    ) -> str:
        """
        Get a prompt text, reading it from disk if not cached or modified.

        Raises:
            FileNotFoundError: If the file does not exist and was never cached
        """
        cache_key = f"{category}/{filename}"
        path = self._path(category, filename)

        if not path.exists():
            if cache_key in self._cache:
                logger.warning(f"Prompt file deleted but using cached version: {cache_key}")
                return self._cache[cache_key]
            raise FileNotFoundError(
                f"Prompt file not found: {path}\n"
                f"Expected location: {self.prompts_dir}/{category}/{filename}"
            )

        mtime = path.stat().st_mtime
        stale = mtime > self._mtimes.get(cache_key, 0)
        if reload or cache_key not in self._cache or stale:
            if cache_key in self._cache:
                logger.info(f"Reloading modified prompt: {cache_key}")
            else:
                logger.debug(f"Loading prompt: {cache_key}")
            self._cache[cache_key] = path.read_text(encoding="utf-8")
            self._mtimes[cache_key] = mtime

        return self._cache[cache_key]


# Global instance - created on first use
_loader: PromptLoader | None = None


def get_loader() -> PromptLoader:
    """Get the global prompt loader instance."""
    global _loader
    if _loader is None:
        _loader = PromptLoader()
    return _loader
