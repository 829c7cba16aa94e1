"""
Narrative engine - Bootstraps game state and processes player turns

Each game keeps two entries in the state store: the GameState document
and the last narrative shown to the player. Neither is parsed here; both
are opaque text that is stored and embedded verbatim into prompts.
"""

from __future__ import annotations

import asyncio
import logging
import re
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from chimera import config
from chimera.engine.store import game_state_key, narrative_key
from chimera.errors import GenerationError, StateNotInitializedError, ValidationError
from chimera.llm.client import LLMClient
from chimera.llm.prompt_loader import (
    INITIAL_GAME_STATE,
    INITIAL_NARRATIVE,
    SYSTEM_BEHAVIOR,
    WORLD_CONTEXT,
    PromptLoader,
    get_loader,
)
from chimera.llm.session_logger import get_session_logger
from chimera.models.game import LLMDebugInfo, TurnResult

if TYPE_CHECKING:
    from chimera.engine.store import StateStore

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Anything with an async `complete(prompt) -> str`"""

    async def complete(self, prompt: str) -> str:
        ...


def build_turn_prompt(
    system_behavior: str, world_context: str, game_state: str, action: str
) -> str:
    """Compose the prompt for one turn.

    Order is fixed: behavior instructions, world context, the current
    game state, then the player's action.
    """
    return (
        f"{system_behavior.strip()}\n\n"
        f"{world_context.strip()}\n\n"
        f"<GAME_STATE>\n{game_state}\n</GAME_STATE>\n\n"
        f"The player takes the following action:\n"
        f"<PLAYER_ACTION>\n{action}\n</PLAYER_ACTION>\n"
    )


def extract_block(text: str, block_name: str) -> str | None:
    """Return the trimmed contents of the first <block_name>...</block_name>, if any"""
    pattern = re.compile(
        rf"<{re.escape(block_name)}>([\s\S]*?)</{re.escape(block_name)}>"
    )
    match = pattern.search(text)
    return match.group(1).strip() if match else None


class NarrativeEngine:
    """Runs the narrative game against a state store and a completion client"""

    def __init__(
        self,
        store: "StateStore",
        llm: CompletionClient | None = None,
        prompts: PromptLoader | None = None,
        update_game_state: bool | None = None,
    ):
        self.store = store
        self.llm = llm or LLMClient()
        self.prompts = prompts or get_loader()
        if update_game_state is None:
            update_game_state = config.update_game_state_enabled()
        self.update_game_state = update_game_state

    def fetch_narrative(self, game_id: str = config.DEFAULT_GAME_ID) -> str:
        """Return the current narrative, initializing the game on first access.

        If no narrative exists yet, the default GameState and the opening
        narrative are written to the store and the opening narrative is
        returned. Later calls perform no writes.
        """
        narrative = self.store.get(narrative_key(game_id))
        if narrative:
            return narrative

        logger.info(f"No narrative found for game '{game_id}', initializing")
        initial_state = self.prompts.get_prompt(INITIAL_GAME_STATE)
        initial_narrative = self.prompts.get_prompt(INITIAL_NARRATIVE)

        self.store.set(game_state_key(game_id), initial_state)
        self.store.set(narrative_key(game_id), initial_narrative)
        return initial_narrative

    def build_prompt(self, game_state: str, action: str) -> str:
        return build_turn_prompt(
            self.prompts.get_prompt(SYSTEM_BEHAVIOR),
            self.prompts.get_prompt(WORLD_CONTEXT),
            game_state,
            action,
        )

    async def process_turn(
        self,
        action: str | None,
        game_id: str = config.DEFAULT_GAME_ID,
        debug: bool = False,
    ) -> TurnResult:
        """Process one player action and return the model's narrative.

        Raises:
            ValidationError: The action is missing or blank
            StateNotInitializedError: The game was never bootstrapped
            GenerationError: The model returned no text
            ModelClientError: The model API call failed
            StoreError: The store could not be read or written
        """
        if not action or not action.strip():
            raise ValidationError("Player action is required.")

        game_state = await asyncio.to_thread(self.store.get, game_state_key(game_id))
        if not game_state:
            raise StateNotInitializedError()

        prompt = self.build_prompt(game_state, action)
        logger.info(f"Processing turn for game '{game_id}': action_length={len(action)}")

        narrative = await self.llm.complete(prompt)
        if not narrative:
            raise GenerationError("Model did not return a valid narrative.")

        state_updated = False
        if self.update_game_state:
            new_state = extract_block(narrative, "GAME_STATE")
            if new_state:
                await asyncio.to_thread(self.store.set, game_state_key(game_id), new_state)
                state_updated = True
            else:
                logger.warning(
                    f"No <GAME_STATE> block in model reply for game '{game_id}'; state unchanged"
                )

        await asyncio.to_thread(self.store.set, narrative_key(game_id), narrative)

        model = getattr(self.llm, "model", "unknown")
        log_dir = config.get_turn_log_dir()
        if log_dir is not None:
            # The narrative is already stored; a log failure must not fail the turn
            try:
                await asyncio.to_thread(
                    get_session_logger(game_id, log_dir).log_turn,
                    action=action,
                    prompt=prompt,
                    raw_response=narrative,
                    model=model,
                    state_updated=state_updated,
                )
            except OSError as e:
                logger.warning(f"Could not write turn log for game '{game_id}' to {log_dir}: {e}")

        debug_info = None
        if debug:
            debug_info = LLMDebugInfo(
                prompt=prompt,
                raw_response=narrative,
                model=model,
                timestamp=datetime.now().isoformat(),
                state_updated=state_updated,
            )

        return TurnResult(
            narrative=narrative, state_updated=state_updated, debug_info=debug_info
        )
