"""
Shared pytest fixtures for Chimera backend tests.

This module provides:
- prompt_loader: PromptLoader over a small temporary prompts directory
- store: RecordingStore that tracks every write
- mock_llm: Mock completion client for deterministic testing
- engine: NarrativeEngine wired to the three fixtures above
- client: FastAPI TestClient with the engine and LLM dependencies overridden
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add backend to path for imports
backend_path = Path(__file__).parent.parent
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from chimera.api import game as game_api  # noqa: E402
from chimera.api import generate as generate_api  # noqa: E402
from chimera.engine.narrative import NarrativeEngine  # noqa: E402
from chimera.llm.prompt_loader import PromptLoader  # noqa: E402
from chimera.main import app  # noqa: E402
from tests.mocks.llm import MockLLMClient, RecordingStore  # noqa: E402


INITIAL_STATE = "game_info:\n  world_clock: {day: 1, hour: 8}\n"
INITIAL_NARRATIVE = "Rain steamed off the asphalt. What do you do?"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer .env settings from leaking into tests."""
    for name in (
        "CHIMERA_UPDATE_GAME_STATE",
        "CHIMERA_TURN_LOG_DIR",
        "CHIMERA_KEY_PREFIX",
        "CHIMERA_STORE",
        "LLM_PROVIDER",
        "LLM_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Minimal prompt texts for fast, readable assertions."""
    category = tmp_path / "prompts" / "chimera"
    category.mkdir(parents=True)
    (category / "system_behavior.txt").write_text("<SYSTEM_BEHAVIOR>Be a narrator.</SYSTEM_BEHAVIOR>\n")
    (category / "world_context.txt").write_text("<WORLD_CONTEXT>Veridia City.</WORLD_CONTEXT>\n")
    (category / "initial_game_state.txt").write_text(INITIAL_STATE)
    (category / "initial_narrative.txt").write_text(INITIAL_NARRATIVE)
    return tmp_path / "prompts"


@pytest.fixture
def prompt_loader(prompts_dir: Path) -> PromptLoader:
    return PromptLoader(prompts_dir)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def mock_llm() -> MockLLMClient:
    return MockLLMClient({"default": "Cipher slipped into the shadows."})


@pytest.fixture
def engine(store, mock_llm, prompt_loader) -> NarrativeEngine:
    return NarrativeEngine(store, llm=mock_llm, prompts=prompt_loader)


@pytest.fixture
def client(engine, mock_llm):
    """Test client whose routes use the fixture engine and mock LLM."""
    app.dependency_overrides[game_api.get_engine] = lambda: engine
    app.dependency_overrides[generate_api.get_llm_client] = lambda: mock_llm
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
