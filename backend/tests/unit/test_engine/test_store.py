"""Unit tests for the state stores.

Tests cover:
- MemoryStore get/set semantics
- FileStore persistence, overwrites and failure reporting
- Key layout per game
- Backend selection from configuration
"""

import json

import pytest

from chimera.engine.store import (
    FileStore,
    MemoryStore,
    StateStore,
    create_store,
    game_state_key,
    narrative_key,
)
from chimera.errors import StoreError


class TestMemoryStore:
    def test_missing_key_returns_none(self) -> None:
        assert MemoryStore().get("nope") is None

    def test_set_then_get(self) -> None:
        store = MemoryStore()
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_overwrite(self) -> None:
        store = MemoryStore({"k": "old"})
        store.set("k", "new")
        assert store.get("k") == "new"
        assert len(store) == 1

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStore(), StateStore)


class TestFileStore:
    def test_missing_key_returns_none(self, tmp_path) -> None:
        assert FileStore(tmp_path).get("nope") is None

    def test_value_survives_new_instance(self, tmp_path) -> None:
        FileStore(tmp_path / "state").set("project_chimera:default:game_state", "day: 1")

        assert FileStore(tmp_path / "state").get("project_chimera:default:game_state") == "day: 1"

    def test_overwrite_leaves_single_file(self, tmp_path) -> None:
        store = FileStore(tmp_path)
        store.set("k", "one")
        store.set("k", "two")

        assert store.get("k") == "two"
        assert len(list(tmp_path.glob("*.json"))) == 1
        assert list(tmp_path.glob("*.tmp")) == []

    def test_document_records_key(self, tmp_path) -> None:
        store = FileStore(tmp_path)
        store.set("some:key", "text")

        document = json.loads(next(tmp_path.glob("*.json")).read_text(encoding="utf-8"))
        assert document["key"] == "some:key"
        assert document["value"] == "text"
        assert "updated_at" in document

    def test_corrupt_file_raises_store_error(self, tmp_path) -> None:
        store = FileStore(tmp_path)
        store.set("k", "v")
        next(tmp_path.glob("*.json")).write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError):
            store.get("k")

    def test_undecodable_file_raises_store_error(self, tmp_path) -> None:
        store = FileStore(tmp_path)
        store.set("k", "v")
        next(tmp_path.glob("*.json")).write_bytes(b'{"value": "\xff\xfe"}')

        with pytest.raises(StoreError):
            store.get("k")

    def test_unencodable_value_raises_store_error(self, tmp_path) -> None:
        """Lone surrogates cannot be written as UTF-8."""
        store = FileStore(tmp_path)

        with pytest.raises(StoreError):
            store.set("k", "bad \ud800 value")

        assert list(tmp_path.glob("*.tmp")) == []

    def test_unwritable_root_raises_store_error(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")

        with pytest.raises(StoreError):
            FileStore(blocker / "state").set("k", "v")


class TestKeys:
    def test_keys_namespaced_by_game(self) -> None:
        assert game_state_key("default") == "project_chimera:default:game_state"
        assert narrative_key("default") == "project_chimera:default:last_narrative"
        assert game_state_key("a") != game_state_key("b")

    def test_prefix_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("CHIMERA_KEY_PREFIX", "test")
        assert narrative_key("g1") == "test:g1:last_narrative"


class TestCreateStore:
    def test_default_is_memory(self) -> None:
        assert isinstance(create_store(), MemoryStore)

    def test_file_backend(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("CHIMERA_STORE", "file")
        monkeypatch.setenv("CHIMERA_STATE_DIR", str(tmp_path))

        store = create_store()

        assert isinstance(store, FileStore)
        assert store.root == tmp_path

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValueError):
            create_store("redis")
