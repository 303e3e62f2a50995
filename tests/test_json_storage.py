"""
Tests for the JSON-file collection store.
"""
from __future__ import annotations

import json
import os
import stat

import pytest

from greetings_api.core.errors import StorageReadError
from greetings_api.domain.greetings import Greeting
from greetings_api.repositories import json_storage
from greetings_api.repositories.json_storage import JsonCollectionStore


@pytest.fixture()
def store(tmp_path):
    s = JsonCollectionStore(tmp_path / "data" / "data.json")
    s.initialize()
    return s


def test_initialize_creates_directory_and_empty_array(tmp_path):
    path = tmp_path / "nested" / "data.json"
    s = JsonCollectionStore(path)
    s.initialize()
    assert path.read_text(encoding="utf-8") == "[]"
    assert s.load() == []


def test_initialize_keeps_existing_content(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps([{"id": 1, "language": "French", "greeting": "Bonjour", "formal": True}]), encoding="utf-8")
    s = JsonCollectionStore(path)
    s.initialize()
    assert s.load() == [Greeting(1, "French", "Bonjour", True)]


def test_save_writes_pretty_printed_array_in_order(store):
    records = [Greeting(3, "Japanese", "こんにちは", False), Greeting(1, "French", "Bonjour", True)]
    assert store.save(records) is True
    text = store.path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {")
    assert "こんにちは" in text
    assert json.loads(text) == [
        {"id": 3, "language": "Japanese", "greeting": "こんにちは", "formal": False},
        {"id": 1, "language": "French", "greeting": "Bonjour", "formal": True},
    ]
    assert store.load() == records


def test_save_of_loaded_collection_is_idempotent(store):
    store.save([Greeting(1, "French", "Bonjour", True), Greeting(2, "Spanish", "Hola", False)])
    before = store.path.read_text(encoding="utf-8")
    assert store.save(store.load()) is True
    assert store.path.read_text(encoding="utf-8") == before


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"id": 1}',
        '[{"id": 1, "language": "French", "greeting": "Bonjour"}]',
        '[{"id": "1", "language": "French", "greeting": "Bonjour", "formal": true}]',
        '[{"id": 1, "language": "", "greeting": "Bonjour", "formal": true}]',
        '[{"id": 1, "language": "French", "greeting": "A", "formal": true},'
        ' {"id": 1, "language": "Dutch", "greeting": "B", "formal": true}]',
        '[{"id": 1, "language": "French", "greeting": "A", "formal": true},'
        ' {"id": 2, "language": "FRENCH", "greeting": "B", "formal": true}]',
    ],
)
def test_load_rejects_invalid_content(store, content):
    store.path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageReadError):
        store.load()


def test_load_missing_file_is_a_read_error(tmp_path):
    with pytest.raises(StorageReadError):
        JsonCollectionStore(tmp_path / "absent.json").load()


def test_failed_save_keeps_previous_content(store, monkeypatch):
    store.save([Greeting(1, "French", "Bonjour", True)])
    before = store.path.read_text(encoding="utf-8")

    def boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(json_storage.os, "replace", boom)
    assert store.save([Greeting(1, "French", "Salut", False)]) is False
    monkeypatch.undo()

    assert store.path.read_text(encoding="utf-8") == before
    assert [p.name for p in store.path.parent.iterdir()] == ["data.json"]


def test_store_lock_is_reentrant(store):
    with store.lock:
        with store.lock:
            assert store.save([]) is True
    assert os.path.exists(store.path)


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_gets_umask_default_mode(store):
    assert stat.S_IMODE(store.path.stat().st_mode) == json_storage.DEFAULT_FILE_MODE
    assert json_storage.DEFAULT_FILE_MODE == 0o666 & ~json_storage._current_umask()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_save_keeps_existing_file_mode(store):
    os.chmod(store.path, 0o640)
    assert store.save([Greeting(1, "French", "Bonjour", True)]) is True
    assert stat.S_IMODE(store.path.stat().st_mode) == 0o640
