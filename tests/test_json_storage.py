"""
Tests for the JSON document store against a temporary file.
"""
from __future__ import annotations

import json
import os
import stat
import sys
import threading
from pathlib import Path

import pytest

# Make the cms package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cms.repositories.json_storage import (  # noqa: E402
    JsonDocumentStore,
    StoreUnavailableError,
    default_document,
)


@pytest.fixture()
def store(tmp_path):
    path = tmp_path / "database.json"
    path.write_text(json.dumps(default_document()), encoding="utf-8")
    return JsonDocumentStore(path)


def test_load_missing_file_raises(tmp_path):
    store = JsonDocumentStore(tmp_path / "missing.json")
    with pytest.raises(StoreUnavailableError):
        store.load()
    with pytest.raises(StoreUnavailableError):
        store.check()


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreUnavailableError):
        JsonDocumentStore(path).load()


def test_load_rejects_non_object_document(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(StoreUnavailableError):
        JsonDocumentStore(path).read()


def test_transaction_writes_whole_document(store):
    with store.transaction() as db:
        db["posts"].append({"id": "1", "title": "Olá"})

    raw = store.path.read_text(encoding="utf-8")
    assert "Olá" in raw  # ensure_ascii=False
    assert store.load()["posts"] == [{"id": "1", "title": "Olá"}]
    assert list(store.path.parent.glob("*.tmp")) == []


def test_transaction_skips_write_on_exception(store):
    before = store.path.read_text(encoding="utf-8")
    with pytest.raises(RuntimeError):
        with store.transaction() as db:
            db["posts"].append({"id": "x"})
            raise RuntimeError("boom")
    assert store.path.read_text(encoding="utf-8") == before


def test_initialize_does_not_overwrite(store, tmp_path):
    with store.transaction() as db:
        db["hero"] = {"title": "keep"}
    assert store.initialize() is False
    assert store.load()["hero"] == {"title": "keep"}

    fresh = JsonDocumentStore(tmp_path / "nested" / "db.json")
    assert fresh.initialize() is True
    assert fresh.load() == default_document()


def test_concurrent_transactions_do_not_lose_updates(store):
    def worker(n: int) -> None:
        for i in range(10):
            with store.transaction() as db:
                db["metrics"].append({"id": f"{n}-{i}"})

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store.load()["metrics"]) == 50


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_save_keeps_existing_file_mode(store):
    os.chmod(store.path, 0o664)

    with store.transaction() as db:
        db["hero"] = {"title": "x"}

    assert stat.S_IMODE(store.path.stat().st_mode) == 0o664


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_new_file_is_not_private(tmp_path):
    store = JsonDocumentStore(tmp_path / "fresh.json")
    store.initialize()
    assert stat.S_IMODE(store.path.stat().st_mode) == 0o644
