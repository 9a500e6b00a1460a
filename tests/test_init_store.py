from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

# Make the cms package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cms.repositories.json_storage import JsonDocumentStore  # noqa: E402
from cms.services.auth_service import AuthService  # noqa: E402


def _load_script():
    spec = importlib.util.spec_from_file_location("init_store", ROOT / "scripts" / "init_store.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_init_store_creates_document_with_hashed_admin(tmp_path):
    target = tmp_path / "server" / "database.json"
    _load_script().main(["--data-file", str(target), "--username", "owner", "--password", "pw"])

    store = JsonDocumentStore(target)
    doc = store.load()
    assert doc["posts"] == [] and doc["hero"] == {}
    assert doc["admin"]["username"] == "owner"
    assert doc["admin"]["password"] != "pw"
    assert AuthService(store).login("owner", "pw") is True


def test_init_store_keeps_existing_content(tmp_path):
    target = tmp_path / "database.json"
    store = JsonDocumentStore(target)
    store.initialize()
    with store.transaction() as db:
        db["posts"].append({"id": "1", "title": "Keep"})

    _load_script().main(["--data-file", str(target), "--password", "pw"])

    assert store.load()["posts"] == [{"id": "1", "title": "Keep"}]
    assert AuthService(store).login("admin", "pw") is True
