from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

# Make the cms package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cms.repositories.json_storage import JsonDocumentStore, StoreError, default_document  # noqa: E402
from cms.services.contact_service import ContactService  # noqa: E402
from cms.services.resource_service import ResourceService  # noqa: E402


class RecordingNotifier:
    def __init__(self, result: bool = True) -> None:
        self.calls = []
        self.result = result

    def __call__(self, subject, to_email, html_body, text_body=None):
        self.calls.append((subject, to_email, html_body))
        return self.result


@pytest.fixture()
def store(tmp_path):
    path = tmp_path / "database.json"
    path.write_text(json.dumps(default_document()), encoding="utf-8")
    return JsonDocumentStore(path)


def test_missing_phone_and_company_default_to_placeholder(store):
    svc = ContactService(ResourceService(store), notifier=RecordingNotifier())

    record = svc.submit({"name": "Ana", "email": "ana@example.com", "phone": "", "message": "Hi"})

    assert record["phone"] == "N/A"
    assert record["company"] == "N/A"
    assert record["id"] and record["created_at"]
    assert store.load()["messages"] == [record]


def test_present_values_are_stored_verbatim(store):
    svc = ContactService(ResourceService(store), notifier=RecordingNotifier())

    record = svc.submit(
        {"name": "Bo", "email": "bo@example.com", "phone": "+1 555", "company": "Acme", "message": "Quote?"}
    )

    stored = store.load()["messages"][0]
    assert stored == record
    assert stored["phone"] == "+1 555"
    assert stored["company"] == "Acme"
    assert stored["message"] == "Quote?"


def test_notify_renders_template_for_recipient(store):
    notifier = RecordingNotifier()
    svc = ContactService(ResourceService(store), recipient="owner@example.com", notifier=notifier)
    record = svc.submit({"name": "Ana <b>", "email": "ana@example.com", "message": "line1\nline2"})

    assert svc.notify(record) is True

    subject, to_email, html_body = notifier.calls[0]
    assert subject == "New Lead: Ana <b> from N/A"
    assert to_email == "owner@example.com"
    assert "Ana &lt;b&gt;" in html_body
    assert "ana@example.com" in html_body
    assert "line1\nline2" in html_body


def test_notify_failure_is_swallowed_and_keeps_record(store):
    def broken(*args, **kwargs):
        raise ConnectionError("smtp down")

    svc = ContactService(ResourceService(store), notifier=broken)
    record = svc.submit({"name": "Ana", "email": "ana@example.com", "message": "Hi"})

    assert svc.notify(record) is False
    assert store.load()["messages"] == [record]


def test_notify_reports_unsent_email(store):
    svc = ContactService(ResourceService(store), notifier=RecordingNotifier(result=False))
    record = svc.submit({"name": "Ana", "email": "ana@example.com", "message": "Hi"})
    assert svc.notify(record) is False


def test_store_failure_propagates(tmp_path):
    store = JsonDocumentStore(tmp_path / "missing.json")
    svc = ContactService(ResourceService(store), notifier=RecordingNotifier())
    with pytest.raises(StoreError):
        svc.submit({"name": "Ana", "email": "ana@example.com", "message": "Hi"})


def test_whitespace_values_are_not_replaced(store):
    svc = ContactService(ResourceService(store), notifier=RecordingNotifier())

    record = svc.submit({"name": "Ana", "email": "ana@example.com", "phone": " ", "company": "  ", "message": "Hi"})

    assert record["phone"] == " "
    assert record["company"] == "  "
    assert store.load()["messages"][0]["phone"] == " "
