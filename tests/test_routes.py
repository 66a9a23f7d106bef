"""Tests for the HTTP surface."""
import pytest
from fastapi.testclient import TestClient

from formfiler.database import get_storage
from formfiler.main import app
from formfiler.services.notifier import get_notifier

PAYLOAD = {
    "response_id": "resp_7",
    "submitted_at": "2025-07-10T13:30:00Z",
    "items": [
        {"question_title": "Last Name", "kind": "TEXT", "answer": "Doe"},
        {"question_title": "Vendor", "kind": "TEXT", "answer": "Acme"},
        {"question_title": "Colors", "kind": "CHECKBOX", "answer": ["Red", "Blue"]},
        {"question_title": "Upload Quote", "kind": "FILE_UPLOAD", "answer": ["u/1"]},
    ],
}


@pytest.fixture
def client(storage, notifier):
    storage.files = {"u/1": "quote - Jane Doe.pdf"}
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_submission_is_filed(client, storage, notifier):
    response = client.post("/api/submissions", json=PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "succeeded"
    assert body["folder_name"].endswith("_PENDING_Doe_Acme_Red, Blue")
    assert body["outcomes"][0]["status"] == "moved"
    assert body["outcomes"][0]["final_name"] == "N-A - Acme - Doe - Upload Quote.pdf"
    assert len(notifier.sent) == 1


def test_fatal_run_still_answers_200(client, storage, notifier):
    storage.fail_create = True

    response = client.post("/api/submissions", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json()["status"] == "fatal"
    assert response.json()["admin_notified"] is True


def test_unknown_item_kind_is_rejected(client):
    payload = {"items": [{"question_title": "Grid", "kind": "GRID", "answer": "x"}]}
    assert client.post("/api/submissions", json=payload).status_code == 422


def test_webhook_secret_is_enforced(client, monkeypatch):
    monkeypatch.setenv("WEBHOOK_SECRET", "s3cret")

    assert client.post("/api/submissions", json=PAYLOAD).status_code == 401
    assert client.post("/api/submissions", json=PAYLOAD, headers={"X-Webhook-Secret": "wrong"}).status_code == 401
    ok = client.post("/api/submissions", json=PAYLOAD, headers={"X-Webhook-Secret": "s3cret"})
    assert ok.status_code == 200


def test_reclassify_endpoint(client, storage):
    storage.list_containers = lambda parent_id: []

    response = client.post("/api/folders/reclassify")

    assert response.status_code == 200
    assert response.json() == {"moved": [], "already_sorted": 0, "failed": []}


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
    assert response.json()["scheduler"] == "stopped"
