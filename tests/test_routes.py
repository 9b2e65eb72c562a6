import json

import pytest
from fastapi.testclient import TestClient

from conftest import SCRAMBLED_ROOMS, WALKTHROUGH_ROOMS, make_request, make_response
from listing_worker.main import app


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("WORKER_SHARED_SECRET", raising=False)
    monkeypatch.setenv("ENVIRONMENT", "development")
    with TestClient(app) as c:
        yield c


def _body(payload, asset_count=7):
    return {
        "request": make_request(asset_count).model_dump(mode="json"),
        "response": payload,
    }


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_validate_repairs_scrambled_order(client):
    resp = client.post("/storyboard/validate", json=_body(make_response(SCRAMBLED_ROOMS)))

    assert resp.status_code == 200
    data = resp.json()
    assert data["report"]["resequenced"] is True
    assert data["report"]["room_sequence"] == WALKTHROUGH_ROOMS
    assert [s["scene_order"] for s in data["storyboard"]["scenes"]] == list(range(1, 8))


def test_validate_accepts_json_text(client):
    raw = json.dumps(make_response(WALKTHROUGH_ROOMS))
    resp = client.post("/storyboard/validate", json=_body(raw))
    assert resp.status_code == 200
    assert resp.json()["report"]["resequenced"] is False


def test_validate_rejects_malformed_output(client):
    payload = make_response(WALKTHROUGH_ROOMS)
    payload["scenes"][0]["scene_order"] = -1

    resp = client.post("/storyboard/validate", json=_body(payload))

    assert resp.status_code == 422
    assert "schema" in resp.json()["detail"]["error"]


def test_validate_rejects_overlong_integer(client):
    raw = json.dumps(make_response(WALKTHROUGH_ROOMS)).replace(
        '"scene_order": 1,', '"scene_order": ' + "9" * 5000 + ",", 1
    )
    resp = client.post("/storyboard/validate", json=_body(raw))

    assert resp.status_code == 422
    assert client.get("/metrics").json()["counters"]["errors.malformed_response"] == 1


def test_validate_rejects_unknown_asset(client):
    payload = make_response(WALKTHROUGH_ROOMS)
    payload["scenes"][0]["asset_id"] = "ghost"

    resp = client.post("/storyboard/validate", json=_body(payload))

    assert resp.status_code == 422
    assert resp.json()["detail"]["errors"] == [{"type": "unknown_asset", "asset_id": "ghost"}]


def test_cut_length(client):
    resp = client.get("/storyboard/cut-length", params={"photo_count": 18})
    assert resp.json() == {
        "photo_count": 18,
        "cut_length": "medium",
        "explicit": False,
        "scene_range": {"min": 15, "max": 20},
    }

    resp = client.get("/storyboard/cut-length", params={"photo_count": 25, "cut_length": "short"})
    assert resp.json()["scene_range"] == {"min": 10, "max": 14}
    assert resp.json()["explicit"] is True


def test_cut_length_rejects_negative_count(client):
    resp = client.get("/storyboard/cut-length", params={"photo_count": -1})
    assert resp.status_code == 422


def test_taxonomy(client):
    data = client.get("/storyboard/taxonomy").json()
    assert data["fallback_priority"] == 50
    assert data["rooms"][0] == {"room_type": "aerial", "priority": 1, "motion_template": "pan_left"}
    assert [r["priority"] for r in data["rooms"]] == sorted(r["priority"] for r in data["rooms"])


def test_priority_lookup(client):
    resp = client.post("/storyboard/priority", json={"labels": ["Living Room", "wine cellar"]})
    assert resp.json() == [
        {"label": "Living Room", "normalized": "living_room", "room_type": "living_room", "priority": 7},
        {"label": "wine cellar", "normalized": "wine_cellar", "room_type": "unknown", "priority": 50},
    ]


def test_metrics_counts_validations(client):
    client.post("/storyboard/validate", json=_body(make_response(SCRAMBLED_ROOMS)))
    snapshot = client.get("/metrics").json()
    assert snapshot["counters"]["storyboard.resequenced"] == 1
    assert snapshot["resequence_rate"] == 100.0


# ── Worker secret ────────────────────────────────────────────────────────────

def test_secret_required_when_configured(client, monkeypatch):
    monkeypatch.setenv("WORKER_SHARED_SECRET", "s3cret")

    assert client.get("/storyboard/taxonomy").status_code == 401
    assert client.get(
        "/storyboard/taxonomy", headers={"X-Worker-Secret": "wrong"}
    ).status_code == 401
    assert client.get(
        "/storyboard/taxonomy", headers={"X-Worker-Secret": "s3cret"}
    ).status_code == 200
    assert client.get("/health").status_code == 200


def test_missing_secret_outside_development(client, monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert client.get("/storyboard/taxonomy").status_code == 500
