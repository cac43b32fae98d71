from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from toy_robot.main import create_app
from toy_robot.runtime_state import HistoryStore


@pytest.fixture
def client(history_store: HistoryStore) -> TestClient:
    return TestClient(create_app(store=history_store))


def test_current_is_empty_object_without_robot(client):
    resp = client.get("/robot/current")
    assert resp.status_code == 200
    assert resp.json() == {}


def test_move_saves_state(client):
    resp = client.post("/robot/move", json={"x": 2, "y": 3, "direction": "NORTH"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == 1
    assert (body["x"], body["y"], body["direction"]) == (2, 3, "NORTH")
    assert "createdAt" in body


def test_current_returns_latest(client):
    client.post("/robot/move", json={"x": 1, "y": 1, "direction": "EAST"})
    client.post("/robot/move", json={"x": 2, "y": 1, "direction": "EAST"})

    body = client.get("/robot/current").json()
    assert (body["id"], body["x"], body["y"], body["direction"]) == (2, 2, 1, "EAST")


def test_history_newest_first(client):
    for x in range(3):
        client.post("/robot/move", json={"x": x, "y": 0, "direction": "EAST"})

    records = client.get("/robot/history").json()
    assert [r["id"] for r in records] == [3, 2, 1]
    assert [r["x"] for r in client.get("/robot/history?limit=1&offset=1").json()] == [1]


@pytest.mark.parametrize(
    "body",
    [
        {"x": 5, "y": 0, "direction": "NORTH"},
        {"x": 0, "y": -1, "direction": "NORTH"},
        {"x": 0, "y": 0, "direction": "UP"},
        {"x": 0, "direction": "NORTH"},
    ],
)
def test_move_rejects_invalid_body(client, body):
    resp = client.post("/robot/move", json=body)
    assert resp.status_code == 400
    data = resp.json()
    assert data["statusCode"] == 400
    assert data["error"] == "Bad Request"
    assert data["message"] and all(isinstance(m, str) for m in data["message"])
    assert client.get("/robot/current").json() == {}


def test_history_rejects_bad_limit(client):
    assert client.get("/robot/history?limit=0").status_code == 400


def test_health_counts_records(client):
    client.post("/robot/move", json={"x": 0, "y": 0, "direction": "NORTH"})
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["records"] == 1
