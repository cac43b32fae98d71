from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import pytest
import requests

from toy_robot.models.robot_model import Direction, RobotState
from toy_robot.storage import HttpStorage, StorageError
from toy_robot.storage import http as http_storage

RECORD = {"id": 3, "x": 2, "y": 3, "direction": "NORTH", "createdAt": "2025-01-01T00:00:00Z"}


class FakeResponse:
    def __init__(self, status_code: int, data: Any = None, raise_on_json: bool = False) -> None:
        self.status_code = status_code
        self._data = data
        self._raise_on_json = raise_on_json

    def json(self) -> Any:
        if self._raise_on_json:
            raise ValueError("not json")
        return self._data


@pytest.fixture
def calls() -> List[Dict[str, Any]]:
    return []


def _patch(monkeypatch, calls, method: str, response: Any) -> None:
    def fake(url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(http_storage.requests, method, fake)


def test_fetch_current_translates_empty_object_to_none(monkeypatch, calls):
    _patch(monkeypatch, calls, "get", FakeResponse(200, {}))
    storage = HttpStorage(base_url="http://robot.test/", timeout_s=1.5)

    assert asyncio.run(storage.fetch_current()) is None
    assert calls[0]["url"] == "http://robot.test/robot/current"
    assert calls[0]["timeout"] == 1.5


def test_fetch_current_returns_state(monkeypatch, calls):
    _patch(monkeypatch, calls, "get", FakeResponse(200, RECORD))
    state = asyncio.run(HttpStorage(base_url="http://robot.test").fetch_current())
    assert state == RobotState(x=2, y=3, direction=Direction.NORTH)


def test_fetch_current_failure(monkeypatch, calls):
    _patch(monkeypatch, calls, "get", requests.ConnectionError("refused"))
    with pytest.raises(StorageError, match="Failed to fetch current robot state"):
        asyncio.run(HttpStorage(base_url="http://robot.test").fetch_current())


def test_save_state_posts_exact_body(monkeypatch, calls):
    _patch(monkeypatch, calls, "post", FakeResponse(200, RECORD))
    record = asyncio.run(
        HttpStorage(base_url="http://robot.test").save_state(
            RobotState(x=2, y=3, direction=Direction.NORTH)
        )
    )

    assert calls[0]["url"] == "http://robot.test/robot/move"
    assert calls[0]["json"] == {"x": 2, "y": 3, "direction": "NORTH"}
    assert record.id == 3


def test_save_state_surfaces_server_message(monkeypatch, calls):
    response = FakeResponse(400, {"statusCode": 400, "message": ["x: too big", "y: too big"]})
    _patch(monkeypatch, calls, "post", response)

    with pytest.raises(StorageError) as excinfo:
        asyncio.run(
            HttpStorage(base_url="http://robot.test").save_state(
                RobotState(x=0, y=0, direction=Direction.NORTH)
            )
        )
    assert str(excinfo.value) == "x: too big; y: too big"


def test_save_state_falls_back_to_generic_message(monkeypatch, calls):
    _patch(monkeypatch, calls, "post", FakeResponse(502, raise_on_json=True))

    with pytest.raises(StorageError, match="Failed to save robot state"):
        asyncio.run(
            HttpStorage(base_url="http://robot.test").save_state(
                RobotState(x=0, y=0, direction=Direction.NORTH)
            )
        )


def test_fetch_history(monkeypatch, calls):
    older = dict(RECORD, id=2, y=2)
    _patch(monkeypatch, calls, "get", FakeResponse(200, [RECORD, older]))

    records = asyncio.run(HttpStorage(base_url="http://robot.test").fetch_history())
    assert [r.id for r in records] == [3, 2]
    assert calls[0]["url"] == "http://robot.test/robot/history"


def test_fetch_history_failure(monkeypatch, calls):
    _patch(monkeypatch, calls, "get", FakeResponse(500, {"detail": "boom"}))
    with pytest.raises(StorageError, match="Failed to fetch robot history"):
        asyncio.run(HttpStorage(base_url="http://robot.test").fetch_history())
