from __future__ import annotations

import sys
from pathlib import Path

# Ensure the repo root is on PYTHONPATH so `import toy_robot` works in tests
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import List, Optional

import pytest

from toy_robot.models.robot_model import HistoryRecord, RobotState
from toy_robot.runtime_state import HistoryStore
from toy_robot.storage import StoragePort


class FakeStorage(StoragePort):
    """Records every call; can be told to fail."""

    def __init__(
        self,
        current: Optional[RobotState] = None,
        fail_fetch: Optional[Exception] = None,
        fail_save: Optional[Exception] = None,
    ) -> None:
        self.current = current
        self.saved: List[RobotState] = []
        self.fetch_calls = 0
        self.fail_fetch = fail_fetch
        self.fail_save = fail_save

    async def fetch_current(self) -> Optional[RobotState]:
        self.fetch_calls += 1
        if self.fail_fetch is not None:
            raise self.fail_fetch
        return self.current

    async def save_state(self, state: RobotState) -> HistoryRecord:
        if self.fail_save is not None:
            raise self.fail_save
        self.saved.append(state)
        return HistoryRecord(id=len(self.saved), x=state.x, y=state.y, direction=state.direction)

    async def fetch_history(self) -> List[HistoryRecord]:
        if self.fail_fetch is not None:
            raise self.fail_fetch
        return [
            HistoryRecord(id=i + 1, x=s.x, y=s.y, direction=s.direction)
            for i, s in reversed(list(enumerate(self.saved)))
        ]


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "robot_history.json"


@pytest.fixture
def history_store(history_path) -> HistoryStore:
    return HistoryStore(history_path)
