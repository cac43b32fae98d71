# toy_robot/storage/local.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — In-process storage adapter
------------------------------------------------
Runs the StoragePort directly against a HistoryStore, with no HTTP in
between. Used by `toy-robot-console --local` and by tests.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from toy_robot.models.robot_model import HistoryRecord, RobotState
from toy_robot.runtime_state import HistoryStore
from toy_robot.storage.base import StorageError, StoragePort

logger = logging.getLogger(__name__)


class LocalStorage(StoragePort):
    """StoragePort over a HistoryStore living in the same process."""

    def __init__(self, store: HistoryStore) -> None:
        self.store = store

    async def fetch_current(self) -> Optional[RobotState]:
        record = self.store.latest()
        return record.to_state() if record is not None else None

    async def save_state(self, state: RobotState) -> HistoryRecord:
        try:
            return self.store.append(state)
        except OSError as exc:
            logger.error("LocalStorage: failed to append to %s: %s", self.store.path, exc)
            raise StorageError("Failed to save robot state") from exc

    async def fetch_history(self) -> List[HistoryRecord]:
        return self.store.history()
