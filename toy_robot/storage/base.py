# toy_robot/storage/base.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Storage port
----------------------------------
The interface the session controller uses to log and recover robot state.

Adapters:
- storage.local.LocalStorage : in-process, wraps a HistoryStore
- storage.http.HttpStorage   : talks to the /robot HTTP API

Absence is always `None` by the time it reaches the controller; wire
conventions such as an empty JSON object stay inside the adapter.
"""

from __future__ import annotations

import abc
from typing import List, Optional

from toy_robot.models.robot_model import HistoryRecord, RobotState


class StorageError(Exception):
    """
    Raised by storage adapters when a call fails.

    The message is meant for humans: the controller shows it as-is.
    """


class StoragePort(abc.ABC):
    """Persistence collaborator for one robot session."""

    @abc.abstractmethod
    async def fetch_current(self) -> Optional[RobotState]:
        """Most recently saved state, or None if nothing was ever saved."""

    @abc.abstractmethod
    async def save_state(self, state: RobotState) -> HistoryRecord:
        """Append {x, y, direction} to the history and return the stored record."""

    @abc.abstractmethod
    async def fetch_history(self) -> List[HistoryRecord]:
        """Every stored record, newest first."""
