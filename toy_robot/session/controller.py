# toy_robot/session/controller.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Robot Session Controller
----------------------------------------------

Holds the one robot of a session and runs the PLACE / MOVE / LEFT / RIGHT /
REPORT commands against the grid model.

Behaviour
~~~~~~~~~
- State changes happen synchronously inside the command call; observers see
  the new RobotState as soon as the call returns.
- Each accepted mutation then schedules a save on the running event loop and
  returns the task. Nobody has to await it: the in-memory state is
  authoritative and is never rolled back. A failed save only sets
  `last_error`.
- PLACE off the table sets "Position is out of bounds". MOVE off the table is
  ignored without an error.
- Every failure stops here; nothing raised by storage reaches the caller.

One controller is one session. Build as many as you like (tests do); they
share nothing.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

from toy_robot.core import grid
from toy_robot.models.robot_model import (
    Direction,
    HistoryRecord,
    RobotState,
    SessionSnapshot,
)
from toy_robot.storage.base import StoragePort

logger = logging.getLogger(__name__)

OUT_OF_BOUNDS_ERROR = "Position is out of bounds"
SAVE_FAILED_ERROR = "Error saving robot state"
HISTORY_FAILED_ERROR = "Error fetching robot history"
NO_LOOP_ERROR = "Robot state not saved: no running event loop"

PLACEMENT_DIRECTION = Direction.NORTH


class RobotSessionController:
    """
    Session state container for a single robot.

    Parameters
    ----------
    storage:
        Where accepted states are logged and where `initialize()` recovers
        the last one from.
    """

    def __init__(self, storage: StoragePort) -> None:
        self.storage = storage

        self._robot: Optional[RobotState] = None
        self._last_error: str = ""
        self._last_report: str = ""

        self._initialized = False
        self._pending_saves: Set["asyncio.Task[None]"] = set()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def robot(self) -> Optional[RobotState]:
        return self._robot

    @property
    def last_error(self) -> str:
        return self._last_error

    @property
    def last_report(self) -> str:
        return self._last_report

    @property
    def pending_saves(self) -> int:
        return len(self._pending_saves)

    def snapshot(self) -> SessionSnapshot:
        """Immutable view of the session for rendering."""
        return SessionSnapshot(
            robot=self._robot,
            last_error=self._last_error,
            last_report=self._last_report,
        )

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """
        Recover the last saved robot, once per controller.

        Later calls (including ones made while the first is still running)
        return immediately. A failed fetch is logged and otherwise ignored:
        there may simply be nothing to recover. A robot placed while the fetch
        was in flight wins over the recovered one.
        """
        if self._initialized:
            return
        self._initialized = True

        try:
            current = await self.storage.fetch_current()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Initial robot fetch failed: %s", exc)
            return

        if current is not None and self._robot is not None:
            logger.info(
                "Ignoring recovered robot %s; session already placed at %s",
                grid.format_report(current),
                grid.format_report(self._robot),
            )
        elif current is not None:
            self._robot = current
            logger.info(
                "Recovered robot at %s",
                grid.format_report(current),
            )
            self._last_error = ""

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place(self, x: int, y: int) -> "Optional[asyncio.Task[None]]":
        """Put the robot at (x, y) facing NORTH."""
        if not grid.is_valid_position(x, y):
            logger.info("PLACE %d,%d rejected: out of bounds", x, y)
            self._last_error = OUT_OF_BOUNDS_ERROR
            return None

        return self._commit(RobotState(x=x, y=y, direction=PLACEMENT_DIRECTION))

    def move(self) -> "Optional[asyncio.Task[None]]":
        """One step forward; ignored when unplaced or when it would leave the table."""
        if self._robot is None:
            return None

        target = grid.next_position(self._robot.position, self._robot.direction)
        if not grid.is_valid_position(target.x, target.y):
            logger.debug("MOVE to %d,%d ignored: off the table", target.x, target.y)
            return None

        return self._commit(self._robot.with_position(target))

    def turn_left(self) -> "Optional[asyncio.Task[None]]":
        if self._robot is None:
            return None
        return self._commit(self._robot.with_direction(grid.turn_left(self._robot.direction)))

    def turn_right(self) -> "Optional[asyncio.Task[None]]":
        if self._robot is None:
            return None
        return self._commit(self._robot.with_direction(grid.turn_right(self._robot.direction)))

    def report(self) -> str:
        """Set and return `last_report`; no-op (returns "") when unplaced."""
        if self._robot is None:
            return ""
        self._last_report = grid.format_report(self._robot)
        return self._last_report

    def clear_report(self) -> None:
        self._last_report = ""

    def clear_error(self) -> None:
        self._last_error = ""

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def load_history(self) -> List[HistoryRecord]:
        """
        Stored history, newest first.

        Like a save, success clears `last_error`; failure sets it and
        returns [].
        """
        try:
            records = await self.storage.fetch_history()
        except Exception as exc:  # noqa: BLE001
            logger.error("Fetching history failed: %s", exc)
            self._last_error = str(exc) or HISTORY_FAILED_ERROR
            return []

        self._last_error = ""
        return records

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _commit(self, state: RobotState) -> "Optional[asyncio.Task[None]]":
        """
        Adopt `state`, then schedule its save. The order matters.

        Without a running event loop the state is still adopted, but no save
        is scheduled and `last_error` says so.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        self._robot = state
        self._last_report = ""

        if loop is None:
            logger.warning("No running event loop; %s not saved", grid.format_report(state))
            self._last_error = NO_LOOP_ERROR
            return None

        task = loop.create_task(self._save(state))
        self._pending_saves.add(task)
        task.add_done_callback(self._pending_saves.discard)
        return task

    async def _save(self, state: RobotState) -> None:
        try:
            record = await self.storage.save_state(state)
        except Exception as exc:  # noqa: BLE001
            logger.error("Saving robot state %s failed: %s", grid.format_report(state), exc)
            self._last_error = str(exc) or SAVE_FAILED_ERROR
            return

        logger.debug("Saved robot state as record #%d", record.id)
        self._last_error = ""

    async def wait_for_saves(self) -> None:
        """Wait until every save scheduled so far has finished."""
        while self._pending_saves:
            await asyncio.gather(*list(self._pending_saves))
