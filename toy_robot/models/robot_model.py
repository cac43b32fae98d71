# toy_robot/models/robot_model.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Robot State Models
----------------------------------------
Value types for the robot on its 5x5 table.

Grid coordinates:
- x: 0-4, left to right
- y: 0-4, bottom to top
- (0, 0) is the bottom-left cell

Usage
-----
- The session controller replaces a RobotState on every accepted PLACE /
  MOVE / LEFT / RIGHT; instances are frozen, so nobody can edit one in place.
- POST /robot/move validates its body as a RobotState (bounds + direction).
- The history log hands back HistoryRecord values: the state plus the
  identifier and timestamp assigned when it was appended.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

GRID_MIN: int = 0
GRID_MAX: int = 4


class Direction(str, Enum):
    """Cardinal direction the robot is facing."""

    NORTH = "NORTH"    # +y
    SOUTH = "SOUTH"    # -y
    EAST = "EAST"      # +x
    WEST = "WEST"      # -x


class Position(BaseModel):
    """
    A cell coordinate that has NOT been bounds-checked.

    next_position() returns these; callers check them with
    is_valid_position() before building a RobotState.
    """

    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class RobotState(BaseModel):
    """
    Position and facing of a placed robot.

    x and y are validated to the grid, so any instance that exists is on the
    table.
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=GRID_MIN, le=GRID_MAX, description="Column, 0 (left) to 4 (right).")
    y: int = Field(ge=GRID_MIN, le=GRID_MAX, description="Row, 0 (bottom) to 4 (top).")
    direction: Direction = Field(description="NORTH, SOUTH, EAST or WEST.")

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)

    def with_position(self, position: Position) -> "RobotState":
        """New state at `position`, same direction. Raises if off the grid."""
        return RobotState(x=position.x, y=position.y, direction=self.direction)

    def with_direction(self, direction: Direction) -> "RobotState":
        """New state facing `direction`, same cell."""
        return RobotState(x=self.x, y=self.y, direction=direction)

    def to_payload(self) -> Dict[str, Any]:
        """Body of POST /robot/move: exactly {x, y, direction}."""
        return {"x": self.x, "y": self.y, "direction": self.direction.value}


class HistoryRecord(RobotState):
    """
    A RobotState as stored in the history log.

    `id` is assigned by the log (strictly increasing); `created_at` is the
    UTC time of the append. On the wire the timestamp is `createdAt`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(ge=1, description="Auto-incrementing record identifier.")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="When this record was appended (UTC).",
    )

    def to_state(self) -> RobotState:
        """Drop the bookkeeping and return the plain RobotState."""
        return RobotState(x=self.x, y=self.y, direction=self.direction)

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-ready dict in wire format (camelCase timestamp, enum values)."""
        return self.model_dump(mode="json", by_alias=True)


class SessionSnapshot(BaseModel):
    """What a rendering layer gets to see of a session."""

    model_config = ConfigDict(frozen=True)

    robot: Optional[RobotState] = None
    last_error: str = ""
    last_report: str = ""

    @property
    def is_placed(self) -> bool:
        return self.robot is not None
