# toy_robot/core/grid.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Grid model
--------------------------------
Pure functions over the value types in toy_robot.models: bounds checking,
one-step movement, rotation and the REPORT text format.

No I/O and no state. Rotation and movement are lookup tables so the
four-step cycles are visible in the data itself.
"""

from __future__ import annotations

from typing import Dict, Tuple

from toy_robot.models.robot_model import (
    GRID_MAX,
    GRID_MIN,
    Direction,
    Position,
    RobotState,
)

GRID_SIZE: int = GRID_MAX - GRID_MIN + 1

# Counter-clockwise and clockwise quarter turns, starting from NORTH.
LEFT_TURN_ORDER: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.WEST,
    Direction.SOUTH,
    Direction.EAST,
)
RIGHT_TURN_ORDER: Tuple[Direction, ...] = (
    Direction.NORTH,
    Direction.EAST,
    Direction.SOUTH,
    Direction.WEST,
)

MOVE_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

REPORT_SEPARATOR = ","


def is_valid_position(x: int, y: int) -> bool:
    """True iff (x, y) lies on the 5x5 table, both bounds inclusive."""
    return GRID_MIN <= x <= GRID_MAX and GRID_MIN <= y <= GRID_MAX


def next_position(position: Position, direction: Direction) -> Position:
    """
    The cell one step ahead of `position` when facing `direction`.

    Not bounds-checked: the result may be off the table.
    """
    dx, dy = MOVE_OFFSETS[direction]
    return Position(x=position.x + dx, y=position.y + dy)


def _step(order: Tuple[Direction, ...], direction: Direction) -> Direction:
    return order[(order.index(direction) + 1) % len(order)]


def turn_left(direction: Direction) -> Direction:
    """Quarter turn counter-clockwise: NORTH -> WEST -> SOUTH -> EAST -> NORTH."""
    return _step(LEFT_TURN_ORDER, direction)


def turn_right(direction: Direction) -> Direction:
    """Quarter turn clockwise: NORTH -> EAST -> SOUTH -> WEST -> NORTH."""
    return _step(RIGHT_TURN_ORDER, direction)


def format_report(state: RobotState) -> str:
    """Canonical REPORT output, e.g. "2,3,NORTH"."""
    return REPORT_SEPARATOR.join((str(state.x), str(state.y), state.direction.value))


def parse_report(text: str) -> RobotState:
    """
    Read a REPORT string back into a RobotState.

    Exactly three comma-separated fields are required; anything else, an
    unknown direction, or an off-table position raises ValueError.
    """
    parts = text.strip().split(REPORT_SEPARATOR)
    if len(parts) != 3:
        raise ValueError(f"Report must have 3 comma-separated fields, got {len(parts)}: {text!r}")

    raw_x, raw_y, raw_direction = (p.strip() for p in parts)
    try:
        x, y = int(raw_x), int(raw_y)
        direction = Direction(raw_direction)
    except ValueError as exc:
        raise ValueError(f"Malformed report {text!r}: {exc}") from exc

    if not is_valid_position(x, y):
        raise ValueError(f"Report position ({x}, {y}) is off the grid")

    return RobotState(x=x, y=y, direction=direction)
