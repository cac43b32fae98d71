"""pydantic models shared by the server, the storage adapters and the session."""

from .robot_model import (  # noqa: F401
    GRID_MAX,
    GRID_MIN,
    Direction,
    HistoryRecord,
    Position,
    RobotState,
    SessionSnapshot,
)
