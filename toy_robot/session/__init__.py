"""
Robot session package.

    from toy_robot.session import RobotSessionController

    session = RobotSessionController(HttpStorage())
    await session.initialize()
    session.place(2, 3)
    session.move()
"""

from .controller import (
    OUT_OF_BOUNDS_ERROR,
    SAVE_FAILED_ERROR,
    RobotSessionController,
)

__all__ = [
    "OUT_OF_BOUNDS_ERROR",
    "SAVE_FAILED_ERROR",
    "RobotSessionController",
]
