"""
Runtime state package for the toy robot server.

Holds the append-only history log that backs GET /robot/current and
GET /robot/history. The store is created by the application factory
(toy_robot.main.create_app) and hung on `app.state.history_store`:

    from toy_robot.runtime_state import HistoryStore

    store = HistoryStore(settings.history_path)
    record = store.append(RobotState(x=0, y=0, direction=Direction.NORTH))
    current = store.latest()
"""

from .history import (
    HistoryDocument,
    HistoryStore,
)

__all__ = [
    "HistoryDocument",
    "HistoryStore",
]
