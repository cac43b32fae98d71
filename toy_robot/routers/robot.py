# toy_robot/routers/robot.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — /robot router
-----------------------------------
HTTP endpoints behind HttpStorage. The server does no robot logic: clients
decide which moves are legal and this API only keeps the history.

Endpoints
---------
POST /robot/move
    - Body: {"x": 0-4, "y": 0-4, "direction": "NORTH"|"SOUTH"|"EAST"|"WEST"}
    - Effect: append a history record
    - Response: the stored record (with id + createdAt)

GET /robot/current
    - Response: latest record, or {} when nothing is stored yet.
    - Clients use this to restore the robot after a restart / page refresh.

GET /robot/history?limit=&offset=
    - Response: records ordered by id, newest first.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from toy_robot.core.config import settings
from toy_robot.models.robot_model import HistoryRecord, RobotState
from toy_robot.runtime_state import HistoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/robot", tags=["robot"])


def get_history_store(request: Request) -> HistoryStore:
    """Dependency: the HistoryStore created by create_app()."""
    return request.app.state.history_store


# ---------------------------------------------------------------------------
# /robot/move — save one state
# ---------------------------------------------------------------------------


@router.post("/move", response_model=HistoryRecord, status_code=200)
async def save_robot_state(
    state: RobotState,
    store: HistoryStore = Depends(get_history_store),
) -> HistoryRecord:
    """
    Append a robot state to the history.

    Typical call after the client turned the robot:
        POST /robot/move
        {"x": 2, "y": 3, "direction": "WEST"}

    Bounds and direction are validated by RobotState before we get here;
    rejected bodies come back as 400 with a message list.
    """
    try:
        record = store.append(state)
    except OSError as exc:
        raise HTTPException(
            status_code=500,
            detail="Failed to save robot state",
        ) from exc

    logger.debug("robot router: saved #%d %s", record.id, record.to_payload())
    return record


# ---------------------------------------------------------------------------
# /robot/current — restore after refresh
# ---------------------------------------------------------------------------


@router.get("/current")
async def get_current_robot(
    store: HistoryStore = Depends(get_history_store),
) -> Dict[str, Any]:
    """
    Return the most recent record, or an empty object when there is none.

        {"id": 7, "x": 1, "y": 1, "direction": "EAST", "createdAt": "..."}
    """
    record = store.latest()
    if record is None:
        return {}
    return record.to_json_dict()


# ---------------------------------------------------------------------------
# /robot/history — full log
# ---------------------------------------------------------------------------


@router.get("/history", response_model=List[HistoryRecord])
async def get_robot_history(
    limit: Optional[int] = Query(default=None, ge=1, le=settings.history_max_limit),
    offset: int = Query(default=0, ge=0),
    store: HistoryStore = Depends(get_history_store),
) -> List[HistoryRecord]:
    """Every saved state (or a page of them), newest first."""
    return store.history(limit=limit, offset=offset)
