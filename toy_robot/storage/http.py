# toy_robot/storage/http.py
# -*- coding: utf-8 -*-
"""

Toy Robot Simulator — HTTP storage adapter

Client side of the /robot API (see toy_robot.routers.robot):

    GET  /robot/current   -> latest record, or {} when nothing is stored
    POST /robot/move      -> body {x, y, direction}; returns the stored record
    GET  /robot/history   -> records, newest first

`requests` is blocking, so every call is pushed onto a worker thread with
asyncio.to_thread and the event loop keeps running while it waits.

"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from toy_robot.core.config import settings
from toy_robot.models.robot_model import HistoryRecord, RobotState
from toy_robot.storage.base import StorageError, StoragePort
from toy_robot.utils import Stopwatch

logger = logging.getLogger(__name__)

FETCH_CURRENT_FAILED = "Failed to fetch current robot state"
SAVE_FAILED = "Failed to save robot state"
FETCH_HISTORY_FAILED = "Failed to fetch robot history"


def extract_error_message(resp: requests.Response) -> Optional[str]:
    """
    Pull a human-readable message out of an error response, if there is one.

    Understands {"message": "..."}, {"message": ["...", "..."]} and
    FastAPI's {"detail": "..."}.
    """
    try:
        data = resp.json()
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    message = data.get("message", data.get("detail"))
    if isinstance(message, str) and message.strip():
        return message.strip()
    if isinstance(message, list):
        parts = [str(m) for m in message if isinstance(m, str) and m.strip()]
        if parts:
            return "; ".join(parts)
    return None


class HttpStorage(StoragePort):
    """
    StoragePort backed by the robot history HTTP API.

    Parameters
    ----------
    base_url:
        Server root, e.g. "http://localhost:3000". Defaults to
        settings.api_base_url.
    timeout_s:
        Per-request timeout. Defaults to settings.request_timeout_s.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.request_timeout_s

    # ------------------------------------------------------------------
    # StoragePort
    # ------------------------------------------------------------------

    async def fetch_current(self) -> Optional[RobotState]:
        return await asyncio.to_thread(self._fetch_current_sync)

    async def save_state(self, state: RobotState) -> HistoryRecord:
        return await asyncio.to_thread(self._save_state_sync, state)

    async def fetch_history(self) -> List[HistoryRecord]:
        return await asyncio.to_thread(self._fetch_history_sync)

    # ------------------------------------------------------------------
    # Blocking implementations
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _fetch_current_sync(self) -> Optional[RobotState]:
        try:
            with Stopwatch("GET /robot/current", logger, logging.DEBUG):
                resp = requests.get(self._url("/robot/current"), timeout=self.timeout_s)
        except requests.RequestException as exc:
            logger.error("HttpStorage: error fetching current robot: %s", exc)
            raise StorageError(FETCH_CURRENT_FAILED) from exc

        if resp.status_code != 200:
            logger.error("HttpStorage: GET /robot/current -> HTTP %s", resp.status_code)
            raise StorageError(FETCH_CURRENT_FAILED)

        try:
            data = resp.json()
        except ValueError as exc:
            raise StorageError(FETCH_CURRENT_FAILED) from exc

        # The server answers {} when no robot has been saved yet.
        if isinstance(data, dict) and not data:
            return None

        try:
            return RobotState(x=data["x"], y=data["y"], direction=data["direction"])
        except (KeyError, TypeError, ValidationError) as exc:
            logger.error("HttpStorage: unexpected /robot/current payload %r", data)
            raise StorageError(FETCH_CURRENT_FAILED) from exc

    def _save_state_sync(self, state: RobotState) -> HistoryRecord:
        payload: Dict[str, Any] = state.to_payload()
        try:
            with Stopwatch("POST /robot/move", logger, logging.DEBUG):
                resp = requests.post(
                    self._url("/robot/move"),
                    json=payload,
                    timeout=self.timeout_s,
                )
        except requests.RequestException as exc:
            logger.error("HttpStorage: error saving robot state: %s", exc)
            raise StorageError(SAVE_FAILED) from exc

        if resp.status_code != 200:
            message = extract_error_message(resp)
            logger.error(
                "HttpStorage: POST /robot/move -> HTTP %s (%s)",
                resp.status_code,
                message,
            )
            raise StorageError(message or SAVE_FAILED)

        try:
            return HistoryRecord.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise StorageError(SAVE_FAILED) from exc

    def _fetch_history_sync(self) -> List[HistoryRecord]:
        try:
            with Stopwatch("GET /robot/history", logger, logging.DEBUG):
                resp = requests.get(self._url("/robot/history"), timeout=self.timeout_s)
        except requests.RequestException as exc:
            logger.error("HttpStorage: error fetching robot history: %s", exc)
            raise StorageError(FETCH_HISTORY_FAILED) from exc

        if resp.status_code != 200:
            logger.error("HttpStorage: GET /robot/history -> HTTP %s", resp.status_code)
            raise StorageError(FETCH_HISTORY_FAILED)

        try:
            data = resp.json()
            return [HistoryRecord.model_validate(item) for item in data]
        except (ValueError, TypeError, ValidationError) as exc:
            raise StorageError(FETCH_HISTORY_FAILED) from exc
