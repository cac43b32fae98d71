# toy_robot/runtime_state/history.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Robot History Log
---------------------------------------

File-backed, append-only log of every accepted robot state.

Purpose
~~~~~~~
- Keep one record per PLACE / MOVE / LEFT / RIGHT so the movement history can
  be listed newest first.
- Let a restarted session pick up where it left off: the latest record is the
  robot's current state.

Design notes
~~~~~~~~~~~~
- Backed by a single JSON document:

      {"next_id": 4, "records": [{"id": 1, "x": 0, "y": 0, ...}, ...]}

- Records are only ever appended. Identifiers come from `next_id`, so they keep
  increasing even after `clear()`.
- Assumes a single server process. Every append rewrites the whole file with
  write_json_atomic, which is fine at toy-robot volumes.
- Nothing here checks moves; the session controller decides what is legal and
  this log just records what it is told (bounds are still enforced by the
  RobotState model on the way in).
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from toy_robot.models.robot_model import HistoryRecord, RobotState
from toy_robot.utils import get_logger, read_json_safely, write_json_atomic


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logger = get_logger("toy_robot.runtime_state")


# ---------------------------------------------------------------------------
# On-disk document
# ---------------------------------------------------------------------------


class HistoryDocument(BaseModel):
    """Top-level container stored on disk."""

    next_id: int = 1
    records: List[HistoryRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# History store implementation
# ---------------------------------------------------------------------------


class HistoryStore:
    """
    Append-only robot history backed by a JSON file.

    All records are kept in memory (oldest first) and the file is rewritten
    after each change.

    Parameters
    ----------
    path:
        Location of the JSON document. Created on the first append.
    auto_persist:
        If False, nothing is written to disk (useful for throwaway stores in
        tests); call `sync()` to write explicitly.
    """

    def __init__(
        self,
        path: Union[Path, str],
        auto_persist: bool = True,
    ) -> None:
        self.path: Path = Path(path)
        self.auto_persist = auto_persist

        self.document: HistoryDocument = self._load_from_disk()

    # ------------------------------------------------------------------
    # Low-level I/O
    # ------------------------------------------------------------------

    def _load_from_disk(self) -> HistoryDocument:
        """
        Load the history document.

        - Missing file: empty history, nothing written yet.
        - Unparseable or invalid file: warning, start empty. The bad file is
          left alone until the next append replaces it.
        """
        raw: Optional[Dict[str, Any]] = read_json_safely(self.path, default=None)
        if raw is None:
            logger.info("[HistoryStore] No history at %s, starting empty.", self.path)
            return HistoryDocument()

        try:
            document = HistoryDocument.model_validate(raw)
        except ValueError as exc:
            logger.warning(
                "[HistoryStore] Failed to validate history from %s: %s; "
                "starting with empty history.",
                self.path,
                exc,
            )
            return HistoryDocument()

        # Guard against a hand-edited next_id that would reuse identifiers.
        highest = max((r.id for r in document.records), default=0)
        if document.next_id <= highest:
            document.next_id = highest + 1

        logger.info(
            "[HistoryStore] Loaded %d records from %s",
            len(document.records),
            self.path,
        )
        return document

    def sync(self) -> None:
        """Write the in-memory document to disk. OSError propagates."""
        payload = self.document.model_dump(mode="json", by_alias=True)
        write_json_atomic(self.path, payload)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, state: RobotState) -> HistoryRecord:
        """
        Append `state` and return the stored record.

        Only x, y and direction are taken from `state`; an id or timestamp it
        may carry (if it is itself a HistoryRecord) is ignored.
        """
        record = HistoryRecord(
            id=self.document.next_id,
            x=state.x,
            y=state.y,
            direction=state.direction,
            created_at=datetime.now(timezone.utc),
        )
        self.document.records.append(record)
        self.document.next_id += 1

        if self.auto_persist:
            try:
                self.sync()
            except OSError:
                # Keep memory and disk in agreement: the append did not happen.
                self.document.records.pop()
                self.document.next_id -= 1
                raise

        logger.debug(
            "[HistoryStore] Appended #%d (%d,%d,%s)",
            record.id,
            record.x,
            record.y,
            record.direction.value,
        )
        return record

    def latest(self) -> Optional[HistoryRecord]:
        """The record with the highest id, or None if the log is empty."""
        if not self.document.records:
            return None
        return max(self.document.records, key=lambda r: r.id)

    def history(self, limit: Optional[int] = None, offset: int = 0) -> List[HistoryRecord]:
        """
        Records ordered by id, newest first.

        `offset` skips that many of the newest records; `limit` caps the
        number returned (None means all).
        """
        if offset < 0:
            raise ValueError("offset must be >= 0")
        if limit is not None and limit < 1:
            raise ValueError("limit must be >= 1")

        ordered = sorted(self.document.records, key=lambda r: r.id, reverse=True)
        end = None if limit is None else offset + limit
        return ordered[offset:end]

    def count(self) -> int:
        return len(self.document.records)

    def clear(self) -> None:
        """Drop every record. Identifiers are not reused afterwards."""
        logger.info("[HistoryStore] Clearing %d records", len(self.document.records))
        self.document.records = []
        if self.auto_persist:
            self.sync()
