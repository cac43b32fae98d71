# toy_robot/utils/file_io.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — file_io utilities
---------------------------------------
Helpers for the small JSON documents the history log lives in.

- Writes go through a temp file + rename so a crash never leaves half a file.
- Reads are tolerant: a missing or unreadable file yields a default.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def read_json_safely(
    path: Path,
    default: Optional[T] = None,
    *,
    log_missing: bool = False,
) -> Optional[T]:
    """
    Read JSON from a file and return the parsed object.

    - Missing file: returns `default` (logged at INFO when log_missing=True).
    - Unreadable or invalid JSON: logged at WARNING, returns `default`.
    """
    if not path.is_file():
        if log_missing:
            logger.info("read_json_safely: file not found: %s", path)
        return default

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("read_json_safely: failed to read %s: %s", path, exc)
        return default

    try:
        return json.loads(text)  # type: ignore[return-value]
    except json.JSONDecodeError as exc:
        logger.warning("read_json_safely: invalid JSON in %s: %s", path, exc)
        return default


def write_json_atomic(path: Path, data: Dict[str, Any]) -> None:
    """
    Write JSON next to `path` and rename it into place.

    The parent directory is created if needed. Any OSError is logged and
    re-raised so the caller can decide how to respond (e.g. HTTP 500).
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("write_json_atomic: failed to create dir %s: %s", path.parent, exc)
        raise

    tmp_path = path.with_suffix(path.suffix + ".tmp")

    try:
        json_text = json.dumps(data, ensure_ascii=False, indent=2)
        tmp_path.write_text(json_text, encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        logger.error("write_json_atomic: failed to write %s: %s", path, exc)
        raise
