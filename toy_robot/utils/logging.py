# toy_robot/utils/logging.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — logging utilities
---------------------------------------
One console handler on the root logger, shared by the history server and the
terminal console.

- The handler is tagged, so calling setup_logging() again only changes the
  level instead of stacking a second handler.
- TOY_ROBOT_LOG_LEVEL (e.g. "WARNING") overrides the debug flag, handy for
  keeping the console quiet while you drive the robot.
- Transport loggers (uvicorn access log, urllib3 under requests, httpx in the
  test client) are held at TOY_ROBOT_NOISY_LOG_LEVEL, WARNING by default.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("uvicorn.access", "urllib3", "httpx")

_HANDLER_TAG = "_toy_robot_handler"


def _level_from_env(var: str, fallback: Union[int, str]) -> Union[int, str]:
    value = os.getenv(var, "").strip().upper()
    if value and isinstance(logging.getLevelName(value), int):
        return value
    return fallback


def _own_handler(root: logging.Logger) -> Optional[logging.Handler]:
    for handler in root.handlers:
        if getattr(handler, _HANDLER_TAG, False):
            return handler
    return None


def quiet_loggers(names: Iterable[str] = NOISY_LOGGERS) -> None:
    """Hold chatty third-party loggers at TOY_ROBOT_NOISY_LOG_LEVEL."""
    level = _level_from_env("TOY_ROBOT_NOISY_LOG_LEVEL", logging.WARNING)
    for name in names:
        logging.getLogger(name).setLevel(level)


def setup_logging(
    *,
    debug: bool = False,
    level: Optional[int] = None,
) -> logging.Handler:
    """
    Attach (once) the stderr handler and set the root level.

    Precedence for the level: explicit `level`, then TOY_ROBOT_LOG_LEVEL,
    then DEBUG/INFO from `debug`. Returns the handler in use.
    """
    if level is not None:
        base_level: Union[int, str] = level
    else:
        base_level = _level_from_env(
            "TOY_ROBOT_LOG_LEVEL",
            logging.DEBUG if debug else logging.INFO,
        )

    root = logging.getLogger()
    handler = _own_handler(root)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)

    root.setLevel(base_level)
    handler.setLevel(base_level)
    quiet_loggers()
    return handler


def get_logger(name: str) -> logging.Logger:
    """logging.getLogger, re-exported so modules import from toy_robot.utils."""
    return logging.getLogger(name)
