# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Utility toolbox
-------------------------------------
Shared helpers used by the server, the storage adapters and the console:

- file_io   : tolerant JSON reads, atomic JSON writes
- logging   : central logging configuration
- timers    : stopwatch for storage latency

    from toy_robot.utils import setup_logging, get_logger
"""

from __future__ import annotations

from .file_io import (  # noqa: F401
    read_json_safely,
    write_json_atomic,
)

from .logging import (  # noqa: F401
    setup_logging,
    quiet_loggers,
    get_logger,
)

from .timers import (  # noqa: F401
    Stopwatch,
)
