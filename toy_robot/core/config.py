# toy_robot/core/config.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Configuration
-----------------------------------
Central configuration for the simulator, including:

- app metadata
- API host/port (server side)
- API base URL + timeout (console / HTTP storage client side)
- filesystem paths for the history log
- history paging limits

"""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

# This file is: <root>/toy_robot/core/config.py
PACKAGE_DIR: Path = Path(__file__).resolve().parents[1]   # .../toy_robot
ROOT_DIR: Path = PACKAGE_DIR.parent                       # project root

DATA_DIR: Path = ROOT_DIR / "data"


# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """
    Global configuration for the toy robot simulator.

    Instantiated once at import time as `settings`. Tests and tools that need
    different values build their own `Settings(...)` or pass explicit
    arguments to the factories that read it.
    """

    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App / server basics -----------------------------------------------
    app_name: str = "Toy Robot Simulator"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False

    api_host: str = "0.0.0.0"
    api_port: int = 3000

    # Browser front-ends allowed outside production.
    cors_origins: List[str] = ["http://localhost:3001"]

    # --- History log --------------------------------------------------------
    data_dir: Path = DATA_DIR
    history_path: Path = DATA_DIR / "robot_history.json"

    # Upper bound for GET /robot/history?limit=...
    history_max_limit: int = 1000

    # --- Client side (console / HttpStorage) --------------------------------
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the robot history API (env: API_BASE_URL).",
    )
    request_timeout_s: float = 5.0


# Single global settings instance used by the rest of the package.
settings = Settings()


if __name__ == "__main__":
    print("Toy Robot — Settings self-test")
    print(f"ROOT_DIR        : {ROOT_DIR}")
    print(f"DATA_DIR        : {settings.data_dir}")
    print(f"History path    : {settings.history_path}")
    print(f"Environment     : {settings.environment}")
    print(f"API             : {settings.api_host}:{settings.api_port}")
    print(f"Client base URL : {settings.api_base_url} (timeout {settings.request_timeout_s}s)")
