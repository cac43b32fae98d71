# toy_robot/main.py
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — FastAPI application entrypoint
----------------------------------------------------
Wires the history API together:

- Sets up central logging.
- Builds the HistoryStore (or takes one from the caller) and keeps it on
  `app.state.history_store`.
- Adds CORS for browser front-ends outside production.
- Turns request validation errors into 400 {"statusCode", "message", "error"}
  so clients can show the message to the user.
- Mounts /robot/* and the meta endpoints.
- Exposes an ASGI `app` object for uvicorn.

Typical run command (dev):

    uvicorn toy_robot.main:app --host 0.0.0.0 --port 3000 --reload

"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from toy_robot.core.config import settings
from toy_robot.routers.robot import router as robot_router
from toy_robot.runtime_state import HistoryStore
from toy_robot.utils import get_logger, setup_logging


setup_logging(debug=settings.debug)
logger = get_logger(__name__)


def _validation_messages(exc: RequestValidationError) -> List[str]:
    """One readable line per validation error, e.g. "x: Input should be ..."."""
    messages: List[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return messages


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = _validation_messages(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, messages)
    return JSONResponse(
        status_code=400,
        content={
            "statusCode": 400,
            "message": messages,
            "error": "Bad Request",
        },
    )


def create_app(store: Optional[HistoryStore] = None) -> FastAPI:
    """
    Application factory.

    Parameters
    ----------
    store:
        History log to serve. Defaults to a file-backed store at
        settings.history_path.
    """
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.history_store = store if store is not None else HistoryStore(settings.history_path)

    if settings.environment != "production":
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    #   POST /robot/move
    #   GET  /robot/current
    #   GET  /robot/history
    app.include_router(robot_router)

    # ------------------------------------------------------------------
    # Meta / health endpoints
    # ------------------------------------------------------------------

    @app.get("/", tags=["meta"])
    async def root() -> Dict[str, Any]:
        return {
            "name": settings.app_name,
            "environment": settings.environment,
            "message": "Toy robot history API is running.",
        }

    @app.get("/health", tags=["meta"])
    async def health_check(request: Request) -> Dict[str, Any]:
        """Lightweight health check for monitoring scripts."""
        history_store: HistoryStore = request.app.state.history_store
        return {
            "status": "ok",
            "environment": settings.environment,
            "debug": settings.debug,
            "records": history_store.count(),
        }

    logger.info("FastAPI app created (env=%s, history=%s)", settings.environment, app.state.history_store.path)
    return app


# ASGI app for uvicorn
app = create_app()


def run() -> None:
    """Console-script entry point: `toy-robot-server`."""
    import uvicorn

    uvicorn.run(
        "toy_robot.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=(settings.environment == "development"),
    )


if __name__ == "__main__":
    run()
