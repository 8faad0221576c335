# Host.py is the greenhouse backend
#
# Responsibilities:
# - Receive sensor readings from the device (HTTP POST /api/readings)
# - Validate request bodies strictly (MSG.py)
# - Store readings and actuator states in SQLite (DB.py)
# - Serve latest/historical readings and actuator state (GET /api/...)
# - Accept actuator toggles from the web UI (POST /api/actuator)
# - Serve the command map the device polls for (GET /api/commands)
# - Serve the live dashboard (GET /)
#
# There is no push channel: device and browser both poll.

import re
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import ValidationError

import DB
import MSG
from Config import Config, configure_logging
from Dashboard import render_dashboard

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100

READING_ERROR = "temp, humidity, soil numbers required"
ACTUATOR_ERROR = "invalid actuator or state"
INVALID_JSON_ERROR = "invalid JSON body"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# SQLite binds signed 64-bit integers only
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


# ----------------------------
# HELPERS
# ----------------------------
def now_iso() -> str:
    return datetime.now().astimezone().isoformat()


def parse_limit(raw: Optional[str]) -> int:
    """Parse the ?limit= query value.

    Takes the leading integer of the string ("20", "20abc" -> 20). Missing,
    unparsable or zero values fall back to DEFAULT_HISTORY_LIMIT. Negative
    values pass through to the store; values beyond 64 bits are clamped.
    """
    if raw is None:
        return DEFAULT_HISTORY_LIMIT
    m = _LEADING_INT.match(raw)
    if m is None:
        return DEFAULT_HISTORY_LIMIT
    value = max(SQLITE_INT_MIN, min(SQLITE_INT_MAX, int(m.group(1))))
    return value or DEFAULT_HISTORY_LIMIT


def get_store(request: Request) -> DB.Store:
    return request.app.state.store


def bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": message})


# ----------------------------
# APP FACTORY
# ----------------------------
def create_app(store: Optional[DB.Store] = None) -> FastAPI:
    store = store or DB.Store()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A store that cannot be initialised aborts startup.
        app.state.store.init()
        logger.info("[API] %s serving with database %s", Config.APP_TITLE, app.state.store.db_path)
        yield
        logger.info("[API] shutting down")

    app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DB.StorageError)
    async def storage_error_handler(request: Request, exc: DB.StorageError) -> JSONResponse:
        logger.error("[API] %s %s -> db error: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "db error"})

    # ----------------------------
    # ROUTES
    # ----------------------------
    @app.get("/health")
    def health(store: DB.Store = Depends(get_store)) -> Dict[str, Any]:
        return {
            "ok": True,
            "service": "greenhouse-host",
            "time": now_iso(),
            "readings": store.count_readings(),
        }

    @app.post("/api/readings")
    async def post_reading(request: Request, store: DB.Store = Depends(get_store)) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return bad_request(INVALID_JSON_ERROR)

        try:
            reading = MSG.validate_reading(body)
        except ValidationError:
            return bad_request(READING_ERROR)

        reading_id = await run_in_threadpool(store.insert_reading, reading.temp, reading.humidity, reading.soil)
        logger.info(
            "[API] reading #%d temp=%.2f humidity=%.2f soil=%d",
            reading_id, reading.temp, reading.humidity, reading.soil,
        )
        return JSONResponse(status_code=200, content={"ok": True, "id": reading_id})

    @app.get("/api/readings/latest")
    def latest_reading(store: DB.Store = Depends(get_store)) -> JSONResponse:
        row = store.latest_reading()
        return JSONResponse(status_code=200, content=row or {})

    @app.get("/api/readings")
    def list_readings(limit: Optional[str] = None, store: DB.Store = Depends(get_store)) -> JSONResponse:
        rows = store.list_readings(limit=parse_limit(limit))
        return JSONResponse(status_code=200, content=rows)

    @app.get("/api/actuators")
    def actuators(store: DB.Store = Depends(get_store)) -> JSONResponse:
        return JSONResponse(status_code=200, content=store.get_actuators())

    @app.post("/api/actuator")
    async def set_actuator(request: Request, store: DB.Store = Depends(get_store)) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return bad_request(INVALID_JSON_ERROR)

        try:
            cmd = MSG.validate_actuator(body)
        except ValidationError:
            return bad_request(ACTUATOR_ERROR)

        await run_in_threadpool(store.set_actuator_state, cmd.name, cmd.state)
        logger.info("[API] actuator %s -> %d", cmd.name, cmd.state)
        return JSONResponse(status_code=200, content={"ok": True, "name": cmd.name, "state": cmd.state})

    @app.get("/api/commands")
    def commands(store: DB.Store = Depends(get_store)) -> JSONResponse:
        # Desired actuator states for the device to apply on its next poll
        return JSONResponse(status_code=200, content=store.get_commands())

    @app.get("/", response_class=HTMLResponse)
    def dashboard() -> str:
        return render_dashboard(Config.APP_TITLE)

    return app


app = create_app()


def main() -> None:
    configure_logging()
    logger.info("[API] listening on http://%s:%d", Config.HOST, Config.PORT)
    uvicorn.run(app, host=Config.HOST, port=Config.PORT, log_level=Config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
