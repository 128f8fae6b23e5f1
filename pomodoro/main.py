#!/usr/bin/env python3
"""
Pomodoro - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Initializes modules
3. Runs the API server

All timer logic is in the session module, following black box principles.
"""

import logging
import logging.config as log_config
from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from pomodoro import __version__
from pomodoro.logging_config import get_logging_config
from pomodoro.modules.api import (
    CreateSessionRequest,
    ErrorResponse,
    SessionResponse,
    to_responses,
)
from pomodoro.modules.config import get_config
from pomodoro.modules.session import SessionModule, SessionNotFoundError, TimerState

# Get configuration
config = get_config()

log_config.dictConfig(get_logging_config(config.get("log_level")))
logger = logging.getLogger(__name__)

# Module instances (initialized at startup)
session_module: Optional[SessionModule] = None

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Session not found"}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - the session registry lives exactly as
    long as the process serves requests.
    """
    global session_module

    logger.info("Starting Pomodoro API...")
    session_module = SessionModule()
    logger.info("Pomodoro API started successfully")

    yield

    logger.info("Shutting down Pomodoro API...")
    session_module = None
    logger.info("Pomodoro API shutdown complete")


app = FastAPI(
    title="Pomodoro API",
    description="Pomodoro - timer-based work sessions",
    version=__version__,
    lifespan=lifespan,
)


def get_session_module() -> SessionModule:
    if not session_module:
        raise HTTPException(503, "Service not initialized")
    return session_module


# Session Endpoints


@app.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(request: CreateSessionRequest):
    """
    Create a new Idle session.

    Returns:
        201: The created session
    """
    module = get_session_module()
    snapshot = await module.create_session(request.work_minutes, request.break_minutes)
    return SessionResponse.from_snapshot(snapshot)


@app.get("/sessions", response_model=List[SessionResponse])
async def list_sessions():
    """List every session, reconciled as of this request."""
    module = get_session_module()
    return to_responses(await module.list_sessions())


@app.get("/sessions/{session_id}", response_model=SessionResponse, responses=NOT_FOUND)
async def get_session(session_id: int):
    """
    Get session status.

    Returns:
        200: Session with up-to-date elapsed/remaining time
        404: Session not found
    """
    module = get_session_module()
    return SessionResponse.from_snapshot(await module.get_session(session_id))


@app.post("/sessions/{session_id}/start", response_model=SessionResponse, responses=NOT_FOUND)
async def start_session(session_id: int):
    """
    Start a session from Idle, or restart it from Finished.

    Starting a Running or Paused session changes nothing.
    """
    module = get_session_module()
    return SessionResponse.from_snapshot(await module.start_session(session_id))


@app.post("/sessions/{session_id}/pause", response_model=SessionResponse, responses=NOT_FOUND)
async def pause_session(session_id: int):
    """Pause a Running session. Any other state is returned unchanged."""
    module = get_session_module()
    return SessionResponse.from_snapshot(await module.pause_session(session_id))


@app.post("/sessions/{session_id}/resume", response_model=SessionResponse, responses=NOT_FOUND)
async def resume_session(session_id: int):
    """Resume a Paused session. Any other state is returned unchanged."""
    module = get_session_module()
    return SessionResponse.from_snapshot(await module.resume_session(session_id))


# Health/Monitoring Endpoints


@app.get("/healthz")
async def healthz():
    """
    Minimal health check endpoint for readiness/liveness probes.

    Returns:
        200: Service is running
    """
    return {"status": "ok"}


@app.get("/health")
async def health_check(request: Request):
    """
    Health check with module status.

    Returns:
        200: Service healthy
        503: Service unhealthy
    """
    environment = config.get("environment", "development")
    if session_module:
        return {
            "status": "healthy",
            "modules": "initialized",
            "environment": environment,
            "version": __version__,
        }
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "modules": "not initialized",
            "environment": environment,
        },
    )


@app.get("/metrics")
async def metrics():
    """
    Prometheus-compatible metrics endpoint.

    Reports the number of sessions in each state.
    """
    if not session_module:
        return Response(content="", status_code=503)

    counts = await session_module.count_by_state()

    lines = [
        "# HELP pomodoro_sessions Number of Pomodoro sessions by state",
        "# TYPE pomodoro_sessions gauge",
    ]
    for state in TimerState:
        lines.append(f'pomodoro_sessions{{state="{state.value}"}} {counts[state]}')
    lines.append(
        "# HELP pomodoro_sessions_total Number of Pomodoro sessions created"
    )
    lines.append("# TYPE pomodoro_sessions_total counter")
    lines.append(f"pomodoro_sessions_total {sum(counts.values())}")

    return Response(content="\n".join(lines) + "\n", media_type="text/plain")


# Error handlers


@app.exception_handler(SessionNotFoundError)
async def session_not_found_handler(request, exc):
    """Handle references to unknown sessions."""
    logger.info(f"Session lookup failed: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def run() -> None:
    """Console entry point."""
    uvicorn.run(
        "pomodoro.main:app",
        host=config.get("host"),
        port=config.get("port"),
        log_level=config.get("log_level").lower(),
        reload=config.get("debug"),
        log_config=get_logging_config(config.get("log_level")),
    )


if __name__ == "__main__":
    run()
