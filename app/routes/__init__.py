# generated-by: codex-agent 2025-03-02T10:21:00Z
"""API router registration."""

from fastapi import FastAPI

from .agents import router as agents_router
from .health import router as health_router


def register_routes(app: FastAPI) -> None:
    app.include_router(health_router)
    app.include_router(health_router, prefix="/api")
    app.include_router(agents_router, prefix="/api")
