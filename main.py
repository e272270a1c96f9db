# generated-by: codex-agent 2025-03-02T10:25:00Z
"""
FastAPI application entrypoint for the Agent Store backend.
"""

from __future__ import annotations

import logging
import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.corr_id import CorrIdMiddleware
from app.core.preflight import PreflightMiddleware
from app.routes import register_routes
from app.services.bootstrap import run_shutdown, run_startup
from app.utils.error_handlers import install_error_handlers
from app.utils.responses import UTF8JSONResponse


def _configure_logging() -> None:
    """Ensure an INFO-level console handler exists (uvicorn may preconfigure logging)."""
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(logging.INFO)
    for name in [
        "agentstore",
        "agentstore.backend",
        "agentstore.jobs",
        "agentstore.store",
        "agentstore.webhooks",
        "agentstore.poller",
    ]:
        logging.getLogger(name).setLevel(logging.INFO)


_configure_logging()
logger = logging.getLogger("agentstore.backend")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Agent Store API",
        version="0.2.0",
        description="Agent Store backend: forwards agent jobs to remote workflows and tracks their completion",
        openapi_url="/api/openapi.json",
        default_response_class=UTF8JSONResponse,
    )

    allow_all = "*" in settings.cors_origins
    app.add_middleware(PreflightMiddleware, allow_any_origin=allow_all)
    app.add_middleware(CorrIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["x-corr-id", "x-response-time-ms"],
    )

    install_error_handlers(app)
    register_routes(app)

    @app.on_event("startup")
    async def _startup() -> None:
        logger.info("Agent Store backend starting")
        await run_startup()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        logger.info("Agent Store backend shutting down")
        await run_shutdown()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.environ.get("PORT", "3001")))
