# generated-by: codex-agent 2025-03-02T09:55:00Z
"""
Application bootstrap helpers executed on startup and shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from app.core.config import settings
from app.services.job_store import JobStore, get_job_store, set_job_store
from app.services.webhooks import close_http_client

logger = logging.getLogger("agentstore.backend")

_cleanup_task: Optional[asyncio.Task[None]] = None


async def cleanup_expired_jobs(store: JobStore, interval_s: float) -> None:
    """Periodically drop expired records (only the in-memory store needs it)."""

    while True:
        await asyncio.sleep(interval_s)
        removed = await store.purge_expired()
        if removed:
            logger.info("Expired %d job(s) from the %s store", removed, store.backend)


async def run_startup() -> None:
    global _cleanup_task
    store = get_job_store()
    logger.info("Job store backend: %s (ttl=%ss)", store.backend, store.ttl_seconds)
    if store.backend == "memory":
        _cleanup_task = asyncio.create_task(cleanup_expired_jobs(store, settings.cleanup_interval_s))


async def run_shutdown() -> None:
    global _cleanup_task
    if _cleanup_task is not None:
        _cleanup_task.cancel()
        try:
            await _cleanup_task
        except asyncio.CancelledError:
            pass
        _cleanup_task = None
    await get_job_store().close()
    set_job_store(None)
    await close_http_client()
