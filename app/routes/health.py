# generated-by: codex-agent 2025-03-02T10:18:00Z
"""
Liveness probe.
"""

from __future__ import annotations

from fastapi import APIRouter

from app.models.common import utc_now_iso
from app.models.jobs import HealthResponse
from app.services.job_store import get_job_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
async def health() -> HealthResponse:
    store = get_job_store()
    store_ok = await store.ping()
    return HealthResponse(
        status="ok" if store_ok else "degraded",
        timestamp=utc_now_iso(),
        store=store.backend,
        store_ok=store_ok,
    )
