# generated-by: codex-agent 2025-03-02T10:15:00Z
"""
Start / callback / status endpoints shared by every agent category.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Path, Query, Request, status

from app.core.config import settings
from app.models.envelope import CallbackAck
from app.models.jobs import JobStarted
from app.services.agents import get_category
from app.services.jobs import job_service
from app.utils.responses import raise_http_error

router = APIRouter(tags=["Agents"])


def request_base_url(request: Request) -> str:
    """Origin the remote workflow should call back, as seen by the client."""

    if settings.public_base_url:
        return settings.public_base_url
    host = request.headers.get("x-forwarded-host") or request.headers.get("host") or request.url.netloc
    proto = request.headers.get("x-forwarded-proto") or request.url.scheme
    return f"{proto}://{host}"


@router.post("/{category}/start", response_model=JobStarted)
async def start_job(
    request: Request,
    category: str = Path(...),
    payload: Optional[Dict[str, Any]] = Body(default=None),
) -> JobStarted:
    agent = get_category(category)
    return await job_service.start(agent, payload or {}, request_base_url(request))


@router.post("/{category}/callback", response_model=CallbackAck)
async def job_callback(
    category: str = Path(...),
    payload: Optional[Dict[str, Any]] = Body(default=None),
) -> CallbackAck:
    agent = get_category(category)
    await job_service.apply_callback(agent, payload or {})
    return CallbackAck.received()


@router.get("/{category}/status")
async def job_status_query(
    category: str = Path(...),
    job_id: Optional[str] = Query(default=None, alias="jobId"),
) -> Dict[str, Any]:
    get_category(category)
    if not job_id:
        raise_http_error("jobId query parameter is required", status.HTTP_400_BAD_REQUEST)
    return await job_service.get(job_id)


@router.get("/{category}/status/{job_id}")
async def job_status(category: str = Path(...), job_id: str = Path(...)) -> Dict[str, Any]:
    get_category(category)
    return await job_service.get(job_id)


@router.get("/{category}/jobs")
async def list_jobs(category: str = Path(...)) -> List[Dict[str, Any]]:
    """Debug listing; empty for backends that cannot enumerate keys."""

    get_category(category)
    return await job_service.list_jobs()
