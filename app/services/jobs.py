# generated-by: codex-agent 2025-03-02T09:50:00Z
"""
Job lifecycle for remote workflow runs: start, callback, status.

The remote workflow does the actual work; we only track its progress:

    start     -> record `pending`, POST to the webhook, then `processing` | `failed`
    callback  -> record `completed` | `failed` (category decides)
    status    -> record as stored

Writes go straight to the store (last write wins). A callback racing the
`processing` write can be overwritten by it, and a second callback replaces
the first; neither case is guarded against.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from fastapi import status
from pydantic import ValidationError

from app.core.corr_id import get_corr_id
from app.models.common import utc_now_iso
from app.models.jobs import JobRecord, JobStarted
from app.services.agents import AgentCategory
from app.services.job_ids import generate_job_id
from app.services.job_store import JobStore, get_job_store
from app.services.logging import log_job_event
from app.services.webhooks import dispatch_webhook
from app.utils.responses import raise_http_error

logger = logging.getLogger(__name__)

JOB_NOT_FOUND = "Job not found"


def callback_url_for(category: AgentCategory, base_url: str) -> str:
    return f"{base_url.rstrip('/')}/api/{category.slug}/callback"


class JobService:
    """Coordinates the job store and the outbound webhook call."""

    def __init__(self, store: Optional[JobStore] = None) -> None:
        self._store = store

    @property
    def store(self) -> JobStore:
        return self._store or get_job_store()

    async def _load(self, job_id: str) -> Optional[JobRecord]:
        data = await self.store.get(job_id)
        if data is None:
            return None
        try:
            return JobRecord.model_validate(data)
        except ValidationError:
            logger.warning("Stored job %s does not match the record schema", job_id)
            return None

    async def _save(self, record: JobRecord) -> None:
        await self.store.set(record.id, record.to_store())

    async def _mark_failed(self, job_id: str, error: str) -> None:
        record = await self._load(job_id)
        if record is None:
            return
        record.status = "failed"
        record.error = error
        record.completedAt = utc_now_iso()
        await self._save(record)

    async def start(self, category: AgentCategory, body: Dict[str, Any], base_url: str) -> JobStarted:
        request = category.parse_request(body)

        job_id = generate_job_id()
        record = JobRecord(
            id=job_id,
            status="pending",
            createdAt=utc_now_iso(),
            **category.record_fields(request),
        )
        await self._save(record)
        log_job_event("job.created", job_id, category.slug)

        callback_url = callback_url_for(category, base_url)
        payload = {**category.outbound_payload(request), "job_id": job_id, "callback_url": callback_url}

        try:
            response = await dispatch_webhook(category.webhook_url, payload)
        except httpx.HTTPError as exc:
            log_job_event(
                "job.dispatch_failed",
                job_id,
                category.slug,
                {"error": str(exc) or exc.__class__.__name__},
                level="error",
            )
            await self._mark_failed(job_id, str(exc) or exc.__class__.__name__)
            raise_http_error(category.start_failed_message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        if not response.is_success:
            log_job_event(
                "job.dispatch_rejected",
                job_id,
                category.slug,
                {"status_code": response.status_code},
                level="warn",
            )
            await self._mark_failed(job_id, f"{category.start_failed_message}: {response.status_code}")
            raise_http_error(category.start_failed_message, status.HTTP_500_INTERNAL_SERVER_ERROR)

        current = await self._load(job_id)
        if current is not None:
            current.status = "processing"
            await self._save(current)
        log_job_event("job.dispatched", job_id, category.slug, {"callback_url": callback_url})
        return JobStarted(job_id=job_id, message=category.started_message, corr_id=get_corr_id())

    async def apply_callback(self, category: AgentCategory, body: Dict[str, Any]) -> JobRecord:
        job_id = body.get("job_id")
        if not job_id or not isinstance(job_id, str):
            log_job_event("callback.missing_job_id", None, category.slug, level="warn")
            raise_http_error("job_id is required", status.HTTP_400_BAD_REQUEST)

        record = await self._load(job_id)
        if record is None:
            log_job_event("callback.job_not_found", job_id, category.slug, level="warn")
            raise_http_error(JOB_NOT_FOUND, status.HTTP_404_NOT_FOUND)

        replaced_terminal = record.is_terminal
        category.apply_callback(record, body)
        if record.status == "completed":
            record.error = None
        record.completedAt = utc_now_iso()
        await self._save(record)
        log_job_event(
            "job.callback_applied",
            job_id,
            category.slug,
            {"status": record.status, "error": record.error, "replaced_terminal": replaced_terminal},
            level="info" if record.status == "completed" else "warn",
        )
        return record

    async def get(self, job_id: str) -> Dict[str, Any]:
        data = await self.store.get(job_id)
        if data is None:
            raise_http_error(JOB_NOT_FOUND, status.HTTP_404_NOT_FOUND, jobId=job_id)
        return data

    async def list_jobs(self) -> List[Dict[str, Any]]:
        jobs: List[Dict[str, Any]] = []
        for job_id in await self.store.keys():
            data = await self.store.get(job_id)
            if data is not None:
                jobs.append(data)
        return jobs


job_service = JobService()
