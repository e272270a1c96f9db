# generated-by: codex-agent 2025-03-02T10:05:00Z
"""
Client-side job poller.

Starts a job through the API, asks for its status right away and then on a
fixed interval until the job is terminal or the attempt budget runs out, in
which case the outcome is a local `timeout`. A failed poll (transport error,
non-2xx) is logged and counts as an attempt; it never ends the loop early.
There is no backoff and no way to cancel the remote work.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from app.core.config import settings
from app.models.jobs import TERMINAL_STATES

logger = logging.getLogger("agentstore.poller")

TIMEOUT_STATUS = "timeout"


class JobStartError(RuntimeError):
    """The API refused to start a job; the message is the server's `error` text."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class PollOutcome:
    job_id: str
    status: str
    attempts: int
    job: Dict[str, Any] = field(default_factory=dict)

    @property
    def file_url(self) -> Optional[str]:
        return self.job.get("fileUrl")

    @property
    def error(self) -> Optional[str]:
        if self.status == TIMEOUT_STATUS:
            return f"Job {self.job_id} did not finish after {self.attempts} status checks"
        return self.job.get("error")


StatusCallback = Callable[[Dict[str, Any]], Optional[Awaitable[None]]]


class JobPoller:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        interval_s: Optional[float] = None,
        max_attempts: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.interval_s = settings.poll_interval_s if interval_s is None else interval_s
        self.max_attempts = max_attempts or settings.poll_max_attempts
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep

    async def __aenter__(self) -> "JobPoller":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=30.0)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def start(self, category: str, payload: Dict[str, Any]) -> str:
        response = await self.client.post(f"{self.base_url}/api/{category}/start", json=payload)
        if not response.is_success:
            try:
                message = response.json().get("error") or f"HTTP {response.status_code}"
            except ValueError:
                message = f"HTTP {response.status_code}"
            raise JobStartError(str(message), response.status_code)
        job_id = response.json()["job_id"]
        logger.info("Started %s job %s", category, job_id)
        return job_id

    async def fetch_status(self, category: str, job_id: str) -> Dict[str, Any]:
        response = await self.client.get(
            f"{self.base_url}/api/{category}/status",
            params={"jobId": job_id},
        )
        response.raise_for_status()
        return response.json()

    async def poll(
        self,
        category: str,
        job_id: str,
        on_status: Optional[StatusCallback] = None,
    ) -> PollOutcome:
        last_job: Dict[str, Any] = {}
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                await self._sleep(self.interval_s)
            try:
                job = await self.fetch_status(category, job_id)
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Polling error for %s (attempt %d): %s", job_id, attempt, exc)
                continue
            last_job = job
            if on_status is not None:
                result = on_status(job)
                if result is not None:
                    await result
            status = job.get("status")
            if status in TERMINAL_STATES:
                logger.info("Job %s finished as %s after %d attempt(s)", job_id, status, attempt)
                return PollOutcome(job_id=job_id, status=str(status), attempts=attempt, job=job)
        logger.warning("Job %s still not terminal after %d attempts", job_id, self.max_attempts)
        return PollOutcome(job_id=job_id, status=TIMEOUT_STATUS, attempts=self.max_attempts, job=last_job)

    async def run(
        self,
        category: str,
        payload: Dict[str, Any],
        on_status: Optional[StatusCallback] = None,
    ) -> PollOutcome:
        job_id = await self.start(category, payload)
        return await self.poll(category, job_id, on_status=on_status)
