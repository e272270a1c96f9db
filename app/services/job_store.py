# generated-by: codex-agent 2025-03-02T09:30:00Z
"""
Job record storage with a fixed time-to-live.

Three interchangeable backends share one async contract:

* ``InMemoryJobStore`` -- process-local map, used for local runs and tests.
* ``RedisJobStore`` -- Redis via ``redis.asyncio`` (``SETEX``).
* ``KVRestJobStore`` -- managed Redis-compatible REST service (Upstash / Vercel KV).

Records are JSON-encoded on write in every backend so a read always returns a
fresh copy with the same shape. Writes are last-write-wins; there is no
compare-and-swap. Backend failures are logged and surface as ``None`` / no-op.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError

from app.core.config import Settings, settings

logger = logging.getLogger("agentstore.store")

JobData = Dict[str, Any]


def _encode(record: JobData) -> str:
    return json.dumps(record, separators=(",", ":"), default=str)


def _decode(job_id: str, payload: Optional[str]) -> Optional[JobData]:
    if payload is None:
        return None
    try:
        value = json.loads(payload)
    except (TypeError, ValueError):
        logger.warning("Discarding undecodable job payload for %s", job_id)
        return None
    return value if isinstance(value, dict) else None


class JobStore(ABC):
    """Async key/value contract for job records."""

    backend: str = "abstract"

    def __init__(self, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds

    @abstractmethod
    async def set(self, job_id: str, record: JobData) -> None:
        """Persist or overwrite a record, restarting its TTL."""

    @abstractmethod
    async def get(self, job_id: str) -> Optional[JobData]:
        """Return the record, or ``None`` when unknown, expired or unreachable."""

    async def keys(self) -> List[str]:
        return []

    async def size(self) -> int:
        return 0

    async def purge_expired(self) -> int:
        """Drop expired records; networked backends expire on their own."""

        return 0

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class InMemoryJobStore(JobStore):
    """Process-local store; expiry is checked lazily and by ``purge_expired``."""

    backend = "memory"

    def __init__(
        self,
        ttl_seconds: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}

    async def set(self, job_id: str, record: JobData) -> None:
        self._entries[job_id] = (self._clock() + self.ttl_seconds, _encode(record))
        logger.debug("Job stored in memory: %s", job_id)

    async def get(self, job_id: str) -> Optional[JobData]:
        entry = self._entries.get(job_id)
        if entry is None:
            return None
        expires_at, payload = entry
        if expires_at <= self._clock():
            self._entries.pop(job_id, None)
            return None
        return _decode(job_id, payload)

    async def keys(self) -> List[str]:
        now = self._clock()
        return [job_id for job_id, (expires_at, _) in self._entries.items() if expires_at > now]

    async def size(self) -> int:
        return len(await self.keys())

    async def purge_expired(self) -> int:
        now = self._clock()
        expired = [job_id for job_id, (expires_at, _) in self._entries.items() if expires_at <= now]
        for job_id in expired:
            del self._entries[job_id]
            logger.info("Cleaned up expired job: %s", job_id)
        return len(expired)


class RedisJobStore(JobStore):
    """Redis-backed implementation using ``SETEX`` for expiry."""

    backend = "redis"

    def __init__(
        self,
        url: str,
        ttl_seconds: int,
        *,
        prefix: str = "job:",
        client: Optional[redis_asyncio.Redis] = None,
    ) -> None:
        super().__init__(ttl_seconds)
        self._client = client or redis_asyncio.Redis.from_url(url, decode_responses=True)
        self._prefix = prefix

    def _key(self, job_id: str) -> str:
        return f"{self._prefix}{job_id}"

    async def set(self, job_id: str, record: JobData) -> None:
        try:
            await self._client.setex(self._key(job_id), self.ttl_seconds, _encode(record))
        except (RedisError, OSError) as exc:
            logger.warning("Redis write failed for %s: %s", job_id, exc)
            return
        logger.debug("Job stored in Redis: %s", job_id)

    async def get(self, job_id: str) -> Optional[JobData]:
        try:
            payload = await self._client.get(self._key(job_id))
        except (RedisError, OSError) as exc:
            logger.warning("Redis read failed for %s: %s", job_id, exc)
            return None
        return _decode(job_id, payload)

    async def keys(self) -> List[str]:
        found: List[str] = []
        try:
            async for key in self._client.scan_iter(match=f"{self._prefix}*"):
                found.append(key[len(self._prefix):])
        except (RedisError, OSError) as exc:
            logger.warning("Redis scan failed: %s", exc)
            return []
        return found

    async def size(self) -> int:
        return len(await self.keys())

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        await self._client.aclose()


class KVRestJobStore(JobStore):
    """Managed key-value service spoken to over its REST command endpoint.

    Each call POSTs a Redis command as a JSON array with a bearer token and
    receives ``{"result": ...}`` or ``{"error": "..."}``. Enumeration is not
    offered by this backend, so ``keys``/``size`` keep the empty defaults.
    """

    backend = "kv"

    def __init__(
        self,
        url: str,
        token: str,
        ttl_seconds: int,
        *,
        prefix: str = "job:",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(ttl_seconds)
        self._url = url.rstrip("/")
        self._prefix = prefix
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Authorization": f"Bearer {token}"}

    def _key(self, job_id: str) -> str:
        return f"{self._prefix}{job_id}"

    async def _command(self, *args: Any) -> Any:
        response = await self._client.post(self._url, json=list(args), headers=self._headers)
        response.raise_for_status()
        body = response.json()
        if isinstance(body, dict) and body.get("error"):
            raise RuntimeError(str(body["error"]))
        return body.get("result") if isinstance(body, dict) else None

    async def set(self, job_id: str, record: JobData) -> None:
        try:
            await self._command("SETEX", self._key(job_id), self.ttl_seconds, _encode(record))
        except (httpx.HTTPError, RuntimeError, ValueError) as exc:
            logger.warning("KV write failed for %s: %s", job_id, exc)
            return
        logger.debug("Job stored in KV: %s", job_id)

    async def get(self, job_id: str) -> Optional[JobData]:
        try:
            payload = await self._command("GET", self._key(job_id))
        except (httpx.HTTPError, RuntimeError, ValueError) as exc:
            logger.warning("KV read failed for %s: %s", job_id, exc)
            return None
        if payload is not None and not isinstance(payload, str):
            payload = json.dumps(payload)
        return _decode(job_id, payload)

    async def ping(self) -> bool:
        try:
            return await self._command("PING") == "PONG"
        except (httpx.HTTPError, RuntimeError, ValueError):
            return False

    async def close(self) -> None:
        await self._client.aclose()


def build_job_store(config: Settings) -> JobStore:
    backend = config.resolve_store_backend()
    if backend == "kv":
        logger.info("Using managed KV job store at %s", config.kv_rest_api_url)
        return KVRestJobStore(
            config.kv_rest_api_url or "",
            config.kv_rest_api_token or "",
            config.job_ttl_seconds,
            prefix=config.job_key_prefix,
        )
    if backend == "redis":
        logger.info("Using Redis job store")
        return RedisJobStore(config.redis_url or "", config.job_ttl_seconds, prefix=config.job_key_prefix)
    logger.info("Using in-memory job store (records are lost on restart)")
    return InMemoryJobStore(config.job_ttl_seconds)


_store: JobStore | None = None


def get_job_store() -> JobStore:
    global _store
    if _store is None:
        _store = build_job_store(settings)
    return _store


def set_job_store(store: Optional[JobStore]) -> None:
    """Swap the process-wide store (tests, or startup wiring)."""

    global _store
    _store = store
