# generated-by: codex-agent 2025-03-02T09:34:00Z
"""
Outbound calls to the remote workflow webhooks.

A dispatch is a single POST; the caller only learns whether the remote side
acknowledged it. Nothing here retries.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger("agentstore.webhooks")

_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient(timeout=settings.webhook_timeout_s)
    return _client


def set_http_client(client: Optional[httpx.AsyncClient]) -> None:
    global _client
    _client = client


async def close_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def dispatch_webhook(url: str, payload: Dict[str, Any]) -> httpx.Response:
    """POST `payload` as JSON to `url`; transport errors propagate as httpx.HTTPError."""

    client = get_http_client()
    logger.info("Dispatching job %s to %s", payload.get("job_id"), url)
    response = await client.post(url, json=payload, headers={"Content-Type": "application/json"})
    logger.info("Webhook %s answered %s for job %s", url, response.status_code, payload.get("job_id"))
    return response
