# generated-by: codex-agent 2025-03-02T09:24:00Z
"""
Job lifecycle event logging.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Optional

from app.core.corr_id import get_corr_id

JobLogLevel = Literal["info", "warn", "error"]

_LEVELS = {"info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}

logger = logging.getLogger("agentstore.jobs")


def log_job_event(
    event: str,
    job_id: Optional[str] = None,
    category: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    level: JobLogLevel = "info",
) -> None:
    extra: dict[str, Any] = {
        "event": event,
        "job_id": job_id,
        "category": category,
        "details": details or {},
        "corr_id": get_corr_id(),
    }
    logger.log(
        _LEVELS[level],
        "%s job_id=%s category=%s corr_id=%s details=%s",
        event,
        job_id,
        category,
        extra["corr_id"],
        extra["details"],
        extra={"job_event": extra},
    )
