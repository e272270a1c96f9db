# generated-by: codex-agent 2025-03-02T09:16:00Z
"""
Job record schemas shared by the start/callback/status handlers.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .common import ISODateStr, JobIdStr

JobState = Literal["pending", "processing", "completed", "failed"]
TERMINAL_STATES: frozenset[str] = frozenset({"completed", "failed"})


class JobRecord(BaseModel):
    """Stored job record.

    Request-specific fields (``url``, ``company_name``, ``data`` ...) travel as
    extra attributes, so the record shape depends on the agent category.
    """

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    id: JobIdStr
    status: JobState = "pending"
    createdAt: ISODateStr
    completedAt: Optional[ISODateStr] = None
    fileUrl: Optional[str] = None
    result: Optional[Any] = None
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATES

    def to_store(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class JobStarted(BaseModel):
    job_id: JobIdStr
    status: Literal["started"] = "started"
    message: str
    corr_id: str


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    timestamp: ISODateStr
    store: str
    store_ok: bool
