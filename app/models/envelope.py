# generated-by: codex-agent 2025-03-02T09:15:00Z
"""
Response envelopes carrying the request corr_id (errors + acknowledgements).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from app.core.corr_id import get_corr_id


class ErrorEnvelope(BaseModel):
    """Flat `{error, corr_id}` body; extra context (e.g. `jobId`) is allowed."""

    model_config = ConfigDict(extra="allow")

    error: str
    corr_id: str

    @classmethod
    def from_error(cls, message: str, **extra: Any) -> "ErrorEnvelope":
        return cls(error=message, corr_id=get_corr_id(), **extra)


class CallbackAck(BaseModel):
    success: bool = True
    corr_id: str

    @classmethod
    def received(cls) -> "CallbackAck":
        return cls(success=True, corr_id=get_corr_id())
