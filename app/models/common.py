# generated-by: codex-agent 2025-03-02T09:14:00Z
"""
Common types shared across the job and agent schemas.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated

from pydantic import Field

JobIdStr = Annotated[str, Field(pattern=r"^job_\d+_[0-9a-z]+$")]
ISODateStr = Annotated[str, Field(pattern=r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z$")]


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a `Z` suffix."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
