# generated-by: codex-agent 2025-03-02T09:25:00Z
"""
Job identifier generation: `job_<unix-millis>_<base36 suffix>`.

Collisions are improbable, not impossible; nothing checks the store.
"""

from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9

_last_millis = 0


def _timestamp_millis() -> int:
    """Wall-clock millis, clamped so ids from this process never go back in time."""

    global _last_millis
    now = int(time.time() * 1000)
    if now < _last_millis:
        now = _last_millis
    _last_millis = now
    return now


def _random_suffix(length: int = SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_job_id() -> str:
    return f"job_{_timestamp_millis()}_{_random_suffix()}"


def job_id_timestamp(job_id: str) -> int:
    """Extract the millisecond timestamp component of a job id."""

    try:
        prefix, millis, _ = job_id.split("_", 2)
    except ValueError as exc:
        raise ValueError(f"Malformed job id: {job_id!r}") from exc
    if prefix != "job" or not millis.isdigit():
        raise ValueError(f"Malformed job id: {job_id!r}")
    return int(millis)
