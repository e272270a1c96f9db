# generated-by: codex-agent 2025-03-02T09:10:00Z
"""
Runtime configuration loading for the Agent Store backend.

Defaults come from `.env.example`; environment variables override them so the
same code runs locally (in-memory store) and in production (Redis / managed KV).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Literal, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, ConfigDict, field_validator

StoreBackend = Literal["auto", "memory", "redis", "kv"]


class Settings(BaseModel):
    """Typed settings derived from .env.example with environment overrides."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    job_store: StoreBackend = Field(alias="JOB_STORE")
    redis_url: Optional[str] = Field(default=None, alias="REDIS_URL")
    kv_rest_api_url: Optional[str] = Field(default=None, alias="KV_REST_API_URL")
    kv_rest_api_token: Optional[str] = Field(default=None, alias="KV_REST_API_TOKEN")
    job_ttl_seconds: int = Field(alias="JOB_TTL_SECONDS", gt=0)
    job_key_prefix: str = Field(alias="JOB_KEY_PREFIX")
    cleanup_interval_s: int = Field(alias="CLEANUP_INTERVAL_S", gt=0)
    webhook_timeout_s: float = Field(alias="WEBHOOK_TIMEOUT_S", gt=0)
    public_base_url: Optional[str] = Field(default=None, alias="PUBLIC_BASE_URL")
    cors_origins: List[str] = Field(alias="CORS_ORIGINS")
    api_base_url: str = Field(alias="API_BASE_URL")
    poll_interval_s: float = Field(alias="POLL_INTERVAL_S", ge=0)
    poll_max_attempts: int = Field(alias="POLL_MAX_ATTEMPTS", ge=1)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, list):
            return value
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @field_validator("job_store", mode="before")
    @classmethod
    def normalize_backend(cls, value: str) -> str:
        return (value or "auto").strip().lower()

    @field_validator(
        "redis_url",
        "kv_rest_api_url",
        "kv_rest_api_token",
        "public_base_url",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("public_base_url", "api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        return value.rstrip("/") if value else value

    def resolve_store_backend(self) -> str:
        """Pick the job store backend from explicit choice or credential presence."""

        if self.job_store == "redis" and not self.redis_url:
            raise RuntimeError("JOB_STORE=redis requires REDIS_URL")
        if self.job_store == "kv" and not (self.kv_rest_api_url and self.kv_rest_api_token):
            raise RuntimeError("JOB_STORE=kv requires KV_REST_API_URL and KV_REST_API_TOKEN")
        if self.job_store != "auto":
            return self.job_store
        if self.kv_rest_api_url and self.kv_rest_api_token:
            return "kv"
        if self.redis_url:
            return "redis"
        return "memory"


def load_settings() -> Settings:
    """Load configuration using `.env.example` as the baseline."""

    repo_root = Path(__file__).resolve().parents[2]
    env_example = repo_root / ".env.example"
    defaults = dotenv_values(env_example) if env_example.exists() else {}

    # Environment variables override the example defaults.
    merged: dict[str, Optional[str]] = {**defaults, **dict(os.environ)}

    # Upstash-style credential names are accepted for the managed KV store.
    if not merged.get("KV_REST_API_URL"):
        merged["KV_REST_API_URL"] = merged.get("UPSTASH_REDIS_REST_URL")
    if not merged.get("KV_REST_API_TOKEN"):
        merged["KV_REST_API_TOKEN"] = merged.get("UPSTASH_REDIS_REST_TOKEN")

    required = {
        "JOB_STORE": "auto",
        "JOB_TTL_SECONDS": "86400",
        "JOB_KEY_PREFIX": "job:",
        "CLEANUP_INTERVAL_S": "3600",
        "WEBHOOK_TIMEOUT_S": "30",
        "CORS_ORIGINS": "*",
        "API_BASE_URL": "http://localhost:3001",
        "POLL_INTERVAL_S": "5",
        "POLL_MAX_ATTEMPTS": "60",
    }
    for key, fallback in required.items():
        if not merged.get(key):
            merged[key] = fallback

    known = {field.alias for field in Settings.model_fields.values() if field.alias}
    return Settings(**{key: value for key, value in merged.items() if key in known})  # type: ignore[arg-type]


settings = load_settings()
