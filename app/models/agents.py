# generated-by: codex-agent 2025-03-02T09:18:00Z
"""
Start request schemas for the dedicated agent categories.

Bodies are permissive (extra keys are kept) because the generic categories
forward whatever the form sent to the remote workflow.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NUMBER_DOCUMENTS = 5


class AgentStartRequest(BaseModel):
    model_config = ConfigDict(extra="allow")


class UrlStartRequest(AgentStartRequest):
    url: str = Field(min_length=1)


class WebsiteIntelligenceStartRequest(AgentStartRequest):
    company_name: str = Field(min_length=1)
    website_url: str = Field(min_length=1)
    number_documents: int = DEFAULT_NUMBER_DOCUMENTS

    @field_validator("number_documents", mode="before")
    @classmethod
    def default_when_blank(cls, value: Any) -> Any:
        if value in (None, "", 0, "0"):
            return DEFAULT_NUMBER_DOCUMENTS
        return value


class GenericStartRequest(AgentStartRequest):
    url: Optional[str] = None
