# generated-by: codex-agent 2025-03-02T09:40:00Z
"""
Agent categories: what each remote workflow expects and how its callback is read.

Every category is reachable under `/api/<slug>/...`. The dedicated categories
(landing analyzer, SEO audit, website intelligence) validate and reshape the
request; the generic ones forward the body untouched.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from fastapi import status
from pydantic import ValidationError

from app.models.agents import (
    AgentStartRequest,
    GenericStartRequest,
    UrlStartRequest,
    WebsiteIntelligenceStartRequest,
)
from app.models.jobs import JobRecord
from app.utils.responses import raise_http_error

WEBHOOK_BASE = "https://neulandai.app.n8n.cloud/webhook"

MISSING_FILE_URL_ERROR = "No File_url received in callback"


def first_file_url(reply: Any) -> Optional[str]:
    """`reply[0].File_url` when the workflow answered with a file, else None."""

    if isinstance(reply, list) and reply and isinstance(reply[0], dict):
        value = reply[0].get("File_url")
        if isinstance(value, str) and value:
            return value
    return None


class AgentCategory:
    """Base category: forwards the body and stores the callback body as the result."""

    request_model: Type[AgentStartRequest] = GenericStartRequest
    missing_fields_message = "Invalid request body"

    def __init__(self, slug: str, webhook_url: str, noun: Optional[str] = None) -> None:
        self.slug = slug
        self.webhook_url = webhook_url
        self.noun = noun or f"{slug} analysis"

    @property
    def started_message(self) -> str:
        return f"{self.noun} started"

    @property
    def start_failed_message(self) -> str:
        return f"Failed to start {self.noun}"

    def parse_request(self, body: Dict[str, Any]) -> AgentStartRequest:
        try:
            return self.request_model.model_validate(body)
        except ValidationError:
            raise_http_error(self.missing_fields_message, status.HTTP_400_BAD_REQUEST)

    def record_fields(self, request: AgentStartRequest) -> Dict[str, Any]:
        url = request.model_dump().get("url")
        return {"agentType": self.slug, "url": url or "N/A", "data": dict(request.model_extra or {})}

    def outbound_payload(self, request: AgentStartRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        url = request.model_dump().get("url")
        if url is not None:
            payload["url"] = url
        payload.update(request.model_extra or {})
        return payload

    def apply_callback(self, record: JobRecord, body: Dict[str, Any]) -> None:
        record.result = body
        record.status = "completed"


class UrlAgentCategory(AgentCategory):
    """Categories keyed on a single target `url`, sent upstream as `website_url`."""

    request_model = UrlStartRequest
    missing_fields_message = "URL is required"

    def record_fields(self, request: AgentStartRequest) -> Dict[str, Any]:
        return {"url": request.model_dump()["url"]}

    def outbound_payload(self, request: AgentStartRequest) -> Dict[str, Any]:
        return {"website_url": request.model_dump()["url"]}


class LandingAnalyzerCategory(UrlAgentCategory):
    """Completes only when the workflow hands back a report file."""

    def __init__(self) -> None:
        super().__init__("landing-analyzer", f"{WEBHOOK_BASE}/landing-analyzer", noun="analysis")

    @property
    def started_message(self) -> str:
        return "Analysis started successfully"

    def apply_callback(self, record: JobRecord, body: Dict[str, Any]) -> None:
        file_url = first_file_url(body.get("reply"))
        if file_url:
            record.fileUrl = file_url
            record.status = "completed"
        else:
            record.fileUrl = None
            record.error = MISSING_FILE_URL_ERROR
            record.status = "failed"


class SEOCategory(UrlAgentCategory):
    def __init__(self) -> None:
        super().__init__("seo", f"{WEBHOOK_BASE}/seo-audit-agent", noun="SEO analysis")

    @property
    def started_message(self) -> str:
        return "SEO analysis started successfully"


class WebsiteIntelligenceCategory(AgentCategory):
    request_model = WebsiteIntelligenceStartRequest
    missing_fields_message = "Company name and website URL are required"

    def __init__(self) -> None:
        super().__init__(
            "website-intelligence",
            f"{WEBHOOK_BASE}/website-Intelligence",
            noun="website intelligence analysis",
        )

    @property
    def started_message(self) -> str:
        return "Website intelligence analysis started successfully"

    def record_fields(self, request: AgentStartRequest) -> Dict[str, Any]:
        fields = request.model_dump()
        return {key: fields[key] for key in ("company_name", "website_url", "number_documents")}

    def outbound_payload(self, request: AgentStartRequest) -> Dict[str, Any]:
        return self.record_fields(request)

    def apply_callback(self, record: JobRecord, body: Dict[str, Any]) -> None:
        super().apply_callback(record, body)
        file_url = first_file_url(body.get("reply"))
        if file_url:
            record.fileUrl = file_url


_GENERIC_AGENTS = {
    "research": "research-agent",
    "leadgen": "lead-generator",
    "support": "support-agent",
    "ops": "ops-agent",
    "image-generation": "image-generation",
    "competitor-tracker": "competitor-tracker",
    "pricing-scraper": "pricing-scraper",
    "social-listening": "social-listening",
    "email-drafting": "email-drafting",
    "ad-copy-generator": "ad-copy-generator",
    "blog-outline": "blog-outline-generator",
    "newsletter-curator": "newsletter-curator",
}


def _build_registry() -> Dict[str, AgentCategory]:
    categories: list[AgentCategory] = [
        LandingAnalyzerCategory(),
        SEOCategory(),
        WebsiteIntelligenceCategory(),
    ]
    categories.extend(
        AgentCategory(slug, f"{WEBHOOK_BASE}/{hook}") for slug, hook in _GENERIC_AGENTS.items()
    )
    return {category.slug: category for category in categories}


CATEGORIES: Dict[str, AgentCategory] = _build_registry()


def get_category(slug: str) -> AgentCategory:
    category = CATEGORIES.get(slug)
    if category is None:
        raise_http_error(f"Unknown agent type: {slug}", status.HTTP_400_BAD_REQUEST)
    return category
