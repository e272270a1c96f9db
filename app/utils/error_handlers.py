# generated-by: codex-agent 2025-03-02T09:21:00Z
"""
Centralised HTTP error handling that emits the `{error, corr_id}` envelope.
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.models.envelope import ErrorEnvelope

_STATUS_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore[override]
        detail = exc.detail
        if isinstance(detail, dict) and "error" in detail and "corr_id" in detail:
            return JSONResponse(status_code=exc.status_code, content=detail, headers=exc.headers)
        message = _STATUS_MESSAGES.get(exc.status_code, str(detail))
        envelope = ErrorEnvelope.from_error(message)
        return JSONResponse(status_code=exc.status_code, content=envelope.model_dump(), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = exc.errors()
        message = "; ".join(err.get("msg", "validation error") for err in errors)
        envelope = ErrorEnvelope.from_error(message or "Invalid request body")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=envelope.model_dump())
