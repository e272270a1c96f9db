# generated-by: codex-agent 2025-03-02T10:20:00Z
"""
Answers bare OPTIONS probes with 200 on every path and, when every origin is
allowed, stamps `Access-Control-Allow-Origin: *` on all other responses too.

Browser preflights (with `Access-Control-Request-Method`) never get here: the
CORS middleware sits outside this one and replies to them itself.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class PreflightMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, allow_any_origin: bool = True) -> None:
        super().__init__(app)
        self.allow_any_origin = allow_any_origin

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_200_OK, headers=PREFLIGHT_HEADERS)
        response = await call_next(request)
        if self.allow_any_origin and "access-control-allow-origin" not in response.headers:
            response.headers["Access-Control-Allow-Origin"] = "*"
        return response
