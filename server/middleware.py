"""Authentication and request metrics middleware."""

from __future__ import annotations

import time

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.routing import Match

from server.auth.dependencies import is_authenticated

PROTECTED_PREFIX = "/values"


def _route_path(request: Request) -> str:
    """Route template for *request* (``/values/{record_id}``), to keep label cardinality bounded."""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return "<unmatched>"


def _is_protected(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Rejects unauthenticated ``/values`` requests before routing or body parsing."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if _is_protected(request.url.path) and not is_authenticated(request):
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
        return await call_next(request)


class MetricsMiddleware(BaseHTTPMiddleware):
    """Counts requests and observes latency per route."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        metrics = request.app.state.metrics
        path = _route_path(request)
        if path == "/metrics":
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        metrics.requests.labels(request.method, path, str(response.status_code)).inc()
        metrics.latency.labels(request.method, path).observe(elapsed)
        return response
