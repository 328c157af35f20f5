"""Request-level credential checks."""

from __future__ import annotations

from fastapi import Request

from server.auth.gate import AuthGate

AUTH_HEADER = "Authorization"


def get_gate(request: Request) -> AuthGate:
    return request.app.state.gate


def is_authenticated(request: Request) -> bool:
    """Run the gate on the request's credential header, counting rejections."""
    if get_gate(request).authenticate(request.headers.get(AUTH_HEADER)):
        return True
    metrics = getattr(request.app.state, "metrics", None)
    if metrics is not None:
        metrics.auth_failures.inc()
    return False
