"""Authentication middleware and dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response


def extract_token(request: Request) -> str | None:
    """Read the session token from the Bearer header or the session cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:] or None
    settings = getattr(request.app.state, "settings", None)
    cookie_name = settings.auth.cookie_name if settings is not None else "nrf_admin"
    return request.cookies.get(cookie_name) or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the session token into request.state.principal_*."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.principal_id = None
        request.state.principal_email = None

        token = extract_token(request)
        if token:
            provider = getattr(request.app.state, "auth_provider", None)
            if provider is not None:
                validation = provider.validate_token(token)
                if validation.valid:
                    request.state.principal_id = validation.user_id
                    request.state.principal_email = validation.email

        return await call_next(request)


def require_admin():
    """FastAPI dependency that requires a logged-in admin."""

    def dependency(request: Request) -> str:
        principal_id = getattr(request.state, "principal_id", None)
        if principal_id is None:
            raise HTTPException(status_code=401, detail="Unauthorized")
        return principal_id

    return Depends(dependency)
