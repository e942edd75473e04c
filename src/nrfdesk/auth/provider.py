"""Session provider: turns a verified login into an opaque session token."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol, runtime_checkable

from nrfdesk.auth.models import AuthenticatedPrincipal, AuthResult, LoginRequest, TokenValidation
from nrfdesk.auth.resolver import CredentialResolver

INVALID_LOGIN = "Invalid email or password"


@runtime_checkable
class AuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def authenticate(self, credentials: LoginRequest) -> AuthResult: ...

    def validate_token(self, token: str) -> TokenValidation: ...

    def revoke_token(self, token: str) -> bool: ...


class SessionAuthProvider:
    """Authenticates through a ``CredentialResolver`` and tracks tokens in memory.

    Every failed login produces the same ``AuthResult`` regardless of the
    reason.
    """

    def __init__(
        self,
        resolver: CredentialResolver,
        token_expiry_minutes: int = 480,
    ) -> None:
        self._resolver = resolver
        self._tokens: dict[str, dict[str, Any]] = {}
        self._token_expiry = timedelta(minutes=token_expiry_minutes)

    @property
    def resolver(self) -> CredentialResolver:
        return self._resolver

    async def authenticate(self, credentials: LoginRequest) -> AuthResult:
        outcome = await self._resolver.authenticate(credentials.email, credentials.password)
        if not isinstance(outcome, AuthenticatedPrincipal):
            return AuthResult(success=False, error=INVALID_LOGIN)

        token = self.issue_token(outcome)
        return AuthResult(
            success=True,
            token=token,
            user_id=outcome.id,
            email=outcome.email,
        )

    def issue_token(self, principal: AuthenticatedPrincipal) -> str:
        self._purge_expired()
        token = secrets.token_urlsafe(32)
        self._tokens[token] = {
            "user_id": principal.id,
            "email": principal.email,
            "expires_at": datetime.now(timezone.utc) + self._token_expiry,
        }
        return token

    def validate_token(self, token: str) -> TokenValidation:
        info = self._tokens.get(token)
        if info is None:
            return TokenValidation(valid=False)

        if datetime.now(timezone.utc) > info["expires_at"]:
            del self._tokens[token]
            return TokenValidation(valid=False)

        return TokenValidation(
            valid=True,
            user_id=info["user_id"],
            email=info["email"],
            expires_at=info["expires_at"],
        )

    def revoke_token(self, token: str) -> bool:
        if token in self._tokens:
            del self._tokens[token]
            return True
        return False

    def _purge_expired(self) -> None:
        now = datetime.now(timezone.utc)
        expired = [t for t, info in self._tokens.items() if info["expires_at"] < now]
        for token in expired:
            del self._tokens[token]
