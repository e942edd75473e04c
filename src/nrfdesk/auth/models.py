"""Authentication data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from nrfdesk.core.types import AuthFailure


class Credential(BaseModel):
    """A stored identifier/secret-hash pair as returned by a credential store."""

    id: str
    identifier: str
    secret_hash: str
    last_login: datetime | None = None


class AuthenticatedPrincipal(BaseModel):
    """The identity produced by a successful verification."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    last_login: datetime | None = None
    source: str = ""


class Rejected(BaseModel):
    """Uniform authentication failure. Carries no reason on purpose."""

    model_config = ConfigDict(frozen=True)


REJECTED = Rejected()


class SourceResult(BaseModel):
    """Outcome of asking one credential source.

    Exactly one of ``principal`` and ``failure`` is set.
    """

    model_config = ConfigDict(frozen=True)

    principal: AuthenticatedPrincipal | None = None
    failure: AuthFailure | None = None

    @classmethod
    def success(cls, principal: AuthenticatedPrincipal) -> SourceResult:
        return cls(principal=principal)

    @classmethod
    def failed(cls, failure: AuthFailure) -> SourceResult:
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.principal is not None


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResult(BaseModel):
    success: bool
    token: str | None = None
    user_id: str | None = None
    email: str | None = None
    error: str | None = None


class TokenValidation(BaseModel):
    valid: bool
    user_id: str | None = None
    email: str | None = None
    expires_at: datetime | None = None
