"""Admin-user data models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from nrfdesk.auth.models import Credential


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdminUser(BaseModel):
    """Public view of an admin account. Never carries the password hash."""

    id: str
    email: str
    created_at: datetime | None = None
    last_login: datetime | None = None


class AdminUserRecord(BaseModel):
    """Stored admin account."""

    id: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=_utcnow)
    last_login: datetime | None = None

    def to_public(self) -> AdminUser:
        return AdminUser(
            id=self.id,
            email=self.email,
            created_at=self.created_at,
            last_login=self.last_login,
        )

    def to_credential(self) -> Credential:
        return Credential(
            id=self.id,
            identifier=self.email,
            secret_hash=self.password_hash,
            last_login=self.last_login,
        )


class AdminUserCreate(BaseModel):
    email: str = ""
    password: str = ""


class AdminUserUpdate(BaseModel):
    email: str | None = None
    password: str | None = None


class AdminUserPage(BaseModel):
    users: list[AdminUser] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0
