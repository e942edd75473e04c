"""In-memory admin-user store."""

from __future__ import annotations

import itertools
from datetime import datetime

from nrfdesk.admin_users.models import AdminUser, AdminUserRecord
from nrfdesk.auth.errors import AdminUserError
from nrfdesk.auth.models import Credential


def normalize_email(email: str) -> str:
    return email.strip().lower()


class InMemoryAdminUserStore:
    """In-memory store for admin accounts. Also serves as a credential store."""

    def __init__(self) -> None:
        self._users: dict[str, AdminUserRecord] = {}
        self._ids = itertools.count(1)

    def create(self, email: str, password_hash: str) -> AdminUser:
        email = normalize_email(email)
        if self._find(email) is not None:
            raise AdminUserError("DUPLICATE_EMAIL")
        record = AdminUserRecord(
            id=str(next(self._ids)),
            email=email,
            password_hash=password_hash,
        )
        self._users[record.id] = record
        return record.to_public()

    def get(self, user_id: str) -> AdminUser | None:
        record = self._users.get(user_id)
        return record.to_public() if record else None

    def list_users(
        self, search: str = "", offset: int = 0, limit: int = 20
    ) -> tuple[list[AdminUser], int]:
        needle = search.strip().lower()
        matches = [
            r for r in self._users.values()
            if not needle or needle in r.email
        ]
        matches.sort(key=lambda r: (r.created_at, int(r.id)), reverse=True)
        page = matches[offset:offset + limit]
        return [r.to_public() for r in page], len(matches)

    def update(
        self,
        user_id: str,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> AdminUser | None:
        record = self._users.get(user_id)
        if record is None:
            return None
        if email is not None:
            email = normalize_email(email)
            other = self._find(email)
            if other is not None and other.id != user_id:
                raise AdminUserError("DUPLICATE_EMAIL")
            record.email = email
        if password_hash is not None:
            record.password_hash = password_hash
        return record.to_public()

    def delete(self, user_id: str) -> bool:
        return self._users.pop(user_id, None) is not None

    def find_by_identifier(self, identifier: str) -> Credential | None:
        record = self._find(normalize_email(identifier))
        return record.to_credential() if record else None

    def touch_last_authenticated(self, user_id: str, when: datetime) -> None:
        record = self._users.get(user_id)
        if record is not None:
            record.last_login = when

    @property
    def count(self) -> int:
        return len(self._users)

    def _find(self, email: str) -> AdminUserRecord | None:
        for record in self._users.values():
            if record.email == email:
                return record
        return None
