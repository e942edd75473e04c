"""Admin-user account management.

Validates input, hashes every password with bcrypt before it reaches a
store, and translates missing rows into ``AdminUserError``.
"""

from __future__ import annotations

import logging
import math
import re

from nrfdesk.admin_users.models import AdminUser, AdminUserPage
from nrfdesk.auth.errors import AdminUserError
from nrfdesk.auth.hashing import (
    DEFAULT_ROUNDS,
    MAX_SECRET_BYTES,
    hash_secret,
    secret_too_long,
)
from nrfdesk.repositories import resolve
from nrfdesk.repositories.protocols import AdminUserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class AdminUserService:
    """CRUD operations over an ``AdminUserRepository``."""

    def __init__(
        self,
        repository: AdminUserRepository,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
        min_password_length: int = 8,
        page_size: int = 20,
    ) -> None:
        self._repository = repository
        self._rounds = bcrypt_rounds
        self._min_password_length = min_password_length
        self._page_size = page_size

    @property
    def repository(self) -> AdminUserRepository:
        return self._repository

    def _validate_email(self, email: str) -> str:
        email = email.strip()
        if not _EMAIL_RE.match(email):
            raise AdminUserError("INVALID_EMAIL")
        return email.lower()

    def _hash_password(self, password: str) -> str:
        if len(password) < self._min_password_length:
            raise AdminUserError(
                "WEAK_PASSWORD",
                f"Password must be at least {self._min_password_length} characters long",
            )
        if secret_too_long(password):
            raise AdminUserError(
                "PASSWORD_TOO_LONG",
                f"Password must be at most {MAX_SECRET_BYTES} bytes long",
            )
        return hash_secret(password, rounds=self._rounds)

    async def create(self, email: str, password: str) -> AdminUser:
        if not email or not password:
            raise AdminUserError("MISSING_FIELDS")
        normalized = self._validate_email(email)
        password_hash = self._hash_password(password)
        user = await resolve(self._repository.create(normalized, password_hash))
        logger.info("Created admin user %s", user.id)
        return user

    async def get(self, user_id: str) -> AdminUser:
        user = await resolve(self._repository.get(user_id))
        if user is None:
            raise AdminUserError("ADMIN_USER_NOT_FOUND")
        return user

    async def list_users(self, search: str = "", page: int = 1, take: int | None = None) -> AdminUserPage:
        take = self._page_size if take is None else take
        if take < 1 or page < 1:
            raise AdminUserError("INVALID_PAGINATION")
        users, total = await resolve(
            self._repository.list_users(search=search, offset=(page - 1) * take, limit=take)
        )
        return AdminUserPage(
            users=users,
            total=total,
            page=page,
            total_pages=math.ceil(total / take),
        )

    async def update(
        self,
        user_id: str,
        email: str | None = None,
        password: str | None = None,
    ) -> AdminUser:
        if not email and not password:
            raise AdminUserError("NOTHING_TO_UPDATE")
        normalized = self._validate_email(email) if email else None
        password_hash = self._hash_password(password) if password else None
        user = await resolve(
            self._repository.update(user_id, email=normalized, password_hash=password_hash)
        )
        if user is None:
            raise AdminUserError("ADMIN_USER_NOT_FOUND")
        logger.info("Updated admin user %s", user_id)
        return user

    async def delete(self, user_id: str) -> None:
        deleted = await resolve(self._repository.delete(user_id))
        if not deleted:
            raise AdminUserError("ADMIN_USER_NOT_FOUND")
        logger.info("Deleted admin user %s", user_id)
