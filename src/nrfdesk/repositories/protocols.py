"""Protocol definitions for all repository interfaces.

Each protocol mirrors the public methods of the corresponding in-memory
store exactly, so both sync (in-memory) and async (SQLAlchemy)
implementations satisfy the same interface.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from nrfdesk.admin_users.models import AdminUser
from nrfdesk.auth.models import Credential
from nrfdesk.exhibitors.models import ExhibitorRecord


@runtime_checkable
class CredentialStore(Protocol):
    """What the credential resolver needs from a primary store.

    ``find_by_identifier`` returns None for an unknown identifier and raises
    when the store itself cannot answer.
    """

    def find_by_identifier(self, identifier: str) -> Credential | None: ...

    def touch_last_authenticated(self, user_id: str, when: datetime) -> None: ...


@runtime_checkable
class AdminUserRepository(CredentialStore, Protocol):
    """Protocol for admin-user account storage."""

    def create(self, email: str, password_hash: str) -> AdminUser: ...

    def get(self, user_id: str) -> AdminUser | None: ...

    def list_users(
        self, search: str = "", offset: int = 0, limit: int = 20
    ) -> tuple[list[AdminUser], int]: ...

    def update(
        self,
        user_id: str,
        email: str | None = None,
        password_hash: str | None = None,
    ) -> AdminUser | None: ...

    def delete(self, user_id: str) -> bool: ...


@runtime_checkable
class ExhibitorRepository(Protocol):
    """Protocol for exhibitor record storage."""

    def add(self, record: ExhibitorRecord) -> ExhibitorRecord: ...

    def get(self, exhibitor_id: str) -> ExhibitorRecord | None: ...

    def search(
        self, query: str = "", country_patterns: list[str] | None = None
    ) -> list[ExhibitorRecord]: ...

    def list_recent(self, limit: int = 100) -> list[ExhibitorRecord]: ...

    def count(self) -> int: ...
